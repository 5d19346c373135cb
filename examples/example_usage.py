"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the check-in rules live in CheckinService.
"""

import asyncio
import importlib

from config import get_settings_module

from jpcs_connect.container import build_container


async def run(event_id: str, code: str) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    async with container.checkin_service.open_session(event_id) as session:
        result = await session.handle(code)
        print(result.level.value, result.title, "-", result.message)
        print(f"{len(session.attendance)} checked in")


if __name__ == "__main__":
    asyncio.run(run("<event id>", "2021-00123"))
