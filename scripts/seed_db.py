"""Seed demo events, students and registrations into the configured store."""
from __future__ import annotations

import asyncio
import importlib
from datetime import date, timedelta

from config import get_settings_module

from jpcs_connect.container import build_container

DEMO_STUDENTS = [
    ("2021-00123", "Ana Cruz", "CCS", "BSCS"),
    ("2021-00456", "Ben Reyes", "CCS", "BSIT"),
    ("2022-00789", "Carla Santos", "CCS", "BSIS"),
]


async def seed() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    next_week = (date.today() + timedelta(days=7)).isoformat()
    event_id = await container.event_service.create_event(
        name="JPCS General Assembly",
        date=next_week,
        start_time="09:00",
        location="AVR 1",
        description="Opening assembly for the semester",
    )
    await container.event_service.create_event(
        name="Hackathon 2026",
        date=next_week,
        start_time="08:00",
        end_time="17:00",
        location="Computer Lab 3",
        days=["Day 1", "Day 2"],
    )

    for student_id, full_name, department, program in DEMO_STUDENTS:
        if await container.users_repo.find_by_student_id(student_id):
            continue
        await container.users_repo.create(
            {
                "studentId": student_id,
                "displayName": full_name,
                "fullName": full_name,
                "department": department,
                "program": program,
                "eventsAttended": 0,
                "profileCompleted": True,
                "isRegistered": False,
                "firebaseUid": None,
            }
        )
        await container.registration_service.register(event_id, student_id, full_name)

    print(f"OK: Seeded {len(DEMO_STUDENTS)} students and 2 events")


def main() -> None:
    asyncio.run(seed())


if __name__ == "__main__":
    main()
