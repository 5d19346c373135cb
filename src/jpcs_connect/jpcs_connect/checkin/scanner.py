from __future__ import annotations

from typing import Protocol


class Scanner(Protocol):
    """A camera-driven code reader.

    ``start`` acquires the video stream and ``stop`` releases it. A scan is
    evaluated between ``pause`` and ``resume`` so the same frame is never
    processed twice.
    """

    async def start(self) -> None:
        raise NotImplementedError

    async def pause(self) -> None:
        raise NotImplementedError

    async def resume(self) -> None:
        raise NotImplementedError

    async def stop(self) -> None:
        raise NotImplementedError


class NullScanner:
    """Used when payloads arrive already decoded (HTTP API, uploads)."""

    async def start(self) -> None:
        return None

    async def pause(self) -> None:
        return None

    async def resume(self) -> None:
        return None

    async def stop(self) -> None:
        return None
