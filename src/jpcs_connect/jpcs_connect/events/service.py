from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, require_non_empty
from ..core.enums import EventStatus
from ..core.exceptions import ValidationError
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "name": "name",
    "description": "description",
    "date": "date",
    "start_time": "startTime",
    "end_time": "endTime",
    "location": "location",
}


def _clean_days(days: Optional[Iterable[str]]) -> list[str]:
    out: list[str] = []
    for d in days or []:
        label = str(d).strip()
        if label and label not in out:
            out.append(label)
    return out


def _check_date(value: str) -> str:
    value = require_non_empty(value, "Date")
    try:
        parse_iso_date(value)
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD")
    return value


class EventService:
    """Use case: admin event catalogue."""

    def __init__(self, events: EventRepository):
        self._events = events

    async def create_event(
        self,
        *,
        name: str,
        date: str,
        start_time: str,
        location: str,
        description: str = "",
        end_time: Optional[str] = None,
        days: Optional[Iterable[str]] = None,
    ) -> str:
        fields = {
            "name": require_non_empty(name, "Event name"),
            "description": optional_text(description),
            "date": _check_date(date),
            "startTime": require_non_empty(start_time, "Start time"),
            "endTime": optional_text(end_time) or None,
            "location": require_non_empty(location, "Location"),
            "status": EventStatus.UPCOMING.value,
            "days": _clean_days(days),
        }
        event_id = await self._events.create(fields)
        logger.info("Created event %s (%s)", event_id, fields["name"])
        return event_id

    async def get_event(self, event_id: str) -> Event:
        event = await self._events.get_by_id(event_id)
        if not event:
            raise ValidationError("Event not found")
        return event

    async def update_event(self, event_id: str, **changes: Any) -> Event:
        await self.get_event(event_id)

        fields: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "days":
                fields["days"] = _clean_days(value)
            elif key == "date":
                fields["date"] = _check_date(value)
            elif key in ("name", "start_time", "location"):
                fields[_EDITABLE_FIELDS[key]] = require_non_empty(value, key.replace("_", " ").capitalize())
            elif key == "end_time":
                fields["endTime"] = optional_text(value) or None
            elif key == "description":
                fields["description"] = optional_text(value)
            else:
                raise ValidationError(f"Field {key} cannot be edited")

        if fields:
            await self._events.update(event_id, fields)
        return await self.get_event(event_id)

    async def change_status(self, event_id: str, status: str) -> Event:
        try:
            target = EventStatus(status)
        except ValueError:
            raise ValidationError("Unknown event status")

        event = await self.get_event(event_id)
        if target.rank < event.status.rank:
            raise ValidationError(f"Cannot move event from {event.status.value} back to {target.value}")
        if target != event.status:
            await self._events.update(event_id, {"status": target.value})
            logger.info("Event %s is now %s", event_id, target.value)
        return await self.get_event(event_id)

    async def delete_event(self, event_id: str) -> None:
        await self.get_event(event_id)
        await self._events.delete(event_id)
        logger.info("Deleted event %s", event_id)

    async def list_events(self) -> Sequence[Event]:
        """Open events first, then by date."""
        events = list(await self._events.list_all())
        events.sort(key=lambda e: (e.status == EventStatus.COMPLETED, e.date))
        return events
