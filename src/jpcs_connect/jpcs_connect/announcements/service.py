from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import optional_text, require_choice, require_non_empty
from ..core.enums import Priority
from ..core.exceptions import StoreUnavailableError, ValidationError
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    async def create(
        self,
        *,
        title: str,
        message: str,
        author: str,
        priority: str = Priority.NORMAL.value,
        recipients: str = "all",
    ) -> str:
        fields = {
            "title": require_non_empty(title, "Title"),
            "message": require_non_empty(message, "Message"),
            "priority": require_choice(priority or Priority.NORMAL.value, "Priority", {p.value for p in Priority}),
            "recipients": optional_text(recipients) or "all",
            "author": optional_text(author) or "Admin",
            "views": 0,
            "status": "sent",
        }
        announcement_id = await self._announcements.create(fields)
        logger.info("Announcement %s sent to %s", announcement_id, fields["recipients"])
        return announcement_id

    async def list_recent(self) -> Sequence[Announcement]:
        try:
            return await self._announcements.list_recent()
        except StoreUnavailableError:
            logger.warning("Announcements unavailable, showing none", exc_info=True)
            return []

    async def delete(self, announcement_id: str) -> None:
        if not await self._announcements.get_by_id(announcement_id):
            raise ValidationError("Announcement not found")
        await self._announcements.delete(announcement_id)

    async def record_view(self, announcement_id: str) -> int:
        announcement = await self._announcements.get_by_id(announcement_id)
        if not announcement:
            raise ValidationError("Announcement not found")
        views = announcement.views + 1
        await self._announcements.update(announcement_id, {"views": views})
        return views
