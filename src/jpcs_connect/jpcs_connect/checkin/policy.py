from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.exceptions import ValidationError


class LookupKey(str, Enum):
    """Which stored value a scanned code is matched against."""

    STUDENT_ID = "student_id"
    UID = "uid"


@dataclass(frozen=True)
class CheckinPolicy:
    """Deployment choices for the check-in rules.

    Defaults: unknown codes are rejected, a registration is required, and
    multi-day events accept one check-in per student per day.
    """

    allow_walk_ins: bool = False
    require_registration: bool = True
    per_day: bool = True
    lookup_key: LookupKey = LookupKey.STUDENT_ID

    @classmethod
    def from_settings(cls, settings: Any) -> "CheckinPolicy":
        raw_key = str(getattr(settings, "CHECKIN_LOOKUP_KEY", LookupKey.STUDENT_ID.value)).lower()
        try:
            lookup_key = LookupKey(raw_key)
        except ValueError:
            raise ValidationError(f"CHECKIN_LOOKUP_KEY must be one of: {', '.join(k.value for k in LookupKey)}")

        return cls(
            allow_walk_ins=bool(getattr(settings, "CHECKIN_ALLOW_WALK_INS", False)),
            require_registration=bool(getattr(settings, "CHECKIN_REQUIRE_REGISTRATION", True)),
            per_day=bool(getattr(settings, "CHECKIN_PER_DAY", True)),
            lookup_key=lookup_key,
        )
