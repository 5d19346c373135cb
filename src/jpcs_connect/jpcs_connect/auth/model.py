from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """A verified identity issued by the external identity provider."""

    uid: str
    display_name: str
    email: str
    photo_url: str = ""


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after sign-in."""

    uid: str
    name: str
    role: Role
    student_id: Optional[str] = None
    profile_completed: bool = False
