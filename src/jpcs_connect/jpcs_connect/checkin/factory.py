from __future__ import annotations

from dataclasses import dataclass

from .policy import CheckinPolicy
from .strategies.base import ResolutionStrategy
from .strategies.strict_strategy import StrictResolution
from .strategies.walkin_strategy import WalkInResolution


@dataclass
class ResolutionStrategyFactory:
    """Factory Pattern: choose how scanned codes are resolved to students."""

    def for_policy(self, policy: CheckinPolicy) -> ResolutionStrategy:
        if policy.allow_walk_ins:
            return WalkInResolution(policy.lookup_key)
        return StrictResolution(policy.lookup_key)
