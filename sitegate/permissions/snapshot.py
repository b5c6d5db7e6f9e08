"""Immutable capability snapshots.

A snapshot captures a user's capability set at the moment it was loaded
from their profile. Checks take the snapshot (or a bare integer) as an
argument on every call; nothing in sitegate reads session state on its own.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.logger import get_logger

logger = get_logger("permissions")

# Profile column holding the bitmask
PROFILE_CAPABILITY_FIELD = "permissions_bitwise"

# Longest decimal string accepted as a capability set (fits 64 bits)
MAX_CAPABILITY_DIGITS = 20


def _coerce(value: Any) -> int:
    if value is None:
        logger.debug("No capability set supplied, treating as 0")
        return 0
    if isinstance(value, bool):
        logger.warning(f"Boolean is not a capability set: {value!r}, treating as 0")
        return 0
    if isinstance(value, int):
        result = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        digits = value.strip()
        if len(digits) > MAX_CAPABILITY_DIGITS:
            logger.warning(f"Oversized capability set ({len(digits)} digits), treating as 0")
            return 0
        try:
            result = int(digits)
        except ValueError:
            # isdigit() accepts characters such as "²" that int() rejects
            logger.warning(f"Invalid capability set: {value!r}, treating as 0")
            return 0
    else:
        logger.warning(f"Invalid capability set: {value!r}, treating as 0")
        return 0
    if result < 0:
        logger.warning(f"Negative capability set: {result}, treating as 0")
        return 0
    return result


@dataclass(frozen=True)
class CapabilitySnapshot:
    """A user's capability set as loaded from their profile."""

    capability_set: int = 0
    user_id: Optional[str] = None
    role: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "capability_set", _coerce(self.capability_set))

    @classmethod
    def empty(cls) -> "CapabilitySnapshot":
        """Snapshot for a user that is not loaded yet. Grants nothing."""
        return cls()

    @classmethod
    def from_profile(cls, profile: Optional[Mapping[str, Any]]) -> "CapabilitySnapshot":
        """Build a snapshot from a user profile row.

        A missing profile or a missing bitmask column yields an empty
        capability set.
        """
        if not profile:
            return cls.empty()
        user_id = profile.get("id")
        return cls(
            capability_set=profile.get(PROFILE_CAPABILITY_FIELD),
            user_id=str(user_id) if user_id is not None else None,
            role=profile.get("role"),
        )


def normalize_capability_set(value: Any) -> int:
    """Turn a snapshot, integer or missing value into a capability integer.

    Missing and malformed values fail closed to 0.
    """
    if isinstance(value, CapabilitySnapshot):
        return value.capability_set
    return _coerce(value)
