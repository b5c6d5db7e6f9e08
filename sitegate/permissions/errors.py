"""Exceptions for strict permission lookups.

The check functions never raise these; they fail closed instead. Strict
lookups used by administrative code (role assignment, flag resolution for
grants) raise them so that typos surface immediately.
"""


class SiteGateError(Exception):
    """Base class for sitegate permission errors."""


class UnknownPermissionError(SiteGateError, KeyError):
    """A permission name has no entry in the name-to-flag mapping."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown permission: {self.name}"


class UnknownRoleError(SiteGateError, ValueError):
    """A role label does not name a role template."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown role template: {label}")
