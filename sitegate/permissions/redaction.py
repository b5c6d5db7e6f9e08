"""Field-level redaction of records for callers without financial access.

Each record type declares the fields it treats as sensitive through an
explicit RedactionPolicy. Records are plain mappings (rows from the
backend); redaction returns shallow copies with the sensitive fields
removed and never mutates its input.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..common.logger import get_logger

logger = get_logger("redaction")


# Cost, price and budget-like fields stripped when no policy applies
DEFAULT_SENSITIVE_FIELDS: Tuple[str, ...] = (
    "unit_cost",
    "total_cost",
    "actual_cost",
    "initial_cost",
    "budget",
    "cost",
    "price",
)


@dataclass(frozen=True)
class RedactionPolicy:
    """Sensitive fields for one record type."""

    record_type: str
    sensitive_fields: Tuple[str, ...]

    def __post_init__(self):
        # Accept any iterable of names but store an immutable tuple
        object.__setattr__(self, "sensitive_fields", tuple(self.sensitive_fields))


BUILTIN_POLICIES: Tuple[RedactionPolicy, ...] = (
    RedactionPolicy("scope_item", ("unit_cost", "total_cost", "actual_cost", "initial_cost", "cost_variance")),
    RedactionPolicy("material_spec", ("unit_cost", "total_cost", "estimated_cost", "price")),
    RedactionPolicy("project", ("budget", "actual_cost", "profit_margin")),
    RedactionPolicy("shop_drawing", ()),
    RedactionPolicy("task", ("estimated_cost", "actual_cost")),
)


class RedactionRegistry:
    """Registry of redaction policies keyed by record type."""

    def __init__(
        self,
        policies: Iterable[RedactionPolicy] = BUILTIN_POLICIES,
        default_fields: Sequence[str] = DEFAULT_SENSITIVE_FIELDS,
    ):
        self._policies: Dict[str, RedactionPolicy] = {}
        self.default_fields: Tuple[str, ...] = tuple(default_fields)
        for policy in policies:
            self.register(policy)

    def register(self, policy: RedactionPolicy) -> None:
        """Register a policy, replacing any existing one for the record type."""
        if policy.record_type in self._policies:
            logger.debug(f"Overwriting redaction policy for: {policy.record_type}")
        self._policies[policy.record_type] = policy
        logger.debug(f"Registered redaction policy: {policy.record_type}")

    def unregister(self, record_type: str) -> None:
        if record_type in self._policies:
            del self._policies[record_type]
            logger.debug(f"Unregistered redaction policy: {record_type}")

    def get_policy(self, record_type: str) -> Optional[RedactionPolicy]:
        return self._policies.get(record_type)

    def fields_for(self, record_type: str) -> Tuple[str, ...]:
        """Sensitive fields for a record type.

        Unknown record types fall back to the default field list so that
        an unregistered entity is still redacted.
        """
        policy = self._policies.get(record_type)
        if policy is None:
            logger.warning(
                f"No redaction policy for record type '{record_type}', using defaults"
            )
            return self.default_fields
        return policy.sensitive_fields

    def list_record_types(self) -> List[str]:
        return list(self._policies.keys())


def strip_fields(
    records: Iterable[Mapping[str, Any]],
    field_names: Iterable[str],
) -> List[Dict[str, Any]]:
    """Return shallow copies of records without the given fields."""
    fields = tuple(field_names)
    stripped = []
    for record in records:
        copy = dict(record)
        for name in fields:
            copy.pop(name, None)
        stripped.append(copy)
    return stripped
