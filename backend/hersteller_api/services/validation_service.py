"""
Hersteller Service — Validation Service
=========================================

What:  Structural checks on manufacturer payloads and on identifiers.
How:   A declarative list of Rule objects evaluated in order. Every rule that
       fails contributes its message; nothing short-circuits.
Who:   Called by HerstellerWriteService before any persistence step, and by
       HerstellerReadService for id shape checks.

Rule Table (evaluation order):
    1. name          required             "A manufacturer name is required."
    2. name          starts with \\w        "A manufacturer name must start with ..."
    3. name          at most 40 chars     "A manufacturer name has at most 40 ..."
    4. telephone     exactly 11 digits    "A telephone number consists of ..."
    5. homepage      URI (pydantic AnyUrl) "The homepage is not a valid URI."
    6. homepage      at most 255 chars    "A homepage has at most 255 characters."
    7. schlagwoerter each at most 16 chars "A keyword has at most 16 characters."

The length limits are the column widths in models.hersteller; keywords
are measured after upper-casing, as they are stored.

Optional fields are only checked when present. Uniqueness is NOT a
validation concern; the Writer owns it.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

# ── Patterns ──────────────────────────────────────────────────────────────
ID_PATTERN = re.compile(
    r"[\dA-Fa-f]{8}-[\dA-Fa-f]{4}-[\dA-Fa-f]{4}-[\dA-Fa-f]{4}-[\dA-Fa-f]{12}"
)
NAME_PATTERN = re.compile(r"\w.*", re.DOTALL)
TELEPHONE_PATTERN = re.compile(r"[0-9]{11}")

# Column widths, see models.hersteller
NAME_MAX_LENGTH = 40
HOMEPAGE_MAX_LENGTH = 255
SCHLAGWORT_MAX_LENGTH = 16

_uri_adapter = TypeAdapter(AnyUrl)


def _is_uri(value: str) -> bool:
    try:
        _uri_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


@dataclass(frozen=True)
class Rule:
    """
    One constraint on one payload field.

    `check` receives the field value and returns True when it holds.
    `required` rules run on absent values too; all others skip them.
    """

    field: str
    check: Callable[[Any], bool]
    message: str
    required: bool = False


HERSTELLER_RULES = (
    Rule(
        field="name",
        check=lambda value: value is not None,
        message="A manufacturer name is required.",
        required=True,
    ),
    Rule(
        field="name",
        check=lambda value: isinstance(value, str) and NAME_PATTERN.match(value) is not None,
        message="A manufacturer name must start with a letter, a digit or _.",
    ),
    Rule(
        field="name",
        check=lambda value: len(value) <= NAME_MAX_LENGTH,
        message=f"A manufacturer name has at most {NAME_MAX_LENGTH} characters.",
    ),
    Rule(
        field="telephone",
        check=lambda value: isinstance(value, str) and TELEPHONE_PATTERN.fullmatch(value) is not None,
        message="A telephone number consists of exactly 11 digits.",
    ),
    Rule(
        field="homepage",
        check=lambda value: isinstance(value, str) and _is_uri(value),
        message="The homepage is not a valid URI.",
    ),
    Rule(
        field="homepage",
        check=lambda value: len(value) <= HOMEPAGE_MAX_LENGTH,
        message=f"A homepage has at most {HOMEPAGE_MAX_LENGTH} characters.",
    ),
    Rule(
        field="schlagwoerter",
        check=lambda values: all(len(s.upper()) <= SCHLAGWORT_MAX_LENGTH for s in values),
        message=f"A keyword has at most {SCHLAGWORT_MAX_LENGTH} characters.",
    ),
)


class HerstellerValidationService:
    """Evaluates HERSTELLER_RULES against payloads and checks id shapes."""

    def __init__(self, rules=HERSTELLER_RULES):
        self.rules = tuple(rules)

    def validate(self, payload: Any) -> Optional[List[str]]:
        """
        Check a payload against every rule.

        Args:
            payload: Any object exposing the rule fields as attributes
                     (a HerstellerCreate or HerstellerUpdate). Never mutated.

        Returns:
            None when the payload is valid, otherwise one message per
            violated rule, in rule order.
        """
        messages = []
        for rule in self.rules:
            value = getattr(payload, rule.field, None)
            if value is None and not rule.required:
                continue
            if not rule.check(value):
                messages.append(rule.message)

        if not messages:
            return None
        logger.debug("Payload rejected: %s", messages)
        return messages

    def validate_id(self, id: Optional[str]) -> bool:
        """True iff `id` has the UUID shape 8-4-4-4-12 (hex digits)."""
        return isinstance(id, str) and ID_PATTERN.fullmatch(id) is not None
