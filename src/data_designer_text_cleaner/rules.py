"""Replacement rule tables and helpers for reading and writing them as JSON.

A rule set is a flat ``str -> str`` mapping from source text (usually a single
character) to its plain-ASCII replacement. Custom rule sets replace the
defaults wholesale; they are never merged.
"""

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class InvalidRuleError(ValueError):
    """Raised when a rule set is not a mapping of non-empty strings to strings."""


# ---------------------------------------------------------------------------
# Default table
# ---------------------------------------------------------------------------

DEFAULT_RULES: Mapping[str, str] = MappingProxyType({
    "—": "... ",         # em dash
    "–": "-",            # en dash
    "\u201C": "\"",
    "\u201D": "\"",
    "\u2018": "'",
    "\u2019": "'",
    "…": "...",          # ellipsis
    "•": "-",            # bullet
    "→": "->",
    "←": "<-",
    "⇒": "=>",
    "⇐": "<=",
    "±": "+/-",
    "×": "x",
    "÷": "/",
    "°": " degrees",
    "©": "(c)",
    "®": "(R)",
    "™": "(TM)",
    "¥": "JPY",
    "¢": "cents",
    "∞": "infinity",
    "√": "sqrt",
    "²": "^2",
    "³": "^3",
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "α": "alpha",
    "β": "beta",
    "γ": "gamma",
    "π": "pi",
    "μ": "mu",
    "σ": "sigma",
    "≤": "<=",
    "≥": ">=",
    "≠": "!=",
    "≈": "~",
    "≡": "==",
    "⊂": "subset",
    "⊃": "superset",
    "∪": "union",
    "∩": "intersection",
})


def default_rules() -> dict[str, str]:
    """Return an editable copy of the default rule set."""
    return dict(DEFAULT_RULES)


# ---------------------------------------------------------------------------
# Validation and JSON round-tripping
# ---------------------------------------------------------------------------


def validate_rules(rules: Any) -> Mapping[str, str]:
    """Check that ``rules`` is a mapping of non-empty strings to strings.

    Returns the mapping unchanged so callers can validate inline.

    Raises:
        InvalidRuleError: On the first offending entry.
    """
    if not isinstance(rules, Mapping):
        raise InvalidRuleError(f"Rules must be a mapping, got {type(rules).__name__}")
    for source, target in rules.items():
        if not isinstance(source, str):
            raise InvalidRuleError(f"Rule source {source!r} is not a string")
        if not source:
            raise InvalidRuleError("Rule source must not be empty")
        if not isinstance(target, str):
            raise InvalidRuleError(f"Rule target for {source!r} is not a string: {target!r}")
    return rules


def parse_rules(raw: str) -> dict[str, str]:
    """Parse a JSON object of ``source -> replacement`` pairs."""
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidRuleError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    if not isinstance(parsed, dict):
        raise InvalidRuleError("Rules JSON must be an object")
    return dict(validate_rules(parsed))


def load_rules(raw: str | None) -> dict[str, str]:
    """Load a previously saved rule set, falling back to the defaults.

    Blank input means nothing was saved. Unparseable input is logged and
    discarded rather than raised, so a corrupted save never blocks cleaning.
    """
    if raw is None or not raw.strip():
        return default_rules()
    try:
        return parse_rules(raw)
    except InvalidRuleError as e:
        logger.warning(f"Failed to parse saved rules, using defaults: {e}")
        return default_rules()


def dump_rules(rules: Mapping[str, str]) -> str:
    """Serialize a rule set to indented JSON, keeping non-ASCII characters readable."""
    return json.dumps(dict(validate_rules(rules)), indent=2, ensure_ascii=False)
