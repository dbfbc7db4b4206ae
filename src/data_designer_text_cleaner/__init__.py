# SPDX-License-Identifier: Apache-2.0
"""Text Cleaner plugin for NeMo Data Designer.

Adds a ``text-cleaner`` column type that rewrites characters typical of generated
text (em dashes, curly quotes, math symbols) into plain ASCII and scores each row
for AI-likelihood with five capped heuristic detectors. No LLM calls, no API
dependencies.

Usage::

    from data_designer_text_cleaner import TextCleanerColumnConfig

    builder.add_column(TextCleanerColumnConfig(
        name="cleaned",
        target_columns=["article"],
        max_ai_percentage=40,
    ))

The core functions work on plain strings as well::

    from data_designer_text_cleaner import normalize, score

    normalize("a “quote”")   # 'a "quote"'
    score("Furthermore, ...").percentage
"""

from data_designer_text_cleaner.config import TextCleanerColumnConfig
from data_designer_text_cleaner.core import AIScoreResult, DetectorResult, Hyperparameters, normalize, score
from data_designer_text_cleaner.rules import (
    DEFAULT_RULES,
    InvalidRuleError,
    default_rules,
    dump_rules,
    load_rules,
    parse_rules,
    validate_rules,
)

__all__ = [
    "TextCleanerColumnConfig",
    "normalize",
    "score",
    "AIScoreResult",
    "DetectorResult",
    "Hyperparameters",
    "DEFAULT_RULES",
    "InvalidRuleError",
    "default_rules",
    "dump_rules",
    "load_rules",
    "parse_rules",
    "validate_rules",
]
