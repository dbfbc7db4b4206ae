from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_text_cleaner.config import TextCleanerColumnConfig
from data_designer_text_cleaner.core import normalize, score

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def clean_row(text: str, config: TextCleanerColumnConfig) -> dict:
    """Clean and score one row's text according to ``config``."""
    result = score(text, config.rules)
    output: dict = {
        "is_valid": result.percentage <= config.max_ai_percentage,
        "cleaned_text": normalize(text, config.rules),
        "ai_percentage": result.percentage,
        "raw_score": result.raw_score,
    }
    if config.include_breakdown:
        output["breakdown"] = result.to_payload()["breakdown"]
    return output


class TextCleanerColumnGenerator(ColumnGeneratorFullColumn[TextCleanerColumnConfig]):
    """Column generator that normalizes special characters and scores AI likelihood."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f9fd Cleaning column {self.config.name!r} and scoring AI likelihood")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   rules: {'custom' if self.config.rules is not None else 'default'}")
        logger.info(f"   max_ai_percentage: {self.config.max_ai_percentage}")

        results = []
        for _, row in data[self.config.target_columns].iterrows():
            text = " ".join(str(v) for v in row.values if v is not None)
            results.append(clean_row(text, self.config))

        data = data.copy()
        data[self.config.name] = results
        return data
