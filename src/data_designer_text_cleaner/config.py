from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator

from data_designer.config.column_configs import SingleColumnConfig

from data_designer_text_cleaner.rules import parse_rules, validate_rules


class TextCleanerColumnConfig(SingleColumnConfig):
    """Normalize special characters in text columns and score them for AI-generated style.

    Each row's text is rewritten with the configured replacement rules and scored by five
    heuristic detectors, yielding an AI-likelihood percentage between 0 and 95.

    Attributes:
        target_columns: Columns whose text content will be concatenated, cleaned, and scored.
        rules: Replacement rules as a mapping or JSON object text. Replaces the built-in
            table entirely when set; ``None`` uses the defaults.
        max_ai_percentage: Highest AI-likelihood percentage (0-95) for ``is_valid=True``.
            Defaults to 50.
        include_breakdown: Include per-detector scores and evidence in output.
    """

    target_columns: list[str]
    rules: dict[str, str] | None = Field(default=None, description="Replacement rules; None uses the defaults")
    max_ai_percentage: int = Field(default=50, ge=0, le=95, description="Maximum AI percentage for is_valid=True")
    include_breakdown: bool = Field(default=False, description="Include per-detector breakdown in output")
    column_type: Literal["text-cleaner"] = "text-cleaner"

    @field_validator("rules", mode="before")
    @classmethod
    def _parse_rules_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_rules(value)
        return value

    @field_validator("rules")
    @classmethod
    def _check_rules(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        if value is not None:
            validate_rules(value)
        return value

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f9fd"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
