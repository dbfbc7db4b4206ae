import pytest
from pydantic import ValidationError

from data_designer_text_cleaner.config import TextCleanerColumnConfig
from data_designer_text_cleaner.generator import clean_row


def _config(**kwargs) -> TextCleanerColumnConfig:
    return TextCleanerColumnConfig(name="cleaned", target_columns=["text"], **kwargs)


class TestTextCleanerColumnConfig:
    def test_defaults(self):
        config = _config()
        assert config.rules is None
        assert config.max_ai_percentage == 50
        assert config.include_breakdown is False
        assert config.column_type == "text-cleaner"
        assert config.required_columns == ["text"]
        assert config.side_effect_columns == []

    def test_rules_from_mapping(self):
        assert _config(rules={"—": "-"}).rules == {"—": "-"}

    def test_rules_from_json_text(self):
        assert _config(rules='{"\\u2014": "--"}').rules == {"—": "--"}

    @pytest.mark.parametrize("rules", ['{"a": 1}', "not json", "[]", {"": "x"}, {"a": 1}])
    def test_invalid_rules_rejected(self, rules):
        with pytest.raises(ValidationError):
            _config(rules=rules)

    def test_max_ai_percentage_bounds(self):
        with pytest.raises(ValidationError):
            _config(max_ai_percentage=96)
        with pytest.raises(ValidationError):
            _config(max_ai_percentage=-1)


class TestCleanRow:
    def test_default_output(self):
        output = clean_row("It's a “great” day—truly.", _config())
        assert set(output) == {"is_valid", "cleaned_text", "ai_percentage", "raw_score"}
        assert output["cleaned_text"] == "It's a \"great\" day... truly."
        assert output["raw_score"] == 6
        assert output["ai_percentage"] == 6
        assert output["is_valid"] is True

    def test_threshold(self):
        output = clean_row("—" * 20, _config(max_ai_percentage=10))
        assert output["ai_percentage"] == 19
        assert output["is_valid"] is False

    def test_custom_rules(self):
        output = clean_row("a—b “c”", _config(rules={"—": "--"}))
        assert output["cleaned_text"] == "a--b “c”"
        assert output["raw_score"] == 2

    def test_breakdown(self):
        output = clean_row("Furthermore, it works.", _config(include_breakdown=True))
        assert output["breakdown"]["language_patterns"]["evidence"] == ["furthermore"]
        assert output["breakdown"]["language_patterns"]["max_score"] == 30
