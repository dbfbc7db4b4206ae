import json
import logging

import pytest

from data_designer_text_cleaner.rules import (
    DEFAULT_RULES,
    InvalidRuleError,
    default_rules,
    dump_rules,
    load_rules,
    parse_rules,
    validate_rules,
)


class TestDefaultRules:
    def test_table_contents(self):
        assert len(DEFAULT_RULES) == 43
        assert DEFAULT_RULES["—"] == "... "
        assert DEFAULT_RULES["“"] == DEFAULT_RULES["”"] == "\""
        assert DEFAULT_RULES["°"] == " degrees"
        assert DEFAULT_RULES["∩"] == "intersection"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_RULES["x"] = "y"

    def test_default_rules_returns_fresh_copy(self):
        rules = default_rules()
        rules["x"] = "y"
        assert "x" not in DEFAULT_RULES
        assert "x" not in default_rules()


class TestValidateRules:
    def test_valid_rules_pass_through(self):
        rules = {"a": "b"}
        assert validate_rules(rules) is rules
        assert validate_rules({}) == {}

    @pytest.mark.parametrize("rules", [None, [("a", "b")], {"a": 1}, {2: "b"}, {"": "b"}])
    def test_invalid_rules(self, rules):
        with pytest.raises(InvalidRuleError):
            validate_rules(rules)

    def test_is_value_error(self):
        assert issubclass(InvalidRuleError, ValueError)


class TestParseRules:
    def test_parses_object(self):
        assert parse_rules('{"\\u2014": "-", "x": ""}') == {"—": "-", "x": ""}

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"text"', '{"a": 1}', '{"a": null}'])
    def test_rejects_invalid(self, raw):
        with pytest.raises(InvalidRuleError):
            parse_rules(raw)


class TestLoadAndDump:
    def test_missing_save_uses_defaults(self):
        assert load_rules(None) == dict(DEFAULT_RULES)
        assert load_rules("   ") == dict(DEFAULT_RULES)

    def test_loads_saved_rules(self):
        assert load_rules('{"a": "b"}') == {"a": "b"}

    def test_corrupt_save_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="data_designer_text_cleaner.rules"):
            assert load_rules("{broken") == dict(DEFAULT_RULES)
        assert "Failed to parse saved rules" in caplog.text

    def test_dump_round_trip(self):
        raw = dump_rules(DEFAULT_RULES)
        assert "—" in raw
        assert raw.startswith("{\n  ")
        assert parse_rules(raw) == dict(DEFAULT_RULES)

    def test_dump_rejects_invalid(self):
        with pytest.raises(InvalidRuleError):
            dump_rules({"a": 1})

    def test_dump_preserves_order(self):
        assert list(json.loads(dump_rules({"b": "1", "a": "2"}))) == ["b", "a"]
