# File: tests/config/test_opening_config.py
"""Tests for opening run configuration."""

import json

import pytest

from wall_opening_generator.config.opening_config import (
    OpeningConfig,
    load_opening_config,
)


class TestOpeningConfigDefaults:
    """Test default naming conventions."""

    def test_defaults(self):
        config = OpeningConfig()

        assert config.secondary_document_marker == "ОВ"
        assert config.family_name == "Отверстия"
        assert config.width_parameter == "Ширина"
        assert config.height_parameter == "Высота"
        assert config.length_tolerance == 0.0

    def test_negative_length_tolerance_rejected(self):
        with pytest.raises(ValueError):
            OpeningConfig(length_tolerance=-0.1)

    def test_zero_unit_tolerance_rejected(self):
        with pytest.raises(ValueError):
            OpeningConfig(unit_tolerance=0.0)

    def test_empty_family_name_rejected(self):
        with pytest.raises(ValueError):
            OpeningConfig(family_name="")

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown configuration keys"):
            OpeningConfig.from_dict({"family": "Holes"})


class TestFromDictConversion:
    """Test value conversion in from_dict."""

    def test_numeric_string_converted(self):
        config = OpeningConfig.from_dict({"length_tolerance": "0.1"})

        assert config.length_tolerance == 0.1

    def test_int_accepted_for_float_field(self):
        assert OpeningConfig.from_dict({"unit_tolerance": 1}).unit_tolerance == 1.0

    @pytest.mark.parametrize("value", ["abc", None, [0.1], True])
    def test_non_numeric_tolerance_rejected(self, value):
        with pytest.raises(ValueError, match="length_tolerance must be a number"):
            OpeningConfig.from_dict({"length_tolerance": value})

    def test_non_string_name_rejected(self):
        with pytest.raises(ValueError, match="family_name must be a string"):
            OpeningConfig.from_dict({"family_name": 42})

    @pytest.mark.parametrize("value,expected", [
        ("yes", True), ("ON", True), ("0", False), ("off", False), (False, False),
    ])
    def test_bool_strings(self, value, expected):
        assert OpeningConfig.from_dict({"trace": value}).trace is expected

    @pytest.mark.parametrize("value", ["maybe", 1, None])
    def test_bad_bool_rejected(self, value):
        with pytest.raises(ValueError, match="debug must be a boolean"):
            OpeningConfig.from_dict({"debug": value})

    def test_converted_value_still_validated(self):
        with pytest.raises(ValueError):
            OpeningConfig.from_dict({"length_tolerance": "-1"})


class TestLoadOpeningConfig:
    """Test file and environment loading."""

    def test_no_sources_gives_defaults(self):
        assert load_opening_config(environ={}) == OpeningConfig()

    def test_json_file(self, tmp_path):
        path = tmp_path / "openings.json"
        path.write_text(
            json.dumps({"family_name": "Holes", "length_tolerance": 0.01}),
            encoding="utf-8",
        )

        config = load_opening_config(str(path), environ={})

        assert config.family_name == "Holes"
        assert config.length_tolerance == 0.01

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "openings.json"
        path.write_text(json.dumps({"family_name": "Holes"}), encoding="utf-8")

        config = load_opening_config(str(path), environ={
            "OPENING_FAMILY_NAME": "Voids",
            "OPENING_LENGTH_TOLERANCE": "0.05",
            "OPENING_DEBUG": "true",
        })

        assert config.family_name == "Voids"
        assert config.length_tolerance == 0.05
        assert config.debug is True

    def test_bad_environment_number_rejected(self):
        with pytest.raises(ValueError, match="length_tolerance must be a number"):
            load_opening_config(environ={"OPENING_LENGTH_TOLERANCE": "lots"})

    def test_non_object_file_rejected(self, tmp_path):
        path = tmp_path / "openings.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_opening_config(str(path), environ={})

    def test_invalid_json_rejected(self, tmp_path):
        path = tmp_path / "openings.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration JSON"):
            load_opening_config(str(path), environ={})
