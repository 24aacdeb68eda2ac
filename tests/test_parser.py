"""Tests for YAML parsing into Config."""

from __future__ import annotations

from pathlib import Path

import pytest

from voboost_config.exceptions import ConfigIoError, ConfigParseError, ConfigValidationError
from voboost_config.fields import FIELDS
from voboost_config.models import Config, DriveMode, FuelMode, Language, SettingsSection, Theme
from voboost_config.parser import parse, parse_file
from voboost_config.validator import validate

FULL_DOCUMENT = """\
# Voboost configuration
settings:
  language: ru
  theme: dark
  interface-shift-x: -12
  interface-shift-y: 40

vehicle:
  fuel-mode: save      # keep the battery charged
  drive-mode: sport
"""


class TestValidDocuments:
    def test_full_document(self) -> None:
        config = parse(FULL_DOCUMENT)

        assert config.settings is not None
        assert config.settings.language is Language.RU
        assert config.settings.theme is Theme.DARK
        assert config.settings.interface_shift_x == -12
        assert config.settings.interface_shift_y == 40
        assert config.vehicle is not None
        assert config.vehicle.fuel_mode is FuelMode.SAVE
        assert config.vehicle.drive_mode is DriveMode.SPORT

    def test_parsed_document_passes_validation(self) -> None:
        validate(parse(FULL_DOCUMENT))

    def test_empty_document_is_empty_config(self) -> None:
        assert parse("") == Config()
        assert parse("# only a comment\n") == Config()

    def test_missing_keys_stay_absent(self) -> None:
        config = parse("settings:\n  theme: light\n")
        assert config.settings == SettingsSection(theme=Theme.LIGHT)
        assert config.settings.language is None
        assert config.vehicle is None

    def test_empty_section_is_present(self) -> None:
        config = parse("settings: {}\nvehicle:\n")
        assert config.settings == SettingsSection()
        # A bare key with no value is YAML null, i.e. not specified.
        assert config.vehicle is None

    def test_attribute_names_are_unknown_keys(self) -> None:
        config = parse("settings:\n  interface_shift_x: 9999\n  language: en\nvehicle:\n  fuel_mode: save\n")
        assert config.settings == SettingsSection(language=Language.EN)
        assert config.settings.interface_shift_x is None
        assert config.vehicle is not None
        assert config.vehicle.fuel_mode is None

    def test_unknown_keys_are_ignored(self) -> None:
        config = parse(
            "version: 3\n"
            "audio:\n  volume: 7\n"
            "settings:\n  language: en\n  font-size: 14\n"
        )
        assert config == Config(settings=SettingsSection(language=Language.EN))

    def test_whitespace_and_flow_style(self) -> None:
        config = parse("vehicle: {fuel-mode: electric,   drive-mode: snow}\n\n\n")
        assert config.vehicle is not None
        assert config.vehicle.drive_mode is DriveMode.SNOW

    @pytest.mark.parametrize(
        ("location", "token"),
        [
            (spec.location, token)
            for spec in FIELDS
            if spec.allowed is not None
            for token in sorted(spec.allowed)
        ],
    )
    def test_every_legal_token_round_trips(self, location: str, token: str) -> None:
        section, key = location.split(".")
        config = parse(f"{section}:\n  {key}: {token}\n")
        spec = next(spec for spec in FIELDS if spec.location == location)
        assert spec.get(config) == token


class TestParseErrors:
    def test_malformed_yaml_reports_line(self) -> None:
        with pytest.raises(ConfigParseError) as exc_info:
            parse("settings:\n  language: [en\n  theme: dark\n")
        assert exc_info.value.line is not None

    def test_top_level_must_be_mapping(self) -> None:
        with pytest.raises(ConfigParseError):
            parse("- settings\n- vehicle\n")

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ConfigParseError) as exc_info:
            parse("settings: english\n")
        assert exc_info.value.field == "settings"

    def test_non_numeric_shift(self) -> None:
        with pytest.raises(ConfigParseError) as exc_info:
            parse("settings:\n  language: en\n  interface-shift-x: left\n")
        assert exc_info.value.field == "settingsInterfaceShiftX"
        assert exc_info.value.line == 3
        assert "settings.interface-shift-x" in str(exc_info.value)

    def test_boolean_shift_is_not_a_number(self) -> None:
        with pytest.raises(ConfigParseError):
            parse("settings:\n  interface-shift-y: true\n")

    def test_fractional_shift_is_rejected(self) -> None:
        with pytest.raises(ConfigParseError):
            parse("settings:\n  interface-shift-y: 1.5\n")

    def test_number_where_token_expected(self) -> None:
        with pytest.raises(ConfigParseError) as exc_info:
            parse("vehicle:\n  drive-mode: 3\n")
        assert exc_info.value.field == "vehicleDriveMode"

    def test_parse_error_is_not_a_validation_error(self) -> None:
        with pytest.raises(ConfigParseError) as exc_info:
            parse("settings:\n  interface-shift-x: left\n")
        assert not isinstance(exc_info.value, ConfigValidationError)


class TestValidationErrors:
    def test_unknown_enum_token(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            parse("vehicle:\n  fuel-mode: bogus\n")
        assert exc_info.value.field == "vehicleFuelMode"
        assert exc_info.value.value == "bogus"
        assert "line 2" in str(exc_info.value)

    def test_tokens_are_case_sensitive(self) -> None:
        with pytest.raises(ConfigValidationError):
            parse("settings:\n  language: EN\n")

    @pytest.mark.parametrize("value", [-501, 501, 10_000])
    def test_shift_out_of_range(self, value: int) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            parse(f"settings:\n  interface-shift-x: {value}\n")
        assert exc_info.value.field == "settingsInterfaceShiftX"
        assert exc_info.value.value == value

    def test_one_bad_field_rejects_the_whole_document(self) -> None:
        with pytest.raises(ConfigValidationError):
            parse(FULL_DOCUMENT.replace("drive-mode: sport", "drive-mode: warp"))


class TestParseFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(FULL_DOCUMENT, encoding="utf-8")
        assert parse_file(path) == parse(FULL_DOCUMENT)

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "absent.yaml"
        with pytest.raises(ConfigIoError) as exc_info:
            parse_file(path)
        assert exc_info.value.path == path

    def test_directory_is_not_readable(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigIoError):
            parse_file(tmp_path)

    def test_undecodable_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_bytes(b"settings:\n  language: \xff\xfe\n")
        with pytest.raises(ConfigIoError):
            parse_file(path, encoding="utf-8")
