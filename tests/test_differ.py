"""Tests for the field-level configuration differ."""

from __future__ import annotations

import pydantic
import pytest

from voboost_config.differ import changed_paths, diff, has_any_change, is_field_changed
from voboost_config.fields import field_paths
from voboost_config.models import (
    Config,
    ConfigDiff,
    DriveMode,
    FuelMode,
    Language,
    SettingsSection,
    Theme,
    VehicleSection,
)


def _config(**settings: object) -> Config:
    base: dict[str, object] = {
        "language": Language.EN,
        "theme": Theme.AUTO,
        "interface_shift_x": 0,
        "interface_shift_y": 0,
    }
    base.update(settings)
    return Config(
        settings=SettingsSection(**base),  # type: ignore[arg-type]
        vehicle=VehicleSection(fuel_mode=FuelMode.ELECTRIC, drive_mode=DriveMode.COMFORT),
    )


class TestDiff:
    def test_identical_configs_have_no_change(self) -> None:
        config = _config()
        result = diff(config, config)
        assert result == ConfigDiff()
        assert not has_any_change(result)
        for path in field_paths():
            assert not is_field_changed(result, path)

    def test_equal_but_distinct_instances_have_no_change(self) -> None:
        assert not has_any_change(diff(_config(), _config()))

    def test_single_field_change(self) -> None:
        result = diff(_config(), _config(theme=Theme.DARK))

        assert has_any_change(result)
        assert is_field_changed(result, "settingsTheme")
        for path in field_paths():
            if path != "settingsTheme":
                assert not is_field_changed(result, path), path
        assert result.settings.theme.previous is Theme.AUTO  # type: ignore[union-attr]
        assert result.settings.theme.current is Theme.DARK  # type: ignore[union-attr]
        assert result.vehicle is None

    def test_field_becoming_absent_is_a_change(self) -> None:
        result = diff(_config(), _config(interface_shift_y=None))
        assert changed_paths(result) == ["settingsInterfaceShiftY"]
        assert result.settings.interface_shift_y.previous == 0  # type: ignore[union-attr]
        assert result.settings.interface_shift_y.current is None  # type: ignore[union-attr]

    def test_field_becoming_present_is_a_change(self) -> None:
        before = Config(vehicle=VehicleSection(fuel_mode=FuelMode.FUEL))
        after = Config(vehicle=VehicleSection(fuel_mode=FuelMode.FUEL, drive_mode=DriveMode.ECO))
        assert changed_paths(diff(before, after)) == ["vehicleDriveMode"]

    def test_removed_section_reports_presence_and_fields(self) -> None:
        before = _config()
        after = Config(settings=before.settings)
        result = diff(before, after)

        assert result.vehicle is not None
        assert result.vehicle.presence.previous is True  # type: ignore[attr-defined]
        assert result.vehicle.presence.current is False  # type: ignore[attr-defined]
        assert changed_paths(result) == ["vehicleFuelMode", "vehicleDriveMode"]

    def test_empty_section_appearing_is_a_change(self) -> None:
        result = diff(Config(), Config(settings=SettingsSection()))
        assert has_any_change(result)
        assert changed_paths(result) == []
        assert result.settings.presence.current is True  # type: ignore[union-attr]

    def test_first_load_has_no_diff_by_default(self) -> None:
        result = diff(None, _config())
        assert not has_any_change(result)

    def test_first_load_can_report_everything(self) -> None:
        config = Config(settings=SettingsSection(language=Language.RU))
        result = diff(None, config, all_changed=True)
        assert changed_paths(result) == ["settingsLanguage"]
        assert result.settings.presence.current is True  # type: ignore[union-attr]
        assert result.settings.language.previous is None  # type: ignore[union-attr]

    def test_diff_is_frozen(self) -> None:
        result = diff(_config(), _config(language=Language.RU))
        with pytest.raises(pydantic.ValidationError):
            result.settings = None  # type: ignore[misc]


class TestQueries:
    def test_none_diff(self) -> None:
        assert not has_any_change(None)
        assert not is_field_changed(None, "settingsLanguage")
        assert changed_paths(None) == []

    def test_unknown_path_is_unchanged(self) -> None:
        result = diff(_config(), _config(language=Language.RU))
        assert not is_field_changed(result, "settingsVolume")
        assert not is_field_changed(result, "")
        assert not is_field_changed(result, None)  # type: ignore[arg-type]

    def test_dotted_location_is_accepted(self) -> None:
        result = diff(_config(), _config(interface_shift_x=25))
        assert is_field_changed(result, "settings.interface-shift-x")
        assert is_field_changed(result, "settingsInterfaceShiftX")

    def test_changed_paths_follow_schema_order(self) -> None:
        before = _config()
        after = Config(
            settings=SettingsSection(language=Language.RU, theme=Theme.AUTO, interface_shift_x=0, interface_shift_y=9),
            vehicle=VehicleSection(fuel_mode=FuelMode.SAVE, drive_mode=DriveMode.COMFORT),
        )
        assert changed_paths(diff(before, after)) == [
            "settingsLanguage",
            "settingsInterfaceShiftY",
            "vehicleFuelMode",
        ]
