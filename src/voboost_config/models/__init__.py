"""Typed configuration schema."""

from voboost_config.models._base import ConfigBaseModel, ConfigEnum, to_kebab
from voboost_config.models.config import Config
from voboost_config.models.diff import ConfigDiff, FieldChange, SectionDiff, build_diff_model
from voboost_config.models.settings import (
    INTERFACE_SHIFT_MAX,
    INTERFACE_SHIFT_MIN,
    Language,
    SettingsSection,
    Theme,
)
from voboost_config.models.vehicle import DriveMode, FuelMode, VehicleSection

__all__ = [
    "INTERFACE_SHIFT_MAX",
    "INTERFACE_SHIFT_MIN",
    "Config",
    "ConfigBaseModel",
    "ConfigDiff",
    "ConfigEnum",
    "DriveMode",
    "FieldChange",
    "FuelMode",
    "Language",
    "SectionDiff",
    "SettingsSection",
    "Theme",
    "VehicleSection",
    "build_diff_model",
    "to_kebab",
]
