"""voboost_config - Typed, validated, hot-reloading configuration for Voboost."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("voboost-config")
except PackageNotFoundError:
    __version__ = "0+local"
from voboost_config.differ import changed_paths, diff, has_any_change, is_field_changed
from voboost_config.events import CallbackListener, ConfigChangeEvent, ConfigChangeListener
from voboost_config.exceptions import (
    ConfigIoError,
    ConfigParseError,
    ConfigValidationError,
    ProvisioningError,
    VoboostConfigError,
    WatchAlreadyActiveError,
    WatchSetupError,
)
from voboost_config.fields import FieldSpec, field_paths, field_spec
from voboost_config.manager import ConfigManager, WatchState, WatchSubscription
from voboost_config.models import (
    Config,
    ConfigDiff,
    DriveMode,
    FieldChange,
    FuelMode,
    Language,
    SettingsSection,
    Theme,
    VehicleSection,
)
from voboost_config.options import ManagerOptions
from voboost_config.parser import parse, parse_file
from voboost_config.provision import copy_default_config_if_needed, default_config_text
from voboost_config.validator import is_valid_config, validate

__all__ = [
    "__version__",
    "CallbackListener",
    "Config",
    "ConfigChangeEvent",
    "ConfigChangeListener",
    "ConfigDiff",
    "ConfigIoError",
    "ConfigManager",
    "ConfigParseError",
    "ConfigValidationError",
    "DriveMode",
    "FieldChange",
    "FieldSpec",
    "FuelMode",
    "Language",
    "ManagerOptions",
    "ProvisioningError",
    "SettingsSection",
    "Theme",
    "VehicleSection",
    "VoboostConfigError",
    "WatchAlreadyActiveError",
    "WatchSetupError",
    "WatchState",
    "WatchSubscription",
    "changed_paths",
    "copy_default_config_if_needed",
    "default_config_text",
    "diff",
    "field_paths",
    "field_spec",
    "has_any_change",
    "is_field_changed",
    "is_valid_config",
    "parse",
    "parse_file",
    "validate",
]
