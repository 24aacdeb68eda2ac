"""``settings`` section: interface language, theme and screen offsets."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, Strict

from voboost_config.models._base import ConfigBaseModel, ConfigEnum

__all__ = [
    "INTERFACE_SHIFT_MAX",
    "INTERFACE_SHIFT_MIN",
    "InterfaceShift",
    "Language",
    "SettingsSection",
    "Theme",
]

# Interface shift is a pixel offset applied to the whole UI.
INTERFACE_SHIFT_MIN = -500
INTERFACE_SHIFT_MAX = 500

InterfaceShift = Annotated[int, Strict(), Field(ge=INTERFACE_SHIFT_MIN, le=INTERFACE_SHIFT_MAX)]


class Language(ConfigEnum):
    """Interface language."""

    EN = "en"
    RU = "ru"


class Theme(ConfigEnum):
    """Colour theme. ``auto`` follows the head unit's day/night mode."""

    AUTO = "auto"
    LIGHT = "light"
    DARK = "dark"


class SettingsSection(ConfigBaseModel):
    """User interface settings."""

    language: Language | None = None
    theme: Theme | None = None
    interface_shift_x: InterfaceShift | None = None
    interface_shift_y: InterfaceShift | None = None
