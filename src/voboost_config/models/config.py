"""Root configuration document."""

from __future__ import annotations

from voboost_config.models._base import ConfigBaseModel
from voboost_config.models.settings import SettingsSection
from voboost_config.models.vehicle import VehicleSection

__all__ = ["Config"]


class Config(ConfigBaseModel):
    """A parsed configuration file.

    A section set to ``None`` was not present in the document. A section
    instance whose fields are all ``None`` was present but empty; the
    differ treats the two as distinct.
    """

    settings: SettingsSection | None = None
    vehicle: VehicleSection | None = None
