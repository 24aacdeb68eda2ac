"""``vehicle`` section: powertrain modes."""

from __future__ import annotations

from voboost_config.models._base import ConfigBaseModel, ConfigEnum

__all__ = [
    "DriveMode",
    "FuelMode",
    "VehicleSection",
]


class FuelMode(ConfigEnum):
    """Energy source strategy of the hybrid powertrain."""

    INTELLECTUAL = "intellectual"
    ELECTRIC = "electric"
    FUEL = "fuel"
    SAVE = "save"  # hold battery charge


class DriveMode(ConfigEnum):
    """Driving dynamics preset."""

    ECO = "eco"
    COMFORT = "comfort"
    SPORT = "sport"
    SNOW = "snow"
    OUTING = "outing"
    INDIVIDUAL = "individual"


class VehicleSection(ConfigBaseModel):
    """Vehicle behaviour settings."""

    fuel_mode: FuelMode | None = None
    drive_mode: DriveMode | None = None
