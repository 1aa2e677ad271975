"""
Bundled ASGS configuration defaults, one record per meteorological forcing kind.

The defaults document (data/asgs_defaults.json) is validated with pydantic
when loaded: every ForcingKind must have a record and every record must
carry only known ASGS fields.
"""

import json
import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from adcirclive.errors import ConfigurationError, UnknownForcingKindError

DEFAULTS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "asgs_defaults.json")


class ForcingKind(str, Enum):
    """Meteorological forcing that selects a defaults template."""
    NAM = "NAM"
    ATCF = "ATCF"
    GFS = "GFS"

    @classmethod
    def parse(cls, value: str) -> "ForcingKind":
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise UnknownForcingKindError(value, [k.value for k in cls]) from None


class AsgsConfig(BaseModel):
    """One ASGS configuration record. Field names are the ASGS variable names."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    INSTANCENAME: str = ""
    GRIDNAME: str = ""
    OPERATOR: str = ""
    ASGSADMIN: str = ""
    MACHINE: str = ""
    NCPU: str = ""
    NUMWRITERS: str = "1"
    NCPUCAPACITY: str = ""
    ACCOUNT: str = ""
    QUEUENAME: str = ""
    SERQUEUE: str = ""
    BACKGROUNDMET: str = "off"
    TIDEFAC: str = "on"
    TROPICALCYCLONE: str = "off"
    WAVES: str = "off"
    VARFLUX: str = "off"
    STORM: str = ""
    YEAR: str = ""
    BASIN: str = ""
    TRIGGER: str = ""
    COLDSTARTDATE: str = "auto"
    HINDCASTLENGTH: str = "30.0"
    FORECASTCYCLE: str = ""
    SCENARIOPACKAGESIZE: str = "2"
    POSTPROCESS: str = ""


# Command-line flag name -> AsgsConfig field overlaid by it
FLAG_FIELDS: dict[str, str] = {
    "instancename": "INSTANCENAME",
    "gridname": "GRIDNAME",
    "operator": "OPERATOR",
    "asgsadmin": "ASGSADMIN",
    "machine": "MACHINE",
    "ncpu": "NCPU",
    "numwriters": "NUMWRITERS",
    "account": "ACCOUNT",
    "queuename": "QUEUENAME",
    "storm": "STORM",
    "year": "YEAR",
    "coldstartdate": "COLDSTARTDATE",
    "hindcastlength": "HINDCASTLENGTH",
    "scenariopackagesize": "SCENARIOPACKAGESIZE",
}

_DEFAULTS_ADAPTER = TypeAdapter(dict[ForcingKind, AsgsConfig])


def load_defaults(path: str = DEFAULTS_PATH) -> dict[ForcingKind, AsgsConfig]:
    """
    Load and validate the defaults document.

    Args:
        path: JSON file mapping upper-case forcing kind to a field record.

    Returns:
        Mapping with one AsgsConfig per ForcingKind.

    Raises:
        ConfigurationError: If the document is unreadable, invalid, or
            lacks a record for some forcing kind.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        defaults = _DEFAULTS_ADAPTER.validate_python(raw)
    except (OSError, ValueError, ValidationError) as e:
        raise ConfigurationError(f"invalid defaults document {path}: {e}") from e

    missing = [kind.value for kind in ForcingKind if kind not in defaults]
    if missing:
        raise ConfigurationError(f"defaults document {path} has no record for: {', '.join(missing)}")

    return defaults
