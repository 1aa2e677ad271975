"""
XDMF description requests.

The service generates XDMF files describing ADCIRC output for a mesh. The
client only chooses which output products to describe and, for
time-varying descriptions, how the time axis is laid out.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from adcirclive.meshes import Mesh
from adcirclive.transport import XDMF_STATIC_PATH, XDMF_TIMEVARYING_PATH, ApiResponse, Transport

DEFAULT_PARAVIEW_VERSION = "5.10"
DEFAULT_ADCIRC_VERSION = "55"


@dataclass(frozen=True)
class OutputSelection:
    """Which ADCIRC output products to describe."""
    fort63: bool = False
    fort64: bool = False
    fort73: bool = False
    fort74: bool = False
    maxele: bool = False
    maxvel: bool = False
    maxwvel: bool = False
    minpr: bool = False
    swan_hs: bool = False
    swan_tps: bool = False

    def to_json(self) -> dict[str, bool]:
        return asdict(self)

    def any_selected(self) -> bool:
        return any(self.to_json().values())


@dataclass(frozen=True)
class TimeAxis:
    """Time layout of a time-varying output series."""
    cold_start: str | None = None
    output_start: str | None = None
    num_datasets: int | None = None
    time_increment: float | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "coldStartDateTime": self.cold_start,
            "outputStartDateTime": self.output_start,
            "numDataSets": self.num_datasets,
            "timeIncrement": self.time_increment,
        }


@dataclass(frozen=True)
class StaticXdmfRequest:
    mesh: Mesh
    output: OutputSelection = field(default_factory=OutputSelection)
    paraview_version: str = DEFAULT_PARAVIEW_VERSION
    adcirc_version: str = DEFAULT_ADCIRC_VERSION

    path = XDMF_STATIC_PATH

    def to_json(self) -> dict[str, Any]:
        return {
            "mesh": self.mesh.to_json(),
            "output": self.output.to_json(),
            "paraviewVersion": self.paraview_version,
            "adcircVersion": self.adcirc_version,
        }


@dataclass(frozen=True)
class TimeVaryingXdmfRequest(StaticXdmfRequest):
    time: TimeAxis = field(default_factory=TimeAxis)

    path = XDMF_TIMEVARYING_PATH

    def to_json(self) -> dict[str, Any]:
        payload = super().to_json()
        payload["time"] = self.time.to_json()
        return payload


def request_xdmf(transport: Transport, request: StaticXdmfRequest) -> ApiResponse:
    """Submit a static or time-varying request and return the checked response."""
    return transport.post(request.path, request.to_json()).raise_for_status()
