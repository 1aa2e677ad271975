"""
Mesh catalog: read-only records of the meshes the service knows about.
"""

from dataclasses import dataclass, field
from typing import Any

from adcirclive.errors import CatalogEntryError, MeshNotFoundError, UnexpectedResponseError
from adcirclive.logging_utils import get_logger
from adcirclive.transport import MESHES_PATH, ApiResponse, Transport

logger = get_logger(__name__)


@dataclass(frozen=True)
class Mesh:
    """One catalog entry. `raw` keeps the entry exactly as the catalog sent it."""
    name: str
    node_count: int
    element_count: int
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, entry: Any) -> "Mesh":
        if not isinstance(entry, dict) or "name" not in entry:
            raise CatalogEntryError(entry, "expected an object with a 'name'")
        # Counts arrive as strings from the catalog endpoint
        try:
            node_count = int(entry.get("nodes") or 0)
            element_count = int(entry.get("elements") or 0)
        except (TypeError, ValueError) as e:
            raise CatalogEntryError(entry, f"node/element count is not an integer ({e})") from e
        return cls(
            name=str(entry["name"]),
            node_count=node_count,
            element_count=element_count,
            raw=dict(entry),
        )

    def to_json(self) -> dict[str, Any]:
        """Identifying metadata echoed back in XDMF requests, as the catalog sent it."""
        if self.raw:
            return dict(self.raw)
        return {
            "name": self.name,
            "nodes": self.node_count,
            "elements": self.element_count,
        }


def fetch_catalog(transport: Transport) -> ApiResponse:
    return transport.get(MESHES_PATH).raise_for_status()


def parse_catalog(response: ApiResponse) -> list[Mesh]:
    entries = response.json()
    if not isinstance(entries, list):
        raise UnexpectedResponseError(response.url, "mesh catalog is not a list", response.body)
    return [Mesh.from_json(entry) for entry in entries]


def list_meshes(transport: Transport) -> list[Mesh]:
    return parse_catalog(fetch_catalog(transport))


def find_mesh(transport: Transport, name: str) -> Mesh:
    """Look up a mesh by exact name."""
    for mesh in list_meshes(transport):
        if mesh.name == name:
            return mesh
    raise MeshNotFoundError(name)


def format_mesh_table(meshes: list[Mesh]) -> str:
    """Render meshes as an aligned name/nodes/elements table."""
    header = ("name", "nodes", "elements")
    rows = [(m.name, str(m.node_count), str(m.element_count)) for m in meshes]

    widths = [len(h) for h in header]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def fmt(row: tuple[str, str, str]) -> str:
        return f"{row[0]:<{widths[0]}}  {row[1]:>{widths[1]}}  {row[2]:>{widths[2]}}"

    lines = [fmt(header), "  ".join("-" * w for w in widths)]
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)
