"""Data models for parsed ABAQUS input files."""

from dataclasses import dataclass, field
from typing import Optional, Union

OptionValue = Union[str, bool]
DataValue = Union[int, float, str, None]


@dataclass
class Keyword:
    """A parsed keyword line: uppercase name plus ordered options.

    Bare flags (e.g. ``GENERATE``, ``NLGEOM``) are stored with value ``True``;
    ``KEY=VALUE`` pairs keep the value verbatim.
    """
    name: str = ""
    options: dict[str, OptionValue] = field(default_factory=dict)

    def get(self, key: str, default=None):
        return self.options.get(key.upper(), default)

    def has(self, key: str) -> bool:
        return key.upper() in self.options


@dataclass
class Mesh:
    nodes: dict[int, list[float]] = field(default_factory=dict)
    elements: dict[int, list[int]] = field(default_factory=dict)
    element_types: dict[int, str] = field(default_factory=dict)
    element_codes: dict[int, str] = field(default_factory=dict)
    node_sets: dict[str, list[int]] = field(default_factory=dict)
    element_sets: dict[str, list[int]] = field(default_factory=dict)
    surface_sets: dict[str, list[tuple[int, str]]] = field(default_factory=dict)
    surface_types: dict[str, str] = field(default_factory=dict)
    parts: dict[str, "Mesh"] = field(default_factory=dict)
    assembly: Optional["Mesh"] = None


# --- Material properties ---

@dataclass
class Elastic:
    E: float = 0.0
    nu: float = 0.0


@dataclass
class Density:
    density: float = 0.0


@dataclass
class Plastic:
    table: list[tuple[float, float]] = field(default_factory=list)


@dataclass
class Expansion:
    alpha: float = 0.0


@dataclass
class Damping:
    alpha: float = 0.0
    beta: float = 0.0


MaterialProperty = Union[Elastic, Density, Plastic, Expansion, Damping]


@dataclass
class Material:
    name: str = ""
    properties: list[MaterialProperty] = field(default_factory=list)


# --- Section properties ---

@dataclass
class SolidSection:
    element_set: str = ""
    material_name: str = ""
    controls: Optional[str] = None
    area: Optional[float] = None


@dataclass
class ShellSection:
    element_set: str = ""
    material_name: str = ""
    thickness: float = 1.0
    integration_points: int = 5


@dataclass
class MassSection:
    element_set: str = ""
    mass: float = 1.0


Property = Union[SolidSection, ShellSection, MassSection]


# --- Analysis definition ---

@dataclass
class BoundaryCondition:
    kind: str = ""              # BOUNDARY, CLOAD, DLOAD, DSLOAD
    data: list[list[DataValue]] = field(default_factory=list)
    options: dict[str, OptionValue] = field(default_factory=dict)


@dataclass
class OutputRequest:
    kind: str = ""              # NODE, EL, SECTION, CONTACT or e.g. NODE_OUTPUT
    data: list[list[DataValue]] = field(default_factory=list)
    options: dict[str, OptionValue] = field(default_factory=dict)
    target: str = "UNKNOWN"     # PRINT, FILE, FIELD or UNKNOWN


@dataclass
class Step:
    name: Optional[str] = None
    kind: Optional[str] = None  # STATIC, FREQUENCY, BUCKLE, DYNAMIC
    options: dict[str, OptionValue] = field(default_factory=dict)
    boundary_conditions: list[BoundaryCondition] = field(default_factory=list)
    output_requests: list[OutputRequest] = field(default_factory=list)
    analysis_data: list[list[DataValue]] = field(default_factory=list)


@dataclass
class Model:
    path: str = ""
    name: str = ""
    heading: str = ""
    mesh: Mesh = field(default_factory=Mesh)
    materials: dict[str, Material] = field(default_factory=dict)
    properties: list[Property] = field(default_factory=list)
    boundary_conditions: list[BoundaryCondition] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)


@dataclass
class ReaderState:
    """Ephemeral context of the model-level section state machine."""
    section: Optional[Keyword] = None
    section_line: int = 0
    material: Optional[Material] = None
    property: Optional[Property] = None
    step: Optional[Step] = None
    data: list[str] = field(default_factory=list)
