"""ABAQUS element type database: vendor code -> (node count, canonical topology)."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from abaqusreader.errors import UnknownElementError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementInfo:
    code: str
    nodes: int
    topology: str
    description: str = ""


# Families sharing node count and topology: (node count, topology, description, codes)
_ELEMENT_FAMILIES: list[tuple[int, str, str, tuple[str, ...]]] = [
    # ===== Point elements =====
    (1, "Point1", "Point mass, inertia, spring or dashpot to ground", (
        "MASS", "ROTARYI", "SPRING1", "DASHPOT1", "HEATCAP",
    )),

    # ===== Line elements =====
    (2, "Seg2", "2-node truss", (
        "T2D2", "T2D2H", "T2D2T", "T2D2E", "T3D2", "T3D2H", "T3D2T", "T3D2E",
    )),
    (3, "Seg3", "3-node truss", (
        "T2D3", "T2D3H", "T2D3T", "T2D3E", "T3D3", "T3D3H", "T3D3T", "T3D3E",
    )),
    (2, "Seg2", "2-node linear beam or pipe", (
        "B21", "B21H", "B23", "B23H", "B31", "B31H", "B31OS", "B31OSH", "B33", "B33H",
        "PIPE21", "PIPE21H", "PIPE31", "PIPE31H", "ELBOW31", "ELBOW31B", "ELBOW31C",
    )),
    (3, "Seg3", "3-node quadratic beam or pipe", (
        "B22", "B22H", "B32", "B32H", "B32OS", "B32OSH",
        "PIPE22", "PIPE22H", "PIPE32", "PIPE32H", "ELBOW32",
    )),
    (2, "Seg2", "2-node rigid, connector, spring, dashpot or gap", (
        "R2D2", "R3D2", "RB2D2", "RB3D2", "RAX2", "CONN2D2", "CONN3D2",
        "SPRING2", "SPRINGA", "DASHPOT2", "DASHPOTA", "GAPUNI", "GAPCYL",
        "GAPSPHER", "JOINTC", "ITSUNI", "ITSCYL",
    )),
    (2, "Seg2", "2-node axisymmetric shell or membrane", ("SAX1", "MAX1", "MGAX1", "SFMGAX1")),
    (3, "Seg3", "3-node axisymmetric shell or membrane", ("SAX2", "SAX2T", "MAX2", "MGAX2")),
    (2, "Seg2", "2-node heat transfer link", ("DC1D2", "DC1D2E", "DCC1D2", "DCC1D2D")),
    (3, "Seg3", "3-node heat transfer link", ("DC1D3", "DC1D3E")),

    # ===== Planar / surface triangles =====
    (3, "Tri3", "3-node linear triangle (plane, axisymmetric, shell, membrane)", (
        "CPS3", "CPS3T", "CPE3", "CPE3H", "CPE3T", "CPEG3", "CPEG3H",
        "CAX3", "CAX3H", "CAX3T", "CAX3E",
        "S3", "S3R", "S3RS", "S3T", "S3RT", "STRI3",
        "M3D3", "SFM3D3", "R3D3",
        "DC2D3", "DC2D3E", "DCAX3", "DCAX3E", "DS3",
        "AC2D3", "ACAX3",
    )),
    (6, "Tri6", "6-node quadratic triangle", (
        "CPS6", "CPS6M", "CPS6MT", "CPE6", "CPE6H", "CPE6M", "CPE6MH", "CPE6MT", "CPE6MHT",
        "CPEG6", "CPEG6H", "CPEG6M", "CAX6", "CAX6H", "CAX6M", "CAX6MH", "CAX6MT", "CAX6MHT",
        "STRI65", "M3D6", "SFM3D6", "DC2D6", "DC2D6E", "DCAX6", "DCAX6E", "DS6",
        "AC2D6", "ACAX6",
    )),

    # ===== Planar / surface quadrilaterals =====
    (4, "Quad4", "4-node linear quadrilateral (plane, axisymmetric, shell, membrane)", (
        "CPS4", "CPS4R", "CPS4I", "CPS4T", "CPS4RT",
        "CPE4", "CPE4R", "CPE4H", "CPE4RH", "CPE4I", "CPE4IH",
        "CPE4T", "CPE4RT", "CPE4HT", "CPE4RHT", "CPE4P", "CPE4RP",
        "CPEG4", "CPEG4R", "CPEG4H", "CPEG4I",
        "CAX4", "CAX4R", "CAX4H", "CAX4RH", "CAX4I", "CAX4IH",
        "CAX4T", "CAX4RT", "CAX4HT", "CAX4RHT", "CAX4P", "CAX4RP",
        "S4", "S4R", "S4RS", "S4R5", "S4RSW", "S4T", "S4RT",
        "M3D4", "M3D4R", "SFM3D4", "SFM3D4R", "R3D4",
        "DC2D4", "DC2D4E", "DCAX4", "DCAX4E", "DS4", "DCC2D4", "DCCAX4",
        "COH2D4", "COHAX4", "AC2D4", "ACAX4", "CPE4PH", "CAX4PH",
    )),
    (8, "Quad8", "8-node quadratic quadrilateral", (
        "CPS8", "CPS8R", "CPS8T", "CPS8RT",
        "CPE8", "CPE8R", "CPE8H", "CPE8RH", "CPE8T", "CPE8RT", "CPE8HT", "CPE8RHT",
        "CPE8P", "CPE8RP", "CPEG8", "CPEG8R", "CPEG8H",
        "CAX8", "CAX8R", "CAX8H", "CAX8RH", "CAX8T", "CAX8RT", "CAX8HT", "CAX8RHT",
        "CAX8P", "CAX8RP",
        "S8R", "S8R5", "S8RT", "M3D8", "M3D8R", "SFM3D8", "SFM3D8R",
        "DC2D8", "DC2D8E", "DCAX8", "DCAX8E", "DS8", "AC2D8", "ACAX8",
    )),
    (9, "Quad9", "9-node quadrilateral", ("M3D9", "M3D9R", "S9R5")),

    # ===== 3D continuum =====
    (4, "Tet4", "4-node linear tetrahedron", (
        "C3D4", "C3D4H", "C3D4T", "C3D4E", "C3D4P", "C3D4HT",
        "DC3D4", "DC3D4E", "AC3D4",
    )),
    (10, "Tet10", "10-node quadratic tetrahedron", (
        "C3D10", "C3D10H", "C3D10I", "C3D10M", "C3D10MH", "C3D10MT", "C3D10MHT",
        "C3D10T", "C3D10HT", "C3D10HS", "C3D10E", "C3D10MP", "C3D10MPH",
        "DC3D10", "DC3D10E", "AC3D10",
    )),
    (5, "Pyr5", "5-node linear pyramid", ("C3D5", "C3D5H")),
    (6, "Wedge6", "6-node linear wedge", (
        "C3D6", "C3D6H", "C3D6T", "C3D6E", "C3D6P",
        "DC3D6", "DC3D6E", "COH3D6", "AC3D6", "SC6R", "SC6RT",
    )),
    (15, "Wedge15", "15-node quadratic wedge", (
        "C3D15", "C3D15H", "C3D15V", "C3D15VH", "C3D15E", "DC3D15", "DC3D15E", "AC3D15",
    )),
    (8, "Hex8", "8-node linear hexahedron", (
        "C3D8", "C3D8R", "C3D8H", "C3D8RH", "C3D8I", "C3D8IH",
        "C3D8T", "C3D8RT", "C3D8HT", "C3D8RHT", "C3D8E", "C3D8P", "C3D8RP",
        "C3D8PH", "C3D8RPH", "C3D8S", "C3D8HS",
        "DC3D8", "DC3D8E", "DCC3D8", "DCC3D8D", "COH3D8", "AC3D8",
        "SC8R", "SC8RT", "CSS8",
    )),
    (20, "Hex20", "20-node quadratic hexahedron", (
        "C3D20", "C3D20R", "C3D20H", "C3D20RH", "C3D20T", "C3D20RT", "C3D20HT",
        "C3D20RHT", "C3D20E", "C3D20RE", "C3D20P", "C3D20RP", "C3D20PH",
        "DC3D20", "DC3D20E", "AC3D20",
    )),
    (27, "Hex27", "27-node quadratic hexahedron", ("C3D27", "C3D27R", "C3D27H", "C3D27RH")),
]


def _build_builtin() -> dict[str, ElementInfo]:
    table: dict[str, ElementInfo] = {}
    for nodes, topology, description, codes in _ELEMENT_FAMILIES:
        for code in codes:
            table[code] = ElementInfo(code=code, nodes=nodes, topology=topology,
                                      description=description)
    return table


BUILTIN_ELEMENTS: dict[str, ElementInfo] = _build_builtin()


class ElementDatabase:
    """Owned lookup table of element codes, seeded from the built-in families.

    Each parser takes one of these; tests construct their own so that
    registrations stay local.
    """

    def __init__(self, entries: Optional[dict[str, ElementInfo]] = None):
        self._entries: dict[str, ElementInfo] = dict(
            BUILTIN_ELEMENTS if entries is None else entries
        )

    def register(self, code: str, nodes: int, topology: str, description: str = ""):
        """Add or replace an element code. Last registration wins."""
        key = code.strip().upper()
        self._entries[key] = ElementInfo(code=key, nodes=nodes, topology=topology,
                                         description=description)
        logger.debug("Registered element %s: %d nodes, topology %s", key, nodes, topology)

    def lookup(self, code: str) -> ElementInfo:
        key = code.strip().upper()
        if key not in self._entries:
            raise UnknownElementError(key)
        return self._entries[key]

    def node_count(self, code: str) -> int:
        return self.lookup(code).nodes

    def topology(self, code: str) -> str:
        return self.lookup(code).topology

    def copy(self) -> "ElementDatabase":
        return ElementDatabase(self._entries)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip().upper() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ElementInfo]:
        return iter(self._entries.values())


DEFAULT_DATABASE = ElementDatabase()


def register_element(code: str, nodes: int, topology: str, description: str = "",
                     database: Optional[ElementDatabase] = None):
    """Register an element code with the default (process-wide) database.

    Example: ``register_element("C3D10X", 10, "Tet10")`` lets subsequently
    parsed files use ``*ELEMENT, TYPE=C3D10X``.
    """
    db = database if database is not None else DEFAULT_DATABASE
    db.register(code, nodes, topology, description)


def lookup_element(code: str, database: Optional[ElementDatabase] = None) -> ElementInfo:
    """Look up an element code. Raises UnknownElementError if it is not registered."""
    db = database if database is not None else DEFAULT_DATABASE
    return db.lookup(code)
