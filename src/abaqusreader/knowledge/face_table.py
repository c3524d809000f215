"""Local face (or edge) definitions of volume and planar element topologies.

Each entry maps (topology, face id) to the face topology and the 1-based
local node positions of that face, in the winding the face element keeps.
"""

FACE_TABLE: dict[str, dict[str, tuple[str, tuple[int, ...]]]] = {
    "Tet4": {
        "S1": ("Tri3", (1, 3, 2)),
        "S2": ("Tri3", (1, 2, 4)),
        "S3": ("Tri3", (2, 3, 4)),
        "S4": ("Tri3", (1, 4, 3)),
    },
    "Tet10": {
        "S1": ("Tri6", (1, 3, 2, 7, 6, 5)),
        "S2": ("Tri6", (1, 2, 4, 5, 9, 8)),
        "S3": ("Tri6", (2, 3, 4, 6, 10, 9)),
        "S4": ("Tri6", (1, 4, 3, 8, 10, 7)),
    },
    "Wedge6": {
        "S1": ("Tri3", (1, 2, 3)),
        "S2": ("Tri3", (4, 6, 5)),
        "S3": ("Quad4", (1, 4, 5, 2)),
        "S4": ("Quad4", (2, 5, 6, 3)),
        "S5": ("Quad4", (3, 6, 4, 1)),
    },
    "Hex8": {
        "S1": ("Quad4", (1, 2, 3, 4)),
        "S2": ("Quad4", (5, 8, 7, 6)),
        "S3": ("Quad4", (1, 5, 6, 2)),
        "S4": ("Quad4", (2, 6, 7, 3)),
        "S5": ("Quad4", (3, 7, 8, 4)),
        "S6": ("Quad4", (4, 8, 5, 1)),
    },
    "Hex20": {
        "S1": ("Quad8", (1, 2, 3, 4, 9, 10, 11, 12)),
        "S2": ("Quad8", (5, 8, 7, 6, 16, 15, 14, 13)),
        "S3": ("Quad8", (1, 5, 6, 2, 17, 13, 18, 9)),
        "S4": ("Quad8", (2, 6, 7, 3, 18, 14, 19, 10)),
        "S5": ("Quad8", (3, 7, 8, 4, 19, 15, 20, 11)),
        "S6": ("Quad8", (4, 8, 5, 1, 20, 16, 17, 12)),
    },
    # Planar elements: faces are edges
    "Tri3": {
        "S1": ("Seg2", (1, 2)),
        "S2": ("Seg2", (2, 3)),
        "S3": ("Seg2", (3, 1)),
    },
    "Tri6": {
        "S1": ("Seg3", (1, 2, 4)),
        "S2": ("Seg3", (2, 3, 5)),
        "S3": ("Seg3", (3, 1, 6)),
    },
    "Quad4": {
        "S1": ("Seg2", (1, 2)),
        "S2": ("Seg2", (2, 3)),
        "S3": ("Seg2", (3, 4)),
        "S4": ("Seg2", (4, 1)),
    },
    "Quad8": {
        "S1": ("Seg3", (1, 2, 5)),
        "S2": ("Seg3", (2, 3, 6)),
        "S3": ("Seg3", (3, 4, 7)),
        "S4": ("Seg3", (4, 1, 8)),
    },
}


def face_definition(topology: str, face: str) -> tuple[str, tuple[int, ...]]:
    """Return (face topology, local positions). Raises KeyError if unknown."""
    return FACE_TABLE[topology][face]
