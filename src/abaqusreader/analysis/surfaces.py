"""Materialize implicit (element, face) surfaces into explicit face elements."""

import logging

from abaqusreader.errors import SurfaceError
from abaqusreader.knowledge.face_table import face_definition
from abaqusreader.models import Mesh

logger = logging.getLogger(__name__)


def create_surface_element(topology: str, face: str,
                           connectivity: list[int]) -> tuple[str, list[int]]:
    """Face element of one element side.

    ``("Tet4", "S1", [8, 9, 10, 2])`` -> ``("Tri3", [8, 10, 9])``
    """
    try:
        face_topology, positions = face_definition(topology, face)
    except KeyError:
        raise SurfaceError(
            f"No face definition for side {face} of element topology {topology}"
        ) from None
    return face_topology, [connectivity[p - 1] for p in positions]


def create_surface_elements(mesh: Mesh, surface_name: str) -> list[tuple[str, list[int]]]:
    """Convert a named surface into (face topology, global connectivity) pairs.

    One face element per surface entry, in surface order. The node order of
    each face is the one of the face table and is never re-sorted.
    """
    if surface_name not in mesh.surface_sets:
        raise SurfaceError(f"Surface '{surface_name}' not found in mesh")
    result = []
    for element_id, face in mesh.surface_sets[surface_name]:
        if element_id not in mesh.elements:
            raise SurfaceError(
                f"Surface '{surface_name}' references element {element_id} "
                f"which is not in the mesh"
            )
        result.append(create_surface_element(
            mesh.element_types[element_id], face, mesh.elements[element_id],
        ))
    logger.debug("Surface %s: %d face elements", surface_name, len(result))
    return result


def surface_nodes(mesh: Mesh, surface_name: str) -> list[int]:
    """Sorted unique node IDs on a surface."""
    nodes: set[int] = set()
    for _, connectivity in create_surface_elements(mesh, surface_name):
        nodes.update(connectivity)
    return sorted(nodes)
