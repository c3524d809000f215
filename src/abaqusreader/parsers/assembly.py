"""Parser for structured input files using *PART / *ASSEMBLY blocks.

Each part is parsed into its own mesh; afterwards all parts are flattened
into one global numbering so that callers expecting a flat mesh keep working:

- node and element IDs of a part are shifted by the largest ID already
  present in the flattened mesh,
- connectivity is shifted by the same node offset,
- part sets and surfaces are renamed ``<part>.<name>``.

The untouched per-part meshes stay available under ``Mesh.parts`` and the
assembly-level definitions under ``Mesh.assembly``.
"""

import logging

from abaqusreader.errors import ParseError
from abaqusreader.models import Mesh
from abaqusreader.parsers.lines import iter_sections, keyword_name, parse_keyword_line
from abaqusreader.parsers.mesh import MeshParser

logger = logging.getLogger(__name__)


def detect_assembly_format(lines: list[str]) -> bool:
    """True if any line opens a *PART block."""
    for line in lines:
        if line.strip().upper().startswith("*PART"):
            return True
    return False


class AssemblyParser:
    """Routes mesh sections to the enclosing part, the assembly, or the file scope."""

    def __init__(self, mesh_parser: MeshParser):
        self.mesh_parser = mesh_parser

    def parse(self, lines: list[str]) -> Mesh:
        result = Mesh()
        assembly = Mesh()
        parts: dict[str, Mesh] = {}
        current_part = None
        in_assembly = False

        for start, end in iter_sections(lines):
            name = keyword_name(lines[start])

            if name == "PART":
                part_name = parse_keyword_line(lines[start]).get("NAME")
                if not isinstance(part_name, str) or not part_name:
                    raise ParseError("PART without NAME", keyword=name, line_number=start + 1)
                logger.debug("Starting PART: %s", part_name)
                current_part = part_name
                parts.setdefault(part_name, Mesh())
                continue
            if name == "END PART":
                logger.debug("Ending PART: %s", current_part)
                current_part = None
                continue
            if name == "ASSEMBLY":
                logger.debug("Starting ASSEMBLY")
                in_assembly = True
                current_part = None
                continue
            if name == "END ASSEMBLY":
                logger.debug("Ending ASSEMBLY")
                in_assembly = False
                continue

            if current_part is not None:
                target = parts[current_part]
            elif in_assembly:
                target = assembly
            else:
                target = result
            self.mesh_parser.parse_section(target, lines, start, end)

        flatten_parts(result, parts)
        result.parts = parts
        result.assembly = assembly
        return result


def flatten_parts(result: Mesh, parts: dict[str, Mesh]):
    """Merge part meshes into ``result`` in definition order with offset IDs."""
    for part_name, part in parts.items():
        node_offset = max(result.nodes, default=0)
        element_offset = max(result.elements, default=0)
        logger.debug("Flattening PART: %s (%d nodes, %d elements, offsets %d/%d)",
                     part_name, len(part.nodes), len(part.elements),
                     node_offset, element_offset)

        for node_id, coords in part.nodes.items():
            result.nodes[node_id + node_offset] = list(coords)

        for element_id, connectivity in part.elements.items():
            new_id = element_id + element_offset
            result.elements[new_id] = [node_id + node_offset for node_id in connectivity]
            result.element_types[new_id] = part.element_types[element_id]
            if element_id in part.element_codes:
                result.element_codes[new_id] = part.element_codes[element_id]

        for set_name, node_ids in part.node_sets.items():
            result.node_sets[f"{part_name}.{set_name}"] = [i + node_offset for i in node_ids]

        for set_name, element_ids in part.element_sets.items():
            result.element_sets[f"{part_name}.{set_name}"] = [
                i + element_offset for i in element_ids
            ]

        for surface_name, faces in part.surface_sets.items():
            prefixed = f"{part_name}.{surface_name}"
            result.surface_sets[prefixed] = [
                (element_id + element_offset, face) for element_id, face in faces
            ]
            result.surface_types[prefixed] = part.surface_types.get(surface_name, "UNKNOWN")

    logger.debug("Flattened mesh: %d nodes, %d elements",
                 len(result.nodes), len(result.elements))
