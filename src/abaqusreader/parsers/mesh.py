"""Mesh-level parser: nodes, elements, node/element sets and surfaces."""

import logging
import re
from typing import Optional

from abaqusreader.errors import ParseError
from abaqusreader.keywords import is_model_only
from abaqusreader.knowledge.element_db import DEFAULT_DATABASE, ElementDatabase
from abaqusreader.models import Mesh
from abaqusreader.parsers.lines import (
    RE_INT_FIELD, is_blank_or_comment, iter_sections, keyword_name,
    parse_integers, parse_keyword_line, parse_numbers,
)

logger = logging.getLogger(__name__)

RE_SET_NAME = {
    "NSET": re.compile(r'\bNSET\s*=\s*(?:"([^"]+)"|([\w\-\.]+))', re.IGNORECASE),
    "ELSET": re.compile(r'\bELSET\s*=\s*(?:"([^"]+)"|([\w\-\.]+))', re.IGNORECASE),
}

# "16, S1" or "16, , S1" (element based)
RE_SURFACE_ELEMENT = re.compile(r'^\s*(\d+)\s*,.*?\b(S\d+)\b', re.IGNORECASE)
# "TOP_FACES, S2" or "\"Top faces\", S2" (element set based)
RE_SURFACE_ELSET = re.compile(
    r'^\s*(?:"([^"]+)"|([A-Za-z_][\w\-\.]*))\s*,\s*(S\d+)\b', re.IGNORECASE
)


def _node_id(token: str) -> int:
    if RE_INT_FIELD.match(token):
        return int(token)
    return int(float(token))


class MeshParser:
    """Section dispatcher for mesh keywords.

    Each keyword section (keyword line plus its data lines) is routed to a
    handler by keyword name; other keywords are logged and skipped.
    """

    def __init__(self, database: Optional[ElementDatabase] = None, verbose: bool = True):
        self.database = database if database is not None else DEFAULT_DATABASE
        self.verbose = verbose
        self._handlers = {
            "NODE": self._parse_nodes,
            "ELEMENT": self._parse_elements,
            "NSET": self._parse_node_set,
            "ELSET": self._parse_element_set,
            "SURFACE": self._parse_surface,
        }

    def parse(self, lines: list[str]) -> Mesh:
        mesh = Mesh()
        for start, end in iter_sections(lines):
            self.parse_section(mesh, lines, start, end)
        logger.debug("Mesh parsed: %d nodes, %d elements, %d node sets, "
                     "%d element sets, %d surfaces",
                     len(mesh.nodes), len(mesh.elements), len(mesh.node_sets),
                     len(mesh.element_sets), len(mesh.surface_sets))
        return mesh

    def parse_section(self, mesh: Mesh, lines: list[str], start: int, end: int):
        """Dispatch the section whose keyword line is ``lines[start]``."""
        definition = lines[start]
        name = keyword_name(definition)
        handler = self._handlers.get(name)
        if handler is None:
            self._skip(name, start)
            return
        data = [line for line in lines[start + 1:end] if not is_blank_or_comment(line)]
        try:
            handler(mesh, definition, data)
        except ParseError as e:
            e.locate(name, start + 1)
            logger.error("Error parsing section %s: %s", name, e)
            raise

    def _skip(self, name: str, start: int):
        if is_model_only(name):
            logger.debug("Skipping model keyword *%s at line %d", name, start + 1)
        elif self.verbose:
            logger.warning("Unknown section: '%s' at line %d", name, start + 1)
        else:
            logger.debug("Unknown section: '%s' at line %d", name, start + 1)

    # ========== NODE ==========
    def _parse_nodes(self, mesh: Mesh, definition: str, data: list[str]):
        ids: list[int] = []
        for line in data:
            tokens = parse_numbers(line)
            if not tokens:
                raise ParseError(f"Node line without numbers: '{line.strip()}'")
            node_id = _node_id(tokens[0])
            mesh.nodes[node_id] = [float(t) for t in tokens[1:]]
            ids.append(node_id)
        logger.debug("%d nodes found", len(ids))

        set_name = parse_keyword_line(definition).get("NSET")
        if isinstance(set_name, str):
            _add_to_set(mesh.node_sets, set_name, ids)

    # ========== ELEMENT ==========
    def _parse_elements(self, mesh: Mesh, definition: str, data: list[str]):
        keyword = parse_keyword_line(definition)
        code = keyword.get("TYPE")
        if not isinstance(code, str) or not code.strip():
            raise ParseError(f"ELEMENT block without TYPE: {definition.strip()}")
        info = self.database.lookup(code)
        logger.debug("Parsing elements. Type: %s. Topology: %s", info.code, info.topology)

        ids: list[int] = []
        rows = iter(data)
        for line in rows:
            numbers = parse_integers(line)
            if not numbers:
                raise ParseError(f"Element line without numbers: '{line.strip()}'")
            element_id, connectivity = numbers[0], numbers[1:]
            # connectivity may continue on following lines
            while len(connectivity) < info.nodes:
                line = next(rows, None)
                if line is None:
                    raise ParseError(
                        f"Element {element_id} of type {info.code} has "
                        f"{len(connectivity)} nodes, expected {info.nodes}"
                    )
                connectivity.extend(parse_integers(line))
            if len(connectivity) > info.nodes:
                raise ParseError(
                    f"Element {element_id} of type {info.code} lists "
                    f"{len(connectivity)} nodes, expected {info.nodes}"
                )
            mesh.elements[element_id] = connectivity
            mesh.element_types[element_id] = info.topology
            mesh.element_codes[element_id] = info.code
            ids.append(element_id)
        logger.debug("%d elements found", len(ids))

        set_name = keyword.get("ELSET")
        if isinstance(set_name, str):
            _add_to_set(mesh.element_sets, set_name, ids)

    # ========== NSET / ELSET ==========
    def _parse_node_set(self, mesh: Mesh, definition: str, data: list[str]):
        self._parse_set(mesh.node_sets, "NSET", definition, data)

    def _parse_element_set(self, mesh: Mesh, definition: str, data: list[str]):
        self._parse_set(mesh.element_sets, "ELSET", definition, data)

    def _parse_set(self, sets: dict[str, list[int]], key: str, definition: str,
                   data: list[str]):
        m = RE_SET_NAME[key].search(definition)
        if not m:
            raise ParseError(f"Could not find set name in definition: {definition.strip()}")
        set_name = m.group(1) if m.group(1) is not None else m.group(2)
        logger.debug("Creating %s %s", key.lower(), set_name)

        flags = [token.strip().upper() for token in definition.split(",")[1:]]
        ids: list[int] = []
        if "GENERATE" in flags:
            for line in data:
                numbers = parse_integers(line)
                if len(numbers) < 2:
                    raise ParseError(f"GENERATE needs first, last[, step]: '{line.strip()}'")
                first, last = numbers[0], numbers[1]
                step = numbers[2] if len(numbers) > 2 else 1
                if step <= 0:
                    raise ParseError(f"GENERATE step must be positive: '{line.strip()}'")
                ids.extend(range(first, last + 1, step))
        else:
            for line in data:
                for field in line.split(","):
                    field = field.strip()
                    if not field:
                        continue
                    if RE_INT_FIELD.match(field):
                        ids.append(int(field))
                    elif field in sets:
                        ids.extend(sets[field])
                    else:
                        logger.warning("%s %s references unknown set %s, skipping",
                                       key, set_name, field)
        _add_to_set(sets, set_name, ids)

    # ========== SURFACE ==========
    def _parse_surface(self, mesh: Mesh, definition: str, data: list[str]):
        keyword = parse_keyword_line(definition)
        name = keyword.get("NAME")
        if not isinstance(name, str) or not name:
            raise ParseError(f"SURFACE without NAME: {definition.strip()}")
        kind = keyword.get("TYPE", "UNKNOWN")
        kind = kind.upper() if isinstance(kind, str) else "UNKNOWN"
        if kind == "NODE":
            logger.debug("Skipping node-based surface %s", name)
            return

        pairs: list[tuple[int, str]] = []
        for line in data:
            m = RE_SURFACE_ELEMENT.match(line)
            if m:
                pairs.append((int(m.group(1)), m.group(2).upper()))
                continue
            m = RE_SURFACE_ELSET.match(line)
            if m:
                set_name = m.group(1) if m.group(1) is not None else m.group(2)
                face = m.group(3).upper()
                if set_name not in mesh.element_sets:
                    logger.warning("Surface %s references unknown element set %s, skipping",
                                   name, set_name)
                    continue
                pairs.extend((element_id, face) for element_id in mesh.element_sets[set_name])
                continue
            raise ParseError(f"Unable to parse surface definition line: '{line.strip()}'")

        if not pairs:
            logger.debug("Surface %s has no faces, discarding", name)
            return
        mesh.surface_sets[name] = pairs
        mesh.surface_types[name] = kind


def _add_to_set(sets: dict[str, list[int]], name: str, ids: list[int]):
    """Repeated definitions of the same set name accumulate."""
    sets.setdefault(name, []).extend(ids)
