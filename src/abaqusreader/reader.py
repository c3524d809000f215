"""Entry points tying the line scanner, mesh and model parsers together."""

import logging
from pathlib import Path
from typing import Optional, Union

from abaqusreader.errors import ModelValidationError
from abaqusreader.knowledge.element_db import ElementDatabase
from abaqusreader.models import Mesh, Model
from abaqusreader.parsers.assembly import AssemblyParser, detect_assembly_format
from abaqusreader.parsers.mesh import MeshParser
from abaqusreader.parsers.lines import KEYWORD_MARKER, find_keyword_lines
from abaqusreader.parsers.model import ModelParser

logger = logging.getLogger(__name__)

Source = Union[str, Path]


def _resolve_path(source: Source) -> Optional[Path]:
    """Path to read, or None when ``source`` is the input text itself.

    A single-line string without a keyword marker can only be a file name,
    so it must exist.
    """
    if isinstance(source, Path):
        return source
    if "\n" in source:
        return None
    try:
        candidate = Path(source)
        if candidate.is_file():
            return candidate
    except (OSError, ValueError):
        pass
    if KEYWORD_MARKER not in source:
        raise FileNotFoundError(f"No such .inp file: '{source}'")
    return None


def read_lines(source: Source) -> list[str]:
    """Lines of an .inp file or text, without line terminators."""
    path = _resolve_path(source)
    if path is None:
        return source.splitlines()
    logger.debug("Reading %s", path)
    with open(path, "r", encoding="utf-8-sig", errors="replace") as f:
        return f.read().splitlines()


def _parse_mesh_lines(lines: list[str], database: Optional[ElementDatabase],
                      verbose: bool) -> Mesh:
    if len(find_keyword_lines(lines)) == 1:
        logger.warning("Input has no keyword lines (%d lines read)", len(lines))
    mesh_parser = MeshParser(database=database, verbose=verbose)
    if detect_assembly_format(lines):
        logger.debug("Part/assembly structure detected")
        return AssemblyParser(mesh_parser).parse(lines)
    return mesh_parser.parse(lines)


def parse_mesh(source: Source, *, database: Optional[ElementDatabase] = None,
               verbose: bool = True) -> Mesh:
    """Parse nodes, elements, sets and surfaces of an .inp file or text.

    Args:
        source: a path, or the input text itself.
        database: element database used to resolve ``TYPE=`` codes;
            defaults to the process-wide one ``register_element`` updates.
        verbose: log unknown keywords as warnings (debug otherwise).
    """
    return _parse_mesh_lines(read_lines(source), database, verbose)


def parse_model(source: Source, *, database: Optional[ElementDatabase] = None) -> Model:
    """Parse the mesh plus materials, sections, boundary conditions and steps.

    Raises ModelValidationError if the mesh ends up without nodes or elements,
    FileNotFoundError if ``source`` names a file that does not exist.
    """
    path = _resolve_path(source)
    lines = read_lines(source)

    model = Model()
    if path is not None:
        model.path = str(path.resolve().parent)
        model.name = path.stem
    model.mesh = _parse_mesh_lines(lines, database, verbose=False)

    ModelParser(model).parse(lines)

    if not model.mesh.nodes:
        raise ModelValidationError("Model has no nodes")
    if not model.mesh.elements:
        raise ModelValidationError("Model has no elements")
    if model.properties and not model.materials:
        logger.warning("Model defines %d section properties but no materials",
                       len(model.properties))

    logger.debug("Model parsed: %d materials, %d properties, %d steps",
                 len(model.materials), len(model.properties), len(model.steps))
    return model
