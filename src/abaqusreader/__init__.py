"""Parser for ABAQUS .inp input files."""

__version__ = "0.1.0"

from abaqusreader.analysis.surfaces import create_surface_elements
from abaqusreader.errors import (
    AbaqusReaderError, ModelValidationError, ParseError, SectionContextError,
    SurfaceError, UnknownElementError,
)
from abaqusreader.knowledge.element_db import (
    DEFAULT_DATABASE, ElementDatabase, ElementInfo, lookup_element, register_element,
)
from abaqusreader.models import Mesh, Model
from abaqusreader.reader import parse_mesh, parse_model, read_lines

__all__ = [
    "__version__",
    "parse_mesh", "parse_model", "read_lines", "create_surface_elements",
    "register_element", "lookup_element", "ElementDatabase", "ElementInfo",
    "DEFAULT_DATABASE", "Mesh", "Model",
    "AbaqusReaderError", "ParseError", "UnknownElementError",
    "SectionContextError", "ModelValidationError", "SurfaceError",
]
