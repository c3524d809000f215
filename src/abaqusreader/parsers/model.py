"""Model-level parser: materials, section properties, steps, loads and output requests.

The parser is a small state machine driven line by line. A keyword line
closes the open section (running its close handler on the collected data
lines) and opens the next one (running its open handler). Handlers read and
update the current material / property / step held in ``ReaderState``.
"""

import logging
from typing import Callable

from abaqusreader.errors import ParseError, SectionContextError
from abaqusreader.keywords import (
    ANALYSIS_KEYWORDS, BOUNDARY_KEYWORDS, OUTPUT_KEYWORDS, PRINT_FILE_KEYWORDS,
    ModelKeyword,
)
from abaqusreader.models import (
    BoundaryCondition, Damping, DataValue, Density, Elastic, Expansion, Keyword,
    MassSection, Material, Model, OutputRequest, Plastic, ReaderState,
    ShellSection, SolidSection, Step,
)
from abaqusreader.parsers.lines import (
    is_comment, is_keyword, keyword_name, parse_data_rows, parse_keyword_line,
)

logger = logging.getLogger(__name__)

Handler = Callable[["ModelParser"], None]


def _is_number(value: DataValue) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ModelParser:
    """Stateful keyword-section parser filling a ``Model``."""

    def __init__(self, model: Model):
        self.model = model
        self.state = ReaderState()

    def parse(self, lines: list[str]) -> Model:
        for line_number, line in enumerate(lines, start=1):
            self.feed(line, line_number)
        self.finish()
        return self.model

    def feed(self, line: str, line_number: int = 0):
        if is_comment(line):
            return
        if is_keyword(line):
            self.new_section(line, line_number)
        else:
            self.process_line(line, line_number)

    def finish(self):
        self.maybe_close_section()

    # ========== Transitions ==========

    def new_section(self, line: str, line_number: int = 0):
        self.maybe_close_section()
        self.state.data = []
        name = keyword_name(line)
        kind = ModelKeyword.lookup(name)
        if kind is ModelKeyword.SKIP:
            section = Keyword(name=name)
        else:
            try:
                section = parse_keyword_line(line)
            except ParseError as e:
                raise e.locate(name, line_number)
        self.state.section = section
        self.state.section_line = line_number
        self.maybe_open_section()

    def process_line(self, line: str, line_number: int = 0):
        line = line.strip()
        if not line or is_comment(line):
            return
        if is_keyword(line):
            if self.state.section is not None:
                logger.warning("missing keyword? line %d = %s", line_number, line)
            self.new_section(line, line_number)
            return
        if self.state.section is None:
            logger.debug("No open section, dropping line %d = %s", line_number, line)
            return
        self.state.data.append(line)

    def maybe_open_section(self):
        section = self.state.section
        kind = ModelKeyword.lookup(section.name)
        logger.debug("New section: %s with options %s", section.name, section.options)
        handler = OPEN_HANDLERS.get(kind)
        if handler is None:
            logger.debug("No open handler for %s", section.name)
            return
        handler(self)

    def maybe_close_section(self):
        section = self.state.section
        if section is None:
            return
        kind = ModelKeyword.lookup(section.name)
        logger.debug("Close section: %s", section.name)
        handler = CLOSE_HANDLERS.get(kind)
        if handler is None:
            logger.debug("No close handler for %s", section.name)
        else:
            handler(self)
        self.state.section = None

    # ========== Helpers ==========

    def _where(self) -> str:
        return f"*{self.state.section.name} at line {self.state.section_line}"

    def _rows(self) -> list[list[DataValue]]:
        return parse_data_rows(self.state.data)

    def _required_option(self, key: str) -> str:
        value = self.state.section.get(key)
        if not isinstance(value, str) or not value:
            raise ParseError(f"Missing required option {key}=",
                             keyword=self.state.section.name,
                             line_number=self.state.section_line)
        return value

    def _float_option(self, key: str, default: float) -> float:
        value = self.state.section.get(key)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ParseError(f"Option {key}={value} is not a number",
                             keyword=self.state.section.name,
                             line_number=self.state.section_line)

    def _current_material(self) -> Material:
        if self.state.material is None:
            raise SectionContextError(f"{self._where()} outside *MATERIAL")
        return self.state.material

    def _current_step(self) -> Step:
        if self.state.step is None:
            raise SectionContextError(f"{self._where()} outside *STEP")
        return self.state.step

    def _single_row(self, length: int) -> list[float]:
        rows = self._rows()
        if len(rows) != 1:
            raise SectionContextError(f"{self._where()} expects exactly one data row, got {len(rows)}")
        row = rows[0]
        if len(row) != length or not all(_is_number(v) for v in row):
            raise SectionContextError(
                f"{self._where()} expects {length} numeric value(s), got {row}"
            )
        return [float(v) for v in row]

    # ========== Model description ==========

    def close_heading(self):
        if self.state.data:
            self.model.heading = "\n".join(self.state.data)

    # ========== Section properties ==========

    def open_solid_section(self):
        controls = self.state.section.get("CONTROLS")
        prop = SolidSection(
            element_set=self._required_option("ELSET"),
            material_name=self._required_option("MATERIAL"),
            controls=controls if isinstance(controls, str) else None,
        )
        self.model.properties.append(prop)
        self.state.property = prop

    def close_solid_section(self):
        prop = self.state.property
        rows = self._rows()
        if isinstance(prop, SolidSection) and rows and rows[0] and _is_number(rows[0][0]):
            # truss / beam-like sections carry the cross-sectional area
            prop.area = float(rows[0][0])
        self.state.property = None

    def open_shell_section(self):
        prop = ShellSection(
            element_set=self._required_option("ELSET"),
            material_name=self._required_option("MATERIAL"),
        )
        self.model.properties.append(prop)
        self.state.property = prop

    def close_shell_section(self):
        prop = self.state.property
        rows = self._rows()
        if isinstance(prop, ShellSection) and rows:
            row = rows[0]
            if not row or not _is_number(row[0]):
                raise ParseError(f"Shell thickness is not a number: {row}",
                                 keyword=self.state.section.name,
                                 line_number=self.state.section_line)
            prop.thickness = float(row[0])
            if len(row) > 1 and _is_number(row[1]):
                prop.integration_points = int(row[1])
        self.state.property = None

    def open_mass(self):
        prop = MassSection(element_set=self._required_option("ELSET"))
        self.model.properties.append(prop)
        self.state.property = prop

    def close_mass(self):
        prop = self.state.property
        rows = self._rows()
        if isinstance(prop, MassSection) and rows:
            value = rows[0][0] if rows[0] else None
            if not _is_number(value):
                raise ParseError(f"Mass is not a number: {rows[0]}",
                                 keyword=self.state.section.name,
                                 line_number=self.state.section_line)
            prop.mass = float(value)
        self.state.property = None

    # ========== Materials ==========

    def open_material(self):
        name = self._required_option("NAME")
        material = Material(name=name)
        self.model.materials[name] = material
        self.state.material = material

    def close_elastic(self):
        material = self._current_material()
        E, nu = self._single_row(2)
        material.properties.append(Elastic(E=E, nu=nu))

    def close_density(self):
        material = self._current_material()
        (density,) = self._single_row(1)
        material.properties.append(Density(density=density))

    def close_plastic(self):
        material = self._current_material()
        table: list[tuple[float, float]] = []
        for row in self._rows():
            if len(row) < 2 or not (_is_number(row[0]) and _is_number(row[1])):
                raise SectionContextError(f"{self._where()} expects 'stress, strain' rows, got {row}")
            table.append((float(row[0]), float(row[1])))
        material.properties.append(Plastic(table=table))

    def close_expansion(self):
        material = self._current_material()
        (alpha,) = self._single_row(1)
        material.properties.append(Expansion(alpha=alpha))

    def close_damping(self):
        material = self._current_material()
        material.properties.append(Damping(
            alpha=self._float_option("ALPHA", 0.0),
            beta=self._float_option("BETA", 0.0),
        ))

    # ========== Steps ==========

    def open_step(self):
        options = dict(self.state.section.options)
        name = options.pop("NAME", None)
        step = Step(name=name if isinstance(name, str) else None, options=options)
        self.model.steps.append(step)
        self.state.step = step

    def open_analysis(self):
        step = self._current_step()
        step.kind = self.state.section.name

    def close_analysis(self):
        if self.state.step is not None and self.state.data:
            self.state.step.analysis_data = self._rows()

    def open_output(self):
        # container only, the sub-keywords carry the requests
        pass

    def open_end_step(self):
        self.state.step = None

    # ========== Boundary conditions ==========

    def close_boundary_condition(self):
        section = self.state.section
        bc = BoundaryCondition(kind=section.name, data=self._rows(),
                               options=dict(section.options))
        if self.state.step is None:
            self.model.boundary_conditions.append(bc)
        else:
            self.state.step.boundary_conditions.append(bc)

    # ========== Output requests ==========

    def close_output_request(self):
        step = self._current_step()
        words = self.state.section.name.split()
        kind = words[0]
        target = words[1] if len(words) > 1 else "UNKNOWN"
        step.output_requests.append(OutputRequest(
            kind=kind, data=self._rows(),
            options=dict(self.state.section.options), target=target,
        ))

    def close_output_definition(self):
        if self.state.step is None:
            logger.debug("%s outside *STEP, ignoring", self._where())
            return
        self.state.step.output_requests.append(OutputRequest(
            kind="_".join(self.state.section.name.split()), data=self._rows(),
            options=dict(self.state.section.options), target="FIELD",
        ))


OPEN_HANDLERS: dict[ModelKeyword, Handler] = {
    ModelKeyword.SOLID_SECTION: ModelParser.open_solid_section,
    ModelKeyword.SHELL_SECTION: ModelParser.open_shell_section,
    ModelKeyword.MASS: ModelParser.open_mass,
    ModelKeyword.MATERIAL: ModelParser.open_material,
    ModelKeyword.STEP: ModelParser.open_step,
    ModelKeyword.OUTPUT: ModelParser.open_output,
    ModelKeyword.END_STEP: ModelParser.open_end_step,
    **{kw: ModelParser.open_analysis for kw in ANALYSIS_KEYWORDS},
}

CLOSE_HANDLERS: dict[ModelKeyword, Handler] = {
    ModelKeyword.HEADING: ModelParser.close_heading,
    ModelKeyword.SOLID_SECTION: ModelParser.close_solid_section,
    ModelKeyword.SHELL_SECTION: ModelParser.close_shell_section,
    ModelKeyword.MASS: ModelParser.close_mass,
    ModelKeyword.ELASTIC: ModelParser.close_elastic,
    ModelKeyword.DENSITY: ModelParser.close_density,
    ModelKeyword.PLASTIC: ModelParser.close_plastic,
    ModelKeyword.EXPANSION: ModelParser.close_expansion,
    ModelKeyword.DAMPING: ModelParser.close_damping,
    **{kw: ModelParser.close_analysis for kw in ANALYSIS_KEYWORDS},
    **{kw: ModelParser.close_boundary_condition for kw in BOUNDARY_KEYWORDS},
    **{kw: ModelParser.close_output_request for kw in PRINT_FILE_KEYWORDS},
    **{kw: ModelParser.close_output_definition for kw in OUTPUT_KEYWORDS},
}
