"""Rich terminal output for parsed meshes and models."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from abaqusreader.analysis.summary import MeshSummary, summarize_mesh, summarize_model
from abaqusreader.models import Mesh, Model


def _fmt_sci(value: float) -> str:
    if value == 0.0:
        return "0"
    if abs(value) < 1e-3 or abs(value) > 1e6:
        return f"{value:.4E}"
    return f"{value:.4f}"


def _fmt_coords(coords: list[float]) -> str:
    return "(" + ", ".join(_fmt_sci(c) for c in coords) + ")"


def _mesh_tables(console: Console, summary: MeshSummary):
    mesh_table = Table(title="Mesh Summary", show_header=False, border_style="dim")
    mesh_table.add_column("Item", style="cyan")
    mesh_table.add_column("Value", justify="right")
    mesh_table.add_row("Nodes", f"{summary.num_nodes:,}")
    mesh_table.add_row("Elements", f"{summary.num_elements:,}")
    mesh_table.add_row("Node sets", f"{summary.num_node_sets:,}")
    mesh_table.add_row("Element sets", f"{summary.num_element_sets:,}")
    mesh_table.add_row("Surfaces", f"{summary.num_surfaces:,}")
    if summary.dimension:
        lower, upper = summary.bounding_box
        mesh_table.add_row("Bounding box", f"{_fmt_coords(lower)} - {_fmt_coords(upper)}")
    console.print(mesh_table)

    if summary.topology_counts:
        topo_table = Table(title="Element Topologies", border_style="dim")
        topo_table.add_column("Topology", style="cyan")
        topo_table.add_column("Count", justify="right")
        for topology, count in summary.topology_counts.items():
            topo_table.add_row(topology, f"{count:,}")
        console.print(topo_table)

        code_table = Table(title="Element Codes", border_style="dim")
        code_table.add_column("Code", style="cyan")
        code_table.add_column("Count", justify="right")
        for code, count in summary.code_counts.items():
            code_table.add_row(code, f"{count:,}")
        console.print(code_table)

    if summary.parts:
        part_table = Table(title="Parts", border_style="dim")
        part_table.add_column("Part", style="cyan")
        part_table.add_column("Nodes", justify="right")
        part_table.add_column("Elements", justify="right")
        for name, (num_nodes, num_elements) in summary.parts.items():
            part_table.add_row(name, f"{num_nodes:,}", f"{num_elements:,}")
        console.print(part_table)


def render_mesh(mesh: Mesh, title: str = "ABAQUS Mesh", no_color: bool = False):
    """Render a mesh summary to the terminal."""
    console = Console(force_terminal=not no_color, highlight=False)
    console.print(Panel(title, border_style="blue"))
    _mesh_tables(console, summarize_mesh(mesh))


def render_model(model: Model, no_color: bool = False):
    """Render a model summary: mesh, materials, properties and steps."""
    console = Console(force_terminal=not no_color, highlight=False)
    summary = summarize_model(model)

    header = f"Model: {model.name or '(text input)'}"
    if model.heading:
        header += f"\n{model.heading}"
    console.print(Panel(header, title="ABAQUS Model", border_style="blue"))
    _mesh_tables(console, summary.mesh)

    if model.materials:
        mat_table = Table(title="Materials", border_style="dim")
        mat_table.add_column("Name", style="cyan")
        mat_table.add_column("Properties")
        for name, material in model.materials.items():
            mat_table.add_row(name, ", ".join(type(p).__name__ for p in material.properties))
        console.print(mat_table)

    if model.properties:
        prop_table = Table(title="Section Properties", border_style="dim")
        prop_table.add_column("Type", style="cyan")
        prop_table.add_column("Element set")
        prop_table.add_column("Material")
        for prop in model.properties:
            prop_table.add_row(type(prop).__name__, prop.element_set,
                               getattr(prop, "material_name", "-"))
        console.print(prop_table)

    if model.boundary_conditions:
        console.print(f"[cyan]Model-level boundary conditions:[/cyan] "
                      f"{summary.num_boundary_conditions}")

    if model.steps:
        step_table = Table(title="Steps", border_style="dim")
        step_table.add_column("#", justify="right")
        step_table.add_column("Name", style="cyan")
        step_table.add_column("Analysis")
        step_table.add_column("BCs", justify="right")
        step_table.add_column("Outputs", justify="right")
        for i, step in enumerate(model.steps, start=1):
            step_table.add_row(str(i), step.name or "-", step.kind or "-",
                               str(summary.step_bc_counts[i - 1]),
                               str(summary.step_output_counts[i - 1]))
        console.print(step_table)


def render_surfaces(surfaces: dict[str, list[tuple[str, list[int]]]],
                    no_color: bool = False):
    """Render face-element counts of materialized surfaces."""
    console = Console(force_terminal=not no_color, highlight=False)
    table = Table(title="Surface Elements", border_style="dim")
    table.add_column("Surface", style="cyan")
    table.add_column("Faces", justify="right")
    table.add_column("Face topologies")
    for name, faces in surfaces.items():
        topologies = sorted({topology for topology, _ in faces})
        table.add_row(name, f"{len(faces):,}", ", ".join(topologies))
    console.print(table)
