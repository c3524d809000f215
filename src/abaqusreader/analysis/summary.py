"""Counts and breakdowns of a parsed mesh/model used by the reports."""

from collections import Counter
from dataclasses import dataclass, field

from abaqusreader.models import Mesh, Model


@dataclass
class MeshSummary:
    num_nodes: int = 0
    num_elements: int = 0
    num_node_sets: int = 0
    num_element_sets: int = 0
    num_surfaces: int = 0
    dimension: int = 0
    topology_counts: dict[str, int] = field(default_factory=dict)
    code_counts: dict[str, int] = field(default_factory=dict)
    parts: dict[str, tuple[int, int]] = field(default_factory=dict)
    bounding_box: tuple[list[float], list[float]] = field(default_factory=lambda: ([], []))


@dataclass
class ModelSummary:
    mesh: MeshSummary = field(default_factory=MeshSummary)
    num_materials: int = 0
    num_properties: int = 0
    num_boundary_conditions: int = 0
    num_steps: int = 0
    step_bc_counts: list[int] = field(default_factory=list)
    step_output_counts: list[int] = field(default_factory=list)


def summarize_mesh(mesh: Mesh) -> MeshSummary:
    summary = MeshSummary(
        num_nodes=len(mesh.nodes),
        num_elements=len(mesh.elements),
        num_node_sets=len(mesh.node_sets),
        num_element_sets=len(mesh.element_sets),
        num_surfaces=len(mesh.surface_sets),
        topology_counts=dict(Counter(mesh.element_types.values()).most_common()),
        code_counts=dict(Counter(mesh.element_codes.values()).most_common()),
        parts={name: (len(p.nodes), len(p.elements)) for name, p in mesh.parts.items()},
    )
    if mesh.nodes:
        summary.dimension = max(len(c) for c in mesh.nodes.values())
        lower = [min(c[i] for c in mesh.nodes.values() if len(c) > i)
                 for i in range(summary.dimension)]
        upper = [max(c[i] for c in mesh.nodes.values() if len(c) > i)
                 for i in range(summary.dimension)]
        summary.bounding_box = (lower, upper)
    return summary


def summarize_model(model: Model) -> ModelSummary:
    return ModelSummary(
        mesh=summarize_mesh(model.mesh),
        num_materials=len(model.materials),
        num_properties=len(model.properties),
        num_boundary_conditions=len(model.boundary_conditions),
        num_steps=len(model.steps),
        step_bc_counts=[len(s.boundary_conditions) for s in model.steps],
        step_output_counts=[len(s.output_requests) for s in model.steps],
    )
