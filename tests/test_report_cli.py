# File: tests/test_report_cli.py
"""
Summaries, JSON export, terminal rendering and the command line entry point.
"""

import json

import pytest

from abaqusreader import parse_mesh, parse_model
from abaqusreader.analysis.summary import summarize_mesh, summarize_model
from abaqusreader.cli import main
from abaqusreader.report.json_report import mesh_to_dict, model_to_dict, write_json_report
from abaqusreader.report.terminal import render_mesh, render_model


def test_mesh_summary(cube_inp):
    summary = summarize_mesh(parse_mesh(cube_inp))
    assert summary.num_nodes == 8
    assert summary.num_elements == 1
    assert summary.num_node_sets == 2
    assert summary.num_surfaces == 1
    assert summary.topology_counts == {"Hex8": 1}
    assert summary.dimension == 3
    assert summary.bounding_box == ([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])


def test_model_summary(cube_inp):
    summary = summarize_model(parse_model(cube_inp))
    assert summary.num_materials == 1
    assert summary.num_properties == 1
    assert summary.num_boundary_conditions == 1
    assert summary.step_bc_counts == [2]
    assert summary.step_output_counts == [3]


def test_mesh_to_dict(cube_inp):
    data = mesh_to_dict(parse_mesh(cube_inp))
    assert data["nodes"]["7"] == [1.0, 1.0, 1.0]
    assert data["elements"]["1"] == [1, 2, 3, 4, 5, 6, 7, 8]
    assert data["surface_sets"]["TOP"] == [[1, "S2"]]
    json.dumps(data)


def test_model_to_dict_tags_record_types(cube_inp):
    data = model_to_dict(parse_model(cube_inp))
    elastic = data["materials"]["STEEL"]["properties"][0]
    assert elastic == {"E": 210000.0, "nu": 0.3, "type": "Elastic"}
    assert data["properties"][0]["type"] == "SolidSection"
    assert data["steps"][0]["name"] == "Load"
    assert data["mesh"]["element_types"] == {"1": "Hex8"}


def test_write_json_report(cube_inp, tmp_path):
    out = tmp_path / "model.json"
    write_json_report(parse_model(cube_inp), out)
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["heading"] == "Unit cube under a corner load"
    assert len(data["mesh"]["nodes"]) == 8


def test_render(cube_inp, capsys):
    model = parse_model(cube_inp)
    render_mesh(model.mesh, no_color=True)
    render_model(model, no_color=True)
    out = capsys.readouterr().out
    assert "Mesh Summary" in out
    assert "STEEL" in out
    assert "Hex8" in out


def test_cli_mesh(cube_file, tmp_path, capsys):
    out = tmp_path / "mesh.json"
    main([str(cube_file), "--no-color", "--surface", "TOP", "-o", str(out)])
    printed = capsys.readouterr().out
    assert "Surface Elements" in printed
    assert "Quad4" in printed
    assert json.loads(out.read_text(encoding="utf-8"))["element_codes"] == {"1": "C3D8"}


def test_cli_model(cube_file, capsys):
    main([str(cube_file), "--model", "--no-color"])
    printed = capsys.readouterr().out
    assert "Steps" in printed
    assert "STATIC" in printed


def test_cli_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.inp"), "--no-color"])
    assert excinfo.value.code == 1


def test_cli_parse_error(tmp_path, capsys):
    path = tmp_path / "bad.inp"
    path.write_text("*NODE\n1, 0, 0\n*ELEMENT, TYPE=NOPE9\n1, 1\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "--no-color"])
    assert excinfo.value.code == 1
    assert "NOPE9" in capsys.readouterr().out


def test_cli_unknown_surface(cube_file):
    with pytest.raises(SystemExit):
        main([str(cube_file), "--no-color", "--surface", "NOPE"])
