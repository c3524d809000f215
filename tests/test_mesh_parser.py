# File: tests/test_mesh_parser.py
"""
Mesh-level parsing: nodes, elements, node/element sets and surfaces.
"""

import logging

import pytest

from abaqusreader import parse_mesh
from abaqusreader.errors import ParseError, UnknownElementError
from abaqusreader.knowledge.element_db import ElementDatabase

TET_INP = """\
*NODE
1, 0.0, 0.0, 0.0
2, 1.0, 0.0, 0.0
3, 0.0, 1.0, 0.0
4, 0.0, 0.0, 1.0
5, 1.0, 1.0, 1.0
*ELEMENT, TYPE=C3D4, ELSET=TETS
1, 1, 2, 3, 4
2, 2, 3, 4, 5
"""


def test_cube_mesh(cube_inp):
    """A single brick: every node, the connectivity and the named sets."""
    mesh = parse_mesh(cube_inp)

    assert len(mesh.nodes) == 8
    assert mesh.nodes[7] == [1.0, 1.0, 1.0]
    assert mesh.elements == {1: [1, 2, 3, 4, 5, 6, 7, 8]}
    assert mesh.element_types == {1: "Hex8"}
    assert mesh.element_codes == {1: "C3D8"}
    assert mesh.node_sets["NALL"] == list(range(1, 9))
    assert mesh.node_sets["FIX"] == [1, 2, 3, 4]
    assert mesh.element_sets["EALL"] == [1]
    assert mesh.surface_sets == {"TOP": [(1, "S2")]}
    assert mesh.surface_types == {"TOP": "ELEMENT"}


def test_every_element_has_its_topology_node_count():
    mesh = parse_mesh(TET_INP)
    assert len(mesh.elements) == 2
    for connectivity in mesh.elements.values():
        assert len(connectivity) == 4
    assert mesh.element_sets["TETS"] == [1, 2]


def test_lowercase_keywords_and_codes():
    mesh = parse_mesh("*node\n1, 0, 0\n2, 1, 0\n3, 0, 1\n*element, type=cps3\n10, 1, 2, 3\n")
    assert mesh.element_types[10] == "Tri3"
    assert mesh.element_codes[10] == "CPS3"
    assert mesh.nodes[2] == [1.0, 0.0]


def test_connectivity_continues_on_next_line():
    nodes = "\n".join(f"{i}, {i}.0, 0.0, 0.0" for i in range(1, 21))
    text = (f"*NODE\n{nodes}\n*ELEMENT, TYPE=C3D20R\n"
            "1, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,\n"
            "16, 17, 18, 19, 20\n")
    mesh = parse_mesh(text)
    assert mesh.elements[1] == list(range(1, 21))
    assert mesh.element_types[1] == "Hex20"


def test_element_with_too_many_nodes():
    with pytest.raises(ParseError) as excinfo:
        parse_mesh("*NODE\n1, 0, 0, 0\n*ELEMENT, TYPE=C3D4\n1, 1, 2, 3, 4, 5\n")
    assert excinfo.value.keyword == "ELEMENT"
    assert excinfo.value.line_number == 3


def test_element_with_too_few_nodes():
    with pytest.raises(ParseError):
        parse_mesh("*ELEMENT, TYPE=C3D4\n1, 1, 2, 3\n")


def test_element_without_type():
    with pytest.raises(ParseError):
        parse_mesh("*ELEMENT\n1, 1, 2\n")


def test_unknown_element_code():
    with pytest.raises(UnknownElementError) as excinfo:
        parse_mesh("*NODE\n1, 0, 0\n*ELEMENT, TYPE=NOPE9\n1, 1\n")
    assert excinfo.value.line_number == 3
    assert "NOPE9" in str(excinfo.value)


def test_registered_element_code():
    db = ElementDatabase()
    db.register("MYTET", 4, "Tet4")
    text = TET_INP.replace("C3D4", "mytet")
    mesh = parse_mesh(text, database=db)
    assert mesh.element_types[1] == "Tet4"
    assert mesh.element_codes[1] == "MYTET"

    db.register("MYTET", 4, "Quad4")
    mesh = parse_mesh(text, database=db)
    assert mesh.element_types[1] == "Quad4", "re-registration replaces the entry"


def test_generate():
    mesh = parse_mesh("*NSET, NSET=EVERY3, GENERATE\n1, 10, 3\n"
                      "*ELSET, ELSET=RANGES, GENERATE\n1, 3\n10, 12\n")
    assert mesh.node_sets["EVERY3"] == [1, 4, 7, 10]
    assert mesh.element_sets["RANGES"] == [1, 2, 3, 10, 11, 12]


def test_generate_with_zero_step():
    with pytest.raises(ParseError):
        parse_mesh("*NSET, NSET=BAD, GENERATE\n1, 10, 0\n")


def test_set_members_can_be_other_sets():
    mesh = parse_mesh("*ELSET, ELSET=A\n1, 2\n*ELSET, ELSET=B\nA, 7\n")
    assert mesh.element_sets["B"] == [1, 2, 7]


def test_repeated_set_accumulates():
    mesh = parse_mesh("*NSET, NSET=N1\n1, 2\n*NSET, NSET=N1\n3\n")
    assert mesh.node_sets["N1"] == [1, 2, 3]


def test_quoted_set_name():
    mesh = parse_mesh('*NSET, NSET="Left side"\n1, 2\n')
    assert mesh.node_sets["Left side"] == [1, 2]


def test_set_without_name():
    with pytest.raises(ParseError) as excinfo:
        parse_mesh("*NODE\n1, 0, 0\n*NSET\n1\n")
    assert excinfo.value.keyword == "NSET"
    assert excinfo.value.line_number == 3


def test_comments_and_blank_lines_in_data():
    mesh = parse_mesh("*NODE\n** first node\n1, 0, 0\n\n2, 1, 0\n")
    assert sorted(mesh.nodes) == [1, 2]


def test_set_based_surface():
    mesh = parse_mesh(TET_INP + "*SURFACE, NAME=OUTER\nTETS, S3\n")
    assert mesh.surface_sets["OUTER"] == [(1, "S3"), (2, "S3")]
    assert mesh.surface_types["OUTER"] == "UNKNOWN"


def test_surface_with_unknown_set_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        mesh = parse_mesh(TET_INP + "*SURFACE, NAME=GHOST\nMISSING, S1\n")
    assert "GHOST" not in mesh.surface_sets, "empty surfaces are discarded"
    assert any("MISSING" in r.getMessage() for r in caplog.records)


def test_surface_row_that_matches_nothing():
    with pytest.raises(ParseError):
        parse_mesh(TET_INP + "*SURFACE, NAME=BAD\n???\n")


def test_surface_without_name():
    with pytest.raises(ParseError):
        parse_mesh(TET_INP + "*SURFACE, TYPE=ELEMENT\n1, S1\n")


def test_node_surface_is_skipped():
    mesh = parse_mesh(TET_INP + "*SURFACE, NAME=NS, TYPE=NODE\n1, 1.0\n")
    assert "NS" not in mesh.surface_sets


def test_unknown_keyword_warns(caplog):
    with caplog.at_level(logging.DEBUG):
        parse_mesh(TET_INP + "*FOOBAR\n1, 2\n")
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "FOOBAR" in warnings[0].getMessage()


def test_unknown_keyword_quiet_when_not_verbose(caplog):
    with caplog.at_level(logging.DEBUG):
        parse_mesh(TET_INP + "*FOOBAR\n1, 2\n", verbose=False)
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_model_keywords_are_not_warnings(caplog, cube_inp):
    with caplog.at_level(logging.DEBUG):
        parse_mesh(cube_inp)
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_parse_mesh_from_file(cube_file):
    assert len(parse_mesh(cube_file).nodes) == 8
    assert len(parse_mesh(str(cube_file)).elements) == 1


def test_generate_with_step_and_unit_step():
    mesh = parse_mesh("*NSET, NSET=X, GENERATE\n7,13,2\n*NSET, NSET=Y, GENERATE\n1,10,1\n")
    assert mesh.node_sets["X"] == [7, 9, 11, 13]
    assert mesh.node_sets["Y"] == list(range(1, 11))


def test_quoted_name_with_spaces():
    mesh = parse_mesh('*NSET, NSET="With quotes"\n3,4,5\n')
    assert mesh.node_sets == {"With quotes": [3, 4, 5]}


def test_unterminated_quoted_name():
    with pytest.raises(ParseError):
        parse_mesh('*NODE, NSET="With wrong quotes\n1, 0, 0\n')


def test_mixed_case_parses_like_uppercase(cube_inp):
    mixed = (cube_inp.replace("*NODE", "*Node").replace("*ELEMENT", "*element")
             .replace("*MATERIAL", "*Material").replace("*SURFACE", "*Surface"))
    assert parse_mesh(mixed) == parse_mesh(cube_inp)


def test_unknown_set_reference_is_skipped(caplog):
    """Names of undefined sets never turn into node or element IDs."""
    with caplog.at_level(logging.WARNING):
        mesh = parse_mesh("*NSET, NSET=B\nSet-1\n*ELSET, ELSET=E\nPart-1-1.Set-2, 4\n")
    assert mesh.node_sets["B"] == []
    assert mesh.element_sets["E"] == [4]
    messages = [r.getMessage() for r in caplog.records]
    assert any("Set-1" in m for m in messages)
    assert any("Part-1-1.Set-2" in m for m in messages)


def test_hyphenated_set_reference():
    mesh = parse_mesh("*ELSET, ELSET=Set-1\n3, 5\n*ELSET, ELSET=ALL\nSet-1, 9\n")
    assert mesh.element_sets["ALL"] == [3, 5, 9]


def test_unterminated_quote_in_set_keyword():
    with pytest.raises(ParseError):
        parse_mesh('*NSET, NSET="With wrong quotes\n3, 4, 5\n')


def test_missing_file_name(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_mesh(str(tmp_path / "typo.inp"))


def test_text_without_keywords_warns(caplog):
    with caplog.at_level(logging.WARNING):
        mesh = parse_mesh("1, 0, 0\n2, 1, 0\n")
    assert mesh.nodes == {}
    assert any("no keyword lines" in r.getMessage() for r in caplog.records)


def test_file_with_byte_order_mark(tmp_path):
    path = tmp_path / "bom.inp"
    path.write_text("*NODE\n1, 0, 0\n2, 1, 0\n", encoding="utf-8-sig")
    assert sorted(parse_mesh(path).nodes) == [1, 2]
