# File: tests/test_element_db.py
"""
Element type database: built-in codes, case handling and runtime registration.
"""

import pytest

from abaqusreader import parse_mesh
from abaqusreader.errors import ParseError, UnknownElementError
from abaqusreader.knowledge.element_db import (
    BUILTIN_ELEMENTS, DEFAULT_DATABASE, ElementDatabase, lookup_element, register_element,
)


def test_builtin_codes():
    db = ElementDatabase()
    assert db.lookup("C3D8R").topology == "Hex8"
    assert db.node_count("C3D10") == 10
    assert db.topology("C3D4") == "Tet4"
    assert db.topology("CPS3") == "Tri3"
    assert db.topology("S4R") == "Quad4"
    assert db.topology("T2D2") == "Seg2"
    assert db.topology("C3D20R") == "Hex20"
    assert db.topology("C3D6") == "Wedge6"


def test_lookup_is_case_insensitive():
    info = ElementDatabase().lookup("c3d8r")
    assert info.code == "C3D8R"
    assert info.nodes == 8
    assert "c3d4" in ElementDatabase()


def test_node_counts_match_topologies():
    expected = {"Seg2": 2, "Seg3": 3, "Tri3": 3, "Tri6": 6, "Quad4": 4, "Quad8": 8,
                "Tet4": 4, "Tet10": 10, "Wedge6": 6, "Hex8": 8, "Hex20": 20}
    for info in BUILTIN_ELEMENTS.values():
        if info.topology in expected:
            assert info.nodes == expected[info.topology], f"{info.code} node count"


def test_unknown_code():
    with pytest.raises(UnknownElementError) as excinfo:
        ElementDatabase().lookup("XYZ99")
    assert isinstance(excinfo.value, ParseError)
    assert excinfo.value.code == "XYZ99"
    assert "register_element" in str(excinfo.value)


def test_register_last_write_wins():
    db = ElementDatabase()
    db.register("myel", 4, "Tet4")
    assert db.lookup("MYEL").topology == "Tet4"
    db.register("MYEL", 4, "Quad4", "user quad")
    info = db.lookup("myel")
    assert info.topology == "Quad4"
    assert info.description == "user quad"
    assert "MYEL" not in DEFAULT_DATABASE, "local registrations stay local"


def test_register_element_into_empty_database():
    db = ElementDatabase({})
    assert len(db) == 0
    register_element("U1", 2, "Seg2", database=db)
    assert len(db) == 1
    assert lookup_element("u1", database=db).nodes == 2
    assert "U1" not in DEFAULT_DATABASE


def test_copy_is_independent():
    db = ElementDatabase()
    clone = db.copy()
    clone.register("C3D8R", 8, "Quad4")
    assert db.topology("C3D8R") == "Hex8"
    assert len(clone) == len(db)
    assert {info.code for info in clone} == {info.code for info in db}


def test_every_builtin_code_parses_with_its_node_count():
    """A synthetic block per code gives one element of the declared topology and size."""
    for info in BUILTIN_ELEMENTS.values():
        connectivity = ", ".join(str(i) for i in range(1, info.nodes + 1))
        mesh = parse_mesh(f"*ELEMENT, TYPE={info.code}\n1, {connectivity}\n")
        assert mesh.element_types == {1: info.topology}, info.code
        assert len(mesh.elements[1]) == info.nodes, info.code


def test_fewer_nodes_than_declared_fails():
    for code in ("C3D8R", "C3D10", "S4R", "T3D2"):
        nodes = ElementDatabase().node_count(code)
        connectivity = ", ".join(str(i) for i in range(1, nodes))
        with pytest.raises(ParseError):
            parse_mesh(f"*ELEMENT, TYPE={code}\n1, {connectivity}\n")
