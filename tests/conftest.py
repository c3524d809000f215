# File: tests/conftest.py
"""Shared .inp inputs for the test modules."""

import pytest

CUBE_INP = """\
*HEADING
Unit cube under a corner load
** one linear brick, fixed at z = 0
*NODE, NSET=NALL
1, 0., 0., 0.
2, 1., 0., 0.
3, 1., 1., 0.
4, 0., 1., 0.
5, 0., 0., 1.
6, 1., 0., 1.
7, 1., 1., 1.
8, 0., 1., 1.
*ELEMENT, TYPE=C3D8, ELSET=EALL
1, 1, 2, 3, 4, 5, 6, 7, 8
*NSET, NSET=FIX
1, 2, 3, 4
*SURFACE, NAME=TOP, TYPE=ELEMENT
1, S2
*MATERIAL, NAME=STEEL
*ELASTIC
210000., 0.3
*DENSITY
7.85e-9
*SOLID SECTION, ELSET=EALL, MATERIAL=STEEL
*BOUNDARY
FIX, ENCASTRE
*STEP, NAME=Load
*STATIC
0.1, 1.0
*CLOAD
7, 3, -100.
*DSLOAD
TOP, P, 1.0
*NODE PRINT, NSET=NALL
U
*EL PRINT
S
*OUTPUT, FIELD
*NODE OUTPUT
U, RF
*END STEP
"""


@pytest.fixture
def cube_inp():
    return CUBE_INP


@pytest.fixture
def cube_file(tmp_path):
    path = tmp_path / "cube.inp"
    path.write_text(CUBE_INP, encoding="utf-8")
    return path
