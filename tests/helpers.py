"""Shared OBJ fixtures for the test suite."""
import os

# Unit square in the XY plane, counter-clockwise seen from +Z, with UVs in the
# last two vertex slots (u = (x + 1) / 2, v = (y + 1) / 2).
SQUARE_OBJ = """\
# square
v -1.0 -1.0 0.0  0 0 0  0 0 0  0 0 0  0.0 0.0
v  1.0 -1.0 0.0  0 0 0  0 0 0  0 0 0  1.0 0.0
v  1.0  1.0 0.0  0 0 0  0 0 0  0 0 0  1.0 1.0
v -1.0  1.0 0.0  0 0 0  0 0 0  0 0 0  0.0 1.0
f 1 2 3 4
"""

# Same square without UVs, two explicit triangles
SQUARE_TRIANGLES_OBJ = """\
v -1.0 -1.0 0.0
v  1.0 -1.0 0.0
v  1.0  1.0 0.0
v -1.0  1.0 0.0
f 1 2 3
f 1 3 4
"""

# Irregular tetrahedron far from the origin
TETRA_OBJ = """\
v 10.0 4.0 -2.0
v 13.0 4.5 -2.0
v 11.0 9.0 -1.0
v 11.5 5.0 3.0
f 1 3 2
f 1 2 4
f 2 3 4
f 3 1 4
"""

OCTAHEDRON_OBJ = """\
v  1.0  0.0  0.0
v -1.0  0.0  0.0
v  0.0  1.0  0.0
v  0.0 -1.0  0.0
v  0.0  0.0  1.0
v  0.0  0.0 -1.0
f 1 3 5
f 3 2 5
f 2 4 5
f 4 1 5
f 3 1 6
f 2 3 6
f 4 2 6
f 1 4 6
"""


def write_obj(directory: str, text: str, name: str = "model.obj") -> str:
    """Write `text` to `directory/name` and return the path."""
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path
