from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import matplotlib.pyplot as plt
from matplotlib.tri import Triangulation

if TYPE_CHECKING:
    from matplotlib.figure import Figure
    from meshframe.model.mesh import Mesh


def plot_uv_layout(mesh: Mesh, title: Optional[str] = None) -> Figure:
    """
    Draw the triangles of a mesh in UV space.

    Useful to compare the spherical, cylindrical and planar projections: seams
    show up as triangles stretched across the unit square.
    """
    plt.rcParams["figure.constrained_layout.use"] = True
    fig, ax = plt.subplots()

    uvs = mesh.uvs
    if mesh.face_count:
        tri = Triangulation(uvs[:, 0], uvs[:, 1], triangles=mesh.faces)
        ax.triplot(tri, color="black", lw=0.5)
    ax.plot(uvs[:, 0], uvs[:, 1], "k.", markersize=2)

    ax.set_aspect("equal")
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.grid(visible=True, which="major", linestyle="-", color="gray", lw=0.5)
    ax.set_xlabel("U")
    ax.set_ylabel("V")
    ax.set_title(title or f"UV layout ({mesh.projection.value} projection)")
    return fig
