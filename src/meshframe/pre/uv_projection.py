"""
Analytic UV Projections
=======================
Overwrites vertex UVs with one of three closed-form mappings of the
(already normalized) vertex positions.

Why is this file needed?
------------------------
Models without authored texture coordinates still need a UV parameterization
for the tangent-space computation; these projections provide one.

All three assume positions lie within the unit sphere centered on the
origin, i.e. they run after the normalizer.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

import numpy as np

from meshframe.model.types import UVProjection

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _azimuth_u(x: npt.NDArray[np.float64], z: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    return (np.arctan2(x, z) + np.pi) / (2.0 * np.pi)


def spherical_uvs(positions: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """u = (atan2(x, z) + pi) / 2pi, v = acos(y) / pi."""
    x, y, z = positions[:, 0], positions[:, 1], positions[:, 2]
    # Rounding can push |y| a hair above 1 after normalization
    v = np.arccos(np.clip(y, -1.0, 1.0)) / np.pi
    return np.column_stack((_azimuth_u(x, z), v))


def cylindrical_uvs(positions: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """u = (atan2(x, z) + pi) / 2pi, v = (y + 1) / 2."""
    x, y, z = positions[:, 0], positions[:, 1], positions[:, 2]
    return np.column_stack((_azimuth_u(x, z), (y + 1.0) / 2.0))


def planar_uvs(positions: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Project onto the plane perpendicular to each vertex's dominant axis.

    The dominant axis is the one whose magnitude strictly exceeds both others,
    tested in the order x, y, z. When neither x nor y dominates (including
    exact ties), the z mapping is used. The two remaining components are
    taken as ratios to the dominant one and mapped from [-1, 1] to [0, 1].

    Mapping per dominant axis:
        x: u = z / x, v = y / x
        y: u = x / y, v = z / y
        z: u = x / z, v = y / z
    """
    x, y, z = positions[:, 0], positions[:, 1], positions[:, 2]
    ax, ay, az = np.abs(x), np.abs(y), np.abs(z)

    x_major = (ax > ay) & (ax > az)
    y_major = ~x_major & (ay > ax) & (ay > az)

    # A vertex at the origin has no dominant component; its ratios are 0/0
    with np.errstate(divide="ignore", invalid="ignore"):
        u = np.where(x_major, z / x, np.where(y_major, x / y, x / z))
        v = np.where(x_major, y / x, np.where(y_major, z / y, y / z))

    return np.column_stack(((u + 1.0) / 2.0, (v + 1.0) / 2.0))


PROJECTIONS: dict[UVProjection, Callable[[npt.NDArray[np.float64]], npt.NDArray[np.float64]]] = {
    UVProjection.SPHERICAL: spherical_uvs,
    UVProjection.CYLINDRICAL: cylindrical_uvs,
    UVProjection.PLANAR: planar_uvs,
}


def resolve_projection(selector: UVProjection | str | None) -> UVProjection:
    """Coerce a projection selector; None means no projection."""
    if selector is None:
        return UVProjection.NONE
    try:
        return UVProjection(str(selector).lower())
    except ValueError:
        valid = ", ".join(p.value for p in UVProjection)
        raise ValueError(f"Unknown UV projection '{selector}'. Expected one of: {valid}.") from None


def apply_projection(
    positions: npt.NDArray[np.float64],
    uvs: npt.NDArray[np.float64],
    selector: UVProjection | str | None,
) -> UVProjection:
    """
    Overwrite `uvs` in-place according to `selector`. Positions are not touched.

    Returns:
        The resolved projection.
    """
    projection = resolve_projection(selector)
    if projection is UVProjection.NONE:
        return projection

    uvs[:] = PROJECTIONS[projection](positions)
    logger.debug(f"Applied {projection.value} UV projection to {len(uvs)} vertices.")
    return projection
