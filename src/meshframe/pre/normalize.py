from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def normalize_positions(positions: npt.NDArray[np.float64]) -> tuple[npt.NDArray[np.float64], float]:
    """
    Recenter positions on their centroid and rescale to unit bounding-sphere radius.

    The array is modified in-place: the arithmetic mean of all positions is
    subtracted, then every position is divided by the largest distance from
    the origin, so the farthest vertex lands exactly on the unit sphere.

    Args:
        positions: (N, 3) array of vertex positions.

    Returns:
        The same array and the radius it was divided by. A radius of 0.0 means
        the scale step was skipped (empty mesh or all positions coincide).
    """
    if len(positions) == 0:
        return positions, 0.0

    center = positions.mean(axis=0)
    positions -= center

    max_length_sq = float(np.max(np.einsum("ij,ij->i", positions, positions)))
    radius = float(np.sqrt(max_length_sq))
    if radius == 0.0:
        logger.warning("All vertex positions coincide; skipping unit-radius scaling.")
        return positions, 0.0

    positions /= radius
    logger.debug(f"Recentered on {center.tolist()} and scaled by 1/{radius:.6g}.")
    return positions, radius
