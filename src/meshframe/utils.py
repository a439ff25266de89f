from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def normalize_rows(vectors: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Normalize every row of an (N, 3) array to unit length.

    Rows with zero length stay zero (same convention as a zero vector's
    ``normalize()``); non-finite rows propagate unchanged as NaN.
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    lengths = np.linalg.norm(vectors, axis=-1, keepdims=True)
    out = np.zeros_like(vectors)
    np.divide(vectors, lengths, out=out, where=lengths != 0.0)
    return out


def row_dot(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Row-wise dot product of two (N, 3) arrays, shape (N, 1)."""
    return np.einsum("ij,ij->i", a, b)[:, np.newaxis]


def flatten_groups_in_order(groups: list[list[int]]) -> tuple[npt.NDArray[np.int64], npt.NDArray[np.int64]]:
    """
    Flatten a list of index lists into CSR form (offsets, indices).

    ``indices[offsets[i]:offsets[i + 1]]`` gives back ``groups[i]``.
    """
    lengths = np.fromiter((len(g) for g in groups), dtype=np.int64, count=len(groups))
    offsets = np.zeros(len(groups) + 1, dtype=np.int64)
    np.cumsum(lengths, out=offsets[1:])
    indices = np.fromiter((i for g in groups for i in g), dtype=np.int64, count=int(offsets[-1]))
    return offsets, indices


def unflatten_groups(offsets: npt.NDArray[np.int64], indices: npt.NDArray[np.int64]) -> list[list[int]]:
    """Inverse of :func:`flatten_groups_in_order`."""
    return [indices[offsets[i]:offsets[i + 1]].tolist() for i in range(len(offsets) - 1)]
