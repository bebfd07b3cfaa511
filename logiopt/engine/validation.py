"""Input coercion shared by the matrix-based solvers.

The solvers accept nested Python sequences as well as NumPy arrays.  Either
way the caller's object is never modified: a fresh ``float64`` array is
returned, with ``None`` entries mapped to ``+inf`` ("no edge").
"""

from __future__ import annotations

import numbers

import numpy as np

from .errors import ShapeError


def _check_real(value, name: str) -> bool:
    """Return ``True`` when ``value`` marks an absent edge."""

    if value is None:
        return True
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} entries must be numeric, got {value!r}")
    return False


def as_matrix(matrix, *, name: str = "matrix", min_size: int = 1) -> np.ndarray:
    """Return ``matrix`` as a validated square ``float64`` array.

    Parameters
    ----------
    matrix:
        Nested sequence or ndarray of shape ``(n, n)``.
    name:
        Argument name used in error messages.
    min_size:
        Smallest accepted ``n``.

    Raises
    ------
    ShapeError
        If the input is ragged, not 2-D, not square or smaller than ``min_size``.
    ValueError
        If an entry is non-numeric, NaN or ``-inf``.
    """

    if isinstance(matrix, np.ndarray) and matrix.dtype.kind in "fiu":
        arr = np.array(matrix, dtype=np.float64, copy=True)
    else:
        try:
            obj = np.array(matrix, dtype=object)
        except ValueError as exc:
            raise ShapeError(f"{name} rows must all have the same length") from exc
        if obj.ndim != 2:
            raise ShapeError(f"{name} must be a 2-D matrix")
        arr = np.empty(obj.shape, dtype=np.float64)
        for idx, value in np.ndenumerate(obj):
            arr[idx] = np.inf if _check_real(value, name) else float(value)

    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ShapeError(f"{name} must have shape (n, n), got {arr.shape}")
    if arr.shape[0] < min_size:
        raise ShapeError(f"{name} needs at least {min_size} vertices, got {arr.shape[0]}")
    if np.isnan(arr).any():
        raise ValueError(f"{name} must not contain NaN")
    if np.isneginf(arr).any():
        raise ValueError(f"{name} must not contain -inf")
    return arr


def as_real(value, name: str) -> float:
    """Return ``value`` as a finite ``float`` or raise ``ValueError``."""

    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a real number, got {value!r}")
    out = float(value)
    if not np.isfinite(out):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return out


def as_vertex(value, n: int, name: str = "vertex") -> int:
    """Return ``value`` as a vertex index in ``[0, n)`` or raise ``ValueError``."""

    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer vertex index, got {value!r}")
    out = int(value)
    if not 0 <= out < n:
        raise ValueError(f"{name} must be a vertex index in [0, {n}), got {value!r}")
    return out
