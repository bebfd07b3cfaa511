"""Input construction helpers for the command-line glue layer.

These turn user-facing text (``"0-1:2, 0-2:3"``, ``"10:60:electronics"``),
YAML/JSON configuration files, CSV/Parquet tables and NPZ matrices into the
numeric structures the solvers accept.  Malformed input is rejected with
``ValueError`` (or ``ShapeError`` for out-of-range vertices) rather than
skipped.  The helpers are plain functions so they compose easily in tests.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import yaml

from ..engine.allocation import Item
from ..engine.errors import ShapeError
from ..engine.stage_graph import stage_layout, stage_vertex_count

_PAIR_SPLIT = re.compile(r"\s*-\s*")


def load_config(path_yaml: Path) -> Dict:
    """Read a YAML (or JSON) configuration file.

    Parameters
    ----------
    path_yaml:
        Path to the configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Empty files resolve to ``{}``.
    """

    path = Path(path_yaml)
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}

    if path.suffix.lower() == ".json":
        return json.loads(text)

    cfg = yaml.safe_load(text)
    return cfg or {}


def _tokens(text: str) -> List[str]:
    return [tok.strip() for tok in str(text).split(",") if tok.strip()]


def _parse_edge(token: str) -> Tuple[int, int, float]:
    pair, sep, cost_text = token.partition(":")
    ends = _PAIR_SPLIT.split(pair.strip())
    if not sep or len(ends) != 2:
        raise ValueError(f"edge must look like 'from-to:cost', got {token!r}")
    try:
        a, b, cost = int(ends[0]), int(ends[1]), float(cost_text.strip())
    except ValueError as exc:
        raise ValueError(f"edge fields must be numeric, got {token!r}") from exc
    if not np.isfinite(cost):
        raise ValueError(f"edge cost must be finite, got {token!r}")
    return a, b, cost


def parse_edge_list(
    text: str,
    n: int,
    *,
    symmetric: bool = False,
    diagonal: Optional[float] = None,
) -> np.ndarray:
    """Build an ``(n, n)`` matrix from ``"from-to:cost"`` tokens.

    Entries that are not mentioned stay ``inf``.  Later tokens overwrite
    earlier ones for the same pair.
    """

    n = int(n)
    if n < 1:
        raise ShapeError("vertex count must be >= 1")
    mat = np.full((n, n), np.inf, dtype=np.float64)
    if diagonal is not None:
        np.fill_diagonal(mat, float(diagonal))

    for tok in _tokens(text):
        a, b, cost = _parse_edge(tok)
        if not (0 <= a < n and 0 <= b < n):
            raise ShapeError(f"edge {tok!r} references a vertex outside [0, {n})")
        mat[a, b] = cost
        if symmetric:
            mat[b, a] = cost
    return mat


def build_stage_matrix(num_stages: int, nodes_per_stage: int, text: str):
    """Cost matrix plus stage layout for the multi-stage graph form."""

    n = stage_vertex_count(num_stages, nodes_per_stage)
    return parse_edge_list(text, n), stage_layout(num_stages, nodes_per_stage)


def build_distance_matrix(num_locations: int, text: str) -> np.ndarray:
    """Symmetric distance matrix with a zero diagonal; unlisted links are ``inf``."""

    return parse_edge_list(text, num_locations, symmetric=True, diagonal=0.0)


def parse_packages(text: str) -> List[Item]:
    """Parse ``"weight:value[:name]"`` tokens into items with positional ids."""

    items = []
    for idx, tok in enumerate(_tokens(text)):
        parts = [p.strip() for p in tok.split(":")]
        if len(parts) not in (2, 3):
            raise ValueError(f"package must look like 'weight:value:name', got {tok!r}")
        try:
            weight, value = float(parts[0]), float(parts[1])
        except ValueError as exc:
            raise ValueError(f"weight and value must be numbers, got {tok!r}") from exc
        name = parts[2] if len(parts) == 3 and parts[2] else None
        items.append(Item(id=idx, weight=weight, value=value, name=name))
    if not items:
        raise ValueError("no packages given")
    return items


def _read_frame(path_like: Path):
    """Return a Pandas ``DataFrame`` from CSV or Parquet input."""

    path = Path(path_like)
    if path.suffix.lower() in {".parquet", ".pq"}:
        df = pd.read_parquet(path)
    else:
        df = pd.read_csv(path)
    return df


def load_items(path_table: Path) -> List[Item]:
    """Load items from a table with ``weight`` and ``value``/``profit`` columns."""

    df = _read_frame(path_table)
    value_col = "value" if "value" in df.columns else "profit"
    if "weight" not in df.columns or value_col not in df.columns:
        raise ValueError("item table must contain 'weight' and 'value' columns")
    if df[["weight", value_col]].isna().any().any():
        raise ValueError("item table has missing weights or values")

    ids = df["id"].tolist() if "id" in df.columns else list(range(len(df.index)))
    names = df["name"].tolist() if "name" in df.columns else [None] * len(df.index)
    items = []
    for i, w, v, name in zip(ids, df["weight"].to_numpy(dtype=np.float64),
                             df[value_col].to_numpy(dtype=np.float64), names):
        if isinstance(i, np.integer):
            i = int(i)
        if isinstance(name, float) and np.isnan(name):
            name = None
        items.append(Item(id=i, weight=float(w), value=float(v), name=None if name is None else str(name)))
    return items


def load_coords(path_table: Path) -> np.ndarray:
    """Load ``x``/``y`` columns as an ``(n, 2)`` array."""

    df = _read_frame(path_table)
    if not {"x", "y"}.issubset(df.columns):
        raise ValueError("coordinate table must contain 'x' and 'y' columns")
    return df[["x", "y"]].to_numpy(dtype=np.float64, copy=True)


def load_matrix(path_like: Path, key: str = "cost") -> np.ndarray:
    """Load a square matrix from an ``.npz`` entry or a headerless CSV."""

    path = Path(path_like)
    if path.suffix.lower() == ".npz":
        with np.load(path) as data:
            if key not in data.files:
                raise ValueError(f"{path.name} has no array named {key!r}")
            return np.array(data[key], dtype=np.float64)
    df = pd.read_csv(path, header=None)
    return df.to_numpy(dtype=np.float64, copy=True)


def compute_euclid(coords: np.ndarray) -> np.ndarray:
    """Pairwise Euclidean distances between ``(n, 2)`` coordinates."""

    coords = np.asarray(coords, dtype=np.float64)
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise ShapeError("coords must have shape (n, 2)")
    diff = coords[:, None, :] - coords[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=-1))


__all__ = [
    "build_distance_matrix",
    "build_stage_matrix",
    "compute_euclid",
    "load_config",
    "load_coords",
    "load_items",
    "load_matrix",
    "parse_edge_list",
    "parse_packages",
]
