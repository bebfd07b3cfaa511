"""Greedy fractional allocation (continuous relaxation of 0/1 knapsack).

Items are copied into an ``(m, F_ITEM_F)`` float table, ordered with a stable
sort on the chosen key and taken greedily until the capacity runs out; the
last item reached may be taken partially.  Only ``Ordering.RATIO_DESC`` is
value-optimal.  The weight and value orderings are kept as separate
behaviours so their results can be compared against it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..config.enums import (
    F_ITEM_F,
    ITEM_RATIO,
    ITEM_VALUE,
    ITEM_WEIGHT,
    ORDERING_LABELS,
    Ordering,
)
from .validation import as_real


@dataclass(frozen=True)
class Item:
    id: Any
    weight: float
    value: float
    name: Optional[str] = None

    @property
    def ratio(self) -> float:
        return self.value / self.weight if self.weight > 0 else 0.0

    @property
    def label(self) -> str:
        return self.name if self.name else f"Box {self.id}"


@dataclass(frozen=True)
class Allocation:
    item: Item
    fraction: float
    taken_weight: float
    taken_value: float


@dataclass(frozen=True)
class AllocationResult:
    total_value: float
    selected: Tuple[Allocation, ...]
    used_capacity: float
    remaining_capacity: float
    capacity: float
    ordering: Ordering
    unselected: Tuple[Item, ...]

    @property
    def efficiency(self) -> float:
        if self.used_capacity <= 0:
            return 0.0
        return self.total_value / self.used_capacity

    def to_dict(self):
        return {
            "total_value": self.total_value,
            "used_capacity": self.used_capacity,
            "remaining_capacity": self.remaining_capacity,
            "capacity": self.capacity,
            "ordering": self.ordering.name,
            "ordering_label": ORDERING_LABELS[self.ordering],
            "efficiency": self.efficiency,
            "selected": [
                {
                    "id": a.item.id,
                    "name": a.item.label,
                    "weight": a.item.weight,
                    "value": a.item.value,
                    "ratio": a.item.ratio,
                    "fraction": a.fraction,
                    "taken_weight": a.taken_weight,
                    "taken_value": a.taken_value,
                }
                for a in self.selected
            ],
            "unselected": [a.id for a in self.unselected],
        }


def _as_item(raw, position: int) -> Item:
    if isinstance(raw, Item):
        item = raw
    elif isinstance(raw, Mapping):
        if "weight" not in raw or ("value" not in raw and "profit" not in raw):
            raise ValueError(f"item {position} needs 'weight' and 'value'")
        item = Item(
            id=raw.get("id", raw.get("index", position)),
            weight=raw["weight"],
            value=raw["value"] if "value" in raw else raw["profit"],
            name=raw.get("name"),
        )
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        if len(raw) not in (3, 4):
            raise ValueError(f"item {position} must be (id, weight, value[, name]), got {raw!r}")
        item = Item(*raw)
    else:
        raise ValueError(f"item {position} must be an Item, a mapping or a tuple, got {raw!r}")

    weight = as_real(item.weight, f"item {position} weight")
    value = as_real(item.value, f"item {position} value")
    if weight <= 0:
        raise ValueError(f"item {position} weight must be > 0, got {weight}")
    if value < 0:
        raise ValueError(f"item {position} value must be >= 0, got {value}")
    return Item(id=item.id, weight=weight, value=value, name=item.name)


def _item_table(items) -> np.ndarray:
    item_f = np.zeros((len(items), F_ITEM_F), dtype=np.float64)
    for i, item in enumerate(items):
        item_f[i, ITEM_WEIGHT] = item.weight
        item_f[i, ITEM_VALUE] = item.value
        item_f[i, ITEM_RATIO] = item.ratio
    return item_f


def sort_order(item_f: np.ndarray, ordering: Ordering) -> np.ndarray:
    """Indices of ``item_f`` rows in greedy order; equal keys keep input order."""

    if ordering == Ordering.WEIGHT_ASC:
        key = item_f[:, ITEM_WEIGHT]
    elif ordering == Ordering.VALUE_DESC:
        key = -item_f[:, ITEM_VALUE]
    else:
        key = -item_f[:, ITEM_RATIO]
    return np.argsort(key, kind="stable")


def allocate(items: Iterable, capacity, ordering=Ordering.RATIO_DESC) -> AllocationResult:
    """Fill ``capacity`` greedily from ``items`` in the given ``ordering``.

    Parameters
    ----------
    items:
        ``Item`` instances or mappings with ``weight``/``value`` (or
        ``profit``) and optional ``id``/``index`` and ``name``, or
        ``(id, weight, value[, name])`` tuples.  They are not modified.
    capacity:
        Non-negative finite capacity.
    ordering:
        An ``Ordering`` or anything ``Ordering.parse`` accepts.

    Returns
    -------
    AllocationResult
        Selected items in selection order.  ``remaining_capacity > 0`` means
        every item was taken in full.
    """

    ordering = Ordering.parse(ordering)
    capacity = as_real(capacity, "capacity")
    if capacity < 0:
        raise ValueError(f"capacity must be >= 0, got {capacity}")
    pool = [_as_item(raw, i) for i, raw in enumerate(items)]

    item_f = _item_table(pool)
    order = sort_order(item_f, ordering)

    remaining = capacity
    total_value = 0.0
    selected = []
    considered = 0
    for idx in order:
        if remaining <= 0.0:
            break
        considered += 1
        w = float(item_f[idx, ITEM_WEIGHT])
        v = float(item_f[idx, ITEM_VALUE])
        if w <= remaining:
            alloc = Allocation(pool[idx], 1.0, w, v)
            remaining -= w
        else:
            fraction = remaining / w
            alloc = Allocation(pool[idx], fraction, remaining, v * fraction)
            remaining = 0.0
        total_value += alloc.taken_value
        selected.append(alloc)

    return AllocationResult(
        total_value=total_value,
        selected=tuple(selected),
        used_capacity=capacity - remaining,
        remaining_capacity=remaining,
        capacity=capacity,
        ordering=ordering,
        unselected=tuple(pool[idx] for idx in order[considered:]),
    )


def compare_orderings(items: Iterable, capacity) -> Dict[Ordering, AllocationResult]:
    """Run :func:`allocate` once per ordering on the same items."""

    items = list(items)
    return {ordering: allocate(items, capacity, ordering) for ordering in Ordering}
