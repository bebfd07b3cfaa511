# Indices / enums used across modules (keep ints for JIT friendliness)

import numbers
from enum import IntEnum

# item_f columns (float)
ITEM_WEIGHT = 0
ITEM_VALUE  = 1
ITEM_RATIO  = 2
F_ITEM_F    = 3 # 3 features

# "no successor" marker in decision arrays / nearest-neighbour scans
NO_VERTEX = -1


class Ordering(IntEnum):
    """Greedy orderings for fractional allocation (codes match the dashboard)."""

    WEIGHT_ASC = 1
    VALUE_DESC = 2
    RATIO_DESC = 3

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _ORDERING_ALIASES:
                return _ORDERING_ALIASES[key]
            if key.isdigit():
                return cls.parse(int(key))
            raise ValueError(f"unknown ordering: {value!r}")
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"unknown ordering: {value!r}")
        try:
            return cls(int(value))
        except ValueError as exc:
            raise ValueError(f"unknown ordering: {value!r}") from exc


_ORDERING_ALIASES = {
    "weight": Ordering.WEIGHT_ASC,
    "weight_asc": Ordering.WEIGHT_ASC,
    "value": Ordering.VALUE_DESC,
    "profit": Ordering.VALUE_DESC,
    "value_desc": Ordering.VALUE_DESC,
    "ratio": Ordering.RATIO_DESC,
    "ratio_desc": Ordering.RATIO_DESC,
}

ORDERING_LABELS = {
    Ordering.WEIGHT_ASC: "Weight-based",
    Ordering.VALUE_DESC: "Profit-based",
    Ordering.RATIO_DESC: "Ratio-based",
}
