import csv
import json

import numpy as np

from ..config.enums import NO_VERTEX


def _plain(value):
    if isinstance(value, np.integer):
        return int(value)
    return value


class StepTrace:
    def __init__(self, kind=""):
        self.kind = kind
        self.rows = []

    def __len__(self):
        return len(self.rows)

    def append(self, step, action, source, target, amount, cumulative, note=""):
        self.rows.append(
            (
                int(step),
                action,
                _plain(source),
                _plain(target),
                None if amount is None else float(amount),
                None if cumulative is None else float(cumulative),
                note,
            )
        )

    def to_records(self):
        keys = ("step", "action", "source", "target", "amount", "cumulative", "note")
        return [dict(zip(keys, row)) for row in self.rows]

    def save_csv(self, path):
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["step", "action", "source", "target", "amount", "cumulative", "note"])
            for row in self.rows:
                step, action, source, target, amount, cumulative, note = row
                w.writerow(
                    [
                        step,
                        action,
                        source,
                        "" if target is None else target,
                        "" if amount is None else amount,
                        "" if cumulative is None else cumulative,
                        note,
                    ]
                )


def trace_stage_graph(result):
    """Backward pass from ``n-2`` down to ``0``, then the forward walk."""

    trace = StepTrace("stage_graph")
    n = result.n
    step = 0
    for j in range(n - 2, -1, -1):
        d = int(result.decision[j])
        bc = result.backward_cost[j]
        trace.append(
            step,
            "relax",
            j,
            d,
            bc if np.isfinite(bc) else None,
            None,
            "" if d != NO_VERTEX else "no successor",
        )
        step += 1

    acc = 0.0
    for a, b in zip(result.path[:-1], result.path[1:]):
        leg = float(result.backward_cost[a] - result.backward_cost[b])
        acc += leg
        trace.append(step, "walk", a, b, leg, acc)
        step += 1
    return trace


def trace_tour(result):
    trace = StepTrace("tour")
    acc = 0.0
    for step, seg in enumerate(result.segments):
        if seg.distance is None:
            acc = None
        elif acc is not None:
            acc += seg.distance
        trace.append(step, "move", seg.source, seg.target, seg.distance, acc)
    return trace


def trace_allocation(result):
    trace = StepTrace("allocation")
    acc = 0.0
    for step, alloc in enumerate(result.selected):
        acc += alloc.taken_value
        trace.append(
            step,
            "take" if alloc.fraction >= 1.0 else "take_part",
            alloc.item.id,
            None,
            alloc.taken_weight,
            acc,
            f"{alloc.item.label} x{alloc.fraction:.4f}",
        )
    return trace


def save_result_json(path, result, params, *, extra=None):
    data = {
        "result": result.to_dict(),
        "params": params,
    }
    if extra:
        data.update(extra)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)
