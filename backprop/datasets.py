"""Truth tables for two-input logic gates, handy for smoke-testing training."""
from __future__ import annotations

INPUTS = [
    [0.0, 0.0],
    [0.0, 1.0],
    [1.0, 0.0],
    [1.0, 1.0],
]

LOGIC_GATES = {
    "and": [0.0, 0.0, 0.0, 1.0],
    "or": [0.0, 1.0, 1.0, 1.0],
    "nand": [1.0, 1.0, 1.0, 0.0],
    "xor": [0.0, 1.0, 1.0, 0.0],
}


def logic_gate_dataset(name: str) -> tuple[list[list[float]], list[list[float]]]:
    """Return ``(inputs, targets)`` for the named gate, one target per row."""

    key = name.lower()
    if key not in LOGIC_GATES:
        raise ValueError(f"unknown logic gate {name!r}; choose from {sorted(LOGIC_GATES)}")
    inputs = [row.copy() for row in INPUTS]
    targets = [[value] for value in LOGIC_GATES[key]]
    return inputs, targets
