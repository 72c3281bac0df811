"""Boolean truth tables as in-memory training sets."""

from __future__ import annotations

from itertools import product
from typing import Callable, Dict, Sequence, Tuple

from .registry import DataSpec, DatasetSpec, register_dataset

GATES: Dict[str, Callable[[int, int], int]] = {
    "and": lambda a, b: a & b,
    "or": lambda a, b: a | b,
    "xor": lambda a, b: a ^ b,
    "nor": lambda a, b: 1 - (a | b),
    "nand": lambda a, b: 1 - (a & b),
}

# Rows run from (1, 1) down to (0, 0).
_ROWS: Tuple[Tuple[int, int], ...] = tuple(product((1, 0), repeat=2))


def _encode(bit: int, low: float) -> float:
    return 1.0 if bit else float(low)


def truth_table(
    gates: Sequence[str] | str,
    *,
    low: float = 0.0,
    name: str | None = None,
) -> DatasetSpec:
    """Build a dataset with one output column per gate in ``gates``.

    ``low`` is the value written for a false bit; use ``-1.0`` to match the
    full range of the tanh activation. A single gate name may be passed as a
    plain string.
    """

    gates = (gates,) if isinstance(gates, str) else tuple(gates)
    unknown = [gate for gate in gates if gate not in GATES]
    if unknown:
        raise KeyError(f"Unknown gates: {', '.join(unknown)}")
    if not gates:
        raise ValueError("truth_table needs at least one gate")

    inputs = tuple(tuple(_encode(bit, low) for bit in row) for row in _ROWS)
    expecteds = tuple(
        tuple(_encode(GATES[gate](*row), low) for gate in gates) for row in _ROWS
    )
    label = name or "-".join(gates)
    return DatasetSpec(
        name=label,
        inputs=inputs,
        expecteds=expecteds,
        data_spec=DataSpec(d_in=2, d_out=len(gates), extra={"columns": list(gates)}),
        provenance={"type": "truth_table", "gates": list(gates), "low": float(low)},
    )


@register_dataset("logic_gates")
def _logic_gates(low: float = 0.0, **_: object) -> DatasetSpec:
    return truth_table(("and", "or", "xor", "nor"), low=low, name="logic_gates")


@register_dataset("xor")
def _xor(low: float = 0.0, **_: object) -> DatasetSpec:
    return truth_table(("xor",), low=low, name="xor")


@register_dataset("and")
def _and(low: float = 0.0, **_: object) -> DatasetSpec:
    return truth_table(("and",), low=low, name="and")


@register_dataset("truth_table")
def _custom(gates: Sequence[str] | str = ("and",), low: float = 0.0, **_: object) -> DatasetSpec:
    return truth_table(gates, low=low)
