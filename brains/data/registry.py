"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, MutableMapping, Tuple

from ..core.types import Vector


@dataclass(frozen=True)
class DataSpec:
    """Structural information about a dataset.

    Attributes
    ----------
    d_in:
        Width of every input vector.
    d_out:
        Width of every expected vector, i.e. the size of the output layer a
        network needs to be trained on it.
    extra:
        Free-form metadata (column names, encodings) kept for provenance.
    """

    d_in: int
    d_out: int
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DatasetSpec:
    """A named training set held entirely in memory."""

    name: str
    inputs: Tuple[Tuple[float, ...], ...]
    expecteds: Tuple[Tuple[float, ...], ...]
    data_spec: DataSpec
    provenance: Dict[str, Any]

    def __len__(self) -> int:
        return len(self.inputs)

    def pairs(self) -> Iterable[Tuple[Vector, Vector]]:
        """Iterate over ``(input, expected)`` pairs in training order."""

        return zip(self.inputs, self.expecteds)


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...

    or directly::

        register_dataset("xor", make_xor)

    Without a name the factory is registered under its function name.
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if callable(name):
        # Bare @register_dataset without parentheses.
        return register_dataset(None, name)
    return _decorator


def get_dataset(dataset: str, /, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` for ``dataset``."""

    if dataset not in _REGISTRY:
        available = ", ".join(available_datasets())
        raise KeyError(f"Unknown dataset {dataset!r}. Available datasets: {available}")

    spec = _REGISTRY[dataset](**options)
    _validate_spec(spec)
    return spec


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if len(spec.inputs) != len(spec.expecteds):
        raise ValueError(
            f"Dataset {spec.name!r} has {len(spec.inputs)} inputs but "
            f"{len(spec.expecteds)} expected vectors"
        )
    if not spec.inputs:
        raise ValueError(f"Dataset {spec.name!r} is empty")
    for row in spec.inputs:
        if len(row) != spec.data_spec.d_in:
            raise ValueError(
                f"Dataset {spec.name!r} declares d_in={spec.data_spec.d_in} "
                f"but contains an input of width {len(row)}"
            )
    for row in spec.expecteds:
        if len(row) != spec.data_spec.d_out:
            raise ValueError(
                f"Dataset {spec.name!r} declares d_out={spec.data_spec.d_out} "
                f"but contains an expected vector of width {len(row)}"
            )


__all__ = [
    "DataSpec",
    "DatasetSpec",
    "available_datasets",
    "get_dataset",
    "register_dataset",
]
