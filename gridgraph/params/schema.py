"""Table configuration schema with validation."""

import operator
from dataclasses import dataclass, field
from typing import Any

from gridgraph.core.border import validate_ndim
from gridgraph.core.errors import ConfigurationError
from gridgraph.core.offsets import NeighborhoodType


class ValidationError(ConfigurationError):
    """Parameter validation failed."""
    pass


@dataclass(frozen=True)
class NeighborhoodParams:
    """One table set: ndim, neighborhood ("direct"/"indirect"), optional strides."""
    ndim: int = 2
    neighborhood: NeighborhoodType = NeighborhoodType.DIRECT
    strides: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        try:
            ndim = validate_ndim(self.ndim)
            neighborhood = NeighborhoodType.parse(self.neighborhood)
        except ConfigurationError as exc:
            raise ValidationError(str(exc)) from exc
        object.__setattr__(self, "ndim", ndim)
        object.__setattr__(self, "neighborhood", neighborhood)

        if self.strides is not None:
            message = f"strides must be a list of ints, got {self.strides!r}"
            if not isinstance(self.strides, (list, tuple)) or any(
                isinstance(s, bool) for s in self.strides
            ):
                raise ValidationError(message)
            try:
                strides = tuple(operator.index(s) for s in self.strides)
            except TypeError as exc:
                raise ValidationError(message) from exc
            if len(strides) != ndim:
                raise ValidationError(
                    f"strides must have length {ndim}, got {len(strides)}"
                )
            object.__setattr__(self, "strides", strides)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "ndim": self.ndim,
            "neighborhood": self.neighborhood.name.lower(),
        }
        if self.strides is not None:
            data["strides"] = list(self.strides)
        return data


@dataclass(frozen=True)
class TableConfig:
    """Neighborhood tables to build up front."""

    neighborhoods: tuple[NeighborhoodParams, ...] = field(
        default_factory=lambda: (NeighborhoodParams(),)
    )

    def __post_init__(self) -> None:
        neighborhoods = tuple(self.neighborhoods)
        for params in neighborhoods:
            if not isinstance(params, NeighborhoodParams):
                raise ValidationError(
                    f"neighborhoods must hold NeighborhoodParams, got {type(params).__name__}"
                )
        object.__setattr__(self, "neighborhoods", neighborhoods)

    def to_dict(self) -> dict[str, Any]:
        """Convert to nested dictionary."""
        return {"neighborhoods": [p.to_dict() for p in self.neighborhoods]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TableConfig":
        """Create from nested dictionary."""
        unknown = set(data) - {"neighborhoods"}
        if unknown:
            raise ValidationError(f"Unknown configuration keys: {sorted(unknown)}")
        if "neighborhoods" not in data:
            return cls()

        entries = data["neighborhoods"] or []
        if not isinstance(entries, list):
            raise ValidationError(
                f"neighborhoods must be a list, got {type(entries).__name__}"
            )
        neighborhoods = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValidationError(
                    f"neighborhood entry must be a dictionary, got {entry!r}"
                )
            try:
                neighborhoods.append(NeighborhoodParams(**entry))
            except TypeError as exc:
                raise ValidationError(f"Invalid neighborhood entry {entry!r}: {exc}") from exc
        return cls(neighborhoods=tuple(neighborhoods))

    def with_neighborhoods(self, *params: NeighborhoodParams) -> "TableConfig":
        """Create new config with additional neighborhoods appended."""
        return TableConfig(neighborhoods=self.neighborhoods + tuple(params))
