"""Configuration tree, generated primitives and ground placements.

Configuration arrives as a nested mapping (from an MCP client or the
embedding application) and is parsed with :meth:`BuildingConfig.from_dict`.
Omitted keys take the reference building's values.  Validation failures are
raised as :class:`ConfigError` / :class:`PlacementError` naming the field path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .helpers.construction import (
    BASE_TOP_INSET,
    CORNER_SIZE_RATIO,
    OUTLINE_COLOR,
    ROOF_FOOTPRINT_RATIO,
)

GRID_SIZE = 64
DEFAULT_FOOTPRINT = 1.0
DEFAULT_NUM_FLOORS = 12


class ConfigError(ValueError):
    """Raised when a building configuration cannot produce valid geometry."""


class PlacementError(ValueError):
    """Raised when a placement is missing its position or has a bad footprint."""


PositiveFloat = Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)]
NonNegativeFloat = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]
FiniteFloat = Annotated[float, Field(strict=True, allow_inf_nan=False)]
Count = Annotated[int, Field(strict=True, ge=1)]
Flag = Annotated[bool, Field(strict=True)]


def _field_path(loc: tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _describe(exc: ValidationError) -> str:
    """One line per pydantic error: ``floors[0].windows.count_front: ...``."""
    messages = []
    for err in exc.errors():
        if err["type"] == "value_error":
            msg = str(err["ctx"]["error"])
        else:
            msg = err["msg"]
        path = _field_path(err["loc"])
        messages.append(f"{path}: {msg}" if path else msg)
    return "; ".join(messages)


def _merge_defaults(cls: type[BaseModel], data: dict[str, Any]) -> dict[str, Any]:
    """Fill a partial section from that field's default, not the class defaults."""
    for name, field in cls.model_fields.items():
        if isinstance(field.default, BaseModel) and isinstance(data.get(name), Mapping):
            data[name] = {**field.default.model_dump(), **data[name]}
    return data


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, revalidate_instances="always")

    @model_validator(mode="before")
    @classmethod
    def merge_defaults(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return _merge_defaults(cls, dict(data))

    @classmethod
    def parse(cls, data: Any):
        """Validate *data* (a mapping or an instance), raising :class:`ConfigError`."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(_describe(exc)) from exc


# ---------------------------------------------------------------------------
# Configuration tree
# ---------------------------------------------------------------------------

class WindowConfig(_ConfigModel):
    width: PositiveFloat = 1.8
    height: PositiveFloat = 2.2
    spacing: PositiveFloat = 3.8
    count_front: Count = 5
    count_side: Count = 3


class DividerConfig(_ConfigModel):
    enabled: Flag = True
    height: PositiveFloat = 0.25
    overhang: NonNegativeFloat = 0.3


class FloorConfig(_ConfigModel):
    windows: WindowConfig = WindowConfig()
    divider: DividerConfig = DividerConfig()
    decorative_lines: Flag = True


class DecorativeLineConfig(_ConfigModel):
    enabled: Flag = True
    height: PositiveFloat = 0.18
    overhang: NonNegativeFloat = 0.2


class ColumnConfig(_ConfigModel):
    enabled: Flag = True
    count: Annotated[int, Field(strict=True, ge=0)] = 4
    width: PositiveFloat = 0.9  # also sizes the corner blocks
    depth: PositiveFloat = 0.9

    @model_validator(mode="after")
    def check_count(self):
        if self.enabled and self.count < 1:
            raise ValueError(f"count must be at least 1 when columns are enabled, got {self.count}")
        return self


class BaseConfig(_ConfigModel):
    width: PositiveFloat = 28.0
    depth: PositiveFloat = 21.0
    height: PositiveFloat = 2.2
    decorative_lines: DecorativeLineConfig = DecorativeLineConfig()
    columns: ColumnConfig = ColumnConfig()

    @model_validator(mode="after")
    def check_insets(self):
        if min(self.width, self.depth) <= BASE_TOP_INSET:
            raise ValueError(
                f"width and depth must exceed the top trim inset {BASE_TOP_INSET}, "
                f"got {self.width}x{self.depth}"
            )
        return self

    @model_validator(mode="after")
    def check_corners_fit(self):
        corner = self.columns.width * CORNER_SIZE_RATIO
        if corner > min(self.width, self.depth):
            raise ValueError(
                f"corner blocks ({corner} wide, from columns.width) do not fit a "
                f"{self.width}x{self.depth} base"
            )
        return self


class TrimConfig(_ConfigModel):
    height: PositiveFloat = 0.3
    overhang: NonNegativeFloat = 0.25


class StageConfig(_ConfigModel):
    width: PositiveFloat
    depth: PositiveFloat
    height: PositiveFloat


class TowerConfig(_ConfigModel):
    base: StageConfig = StageConfig(width=8.0, depth=8.0, height=1.0)
    main: StageConfig = StageConfig(width=6.0, depth=6.0, height=4.0)
    top: StageConfig = StageConfig(width=7.0, depth=7.0, height=1.5)
    spire: StageConfig = StageConfig(width=2.0, depth=2.0, height=2.0)

    STAGES: ClassVar[tuple[str, ...]] = ("base", "main", "top", "spire")

    def stages(self) -> list[tuple[str, StageConfig]]:
        """Stages bottom to top."""
        return [(name, getattr(self, name)) for name in self.STAGES]


class ParapetConfig(_ConfigModel):
    height: PositiveFloat = 1.2
    thickness: PositiveFloat = 0.15
    top_trim: TrimConfig = TrimConfig(height=0.3, overhang=0.15)


class RoofConfig(_ConfigModel):
    width: PositiveFloat = 21.25
    depth: PositiveFloat = 15.3
    height: PositiveFloat = 2.5
    trim: TrimConfig = TrimConfig()
    tower: TowerConfig = TowerConfig()
    parapet: ParapetConfig = ParapetConfig()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class BuildingConfig(_ConfigModel):
    """One building's shape.  Read-only for the life of its generated model.

    ``floors`` may be given as a list (one entry per floor, ``num_floors``
    inferred when omitted) or as a single mapping applied to every floor.
    When the footprint is overridden but the roof size is not, the roof
    follows the footprint at the conventional 0.85 ratio.
    """

    width: PositiveFloat = 25.0
    depth: PositiveFloat = 18.0
    floor_height: PositiveFloat = 3.2
    num_floors: Count = DEFAULT_NUM_FLOORS
    floors: tuple[FloorConfig, ...]
    base: BaseConfig = BaseConfig()
    roof: RoofConfig = RoofConfig()

    @model_validator(mode="before")
    @classmethod
    def merge_defaults(cls, data: Any) -> Any:
        # Same name as the base validator, so it replaces it: shorthand first, then merge.
        if not isinstance(data, Mapping):
            return data
        data = dict(data)

        floors = data.get("floors")
        if floors is None or isinstance(floors, Mapping):
            count = data.get("num_floors", DEFAULT_NUM_FLOORS)
            if isinstance(count, int) and not isinstance(count, bool) and count >= 1:
                data["floors"] = [floors or {}] * count
        elif isinstance(floors, (list, tuple)) and "num_floors" not in data:
            data["num_floors"] = len(floors)

        roof = data.get("roof")
        if roof is None or isinstance(roof, Mapping):
            roof = dict(roof or {})
            for key in ("width", "depth"):
                if key not in roof and _is_number(data.get(key)):
                    roof[key] = data[key] * ROOF_FOOTPRINT_RATIO
            data["roof"] = roof
        return _merge_defaults(cls, data)

    @model_validator(mode="after")
    def check_floor_count(self):
        if len(self.floors) != self.num_floors:
            raise ValueError(
                f"floors must list one entry per floor: expected {self.num_floors}, "
                f"got {len(self.floors)}"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "BuildingConfig":
        """Parse a nested mapping, filling gaps from the reference building."""
        return cls.parse(dict(data or {}))


def default_config() -> BuildingConfig:
    """The reference twelve-storey tower with columns, dividers and a spire."""
    return BuildingConfig.from_dict({})


# ---------------------------------------------------------------------------
# Generated geometry
# ---------------------------------------------------------------------------

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class Primitive:
    """An axis-aligned box outline centred at ``position`` (Y up)."""

    name: str
    kind: str
    size: Vec3
    position: Vec3
    color: tuple[int, int, int] = OUTLINE_COLOR

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "size": list(self.size),
            "position": list(self.position),
            "color": list(self.color),
        }


# ---------------------------------------------------------------------------
# Ground placements
# ---------------------------------------------------------------------------

_PLACEMENT_FIELDS = ("x", "z", "width", "depth", "id")


class Placement(BaseModel):
    """A building footprint on the shared ground grid.

    ``width``/``depth`` default to a single grid cell; ``None`` means the
    default.  Accepts ``Placement(x, z, width, depth, id)`` positionally.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    x: FiniteFloat
    z: FiniteFloat
    width: PositiveFloat = DEFAULT_FOOTPRINT
    depth: PositiveFloat = DEFAULT_FOOTPRINT
    id: str | int | None = None

    def __init__(self, *args: Any, **data: Any):
        if len(args) > len(_PLACEMENT_FIELDS):
            raise TypeError(f"Placement takes at most {len(_PLACEMENT_FIELDS)} positional arguments")
        data.update(zip(_PLACEMENT_FIELDS, args))
        for key in ("width", "depth"):
            if key in data and data[key] is None:
                del data[key]
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise PlacementError(_describe(exc)) from exc

    def world_position(self, grid_size: float = GRID_SIZE) -> Vec3:
        """World-space origin for a placement on a grid centred at the origin."""
        half = grid_size / 2.0
        return (self.x - half, 0.0, self.z - half)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int | None = None) -> "Placement":
        label = f"placements[{index}]" if index is not None else "placement"
        if not isinstance(data, Mapping):
            raise PlacementError(f"{label} must be a mapping, got {type(data).__name__}")
        payload = dict(data)
        payload.setdefault("id", index)
        try:
            return cls(**payload)
        except PlacementError as exc:
            raise PlacementError(f"{label}.{exc}") from exc
