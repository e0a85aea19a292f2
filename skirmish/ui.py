"""Layout values for UI nodes: lengths, flex presets, grid alignment and offsets."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import ClassVar, Iterable

Viewport = tuple[float, float]


class ValArithmeticError(ValueError):
    """Raised when a length cannot be evaluated to pixels."""


class ValUnit(enum.Enum):
    AUTO = "auto"
    PX = "px"
    PERCENT = "percent"
    VW = "vw"
    VH = "vh"
    VMIN = "vmin"
    VMAX = "vmax"


@dataclass(frozen=True)
class Val:
    """A UI length in one of several units."""

    unit: ValUnit = ValUnit.AUTO
    value: float = 0.0

    AUTO: ClassVar[Val]
    ZERO: ClassVar[Val]

    @classmethod
    def px(cls, value: float) -> Val:
        return cls(ValUnit.PX, float(value))

    @classmethod
    def percent(cls, value: float) -> Val:
        return cls(ValUnit.PERCENT, float(value))

    @classmethod
    def vw(cls, value: float) -> Val:
        return cls(ValUnit.VW, float(value))

    @classmethod
    def vh(cls, value: float) -> Val:
        return cls(ValUnit.VH, float(value))

    @classmethod
    def vmin(cls, value: float) -> Val:
        return cls(ValUnit.VMIN, float(value))

    @classmethod
    def vmax(cls, value: float) -> Val:
        return cls(ValUnit.VMAX, float(value))

    def resolve(self, parent_size: float, viewport_size: Viewport) -> float:
        """Convert to pixels; ``AUTO`` cannot be evaluated."""
        width, height = viewport_size
        if self.unit is ValUnit.AUTO:
            raise ValArithmeticError("an auto length cannot be evaluated")
        if self.unit is ValUnit.PX:
            return self.value
        basis = {
            ValUnit.PERCENT: parent_size,
            ValUnit.VW: width,
            ValUnit.VH: height,
            ValUnit.VMIN: min(width, height),
            ValUnit.VMAX: max(width, height),
        }[self.unit]
        return basis * self.value / 100.0

    def add(self, other: Val, parent_size: float, viewport_size: Viewport) -> Val:
        """Sum two lengths as a pixel length."""
        return Val.px(
            self.resolve(parent_size, viewport_size)
            + other.resolve(parent_size, viewport_size)
        )


Val.AUTO = Val()
Val.ZERO = Val.px(0.0)


class PositionType(enum.Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class FlexDirection(enum.Enum):
    ROW = "row"
    COLUMN = "column"


class AlignItems(enum.Enum):
    DEFAULT = "default"
    START = "start"
    END = "end"
    CENTER = "center"


class JustifyContent(enum.Enum):
    DEFAULT = "default"
    CENTER = "center"


class AlignSelf(enum.Enum):
    AUTO = "auto"
    START = "start"
    END = "end"
    CENTER = "center"


class JustifySelf(enum.Enum):
    AUTO = "auto"
    START = "start"
    END = "end"
    CENTER = "center"


class GridAutoFlow(enum.Enum):
    ROW = "row"
    COLUMN = "column"
    ROW_DENSE = "row_dense"
    COLUMN_DENSE = "column_dense"


@dataclass(frozen=True)
class Node:
    """Layout properties of a UI node; builder methods return modified copies."""

    position_type: PositionType = PositionType.RELATIVE
    flex_direction: FlexDirection = FlexDirection.ROW
    align_items: AlignItems = AlignItems.DEFAULT
    justify_content: JustifyContent = JustifyContent.DEFAULT
    align_self: AlignSelf = AlignSelf.AUTO
    justify_self: JustifySelf = JustifySelf.AUTO
    width: Val = Val()
    height: Val = Val()
    grid_auto_flow: GridAutoFlow = GridAutoFlow.ROW

    DEFAULT: ClassVar[Node]
    ROW: ClassVar[Node]
    ROW_TOP: ClassVar[Node]
    ROW_MID: ClassVar[Node]
    ROW_BOTTOM: ClassVar[Node]
    ROW_CENTER: ClassVar[Node]
    COLUMN: ClassVar[Node]
    COLUMN_LEFT: ClassVar[Node]
    COLUMN_MID: ClassVar[Node]
    COLUMN_RIGHT: ClassVar[Node]
    COLUMN_CENTER: ClassVar[Node]

    def abs(self) -> Node:
        return replace(self, position_type=PositionType.ABSOLUTE)

    def with_width(self, percent: float) -> Node:
        return replace(self, width=Val.percent(percent))

    def full_width(self) -> Node:
        return self.with_width(100.0)

    def with_height(self, percent: float) -> Node:
        return replace(self, height=Val.percent(percent))

    def full_height(self) -> Node:
        return self.with_height(100.0)

    def full_size(self) -> Node:
        return self.full_width().full_height()

    def centered(self) -> Node:
        return replace(self, align_self=AlignSelf.CENTER, justify_self=JustifySelf.CENTER)


Node.DEFAULT = Node()
Node.ROW = Node.DEFAULT
Node.ROW_TOP = replace(Node.ROW, align_items=AlignItems.START)
Node.ROW_MID = replace(Node.ROW, align_items=AlignItems.CENTER)
Node.ROW_BOTTOM = replace(Node.ROW, align_items=AlignItems.END)
Node.ROW_CENTER = replace(
    Node.ROW, align_items=AlignItems.CENTER, justify_content=JustifyContent.CENTER
)
Node.COLUMN = replace(Node.DEFAULT, flex_direction=FlexDirection.COLUMN)
Node.COLUMN_LEFT = replace(Node.COLUMN, align_items=AlignItems.START)
Node.COLUMN_MID = replace(Node.COLUMN, align_items=AlignItems.CENTER)
Node.COLUMN_RIGHT = replace(Node.COLUMN, align_items=AlignItems.END)
Node.COLUMN_CENTER = replace(
    Node.COLUMN, align_items=AlignItems.CENTER, justify_content=JustifyContent.CENTER
)


@dataclass
class GridAlignment:
    """Row and column alignment for the items of a grid.

    Assumes the grid has ``len(rows)`` rows and ``len(columns)`` columns and
    that no item has a custom placement.
    """

    rows: list[AlignSelf] = field(default_factory=list)
    columns: list[JustifySelf] = field(default_factory=list)

    @classmethod
    def for_rows(cls, rows: Iterable[AlignSelf]) -> GridAlignment:
        return cls(rows=list(rows))

    @classmethod
    def for_columns(cls, columns: Iterable[JustifySelf]) -> GridAlignment:
        return cls(columns=list(columns))

    def cell(self, index: int, flow: GridAutoFlow) -> tuple[int, int]:
        """Return the (row, column) that the item at ``index`` occupies."""
        if flow in (GridAutoFlow.ROW, GridAutoFlow.ROW_DENSE):
            if not self.columns:
                raise ValueError("row-flow grid alignment needs at least one column")
            return divmod(index, len(self.columns))
        if not self.rows:
            raise ValueError("column-flow grid alignment needs at least one row")
        col, row = divmod(index, len(self.rows))
        return row, col

    def apply(self, flow: GridAutoFlow, items: Iterable[Node]) -> list[Node]:
        """Return the items with their self-alignment set from their cell."""
        aligned = []
        for index, item in enumerate(items):
            row, col = self.cell(index, flow)
            if row < len(self.rows):
                item = replace(item, align_self=self.rows[row])
            if col < len(self.columns):
                item = replace(item, justify_self=self.columns[col])
            aligned.append(item)
        return aligned


@dataclass(frozen=True)
class NodeOffset:
    """A visual offset of a UI node, where ``AUTO`` means no offset."""

    x: Val = Val()
    y: Val = Val()

    def resolve(self, parent_size: float, viewport_size: Viewport) -> tuple[float, float]:
        def one(val: Val) -> float:
            if val.unit is ValUnit.AUTO:
                return 0.0
            return val.resolve(parent_size, viewport_size)

        return one(self.x), one(self.y)