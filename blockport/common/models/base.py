"""Shared base models."""

from typing import ClassVar, TypeAlias

from pydantic import BaseModel, ConfigDict

# Bounding box type: (x0, y0, x1, y1)
BBox: TypeAlias = tuple[float, float, float, float]


class Box(BaseModel):
    """Viewport geometry of a rendered element."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    model_config = ConfigDict(frozen=True)

    @property
    def bbox(self) -> BBox:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class Spacing(BaseModel):
    """Four-sided box spacing (padding or margin), each side with its own unit."""

    top: str = "0"
    right: str = "0"
    bottom: str = "0"
    left: str = "0"
    units: tuple[str, str, str, str] = ("px", "px", "px", "px")  # top, right, bottom, left

    model_config = ConfigDict(frozen=True)

    SIDES: ClassVar[tuple[str, str, str, str]] = ("top", "right", "bottom", "left")

    @property
    def is_zero(self) -> bool:
        return all(getattr(self, side) in ("", "0") for side in self.SIDES)

    @property
    def unit(self) -> str:
        """Unit of the first non-zero side, for targets that take a single unit."""
        for side, unit in zip(self.SIDES, self.units):
            if getattr(self, side) not in ("", "0"):
                return unit
        return self.units[0]

    @property
    def is_mixed(self) -> bool:
        return len({unit for side, unit in zip(self.SIDES, self.units) if getattr(self, side) not in ("", "0")}) > 1

    def length(self, side: str) -> str:
        """One side as a CSS length, e.g. "10px"; zero stays unitless."""
        number = getattr(self, side)
        if number in ("", "0"):
            return "0"
        return f"{number}{self.units[self.SIDES.index(side)]}"

    def css(self) -> str:
        return " ".join(self.length(side) for side in self.SIDES)
