"""Chart color palettes passed explicitly into the geometry engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class ChartPalette:
    """An ordered, cyclic list of series colors.

    Colors are assigned by index modulo the palette length so a given point
    ordering always renders with the same colors.
    """

    colors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("ChartPalette requires at least one color.")

    def color_at(self, index: int) -> str:
        return self.colors[index % len(self.colors)]

    @property
    def primary(self) -> str:
        return self.colors[0]


DEFAULT_PALETTE: Final[ChartPalette] = ChartPalette(
    colors=(
        "#6366F1",
        "#0EA5E9",
        "#10B981",
        "#F59E0B",
        "#EF4444",
        "#A5B4FC",
        "#7DD3FC",
        "#6EE7B7",
    )
)
