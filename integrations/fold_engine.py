"""
Origami Cipher Engine — Deterministic letter-grid folding.

A message is laid row-major into a fixed-width grid of letter cells. Each
fold pairs the rows (or columns) mirrored around a pivot, sums their letter
values into the kept side and retires the other side. Reading the visible
cells row by row gives the output string.

Supported operations:
  - build_grid: normalize text and lay it into a grid
  - apply_fold: apply one horizontal or vertical fold, returning a new grid
  - extract_cipher: read the visible letters back out
"""
import math
import string
from dataclasses import dataclass, replace
from typing import Literal

Axis = Literal["horizontal", "vertical"]
Side = Literal["up", "down", "left", "right"]

MIN_WIDTH = 3
MAX_WIDTH = 10
ALPHABET = string.ascii_uppercase

# Side kept by the default fold on each axis.
DEFAULT_KEEP: dict[str, str] = {"horizontal": "down", "vertical": "right"}
KEEP_SIDES: dict[str, tuple[str, str]] = {
    "horizontal": ("down", "up"),
    "vertical": ("right", "left"),
}


class InvalidWidthError(ValueError):
    """Grid width outside the supported range."""


# ── Letter helpers ──────────────────────────────────────────────────────────

def normalize_text(text: str) -> str:
    """Uppercase text and drop every character outside A-Z."""
    return "".join(ch for ch in text.upper() if ch in ALPHABET)


def letter_value(char: str) -> int:
    """1-based alphabet position of char, 0 for the empty cell."""
    return ALPHABET.index(char) + 1 if char else 0


def letter_of(value: int) -> str:
    """Wrap value into 1..26 and return its letter ("" for 0)."""
    if value == 0:
        return ""
    return ALPHABET[(value - 1) % 26]


def validate_width(width) -> int:
    if isinstance(width, bool) or not isinstance(width, int):
        raise InvalidWidthError(f"Grid width must be an integer, got {width!r}")
    if not MIN_WIDTH <= width <= MAX_WIDTH:
        raise InvalidWidthError(
            f"Grid width must be between {MIN_WIDTH} and {MAX_WIDTH}, got {width}"
        )
    return width


# ── Grid model ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Cell:
    char: str = ""
    value: int = 0
    visible: bool = True
    depth: int = 0

    @classmethod
    def from_char(cls, char: str) -> "Cell":
        return cls(char=char, value=letter_value(char))

    def to_dict(self) -> dict:
        return {"char": self.char, "value": self.value, "visible": self.visible, "depth": self.depth}


@dataclass(frozen=True)
class FoldDescriptor:
    """One fold: axis, pivot row/column index and the side that survives."""

    axis: Axis
    pivot: int
    keep: Side

    def __post_init__(self):
        if self.axis not in KEEP_SIDES:
            raise ValueError(f"Unknown fold axis: {self.axis!r}")
        if self.keep not in KEEP_SIDES[self.axis]:
            raise ValueError(f"Cannot keep side {self.keep!r} on a {self.axis} fold")

    @classmethod
    def default_for(cls, axis: Axis, rows: int, cols: int) -> "FoldDescriptor":
        """Fold at the middle of the current dimension, keeping the default side."""
        dimension = rows if axis == "horizontal" else cols
        return cls(axis=axis, pivot=dimension // 2, keep=DEFAULT_KEEP.get(axis, ""))

    @property
    def label(self) -> str:
        return f"{self.axis} ({self.keep})"

    def to_dict(self) -> dict:
        return {"axis": self.axis, "pivot": self.pivot, "keep": self.keep}


@dataclass(frozen=True)
class Grid:
    """Immutable rows x cols table of cells. cols always equals the width."""

    cols: int
    cells: tuple[tuple[Cell, ...], ...] = ()

    @property
    def rows(self) -> int:
        return len(self.cells)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def to_dict(self) -> dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "cells": [[c.to_dict() for c in row] for row in self.cells],
        }


# ── Core operations ─────────────────────────────────────────────────────────

def build_grid(text: str, width: int) -> Grid:
    """
    Lay the normalized text row-major into a grid of the given width.

    Text without any letter gives a valid grid with zero rows. Cells past the
    end of the text are empty (value 0).
    """
    width = validate_width(width)
    chars = normalize_text(text)
    rows = math.ceil(len(chars) / width)
    padded = chars.ljust(rows * width, " ")
    cells = tuple(
        tuple(Cell.from_char(ch.strip()) for ch in padded[r * width:(r + 1) * width])
        for r in range(rows)
    )
    return Grid(cols=width, cells=cells)


def _merge(a: Cell, b: Cell) -> Cell:
    combined = a.value + b.value
    return Cell(char=letter_of(combined), value=combined, visible=True, depth=max(a.depth, b.depth) + 1)


def apply_fold(grid: Grid, fold: FoldDescriptor) -> Grid:
    """
    Apply one fold and return a new grid; the input grid is never touched.

    Bands are paired outward from the pivot: (p-1, p+1), (p-2, p+2), ...
    for as many pairs as fit on both sides. The pivot band itself and
    anything past the shorter side stay as they were. A fold with no pairs
    (pivot on an edge, grid too small) returns the grid unchanged.
    """
    horizontal = fold.axis == "horizontal"
    size = grid.rows if horizontal else grid.cols
    p = fold.pivot
    pairs = min(p, size - p - 1)
    if pairs <= 0 or grid.rows == 0:
        return grid

    table = [list(row) for row in grid.cells]
    # Survivor is the far side of the pivot for down/right.
    keep_far = fold.keep in ("down", "right")

    for i in range(pairs):
        near, far = p - 1 - i, p + 1 + i
        target, retired = (far, near) if keep_far else (near, far)
        lanes = range(grid.cols) if horizontal else range(grid.rows)
        for lane in lanes:
            if horizontal:
                a, b = table[near][lane], table[far][lane]
                table[target][lane] = _merge(a, b)
                table[retired][lane] = replace(table[retired][lane], visible=False)
            else:
                a, b = table[lane][near], table[lane][far]
                table[lane][target] = _merge(a, b)
                table[lane][retired] = replace(table[lane][retired], visible=False)

    return Grid(cols=grid.cols, cells=tuple(tuple(row) for row in table))


def extract_cipher(grid: Grid) -> str:
    """Visible, non-empty letters in row-major order."""
    return "".join(c.char for row in grid.cells for c in row if c.visible and c.char)
