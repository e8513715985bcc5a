"""
Fold sequences — building the ordered fold list and replaying it.

The runner has two delivery modes over the same computation:
  - run_sequence: eager, returns the final grid and the whole trace
  - FoldRun: lazy and restartable, yields one FoldStep per fold so a caller
    can pace the display (the HTTP stream and the CLI add the delay)
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from integrations.fold_engine import Axis, FoldDescriptor, Grid, apply_fold, extract_cipher
from prompts.trace_messages import complete_line, fold_start_line, matrix_state_line

logger = logging.getLogger(__name__)


# ── Sequence builder ────────────────────────────────────────────────────────

class FoldSequence:
    """Ordered, editable list of folds. Pivots are fixed when a fold is added."""

    def __init__(self, folds: Iterable[FoldDescriptor] = ()):
        self._folds: list[FoldDescriptor] = list(folds)

    def add(self, axis: Axis, grid: Grid) -> FoldDescriptor:
        """Append a default fold for axis, centered on the grid's current dimensions."""
        fold = FoldDescriptor.default_for(axis, grid.rows, grid.cols)
        self._folds.append(fold)
        return fold

    def remove(self, index: int) -> FoldDescriptor:
        """Delete the fold at index; later folds shift down unchanged."""
        if not 0 <= index < len(self._folds):
            raise IndexError(f"No fold at position {index} (sequence has {len(self._folds)})")
        return self._folds.pop(index)

    def clear(self):
        self._folds.clear()

    @property
    def folds(self) -> tuple[FoldDescriptor, ...]:
        return tuple(self._folds)

    def __len__(self) -> int:
        return len(self._folds)

    def __iter__(self) -> Iterator[FoldDescriptor]:
        return iter(self.folds)

    def __getitem__(self, index: int) -> FoldDescriptor:
        return self._folds[index]


# ── Runner ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FoldStep:
    """Result of one fold: the new grid and the trace lines it added."""

    index: int
    total: int
    fold: FoldDescriptor
    grid: Grid
    trace: tuple[str, ...]

    @property
    def is_last(self) -> bool:
        return self.index == self.total - 1


class FoldRun:
    """
    Lazy replay of a fold sequence over an initial grid.

    Iterating starts from the initial grid every time, so a run can be
    restarted; each fold is applied exactly once per pass. The last step's
    trace also carries the completion line.
    """

    def __init__(self, grid: Grid, folds: Iterable[FoldDescriptor]):
        self.initial = grid
        self.folds = tuple(folds)

    def __len__(self) -> int:
        return len(self.folds)

    def __iter__(self) -> Iterator[FoldStep]:
        grid = self.initial
        total = len(self.folds)
        for i, fold in enumerate(self.folds):
            grid = apply_fold(grid, fold)
            snapshot = extract_cipher(grid)
            logger.debug(f"Fold {i + 1}/{total}: {fold.axis} pivot={fold.pivot} keep={fold.keep} -> {snapshot}")
            trace = [fold_start_line(fold.axis, fold.pivot, fold.keep), matrix_state_line(snapshot)]
            if i == total - 1:
                trace.append(complete_line(snapshot))
            yield FoldStep(index=i, total=total, fold=fold, grid=grid, trace=tuple(trace))


def run_sequence(grid: Grid, folds: Iterable[FoldDescriptor]) -> tuple[Grid, list[str]]:
    """Apply every fold in order; return the final grid and the full trace."""
    final = grid
    trace: list[str] = []
    for step in FoldRun(grid, folds):
        final = step.grid
        trace.extend(step.trace)
    if trace:
        logger.info(f"Sequence complete: {extract_cipher(final)!r}")
    return final, trace
