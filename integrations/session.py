"""
Cipher session — the mutable state a front end keeps around the pure engine.

Holds the message, width, initial grid and fold sequence. Rebuilding the grid
(new text or width) clears the fold sequence, so folds whose pivots were
computed for old dimensions are never replayed.
"""
import logging
from typing import Iterator

from integrations.fold_engine import Axis, FoldDescriptor, Grid, build_grid, extract_cipher, validate_width
from integrations.fold_sequence import FoldRun, FoldSequence, FoldStep, run_sequence

logger = logging.getLogger(__name__)

DEFAULT_TEXT = "HELLOWORLD"
DEFAULT_WIDTH = 5


class CipherSession:
    def __init__(self, text: str = DEFAULT_TEXT, width: int = DEFAULT_WIDTH):
        self.default_text = text
        self.default_width = validate_width(width)
        self.text = text
        self.width = self.default_width
        self.grid: Grid = build_grid(text, width)
        self.sequence = FoldSequence()
        self.ciphertext = ""
        self.trace: list[str] = []
        self.current_fold = -1
        # Grid as last shown by a run; the initial grid is never replaced by it.
        self.display_grid: Grid = self.grid
        # Bumped on every rebuild; a stepwise run stops once it changes.
        self.generation = 0

    # ── Configuration ────────────────────────────────────────────────────────

    def _rebuild(self, text: str, width: int):
        self.grid = build_grid(text, width)
        self.generation += 1
        self.text = text
        self.width = width
        self.display_grid = self.grid
        if len(self.sequence):
            logger.info(f"Grid rebuilt ({self.grid.rows}x{self.grid.cols}), clearing {len(self.sequence)} folds")
        self.sequence.clear()
        self.ciphertext = ""
        self.current_fold = -1

    def set_text(self, text: str):
        self._rebuild(text, self.width)

    def set_width(self, width: int):
        """Raises InvalidWidthError and keeps the current width when out of range."""
        width = validate_width(width)
        self._rebuild(self.text, width)

    def reset(self):
        self._rebuild(self.default_text, self.default_width)
        self.trace = []

    # ── Fold editing ─────────────────────────────────────────────────────────

    def add_fold(self, axis: Axis) -> FoldDescriptor:
        return self.sequence.add(axis, self.grid)

    def remove_fold(self, index: int) -> FoldDescriptor:
        fold = self.sequence.remove(index)
        self.current_fold = -1
        return fold

    # ── Running ──────────────────────────────────────────────────────────────

    def run(self) -> str:
        final, trace = run_sequence(self.grid, self.sequence.folds)
        self.display_grid = final
        self.trace = trace
        self.ciphertext = extract_cipher(final)
        return self.ciphertext

    def steps(self) -> Iterator[FoldStep]:
        """
        Stepwise run; the session follows along as steps are pulled.

        A rebuild while the run is pending ends it without touching the
        rebuilt session.
        """
        generation = self.generation
        self.trace = []
        self.display_grid = self.grid
        final = self.grid
        for step in FoldRun(self.grid, self.sequence.folds):
            if self.generation != generation:
                logger.info(f"Grid rebuilt during run, dropping remaining {step.total - step.index} step(s)")
                return
            self.current_fold = step.index
            self.display_grid = final = step.grid
            self.trace.extend(step.trace)
            yield step
        if self.generation == generation:
            self.ciphertext = extract_cipher(final)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "width": self.width,
            "grid": self.display_grid.to_dict(),
            "folds": [f.to_dict() for f in self.sequence],
            "ciphertext": self.ciphertext,
            "trace": list(self.trace),
            "current_fold": self.current_fold,
        }
