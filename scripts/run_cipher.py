"""
Origami Cipher — command-line runner.

Lays a message into a grid, replays a fold sequence and prints the trace and
the resulting string. Optionally writes one before→after SVG per fold.

Usage:
  python scripts/run_cipher.py --text "Hello World"                       # No folds
  python scripts/run_cipher.py --width 4 --fold horizontal --fold vertical
  python scripts/run_cipher.py --step                                      # Pace each fold
  python scripts/run_cipher.py --svg-dir data/fold                         # Save step SVGs
"""

import argparse
import logging
import sys
import time
from pathlib import Path

import yaml

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from integrations.fold_engine import InvalidWidthError, build_grid, extract_cipher
from integrations.fold_sequence import FoldRun, FoldSequence, run_sequence
from integrations.grid_renderer import build_step_svgs

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def load_config(config_path: Path | None = None) -> dict:
    """Load cipher_config.yaml or return defaults."""
    default_path = PROJECT_ROOT / "config" / "cipher_config.yaml"
    path = config_path or default_path

    defaults = {
        "message": {"text": "HELLOWORLD", "width": 5},
        "folds": [],
        "run": {"step_delay": 0.6},
        "paths": {"svg_dir": None},
    }

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        # Merge loaded into defaults
        for key in defaults:
            if key in loaded:
                if isinstance(defaults[key], dict) and isinstance(loaded[key], dict):
                    defaults[key].update(loaded[key])
                else:
                    defaults[key] = loaded[key]
        return defaults
    else:
        logger.warning(f"Config not found at {path}, using defaults")
        return defaults


def write_svgs(svgs: list[str], svg_dir: Path) -> list[Path]:
    svg_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for i, svg in enumerate(svgs):
        path = svg_dir / f"fold_step_{i + 1}.svg"
        with open(path, "w", encoding="utf-8") as f:
            f.write(svg)
        paths.append(path)
    logger.info(f"Saved {len(paths)} SVG diagrams to {svg_dir}")
    return paths


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fold a message through the origami cipher")
    parser.add_argument("--text", type=str, help="Message to fold")
    parser.add_argument("--width", type=int, help="Grid width (3-10)")
    parser.add_argument("--fold", action="append", choices=["horizontal", "vertical"],
                        help="Add a fold at the grid's center (repeatable, applied in order)")
    parser.add_argument("--config", type=str, help="Path to config YAML file")
    parser.add_argument("--svg-dir", type=str, help="Write one before/after SVG per fold here")
    parser.add_argument("--step", action="store_true", help="Pace the folds with the configured delay")
    args = parser.parse_args(argv)

    config = load_config(Path(args.config) if args.config else None)
    text = args.text if args.text is not None else config["message"]["text"]
    width = args.width if args.width is not None else config["message"]["width"]
    axes = args.fold if args.fold else config["folds"]

    try:
        grid = build_grid(text, width)
    except InvalidWidthError as e:
        logger.error(str(e))
        return 2

    sequence = FoldSequence()
    for axis in axes:
        try:
            sequence.add(axis, grid)
        except ValueError as e:
            logger.error(str(e))
            return 2
    logger.info(f"Grid {grid.rows}x{grid.cols}, {len(sequence)} fold(s)")

    if args.step:
        delay = float(config["run"].get("step_delay", 0.6))
        final = grid
        for step in FoldRun(grid, sequence.folds):
            for line in step.trace:
                print(line)
            final = step.grid
            if not step.is_last:
                time.sleep(delay)
    else:
        final, trace = run_sequence(grid, sequence.folds)
        for line in trace:
            print(line)

    svg_dir = args.svg_dir or config["paths"].get("svg_dir")
    if svg_dir and len(sequence):
        svg_path = Path(svg_dir)
        if not svg_path.is_absolute():
            svg_path = PROJECT_ROOT / svg_path
        write_svgs(build_step_svgs(grid, sequence.folds), svg_path)

    print(extract_cipher(final))
    return 0


if __name__ == "__main__":
    sys.exit(main())
