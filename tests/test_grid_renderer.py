"""Tests for integrations.grid_renderer."""

from integrations.fold_engine import FoldDescriptor, apply_fold, build_grid
from integrations.grid_renderer import build_step_svgs, grid_to_svg, render_step_svg

H_DOWN = FoldDescriptor("horizontal", 1, "down")


def test_grid_svg_draws_every_letter():
    svg = grid_to_svg(build_grid("HELLOWORLD", 5))
    assert svg.startswith("<svg") and svg.endswith("</svg>")
    assert svg.count("<text") == 10
    assert svg.count('data-depth="0"') == 10


def test_retired_cells_not_drawn():
    folded = apply_fold(build_grid("ABCDEFGHI", 3), H_DOWN)
    svg = grid_to_svg(folded)
    assert ">A<" not in svg
    assert ">J<" in svg
    assert svg.count('data-depth="1"') == 3
    assert svg.count("<text") == 6


def test_padding_cells_drawn_without_letter():
    svg = grid_to_svg(build_grid("ABCD", 3))
    assert svg.count("data-depth") == 6
    assert svg.count("<text") == 4


def test_empty_grid_renders():
    svg = grid_to_svg(build_grid("", 4))
    assert "<text" not in svg


def test_step_svg_marks_fold_line():
    grid = build_grid("ABCDEFGHI", 3)
    svg = render_step_svg(grid, apply_fold(grid, H_DOWN), H_DOWN, action_label="fold it")
    assert 'stroke-dasharray="6,4"' in svg
    assert "fold it" in svg


def test_one_svg_per_fold():
    grid = build_grid("HELLOWORLD", 5)
    folds = [FoldDescriptor("vertical", 2, "right"), FoldDescriptor("vertical", 2, "right")]
    svgs = build_step_svgs(grid, folds)
    assert len(svgs) == 2
    assert "1. vertical (right) @ 2" in svgs[0]
