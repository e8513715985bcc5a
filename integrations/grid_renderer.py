"""
Grid Renderer — SVG snapshots of cipher grids.

Visible cells are drawn as tiles shrunk by their fold depth so merged layers
read as stacked paper; retired cells are not drawn.
"""
from integrations.fold_engine import FoldDescriptor, Grid
from integrations.fold_sequence import FoldRun

CELL = 40
GAP = 4
DEPTH_SHRINK = 0.08

FOLD_COLOR = {"horizontal": "#3B82F6", "vertical": "#E74C3C"}


def _depth_scale(depth: int) -> float:
    return max(0.2, 1.0 - depth * DEPTH_SHRINK)


def _grid_size(grid: Grid) -> tuple[int, int]:
    return grid.cols * (CELL + GAP) - GAP, max(grid.rows, 1) * (CELL + GAP) - GAP


def _grid_body(grid: Grid, ox: float, oy: float) -> list[str]:
    """SVG elements for every visible cell, offset to (ox, oy)."""
    lines = []
    for r, row in enumerate(grid.cells):
        for c, cell in enumerate(row):
            if not cell.visible:
                continue
            size = CELL * _depth_scale(cell.depth)
            x = ox + c * (CELL + GAP) + (CELL - size) / 2
            y = oy + r * (CELL + GAP) + (CELL - size) / 2
            fill = "#FFFEF5" if cell.depth == 0 else "#F5F0E8"
            lines.append(
                f'  <rect x="{x:.1f}" y="{y:.1f}" width="{size:.1f}" height="{size:.1f}" '
                f'fill="{fill}" stroke="#8B7355" stroke-width="1.5" data-depth="{cell.depth}"/>'
            )
            if cell.char:
                cx = ox + c * (CELL + GAP) + CELL / 2
                cy = oy + r * (CELL + GAP) + CELL / 2 + 6
                lines.append(
                    f'  <text x="{cx:.1f}" y="{cy:.1f}" text-anchor="middle" font-size="16" '
                    f'font-family="monospace" fill="#333">{cell.char}</text>'
                )
    return lines


def _fold_line(grid: Grid, fold: FoldDescriptor, ox: float, oy: float) -> str:
    width, height = _grid_size(grid)
    color = FOLD_COLOR[fold.axis]
    if fold.axis == "horizontal":
        y = oy + fold.pivot * (CELL + GAP) + CELL / 2
        x1, y1, x2, y2 = ox - 6, y, ox + width + 6, y
    else:
        x = ox + fold.pivot * (CELL + GAP) + CELL / 2
        x1, y1, x2, y2 = x, oy - 6, x, oy + height + 6
    return (
        f'  <line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}" '
        f'stroke="{color}" stroke-width="2" stroke-dasharray="6,4"/>'
    )


def grid_to_svg(grid: Grid, pad: int = 20) -> str:
    """Render one grid snapshot."""
    gw, gh = _grid_size(grid)
    width, height = gw + 2 * pad, gh + 2 * pad
    lines = [f'<svg viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">']
    lines.append(f'  <rect x="0" y="0" width="{width}" height="{height}" rx="12" fill="#FFF9F0"/>')
    lines.extend(_grid_body(grid, pad, pad))
    lines.append('</svg>')
    return "\n".join(lines)


def render_step_svg(before: Grid, after: Grid, fold: FoldDescriptor, action_label: str = "", pad: int = 20) -> str:
    """
    Render a before→after pair for one fold.
    Left side: before grid with the fold line marked
    Center: transformation arrow
    Right side: after grid
    """
    gw, gh = _grid_size(before)
    arrow = 40
    width = 2 * gw + 4 * pad + arrow
    height = gh + 2 * pad + 40
    a_x, b_x = pad, 3 * pad + gw + arrow
    top = pad + 16

    lines = [f'<svg viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">']
    lines.append(f'  <rect x="0" y="0" width="{width}" height="{height}" rx="12" fill="#FFF9F0"/>')

    # ── A side (before) ──
    lines.append(f'  <text x="{a_x + gw / 2:.1f}" y="{pad}" text-anchor="middle" font-size="10" fill="#999" font-weight="600">A</text>')
    lines.extend(_grid_body(before, a_x, top))
    lines.append(_fold_line(before, fold, a_x, top))

    # ── Arrow between A and B ──
    mid_y = top + gh / 2
    ax1, ax2 = a_x + gw + pad, b_x - pad
    lines.append(f'  <path d="M {ax1:.1f} {mid_y:.1f} L {ax2 - 8:.1f} {mid_y:.1f}" fill="none" stroke="#666" stroke-width="2.5"/>')
    lines.append(f'  <polygon points="{ax2 - 10:.1f},{mid_y - 5:.1f} {ax2:.1f},{mid_y:.1f} {ax2 - 10:.1f},{mid_y + 5:.1f}" fill="#666"/>')

    # ── B side (after) ──
    lines.append(f'  <text x="{b_x + gw / 2:.1f}" y="{pad}" text-anchor="middle" font-size="10" fill="#8B7355" font-weight="700">B</text>')
    lines.extend(_grid_body(after, b_x, top))

    if action_label:
        lines.append(f'  <text x="{width // 2}" y="{height - 12}" text-anchor="middle" font-size="11" fill="#10B981" font-weight="600">{action_label}</text>')

    lines.append('</svg>')
    return "\n".join(lines)


def build_step_svgs(grid: Grid, folds: list[FoldDescriptor]) -> list[str]:
    """One before→after SVG per fold of the sequence."""
    svgs = []
    before = grid
    for step in FoldRun(grid, folds):
        label = f"{step.index + 1}. {step.fold.label} @ {step.fold.pivot}"
        svgs.append(render_step_svg(before, step.grid, step.fold, action_label=label))
        before = step.grid
    return svgs
