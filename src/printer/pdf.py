"""Lay Sudoku puzzles out on A4 landscape PDF pages."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from engine.grid import BOX, SIZE, Grid
from project_config import get_config

INCH_PER_CM = 0.3937007874
PAGE_WIDTH_CM = 29.7
PAGE_HEIGHT_CM = 21.0
FOOTER_OFFSET_CM = 1.0


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def pdf_defaults() -> Dict[str, Any]:
    """Layout settings from the ``[pdf]`` config section, with fallbacks."""
    pdf_cfg = _as_dict(get_config().get("pdf"))
    layout_cfg = _as_dict(pdf_cfg.get("layout"))
    return {
        "count": int(pdf_cfg.get("count", 4)),
        "out": str(pdf_cfg.get("out", "out/sudoku.pdf")),
        "rows": int(layout_cfg.get("rows", 2)),
        "cols": int(layout_cfg.get("cols", 2)),
        "margin_cm": float(pdf_cfg.get("margin_cm", 1.5)),
        "gap_cm": float(pdf_cfg.get("gap_cm", 1.0)),
        "font_scale": float(pdf_cfg.get("font_scale", 0.65)),
    }


def render_pdf(
    puzzles: Sequence[Grid],
    out_path: str | Path,
    *,
    rows: int = 2,
    cols: int = 2,
    margin_cm: float = 1.5,
    gap_cm: float = 1.0,
    font_scale: float = 0.65,
    footer: Optional[str] = None,
) -> int:
    """Draw ``puzzles`` ``rows`` × ``cols`` per page and return the page count."""

    if not puzzles:
        raise ValueError("at least one puzzle is required")
    if rows < 1 or cols < 1:
        raise ValueError("layout rows and cols must be positive")

    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.backends.backend_pdf import PdfPages

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    per_page = rows * cols
    pages = math.ceil(len(puzzles) / per_page)

    page_w_in = PAGE_WIDTH_CM * INCH_PER_CM
    page_h_in = PAGE_HEIGHT_CM * INCH_PER_CM
    margin_in = margin_cm * INCH_PER_CM
    gap_in = gap_cm * INCH_PER_CM

    avail_w = page_w_in - 2 * margin_in - gap_in * (cols - 1)
    avail_h = page_h_in - 2 * margin_in - gap_in * (rows - 1)
    grid_size = min(avail_w / cols, avail_h / rows)
    if grid_size <= 0:
        raise ValueError("margins and gaps leave no room for a grid")

    def draw_grid(ax, puzzle, left_in, bottom_in, size_in):
        ax.set_position([left_in / page_w_in, bottom_in / page_h_in, size_in / page_w_in, size_in / page_h_in])
        for idx in range(SIZE + 1):
            linewidth = 1.5 if idx % BOX else 3.0
            ax.axvline(idx / SIZE, color="k", linewidth=linewidth)
            ax.axhline(idx / SIZE, color="k", linewidth=linewidth)
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1)
        ax.axis("off")
        font_size = max(1, int(font_scale * size_in * 72 / SIZE))
        for r in range(SIZE):
            for c in range(SIZE):
                value = puzzle[r][c]
                if value:
                    x = (c + 0.5) / SIZE
                    y = 1 - (r + 0.5) / SIZE
                    ax.text(x, y, str(value), ha="center", va="center", fontsize=font_size)

    footer_y_pos_norm = (FOOTER_OFFSET_CM * INCH_PER_CM) / page_h_in

    with PdfPages(out_path) as pdf:
        for page_num in range(pages):
            fig = plt.figure(figsize=(page_w_in, page_h_in))
            page_puzzles = puzzles[page_num * per_page:(page_num + 1) * per_page]
            for idx, puzzle in enumerate(page_puzzles):
                row, col = divmod(idx, cols)
                left = margin_in + col * (grid_size + gap_in)
                bottom = margin_in + (rows - 1 - row) * (grid_size + gap_in)
                ax = fig.add_axes([0, 0, 1, 1], frameon=False)
                draw_grid(ax, puzzle, left, bottom, grid_size)

            if footer:
                fig.text(0.5, footer_y_pos_norm, footer, ha="center", va="bottom", fontsize=8)

            pdf.savefig(fig)
            plt.close(fig)

    return pages


__all__ = ["pdf_defaults", "render_pdf"]
