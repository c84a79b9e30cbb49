"""
Visualizer — lays out a preview sheet comparing icons for several app names.

Layout (one row per distinct seed, four columns):

  ┌──────────┬──────────┬──────────┬──────────┐
  │ logo     │ logo     │ name     │ name     │  ← column header
  │ light    │ dark     │ light    │ dark     │
  ├──────────┼──────────┼──────────┼──────────┤
  │  icon    │  icon    │  icon    │  icon    │
  │ Aura · gradient_waves                     │  ← row label
  └──────────┴──────────┴──────────┴──────────┘

Each cell is a complete icon document nested as an <svg> element, so the
sheet doubles as a check that ids from many icons never collide.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Tuple, Union

from .compositor import compose_icon, xml_text
from .design_spec import DesignSpec, Overrides, build_design_spec
from .styles import FONT_STACK, STYLE_NAMES, fmt

logger = logging.getLogger(__name__)

COLUMNS: List[Tuple[str, str]] = [
    ("logo", "light"),
    ("logo", "dark"),
    ("name", "light"),
    ("name", "dark"),
]

SHEET_BG     = "hsl(220, 14%, 96%)"
LABEL_COLOR  = "hsl(220, 9%, 40%)"
HEADER_H     = 28
LABEL_H      = 22


def _distinct_specs(
    app_names: Iterable[str],
    overrides: Union[None, Dict[str, Any], Overrides],
) -> List[Tuple[str, DesignSpec]]:
    rows: List[Tuple[str, DesignSpec]] = []
    seen = set()
    for name in app_names:
        spec = build_design_spec(name, overrides)
        if spec.seed in seen:
            logger.debug(f"Skipping {name!r}: seed {spec.seed} already on the sheet")
            continue
        seen.add(spec.seed)
        rows.append((name, spec))
    return rows


def _place(icon_svg: str, x: float, y: float) -> str:
    """Position a standalone icon document inside the sheet."""
    return icon_svg.replace("<svg ", f'<svg x="{fmt(x)}" y="{fmt(y)}" ', 1)


def render_preview_sheet(
    app_names: Iterable[str],
    size: int = 128,
    overrides: Union[None, Dict[str, Any], Overrides] = None,
    mask: Union[str, float, int] = "squircle",
    gap: int = 16,
) -> str:
    """
    Render a comparison sheet for several app names.

    Args:
        app_names: Names to compare; names hashing to the same seed appear once.
        size:      Icon edge length in pixels.
        overrides: Dials applied to every row.
        mask:      Mask shape passed to compose_icon().
        gap:       Spacing between cells.

    Returns:
        One SVG document.
    """
    rows = _distinct_specs(app_names, overrides)
    row_h = size + LABEL_H + gap
    width = gap + len(COLUMNS) * (size + gap)
    height = gap + HEADER_H + len(rows) * row_h

    label_size = max(10, min(14, size // 9))
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        f'<rect width="{width}" height="{height}" fill="{SHEET_BG}"/>',
    ]

    for col, (variant, mode) in enumerate(COLUMNS):
        x = gap + col * (size + gap)
        parts.append(
            f'<text x="{fmt(x)}" y="{fmt(gap + HEADER_H / 2)}" font-family="{FONT_STACK}" '
            f'font-size="{label_size}" fill="{LABEL_COLOR}" dominant-baseline="central">'
            f"{variant} · {mode}</text>"
        )

    for row, (name, spec) in enumerate(rows):
        y = gap + HEADER_H + row * row_h
        for col, (variant, mode) in enumerate(COLUMNS):
            x = gap + col * (size + gap)
            parts.append(_place(compose_icon(name, variant, mode, size, spec, mask=mask), x, y))
        parts.append(
            f'<text x="{fmt(gap)}" y="{fmt(y + size + LABEL_H / 2)}" font-family="{FONT_STACK}" '
            f'font-size="{label_size}" fill="{LABEL_COLOR}" dominant-baseline="central">'
            f"{xml_text(name)} · {STYLE_NAMES[spec.style_index]}</text>"
        )

    parts.append("</svg>")
    return "\n".join(parts)
