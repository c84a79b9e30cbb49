"""
styles.py — The six procedural icon styles.

Every renderer has the same shape:

    render_xxx(spec, size, mode, display_name) -> SVG fragment

A fragment is a <defs> block holding one gradient (id namespaced by seed and
mode) followed by the shape elements, all drawn on a size×size canvas centered
at (size/2, size/2). Renderers are pure: each builds its own SeededRandom from
spec.seed, independent of the one used to build the DesignSpec.

  0  geometric       circle / square / triangle, single or radial ring
  1  modular         grid of dots and diamonds
  2  organic         soft blob (+ offset secondary blob)
  3  gradient_waves  concentric stroked rings around a center disc
  4  typographic     background shape with a single letter
  5  abstract        overlapping pie wedges and translucent circles
"""

from __future__ import annotations

import math
from typing import Callable, List, Sequence, Tuple

from .design_spec import DesignSpec, resolve_dials
from .palette import gradient_id, gradient_stops
from .seeding import SeededRandom

StyleRenderer = Callable[[DesignSpec, int, str, str], str]

TAU = math.pi * 2
SIN_60 = 0.866


# ── Markup helpers ────────────────────────────────────────────────────────────

def fmt(value: float) -> str:
    """Compact number for markup: at most 3 decimals, no trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _rotate(degrees: float, cx: float, cy: float) -> str:
    if degrees == 0:
        return ""
    return f' transform="rotate({fmt(degrees)} {fmt(cx)} {fmt(cy)})"'


def _linear_gradient(gid: str, stops: List[str]) -> str:
    return (
        f'<linearGradient id="{gid}" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" stop-color="{stops[0]}"/>'
        f'<stop offset="100%" stop-color="{stops[1]}"/>'
        f"</linearGradient>"
    )


def _radial_gradient(gid: str, stops: List[str], fade: bool = False) -> str:
    if fade:
        body = (
            f'<stop offset="0%" stop-color="{stops[0]}"/>'
            f'<stop offset="70%" stop-color="{stops[1]}"/>'
            f'<stop offset="100%" stop-color="{stops[1]}" stop-opacity="0.3"/>'
        )
    else:
        body = (
            f'<stop offset="0%" stop-color="{stops[0]}"/>'
            f'<stop offset="100%" stop-color="{stops[1]}"/>'
        )
    return f'<radialGradient id="{gid}" cx="50%" cy="50%" r="50%">{body}</radialGradient>'


def _fragment(gradient: str, elements: Sequence[str]) -> str:
    return "\n".join([f"<defs>{gradient}</defs>", *elements])


def _size_jitter(rng: SeededRandom, size_variation: float, base: float, gain: float) -> float:
    """
    Random size multiplier centered on 1.0.

    The half-width of the range grows from ``base`` (size_variation = 0)
    to ``base + gain`` (size_variation = 1).
    """
    spread = base + gain * size_variation
    return 1.0 + (rng.next() * 2 - 1) * spread


def _shape(kind: int, x: float, y: float, r: float, fill: str, opacity: float,
           corner: float, transform: str = "") -> str:
    """kind: 0 = circle, 1 = rounded square, 2 = triangle; r is the half-extent."""
    if kind == 0:
        return (
            f'<circle cx="{fmt(x)}" cy="{fmt(y)}" r="{fmt(r)}" '
            f'fill="{fill}" opacity="{opacity}"{transform}/>'
        )
    if kind == 1:
        return (
            f'<rect x="{fmt(x - r)}" y="{fmt(y - r)}" width="{fmt(r * 2)}" height="{fmt(r * 2)}" '
            f'rx="{fmt(r * corner)}" fill="{fill}" opacity="{opacity}"{transform}/>'
        )
    points = " ".join([
        f"{fmt(x)},{fmt(y - r)}",
        f"{fmt(x - r * SIN_60)},{fmt(y + r * 0.5)}",
        f"{fmt(x + r * SIN_60)},{fmt(y + r * 0.5)}",
    ])
    return f'<polygon points="{points}" fill="{fill}" opacity="{opacity}"{transform}/>'


def _smooth_closed_path(points: List[Tuple[float, float]]) -> str:
    """Closed curve through the midpoints of a polygon, using vertices as controls."""
    n = len(points)
    mids = [
        ((points[i][0] + points[(i + 1) % n][0]) / 2, (points[i][1] + points[(i + 1) % n][1]) / 2)
        for i in range(n)
    ]
    parts = [f"M {fmt(mids[-1][0])} {fmt(mids[-1][1])}"]
    for i in range(n):
        cx, cy = points[i]
        mx, my = mids[i]
        parts.append(f"Q {fmt(cx)} {fmt(cy)} {fmt(mx)} {fmt(my)}")
    parts.append("Z")
    return " ".join(parts)


# ── 0. Geometric ──────────────────────────────────────────────────────────────

def render_geometric(spec: DesignSpec, size: int, mode: str, display_name: str = "") -> str:
    rng = SeededRandom(spec.seed)
    dials = resolve_dials(spec)
    gid = gradient_id(spec, mode)
    fill = f"url(#{gid})"
    center = size / 2
    base = size * spec.scale_factor * 0.4

    shape_kind = rng.int(0, 2)
    adjusted_count = max(2, min(8, math.floor(spec.element_count * (0.7 + dials.complexity * 0.6))))

    shapes: List[str] = []
    if spec.symmetry == "radial":
        count = min(adjusted_count, 6)
        step = TAU / count
        spread = 0.5 + dials.size_variation * 0.5
        ring = base * 0.6
        for i in range(count):
            angle = step * i + dials.rotation
            x = center + math.cos(angle) * ring
            y = center + math.sin(angle) * ring
            shape_size = base * 0.3 * (0.7 + (i % 3) * 0.1 * spread)
            shapes.append(_shape(
                shape_kind, x, y, shape_size, fill, 0.9, 0.3,
                _rotate(dials.rotation_deg, x, y),
            ))
        center_size = base * 0.4 * (1 + dials.size_variation * 0.3)
        shapes.append(_shape(0, center, center, center_size, fill, 0.95, 0))
    else:
        main_size = base * (1 + dials.size_variation * 0.2)
        shapes.append(_shape(
            shape_kind, center, center, main_size, fill, 0.95, 0.2,
            _rotate(dials.rotation_deg, center, center),
        ))

    return _fragment(_linear_gradient(gid, gradient_stops(spec, mode)), shapes)


# ── 1. Modular ────────────────────────────────────────────────────────────────

MODULAR_DIAGONAL = 0
MODULAR_CHECKERBOARD = 1
MODULAR_RADIAL = 2


def modular_cell_included(pattern: int, i: int, j: int, grid: int, density: float,
                          rng: SeededRandom) -> bool:
    """Inclusion rule for one grid cell. Draws from ``rng`` only when the structural rule holds."""
    threshold = 0.3 + density * 0.5
    if pattern == MODULAR_DIAGONAL:
        return (i - j) % 3 == 0 and rng.next() < threshold
    if pattern == MODULAR_CHECKERBOARD:
        return (i + j) % 2 == 0 and rng.next() < threshold
    dist = math.hypot(i - grid / 2, j - grid / 2)
    return dist < grid * (0.4 + density * 0.4)


def render_modular(spec: DesignSpec, size: int, mode: str, display_name: str = "") -> str:
    rng = SeededRandom(spec.seed)
    dials = resolve_dials(spec)
    gid = gradient_id(spec, mode)
    fill = f"url(#{gid})"

    grid = 3 + math.floor(dials.complexity * 4)    # 3–7 cells per side
    cell = size / grid
    base_dot = cell * (0.2 + dials.pattern_density * 0.3)
    pattern = rng.int(0, 2)

    shapes: List[str] = []
    for i in range(grid):
        for j in range(grid):
            if not modular_cell_included(pattern, i, j, grid, dials.pattern_density, rng):
                continue
            x = i * cell + cell / 2
            y = j * cell + cell / 2
            dot = base_dot * _size_jitter(rng, dials.size_variation, 0.1, 0.4)
            kind = rng.int(0, 1)
            tilt = math.degrees(dials.rotation + (rng.next() * 0.3 - 0.15))
            if kind == 0:
                shapes.append(_shape(0, x, y, dot / 2, fill, 0.9, 0, _rotate(tilt, x, y)))
            else:
                shapes.append(_shape(1, x, y, dot / 2, fill, 0.9, 0.4, _rotate(45 + tilt, x, y)))

    return _fragment(_linear_gradient(gid, gradient_stops(spec, mode)), shapes)


# ── 2. Organic ────────────────────────────────────────────────────────────────

def _blob_points(rng: SeededRandom, cx: float, cy: float, radius: float, count: int,
                 size_variation: float, base: float, gain: float) -> List[Tuple[float, float]]:
    points = []
    for i in range(count):
        angle = i / count * TAU
        r = radius * _size_jitter(rng, size_variation, base, gain)
        points.append((cx + math.cos(angle) * r, cy + math.sin(angle) * r))
    return points


def render_organic(spec: DesignSpec, size: int, mode: str, display_name: str = "") -> str:
    rng = SeededRandom(spec.seed)
    dials = resolve_dials(spec)
    gid = gradient_id(spec, mode)
    fill = f"url(#{gid})"
    center = size / 2

    base_radius = size * spec.scale_factor * (0.3 + dials.complexity * 0.1)
    vertices = 6 + math.floor(dials.complexity * 6)     # 6–12

    main = _blob_points(rng, center, center, base_radius, vertices, dials.size_variation, 0.05, 0.25)
    paths = [f'<path d="{_smooth_closed_path(main)}" fill="{fill}" opacity="0.95"/>']

    if dials.complexity > 0.3:
        secondary_radius = base_radius * (0.5 + dials.size_variation * 0.2)
        offset_x = rng.range(-base_radius * 0.3, base_radius * 0.3)
        offset_y = rng.range(-base_radius * 0.3, base_radius * 0.3)
        second = _blob_points(
            rng, center + offset_x, center + offset_y, secondary_radius, vertices,
            dials.size_variation, 0.05, 0.15,
        )
        paths.append(f'<path d="{_smooth_closed_path(second)}" fill="{fill}" opacity="0.7"/>')

    group = [f"<g{_rotate(dials.rotation_deg, center, center)}>", *paths, "</g>"]
    return _fragment(_radial_gradient(gid, gradient_stops(spec, mode)), group)


# ── 3. Gradient waves ─────────────────────────────────────────────────────────

def render_gradient_waves(spec: DesignSpec, size: int, mode: str, display_name: str = "") -> str:
    dials = resolve_dials(spec)
    gid = gradient_id(spec, mode)
    fill = f"url(#{gid})"
    center = size / 2

    rings = 2 + math.floor(dials.complexity * 4)          # 2–6
    spacing = size * (0.09 - dials.pattern_density * 0.05)
    core = size * (0.2 + dials.size_variation * 0.1) * (spec.scale_factor / 0.75)
    stroke = spacing * 0.5

    elements: List[str] = []
    for i in range(rings):
        growth = 1 + dials.size_variation * 0.3 * (i / rings)
        radius = core + (i + 1) * spacing * growth
        opacity = round(0.9 - i * 0.1, 2)
        elements.append(
            f'<circle cx="{fmt(center)}" cy="{fmt(center)}" r="{fmt(radius)}" fill="none" '
            f'stroke="{fill}" stroke-width="{fmt(stroke)}" opacity="{opacity}"/>'
        )
    elements.append(_shape(0, center, center, core, fill, 0.95, 0))

    group = [f"<g{_rotate(dials.rotation_deg, center, center)}>", *elements, "</g>"]
    return _fragment(_radial_gradient(gid, gradient_stops(spec, mode), fade=True), group)


# ── 4. Typographic ────────────────────────────────────────────────────────────

TEXT_COLOR = {"light": "hsl(0, 0%, 100%)", "dark": "hsl(0, 0%, 95%)"}
FONT_STACK = "system-ui, -apple-system, sans-serif"


def seed_letter(seed: int) -> str:
    return chr(seed % 26 + ord("A"))


def render_typographic(spec: DesignSpec, size: int, mode: str, display_name: str = "") -> str:
    rng = SeededRandom(spec.seed)
    dials = resolve_dials(spec)
    stops = gradient_stops(spec, mode)
    gid = gradient_id(spec, mode)
    fill = f"url(#{gid})"
    center = size / 2

    letter_size = size * spec.scale_factor * 0.5 * (0.85 + dials.size_variation * 0.3)
    bg_size = letter_size * (0.65 + dials.size_variation * 0.1)
    rotate = _rotate(dials.rotation_deg, center, center)

    bg_kind = rng.int(0, 2) if dials.complexity > 0.6 else rng.int(0, 1)
    if bg_kind == 0:
        background = _shape(0, center, center, bg_size, fill, 0.9, 0, rotate)
    elif bg_kind == 1:
        background = _shape(1, center, center, bg_size, fill, 0.9, letter_size * 0.2 / bg_size, rotate)
    else:
        sides = 6 + math.floor(dials.complexity * 2)
        points = []
        for i in range(sides):
            angle = i / sides * TAU - math.pi / 2 + dials.rotation
            points.append(f"{fmt(center + math.cos(angle) * bg_size)},{fmt(center + math.sin(angle) * bg_size)}")
        background = f'<polygon points="{" ".join(points)}" fill="{fill}" opacity="0.9"/>'

    font_size = letter_size * 0.8
    text = (
        f'<text x="{fmt(center)}" y="{fmt(center)}" font-family="{FONT_STACK}" '
        f'font-size="{fmt(font_size)}" font-weight="bold" fill="{TEXT_COLOR[mode]}" '
        f'text-anchor="middle" dominant-baseline="central"{rotate}>{seed_letter(spec.seed)}</text>'
    )
    return _fragment(_linear_gradient(gid, stops), [background, text])


# ── 5. Abstract ───────────────────────────────────────────────────────────────

def render_abstract(spec: DesignSpec, size: int, mode: str, display_name: str = "") -> str:
    rng = SeededRandom(spec.seed)
    dials = resolve_dials(spec)
    gid = gradient_id(spec, mode)
    fill = f"url(#{gid})"
    center = size / 2

    base_radius = size * spec.scale_factor * (0.35 + dials.size_variation * 0.1)
    wedges = 2 + math.floor(dials.complexity * 4)     # 2–6
    spacing = 0.08 + dials.pattern_density * 0.08
    sweep = math.pi * (1.3 + dials.pattern_density * 0.4)

    elements: List[str] = []
    for i in range(wedges):
        radius = base_radius * (0.6 + i * spacing + dials.size_variation * 0.1 * (i / wedges))
        start = i * TAU / wedges + dials.rotation + rng.range(-0.2, 0.2)
        end = start + sweep
        x1, y1 = center + math.cos(start) * radius, center + math.sin(start) * radius
        x2, y2 = center + math.cos(end) * radius, center + math.sin(end) * radius
        elements.append(
            f'<path d="M {fmt(center)} {fmt(center)} L {fmt(x1)} {fmt(y1)} '
            f'A {fmt(radius)} {fmt(radius)} 0 1 1 {fmt(x2)} {fmt(y2)} Z" '
            f'fill="{fill}" opacity="{round(0.8 - i * 0.1, 2)}"/>'
        )

    circles = 3 if dials.complexity > 0.5 else 2
    offset = base_radius * (0.25 + dials.size_variation * 0.15)
    circle_radius = base_radius * (0.4 + dials.size_variation * 0.2)
    for i in range(circles):
        angle = i * TAU / circles + dials.rotation
        x = center + math.cos(angle) * offset
        y = center + math.sin(angle) * offset
        elements.append(_shape(0, x, y, circle_radius, fill, round(0.6 - i * 0.1, 2), 0))

    return _fragment(_linear_gradient(gid, gradient_stops(spec, mode)), elements)


# ── Registry ──────────────────────────────────────────────────────────────────

STYLE_RENDERERS: Tuple[StyleRenderer, ...] = (
    render_geometric,
    render_modular,
    render_organic,
    render_gradient_waves,
    render_typographic,
    render_abstract,
)

STYLE_NAMES: Tuple[str, ...] = (
    "geometric",
    "modular",
    "organic",
    "gradient_waves",
    "typographic",
    "abstract",
)


def select_renderer(spec: DesignSpec, renderers: Sequence[StyleRenderer] = STYLE_RENDERERS) -> StyleRenderer:
    return renderers[spec.style_index % len(renderers)]


def render_design_style(
    spec: DesignSpec,
    size: int,
    mode: str,
    display_name: str = "",
    renderers: Sequence[StyleRenderer] = STYLE_RENDERERS,
) -> str:
    """Dispatch to the style selected by ``spec.style_index`` and return its fragment."""
    return select_renderer(spec, renderers)(spec, size, mode, display_name)
