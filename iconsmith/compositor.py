"""
Compositor — assembles one complete, self-contained icon SVG.

Layer order (bottom → top), all clipped to the rounded mask:

  ┌──────────────────────────────┐
  │  background   spec gradient  │  rounded rect, 135° linear gradient
  │  glass        white → clear  │  vertical sheen, darker at the bottom
  │  highlight    soft ellipse   │  blurred glow near the top edge
  │  foreground   logo | name    │  dispatched style, or name / initials
  └──────────────────────────────┘

Mask shapes:  squircle = 22.37%  |  circle = 50%  |  square = 0  |  "NN%"  |  pixels

Every id in the document carries the seed, mode and variant, so any number
of icons can share one SVG document.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence, Union
from xml.sax.saxutils import escape

from .design_spec import DesignSpec
from .palette import check_mode, gradient_id, gradient_stops, hsl_color
from .styles import FONT_STACK, STYLE_RENDERERS, StyleRenderer, fmt, select_renderer

logger = logging.getLogger(__name__)

VARIANTS = ("logo", "name")

# ── Mask geometry ─────────────────────────────────────────────────────────────

SQUIRCLE_RATIO = 0.2237
MASK_RATIOS = {
    "squircle": SQUIRCLE_RATIO,
    "circle":   0.5,
    "square":   0.0,
}

_PERCENT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%\s*$")

# Code points XML 1.0 cannot carry (C0 controls, lone surrogates, U+FFFE/U+FFFF)
_XML_ILLEGAL_RE = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

# ── Layer constants ───────────────────────────────────────────────────────────

NAME_MAX_CHARS  = 6        # longer names collapse to initials
INITIALS_LEN    = 2
NAME_FONT_RATIO = 0.22

GLASS_STOPS = {
    "light": (("0%", "hsl(0, 0%, 100%)", 0.25), ("50%", "hsl(0, 0%, 100%)", 0.0), ("100%", "hsl(0, 0%, 0%)", 0.05)),
    "dark":  (("0%", "hsl(0, 0%, 100%)", 0.06), ("50%", "hsl(0, 0%, 100%)", 0.0), ("100%", "hsl(0, 0%, 0%)", 0.15)),
}
GLOW_COLOR = {
    "light": ("hsl(0, 0%, 100%)", 0.2),
    "dark":  ("hsl(220, 70%, 70%)", 0.08),
}

# Highlight box: top 8%, inset 15% left/right, 35% tall
GLOW_CY = 0.08 + 0.35 / 2
GLOW_RX = (1 - 0.15 * 2) / 2
GLOW_RY = 0.35 / 2
GLOW_BLUR = 0.04


def corner_radius(size: int, mask: Union[str, float, int] = "squircle") -> float:
    """Map a mask shape to a corner radius in pixels, clamped to [0, size/2]."""
    if isinstance(mask, (int, float)) and not isinstance(mask, bool):
        radius = float(mask)
    elif isinstance(mask, str) and mask in MASK_RATIOS:
        radius = size * MASK_RATIOS[mask]
    elif isinstance(mask, str) and _PERCENT_RE.match(mask):
        radius = size * float(_PERCENT_RE.match(mask).group(1)) / 100
    else:
        raise ValueError(
            f"mask must be one of {sorted(MASK_RATIOS)}, a percentage like '18%', or pixels; got {mask!r}"
        )
    return max(0.0, min(size / 2, radius))


# ── Name variant text ─────────────────────────────────────────────────────────

def initials(app_name: str) -> str:
    """First character of each whitespace-separated word, upper-cased, max 2."""
    return "".join(word[0] for word in app_name.split()).upper()[:INITIALS_LEN]


def xml_text(text: str) -> str:
    """Escape text for an SVG text node, dropping code points XML cannot hold."""
    return escape(_XML_ILLEGAL_RE.sub("", text))


def display_text(app_name: str) -> str:
    return app_name if len(app_name) <= NAME_MAX_CHARS else initials(app_name)


def _name_gradient(spec: DesignSpec, mode: str, gid: str) -> str:
    if mode == "light":
        start = hsl_color(0, 0, 100)
        end = hsl_color(spec.primary_hue, 30, 92)
    else:
        start = hsl_color(spec.primary_hue, 60, 85)
        end = hsl_color(spec.secondary_hue, 50, 75)
    return (
        f'<linearGradient id="{gid}" x1="0%" y1="0%" x2="0%" y2="100%">'
        f'<stop offset="0%" stop-color="{start}"/>'
        f'<stop offset="100%" stop-color="{end}"/>'
        f"</linearGradient>"
    )


def _name_layer(app_name: str, spec: DesignSpec, mode: str, size: int, suffix: str) -> str:
    gid = gradient_id(spec, mode, "name") + suffix
    center = size / 2
    return "\n".join([
        f"<defs>{_name_gradient(spec, mode, gid)}</defs>",
        f'<text x="{fmt(center)}" y="{fmt(center)}" font-family="{FONT_STACK}" '
        f'font-size="{fmt(size * NAME_FONT_RATIO)}" font-weight="bold" letter-spacing="-0.02em" '
        f'fill="url(#{gid})" text-anchor="middle" dominant-baseline="central">'
        f"{xml_text(display_text(app_name))}</text>",
    ])


# ── Shell layers ──────────────────────────────────────────────────────────────

def _shell_defs(spec: DesignSpec, mode: str, size: int, radius: float, suffix: str) -> str:
    bg_id = gradient_id(spec, mode, "bg") + suffix
    glass_id = gradient_id(spec, mode, "glass") + suffix
    glow_id = gradient_id(spec, mode, "glow") + suffix
    blur_id = gradient_id(spec, mode, "blur") + suffix
    clip_id = gradient_id(spec, mode, "clip") + suffix

    bg_stops = gradient_stops(spec, mode)
    glass = "".join(
        f'<stop offset="{offset}" stop-color="{color}" stop-opacity="{opacity}"/>'
        for offset, color, opacity in GLASS_STOPS[mode]
    )
    glow_color, glow_opacity = GLOW_COLOR[mode]

    return "".join([
        "<defs>",
        f'<linearGradient id="{bg_id}" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" stop-color="{bg_stops[0]}"/>'
        f'<stop offset="100%" stop-color="{bg_stops[1]}"/>'
        f"</linearGradient>",
        f'<linearGradient id="{glass_id}" x1="0%" y1="0%" x2="0%" y2="100%">{glass}</linearGradient>',
        f'<radialGradient id="{glow_id}" cx="50%" cy="50%" r="50%">'
        f'<stop offset="0%" stop-color="{glow_color}" stop-opacity="{glow_opacity}"/>'
        f'<stop offset="100%" stop-color="{glow_color}" stop-opacity="0"/>'
        f"</radialGradient>",
        f'<filter id="{blur_id}" x="-20%" y="-20%" width="140%" height="140%">'
        f'<feGaussianBlur stdDeviation="{fmt(size * GLOW_BLUR)}"/>'
        f"</filter>",
        f'<clipPath id="{clip_id}">'
        f'<rect width="{size}" height="{size}" rx="{fmt(radius)}" ry="{fmt(radius)}"/>'
        f"</clipPath>",
        "</defs>",
    ])


def compose_icon(
    app_name: str,
    variant: str,
    mode: str,
    size: int,
    spec: DesignSpec,
    mask: Union[str, float, int] = "squircle",
    renderers: Sequence[StyleRenderer] = STYLE_RENDERERS,
) -> str:
    """
    Render the full icon document.

    Args:
        app_name:  Display name (used as-is for the name variant).
        variant:   "logo" → dispatched style; "name" → name or initials.
        mode:      "light" | "dark"
        size:      Output width/height in pixels.
        spec:      DesignSpec from build_design_spec().
        mask:      Mask shape name, "NN%" literal, or a pixel radius.
        renderers: Ordered style registry, indexed by style_index mod len.

    Returns:
        A standalone <svg> string of exactly size × size.
    """
    if variant not in VARIANTS:
        raise ValueError(f"variant must be one of {VARIANTS}, got {variant!r}")
    check_mode(mode)
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"size must be a positive integer, got {size!r}")

    radius = corner_radius(size, mask)
    suffix = f"-{variant}"
    clip_id = gradient_id(spec, mode, "clip") + suffix

    if variant == "logo":
        renderer = select_renderer(spec, renderers)
        logger.debug(
            "dispatch seed=%d style_index=%d → %s",
            spec.seed, spec.style_index, getattr(renderer, "__name__", renderer),
        )
        foreground = renderer(spec, size, mode, app_name)
    else:
        foreground = _name_layer(app_name, spec, mode, size, suffix)

    return "\n".join([
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}">',
        _shell_defs(spec, mode, size, radius, suffix),
        f'<g clip-path="url(#{clip_id})">',
        f'<rect width="{size}" height="{size}" rx="{fmt(radius)}" ry="{fmt(radius)}" '
        f'fill="url(#{gradient_id(spec, mode, "bg")}{suffix})"/>',
        f'<rect width="{size}" height="{size}" fill="url(#{gradient_id(spec, mode, "glass")}{suffix})"/>',
        f'<ellipse cx="{fmt(size / 2)}" cy="{fmt(size * GLOW_CY)}" rx="{fmt(size * GLOW_RX)}" '
        f'ry="{fmt(size * GLOW_RY)}" fill="url(#{gradient_id(spec, mode, "glow")}{suffix})" '
        f'filter="url(#{gradient_id(spec, mode, "blur")}{suffix})"/>',
        foreground,
        "</g>",
        "</svg>",
    ])
