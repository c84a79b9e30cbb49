"""
palette.py — HSL color strings and the two-stop icon gradient.

Stop 0 is the primary hue at the mode's lightness; stop 1 is the secondary
hue at 70% of that lightness, so every style and mode gets the same
light-to-dark depth cue.

Usage:
    from iconsmith.palette import gradient_stops, gradient_id

    stops = gradient_stops(spec, "dark")   # ["hsl(355, 58%, 29%)", "hsl(72, 58%, 20%)"]
    gid   = gradient_id(spec, "dark")      # "grad-2090090766-dark"
"""

from __future__ import annotations

import colorsys
import math
from typing import List, Literal

from .design_spec import DesignSpec, resolve_dials

Mode = Literal["light", "dark"]
MODES = ("light", "dark")

SECOND_STOP_DARKEN = 0.7


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def hsl_color(hue: float, saturation: float, lightness: float) -> str:
    """Format an HSL triple (H: 0–360, S/L: 0–100) with integer components."""
    return (
        f"hsl({_round_half_up(hue)}, "
        f"{_round_half_up(saturation)}%, "
        f"{_round_half_up(lightness)}%)"
    )


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """HSL (H: 0–360, S/L: 0–100) → #RRGGBB"""
    r, g, b = colorsys.hls_to_rgb(
        (hue % 360) / 360,
        max(0.0, min(1.0, lightness / 100)),
        max(0.0, min(1.0, saturation / 100)),
    )
    return "#{:02X}{:02X}{:02X}".format(
        _round_half_up(r * 255), _round_half_up(g * 255), _round_half_up(b * 255)
    )


def check_mode(mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
    return mode


def mode_lightness(spec: DesignSpec, mode: str) -> float:
    return spec.lightness if check_mode(mode) == "light" else spec.dark_lightness


def effective_saturation(spec: DesignSpec) -> float:
    """Saturation scaled by vibrancy; neutral vibrancy (50) leaves it unchanged."""
    factor = 0.5 + resolve_dials(spec).vibrancy
    return max(0.0, min(100.0, spec.saturation * factor))


def gradient_stops(spec: DesignSpec, mode: str) -> List[str]:
    lightness = mode_lightness(spec, mode)
    saturation = effective_saturation(spec)
    return [
        hsl_color(spec.primary_hue, saturation, lightness),
        hsl_color(spec.secondary_hue, saturation, lightness * SECOND_STOP_DARKEN),
    ]


def gradient_id(spec: DesignSpec, mode: str, prefix: str = "grad") -> str:
    """Document-unique gradient id, namespaced by seed and mode."""
    return f"{prefix}-{spec.seed}-{mode}"
