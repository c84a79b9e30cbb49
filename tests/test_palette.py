"""HSL formatting and gradient stops."""

import pytest

from iconsmith.design_spec import build_design_spec
from iconsmith.palette import (
    effective_saturation,
    gradient_id,
    gradient_stops,
    hsl_color,
    hsl_to_hex,
)


def test_hsl_color_rounds_half_up():
    assert hsl_color(40.5, 50.5, 60.4) == "hsl(41, 51%, 60%)"
    assert hsl_color(0, 0, 100) == "hsl(0, 0%, 100%)"


def test_aura_light_stops():
    spec = build_design_spec("Aura")
    assert gradient_stops(spec, "light") == ["hsl(355, 58%, 50%)", "hsl(72, 58%, 35%)"]


def test_aura_dark_stops():
    spec = build_design_spec("Aura")
    assert gradient_stops(spec, "dark") == ["hsl(355, 58%, 29%)", "hsl(72, 58%, 20%)"]


def test_neutral_vibrancy_keeps_saturation():
    spec = build_design_spec("Aura", {"vibrancy": 50})
    assert effective_saturation(spec) == pytest.approx(spec.saturation)
    assert gradient_stops(spec, "light") == gradient_stops(build_design_spec("Aura"), "light")


def test_vibrancy_scales_saturation():
    vivid = build_design_spec("Aura", {"vibrancy": 100})
    muted = build_design_spec("Aura", {"vibrancy": 0})
    assert gradient_stops(vivid, "light")[0] == "hsl(355, 88%, 50%)"
    assert gradient_stops(muted, "light")[0] == "hsl(355, 29%, 50%)"


def test_gradient_id_is_namespaced():
    spec = build_design_spec("Aura")
    assert gradient_id(spec, "dark") == "grad-2090090766-dark"
    assert gradient_id(spec, "light", "bg") == "bg-2090090766-light"


def test_invalid_mode_raises():
    with pytest.raises(ValueError):
        gradient_stops(build_design_spec("Aura"), "dim")


@pytest.mark.parametrize(
    "hsl, expected",
    [
        ((0, 100, 50), "#FF0000"),
        ((120, 100, 50), "#00FF00"),
        ((0, 0, 100), "#FFFFFF"),
        ((0, 0, 0), "#000000"),
    ],
)
def test_hsl_to_hex(hsl, expected):
    assert hsl_to_hex(*hsl) == expected
