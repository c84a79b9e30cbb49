"""build_design_spec: determinism, ranges, override dials."""

import math
import random
import string

import pytest
from pydantic import ValidationError

from iconsmith.design_spec import (
    DIAL_NAMES,
    Overrides,
    build_design_spec,
    resolve_dials,
)


def test_aura_fixture():
    spec = build_design_spec("Aura")
    assert spec.seed == 2090090766
    assert spec.primary_hue == pytest.approx(354.7256415802985)
    assert spec.secondary_hue == pytest.approx(71.9816276896745)
    assert spec.saturation == pytest.approx(58.42495930497535)
    assert spec.lightness == pytest.approx(49.94256750680506)
    assert spec.dark_lightness == pytest.approx(28.925468114903197)
    assert spec.style_index == 3
    assert spec.symmetry == "diagonal"
    assert spec.element_count == 4
    assert spec.scale_factor == pytest.approx(0.715213811933063)
    for name in DIAL_NAMES:
        assert getattr(spec, name) is None


def test_deterministic_across_calls():
    assert build_design_spec("Notes") == build_design_spec("Notes")


def test_case_and_whitespace_are_ignored():
    assert build_design_spec(" Aura ") == build_design_spec("AURA") == build_design_spec("aura")


def test_empty_name_uses_base_seed():
    assert build_design_spec("").seed == 5381


def _random_names(count):
    rand = random.Random(1234)
    alphabet = string.ascii_letters + string.digits + " -_.!é漢"
    for _ in range(count):
        yield "".join(rand.choice(alphabet) for _ in range(rand.randint(0, 24)))


def test_ranges_hold_for_many_names():
    for name in _random_names(10000):
        spec = build_design_spec(name)
        assert 0 <= spec.primary_hue < 360
        assert 0 <= spec.secondary_hue < 360
        assert 50 <= spec.saturation <= 85
        assert 45 <= spec.lightness <= 65
        assert 20 <= spec.dark_lightness <= 35
        assert 0 <= spec.style_index <= 5
        assert 2 <= spec.element_count <= 8
        assert 0.6 <= spec.scale_factor <= 0.9

        delta = (spec.secondary_hue - spec.primary_hue) % 360
        assert 60 - 1e-9 <= delta <= 120 + 1e-9


def test_every_style_is_reachable():
    styles = {build_design_spec(name).style_index for name in _random_names(500)}
    assert styles == set(range(6))


def test_overrides_do_not_change_base_draws():
    base = build_design_spec("Aura")
    tuned = build_design_spec("Aura", {"complexity": 90, "rotation": 45})
    assert tuned.complexity == 90
    assert tuned.rotation == 45
    assert tuned.model_dump(exclude=set(DIAL_NAMES)) == base.model_dump(exclude=set(DIAL_NAMES))


def test_empty_overrides_reset_dials():
    build_design_spec("Aura", {"complexity": 90})
    spec = build_design_spec("Aura", {})
    assert spec.complexity is None
    assert spec == build_design_spec("Aura")


def test_overrides_model_is_accepted():
    spec = build_design_spec("Aura", Overrides(vibrancy=10))
    assert spec.vibrancy == 10


@pytest.mark.parametrize(
    "field, raw, expected",
    [
        ("vibrancy", 150, 100.0),
        ("complexity", -5, 0.0),
        ("pattern_density", "40", 40.0),
        ("rotation", 370, 10.0),
        ("rotation", -90, 270.0),
        ("rotation", 400, 40.0),
        ("rotation", 360, 0.0),
        ("size_variation", float("nan"), None),
        ("size_variation", float("inf"), None),
        ("complexity", "lots", None),
        ("vibrancy", True, None),
    ],
)
def test_override_normalization(field, raw, expected):
    assert getattr(Overrides(**{field: raw}), field) == expected


def test_unknown_override_key_is_rejected():
    with pytest.raises(ValidationError):
        build_design_spec("Aura", {"glow": 5})


def test_spec_is_frozen():
    spec = build_design_spec("Aura")
    with pytest.raises(ValidationError):
        spec.seed = 1


def test_spec_overrides_round_trip():
    spec = build_design_spec("Aura", {"complexity": 20})
    assert spec.overrides() == Overrides(complexity=20)


def test_resolve_dials_defaults():
    dials = resolve_dials(build_design_spec("Aura"))
    assert dials.vibrancy == 0.5
    assert dials.complexity == 0.5
    assert dials.size_variation == 0.5
    assert dials.pattern_density == 0.5
    assert dials.rotation == 0.0
    assert dials.rotation_deg == 0.0


def test_resolve_dials_normalizes():
    dials = resolve_dials(build_design_spec("Aura", {"complexity": 90, "rotation": 180}))
    assert dials.complexity == pytest.approx(0.9)
    assert dials.rotation == pytest.approx(math.pi)
    assert dials.rotation_deg == 180
