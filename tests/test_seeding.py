"""Hasher and seeded generator."""

import pytest

from iconsmith.seeding import SeededRandom, hash_string


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 5381),
        ("a", 177670),
        ("aura", 2090090766),
        ("icon studio", 389903866),
        ("super duper app", 280026549),
    ],
)
def test_hash_string_known_values(text, expected):
    assert hash_string(text) == expected


def test_hash_string_is_case_sensitive():
    assert hash_string("Aura") != hash_string("aura")


def test_hash_string_astral_characters_hash_as_surrogate_pairs():
    # U+1F600 is two UTF-16 code units: 0xD83D 0xDE00
    expected = ((5381 * 33 + 0xD83D) * 33 + 0xDE00) & 0xFFFFFFFF
    assert hash_string("\U0001F600") == expected


def test_hash_string_stays_in_31_bit_range():
    for text in ["x" * 500, "icon studio", "été", "🚀 launch"]:
        assert 0 <= hash_string(text) <= 2 ** 31


def test_first_draw_from_zero_seed():
    rng = SeededRandom(0)
    assert rng.next() == 1013904223 / 2 ** 32
    assert rng.state == 1013904223


def test_same_seed_same_sequence():
    a = SeededRandom(2090090766)
    b = SeededRandom(2090090766)
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


def test_next_is_in_unit_interval():
    rng = SeededRandom(123456789)
    for _ in range(5000):
        value = rng.next()
        assert 0.0 <= value < 1.0


def test_int_bounds_are_inclusive():
    rng = SeededRandom(42)
    seen = {rng.int(2, 8) for _ in range(2000)}
    assert seen == set(range(2, 9))


def test_range_respects_bounds():
    rng = SeededRandom(7)
    for _ in range(1000):
        assert 60 <= rng.range(60, 120) < 120


def test_pick_returns_member_and_covers_all():
    items = ["radial", "diagonal", "horizontal", "vertical", "none"]
    rng = SeededRandom(99)
    picks = {rng.pick(items) for _ in range(1000)}
    assert picks == set(items)
