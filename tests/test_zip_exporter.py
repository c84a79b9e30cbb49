"""Export size tables, filenames and ZIP bundling."""

import io
import zipfile

import pytest

from iconsmith import zip_exporter
from iconsmith.design_spec import build_design_spec
from iconsmith.compositor import compose_icon
from iconsmith.zip_exporter import (
    build_export_zip,
    generate_filename,
    render_variants,
    unique_sizes,
)


def test_generate_filename():
    assert generate_filename("Super Duper App", "logo", "light", 180) == "super-duper-app-logo-light-180px.png"
    assert generate_filename("A&B", "name", "dark", 48, ext="svg") == "a-b-name-dark-48px.svg"


def test_unique_sizes():
    assert unique_sizes("ios") == [1024, 180, 120, 87, 60, 40, 29]
    assert unique_sizes("android") == [512, 432, 48, 36, 24]


def test_unknown_platform():
    with pytest.raises(ValueError):
        unique_sizes("windows")


def test_unknown_format():
    with pytest.raises(ValueError):
        render_variants("Aura", "ios", fmt="gif")


@pytest.mark.parametrize("platform, expected", [("ios", 28), ("android", 20)])
def test_svg_zip_contents(tmp_path, platform, expected):
    zip_path = build_export_zip("Aura", platform, tmp_path, fmt="svg", max_workers=2)
    assert zip_path == tmp_path / f"aura_{platform}_icons.zip"

    with zipfile.ZipFile(zip_path) as zf:
        names = zf.namelist()
        assert len(names) == expected
        assert all(name.startswith(f"{platform}/") for name in names)
        assert f"{platform}/aura-logo-dark-{unique_sizes(platform)[-1]}px.svg" in names


def test_platform_masks(tmp_path):
    files = render_variants("Aura", "android", fmt="svg", max_workers=1)
    assert 'rx="24" ry="24"' in files["aura-logo-light-48px.svg"].decode("utf-8")

    files = render_variants("Aura", "ios", fmt="svg", max_workers=1)
    assert 'rx="0" ry="0"' in files["aura-logo-light-29px.svg"].decode("utf-8")


def test_overrides_reach_every_file():
    plain = render_variants("Aura", "ios", fmt="svg", max_workers=1)
    tuned = render_variants("Aura", "ios", overrides={"vibrancy": 100}, fmt="svg", max_workers=1)
    assert plain.keys() == tuned.keys()
    assert plain["aura-logo-light-60px.svg"] != tuned["aura-logo-light-60px.svg"]


def test_failed_items_are_skipped(monkeypatch, caplog):
    def flaky(app_name, variant, mode, size, spec, mask="squircle"):
        if size == 29:
            raise RuntimeError("boom")
        return compose_icon(app_name, variant, mode, size, spec, mask=mask)

    monkeypatch.setattr(zip_exporter, "compose_icon", flaky)
    files = render_variants("Aura", "ios", fmt="svg", max_workers=2)

    assert len(files) == 24
    assert not any(name.endswith("-29px.svg") for name in files)
    assert "boom" in caplog.text


def test_zip_skipped_when_nothing_renders(monkeypatch, tmp_path):
    def broken(*args, **kwargs):
        raise RuntimeError("no renderer")

    monkeypatch.setattr(zip_exporter, "compose_icon", broken)
    assert build_export_zip("Aura", "android", tmp_path, fmt="svg") is None
    assert not list(tmp_path.iterdir())


def test_unencodable_name_still_exports_everything(caplog):
    files = render_variants("Ab\ud800", "ios", fmt="svg", max_workers=2)
    assert len(files) == 28
    assert "Failed to generate" not in caplog.text
    for data in files.values():
        assert b"\xed\xa0\x80" not in data


def _require_cairosvg():
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as exc:
        pytest.skip(f"cairosvg unavailable: {exc}")


@pytest.mark.parametrize("flatten, mode", [(True, "RGB"), (False, "RGBA")])
def test_rasterize_svg(flatten, mode):
    _require_cairosvg()
    from PIL import Image

    svg = compose_icon("Aura", "logo", "light", 40, build_design_spec("Aura"))
    png = zip_exporter.rasterize_svg(svg, 40, flatten=flatten)
    img = Image.open(io.BytesIO(png))
    assert img.size == (40, 40)
    assert img.mode == mode
