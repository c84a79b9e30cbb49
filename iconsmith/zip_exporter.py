"""
zip_exporter.py — Render every platform size × variant × mode and bundle the
results into a ZIP file.

Creates organized ZIP with:
  ios/       — {name}-{variant}-{mode}-{size}px.png   (1024 → 29, flattened, no alpha)
  android/   — {name}-{variant}-{mode}-{size}px.png   (512 → 24, RGBA, circle mask)

The engine only produces SVG. Rasterization happens here, with cairosvg
(SVG → PNG) and Pillow (exact size, alpha flattening for the App Store).
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from PIL import Image

from .compositor import compose_icon
from .config import get_config
from .design_spec import Overrides, build_design_spec

logger = logging.getLogger(__name__)


# ── Size tables ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ExportSize:
    label: str
    size: int
    platform: str


IOS_SIZES: List[ExportSize] = [
    ExportSize("AppStore", 1024, "ios"),
    ExportSize("180px",     180, "ios"),
    ExportSize("120px",     120, "ios"),
    ExportSize("87px",       87, "ios"),
    ExportSize("60px",       60, "ios"),
    ExportSize("40px",       40, "ios"),
    ExportSize("29px",       29, "ios"),
]

ANDROID_SIZES: List[ExportSize] = [
    ExportSize("PlayStore",  512, "android"),
    ExportSize("AdaptiveFG", 432, "android"),
    ExportSize("AdaptiveBG", 432, "android"),
    ExportSize("48dp",        48, "android"),
    ExportSize("36dp",        36, "android"),
    ExportSize("24dp",        24, "android"),
]

PLATFORM_SIZES: Dict[str, List[ExportSize]] = {
    "ios":     IOS_SIZES,
    "android": ANDROID_SIZES,
}

# iOS applies its own mask and rejects alpha; Android launchers show a circle.
PLATFORM_MASK = {"ios": "square", "android": "circle"}
PLATFORM_FLATTEN = {"ios": True, "android": False}

VARIANT_MODES: List[Tuple[str, str]] = [
    ("logo", "light"),
    ("logo", "dark"),
    ("name", "light"),
    ("name", "dark"),
]

FORMATS = ("png", "svg")


def generate_filename(app_name: str, variant: str, mode: str, size: int, ext: str = "png") -> str:
    sanitized = re.sub(r"[^a-zA-Z0-9]", "-", app_name).lower()
    return f"{sanitized}-{variant}-{mode}-{size}px.{ext}"


def unique_sizes(platform: str) -> List[int]:
    """Sizes in table order, each once (the two adaptive layers share 432)."""
    if platform not in PLATFORM_SIZES:
        raise ValueError(f"platform must be one of {sorted(PLATFORM_SIZES)}, got {platform!r}")
    seen: List[int] = []
    for entry in PLATFORM_SIZES[platform]:
        if entry.size not in seen:
            seen.append(entry.size)
    return seen


# ── Rasterization ─────────────────────────────────────────────────────────────

def rasterize_svg(
    svg: str,
    size: int,
    flatten: bool = False,
    background: Tuple[int, int, int] = (255, 255, 255),
) -> bytes:
    """
    SVG markup → PNG bytes of exactly size × size.

    Args:
        svg:        Standalone SVG document
        size:       Output width and height in pixels
        flatten:    Composite onto ``background`` and drop the alpha channel
        background: RGB used under transparent pixels when flattening

    Returns:
        PNG file contents.
    """
    import cairosvg

    png = cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=size,
        output_height=size,
    )
    img = Image.open(io.BytesIO(png)).convert("RGBA")
    if img.size != (size, size):
        img = img.resize((size, size), Image.LANCZOS)

    if flatten:
        flat = Image.new("RGB", img.size, background)
        flat.paste(img, mask=img.split()[3])
        img = flat

    buf = io.BytesIO()
    img.save(buf, "PNG")
    return buf.getvalue()


# ── Batch rendering ───────────────────────────────────────────────────────────

def render_variants(
    app_name: str,
    platform: str,
    overrides: Union[None, Dict[str, Any], Overrides] = None,
    fmt: str = "png",
    max_workers: Optional[int] = None,
) -> Dict[str, bytes]:
    """
    Render every size × variant × mode for one platform.

    Each combination is independent (the DesignSpec is immutable and every render
    builds its own generator), so they run on a thread pool. A combination
    that fails is logged and left out of the result.

    Returns:
        Dict mapping filename → file bytes.
    """
    if fmt not in FORMATS:
        raise ValueError(f"fmt must be one of {FORMATS}, got {fmt!r}")
    sizes = unique_sizes(platform)
    spec = build_design_spec(app_name, overrides)
    mask = PLATFORM_MASK[platform]
    flatten = PLATFORM_FLATTEN[platform]
    workers = max_workers or get_config().export_workers

    def _render_one(variant: str, mode: str, size: int) -> Tuple[str, bytes]:
        svg = compose_icon(app_name, variant, mode, size, spec, mask=mask)
        filename = generate_filename(app_name, variant, mode, size, ext=fmt)
        if fmt == "svg":
            return filename, svg.encode("utf-8")
        return filename, rasterize_svg(svg, size, flatten=flatten)

    jobs = [(variant, mode, size) for variant, mode in VARIANT_MODES for size in sizes]
    results: Dict[str, bytes] = {}

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(_render_one, *job): job for job in jobs}
        for future in as_completed(futures):
            variant, mode, size = futures[future]
            try:
                filename, data = future.result()
                results[filename] = data
            except Exception as exc:
                logger.warning(f"Failed to generate {variant}-{mode}-{size}px: {exc}")

    return results


def build_export_zip(
    app_name: str,
    platform: str,
    output_dir: Path,
    overrides: Union[None, Dict[str, Any], Overrides] = None,
    fmt: str = "png",
    max_workers: Optional[int] = None,
) -> Optional[Path]:
    """
    Bundle all icon assets for a platform into a ZIP file.

    Args:
        app_name:    App name (seed source and filename prefix)
        platform:    "ios" | "android"
        output_dir:  Directory to write the ZIP file
        overrides:   Optional design dials
        fmt:         "png" (rasterized) or "svg" (markup only)
        max_workers: Thread pool size (default from config)

    Returns:
        Path to created ZIP file, or None if nothing could be written.
    """
    files = render_variants(app_name, platform, overrides, fmt=fmt, max_workers=max_workers)
    if not files:
        logger.warning(f"No {platform} assets rendered for {app_name!r} — ZIP skipped")
        return None

    safe_name = re.sub(r"[^a-zA-Z0-9_-]", "_", app_name.lower().strip())[:30] or "icon"
    zip_path = Path(output_dir) / f"{safe_name}_{platform}_icons.zip"

    try:
        zip_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
            for filename in sorted(files):
                zf.writestr(f"{platform}/{filename}", files[filename])
    except OSError as e:
        logger.warning(f"ZIP creation failed: {e}")
        return None

    logger.info(f"ZIP created: {zip_path.name} ({len(files)} files, {zip_path.stat().st_size // 1024} KB)")
    return zip_path
