"""
Iconsmith — deterministic app icon generator

Usage:
  python -m iconsmith.main "Aura"
  python -m iconsmith.main "Aura" --variant name --mode dark --size 512
  python -m iconsmith.main "Aura" --complexity 90 --rotation 30 --show-spec
  python -m iconsmith.main "Aura" --export ios
  python -m iconsmith.main "Aura" "Notes" "Super Duper App" --sheet
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from .compositor import VARIANTS, compose_icon, corner_radius, display_text
from .config import get_config
from .design_spec import DIAL_NAMES, DesignSpec, build_design_spec
from .palette import (
    MODES,
    SECOND_STOP_DARKEN,
    effective_saturation,
    gradient_stops,
    hsl_to_hex,
    mode_lightness,
)
from .styles import STYLE_NAMES
from .validate import check_markup
from .visualizer import render_preview_sheet
from .zip_exporter import FORMATS, PLATFORM_SIZES, build_export_zip, generate_filename

console = Console()
logger = logging.getLogger(__name__)


# ── CLI ───────────────────────────────────────────────────────────────────────

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    cfg = get_config()
    parser = argparse.ArgumentParser(
        description="Iconsmith — deterministic app icons from an app name"
    )
    parser.add_argument(
        "names",
        nargs="+",
        help="App name(s). The first one is rendered/exported; all appear on --sheet",
    )
    parser.add_argument("--variant", choices=VARIANTS, default="logo",
                        help="logo = procedural style; name = app name / initials")
    parser.add_argument("--mode", choices=MODES, default="light")
    parser.add_argument("--size", type=int, default=1024, help="Icon size in pixels")
    parser.add_argument("--mask", default=cfg.default_mask,
                        help="squircle | circle | square | 'NN%%' | pixel radius")

    dials = parser.add_argument_group("design dials (0–100, rotation in degrees)")
    dials.add_argument("--vibrancy", type=float, default=None)
    dials.add_argument("--complexity", type=float, default=None)
    dials.add_argument("--size-variation", type=float, default=None)
    dials.add_argument("--rotation", type=float, default=None)
    dials.add_argument("--pattern-density", type=float, default=None)

    parser.add_argument("--output", default=None,
                        help=f"Output directory (default: {cfg.output_dir})")
    parser.add_argument("--export", choices=sorted(PLATFORM_SIZES), default=None,
                        help="Bundle every platform size × variant × mode into a ZIP")
    parser.add_argument("--format", choices=FORMATS, default="png",
                        help="Export file format (png needs cairosvg + libcairo)")
    parser.add_argument("--sheet", action="store_true",
                        help="Write a preview sheet comparing all given names")
    parser.add_argument("--show-spec", action="store_true",
                        help="Print the design spec")
    return parser.parse_args(argv)


def _overrides_from_args(args: argparse.Namespace) -> Dict[str, float]:
    return {
        name: getattr(args, name)
        for name in DIAL_NAMES
        if getattr(args, name) is not None
    }


def _parse_mask(raw: str):
    try:
        return float(raw)
    except ValueError:
        return raw


# ── Output helpers ────────────────────────────────────────────────────────────

def swatch_hexes(spec: DesignSpec, mode: str) -> List[str]:
    """Hex colours of the two gradient stops, matching gradient_stops()."""
    saturation = effective_saturation(spec)
    lightness = mode_lightness(spec, mode)
    return [
        hsl_to_hex(spec.primary_hue, saturation, lightness),
        hsl_to_hex(spec.secondary_hue, saturation, lightness * SECOND_STOP_DARKEN),
    ]


def display_spec(app_name: str, spec: DesignSpec) -> None:
    table = Table(title=f"Design spec — {app_name}", show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")

    table.add_row("seed", str(spec.seed))
    table.add_row("style", f"{spec.style_index} ({STYLE_NAMES[spec.style_index]})")
    for mode in MODES:
        swatches = "  ".join(f"[on {h}]    [/on {h}] {h}" for h in swatch_hexes(spec, mode))
        table.add_row(f"gradient ({mode})", f"{swatches}\n[dim]{' → '.join(gradient_stops(spec, mode))}[/dim]")
    table.add_row("primary_hue", f"{spec.primary_hue:.2f}")
    table.add_row("secondary_hue", f"{spec.secondary_hue:.2f}")
    table.add_row("saturation", f"{spec.saturation:.2f}")
    table.add_row("lightness / dark", f"{spec.lightness:.2f} / {spec.dark_lightness:.2f}")
    table.add_row("symmetry", spec.symmetry)
    table.add_row("element_count", str(spec.element_count))
    table.add_row("scale_factor", f"{spec.scale_factor:.3f}")
    for name in DIAL_NAMES:
        value = getattr(spec, name)
        table.add_row(name, "[dim]default[/dim]" if value is None else f"{value:g}")

    console.print(table)


def _write_svg(path: Path, svg: str, size: Optional[int]) -> bool:
    report = check_markup(svg, size=size)
    if not report.ok:
        for err in report.errors:
            console.print(f"  [yellow]⚠ {err}[/yellow]")
    path.write_text(svg, encoding="utf-8")
    return report.ok


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    cfg = get_config()
    logging.basicConfig(
        format="%(asctime)s — %(levelname)s — %(name)s — %(message)s",
        level=getattr(logging, cfg.log_level, logging.INFO),
    )
    args = parse_args(argv)
    start = time.time()

    output_dir = Path(args.output) if args.output else cfg.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    app_name = args.names[0]
    overrides = _overrides_from_args(args)
    mask = _parse_mask(args.mask)

    try:
        if args.size <= 0:
            raise ValueError(f"size must be a positive integer, got {args.size}")
        corner_radius(args.size, mask)
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return 1

    console.print(Rule("[bold magenta]Iconsmith[/bold magenta]"))
    spec = build_design_spec(app_name, overrides)
    console.print(
        f"  App: [bold]{app_name}[/bold]  |  "
        f"Style: [bold]{STYLE_NAMES[spec.style_index]}[/bold]  |  "
        f"Output: [bold]{output_dir}[/bold]"
    )

    if args.show_spec:
        display_spec(app_name, spec)

    written: List[Path] = []

    # ── Single icon ───────────────────────────────────────────────────────────
    svg = compose_icon(app_name, args.variant, args.mode, args.size, spec, mask=mask)
    icon_path = output_dir / generate_filename(app_name, args.variant, args.mode, args.size, ext="svg")
    if _write_svg(icon_path, svg, args.size):
        console.print(f"  [green]✓[/green] {args.variant}/{args.mode} {args.size}px → {icon_path}")
    if args.variant == "name":
        console.print(f"    [dim]text: {display_text(app_name)!r}[/dim]")
    written.append(icon_path)

    # ── Preview sheet ─────────────────────────────────────────────────────────
    if args.sheet:
        sheet = render_preview_sheet(args.names, size=min(args.size, 256), overrides=overrides, mask=mask)
        sheet_path = output_dir / "preview-sheet.svg"
        _write_svg(sheet_path, sheet, None)
        console.print(f"  [green]✓[/green] preview sheet ({len(args.names)} name(s)) → {sheet_path}")
        written.append(sheet_path)

    # ── Export ────────────────────────────────────────────────────────────────
    if args.export:
        console.print(f"\n[bold]Exporting {args.export} assets ({args.format})[/bold]")
        t0 = time.time()
        zip_path = build_export_zip(
            app_name, args.export, output_dir,
            overrides=overrides, fmt=args.format, max_workers=cfg.export_workers,
        )
        if zip_path is None:
            console.print("  [bold red]✗ Export failed — see log for details[/bold red]")
            return 1
        console.print(f"  [green]✓ {zip_path} — {time.time() - start:.1f}s total, export {time.time() - t0:.1f}s[/green]")
        written.append(zip_path)

    console.print(
        Panel(
            "\n".join(str(p) for p in written),
            title="[bold green]Done[/bold green]",
            border_style="green",
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
