"""
validate.py — Structural checks for generated SVG markup.

Checks:
  1. The document parses as XML (balanced tags, escaped text)
  2. The root is an <svg> in the SVG namespace
  3. Optional: width / height / viewBox match the requested size
  4. Every id is defined exactly once
  5. Every url(#id) / href="#id" reference points at a defined id

Usage:
  from iconsmith.validate import check_markup
  report = check_markup(svg, size=1024)
  if not report.ok:
      print(report.errors)
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Set

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_HREF = "{http://www.w3.org/1999/xlink}href"

_URL_REF_RE = re.compile(r"url\(\s*#([^)\s]+)\s*\)")


@dataclass
class MarkupReport:
    """Outcome of check_markup(). Empty ``errors`` means the markup is sound."""
    errors: List[str] = field(default_factory=list)
    ids: Set[str] = field(default_factory=set)
    references: Set[str] = field(default_factory=set)

    @property
    def ok(self) -> bool:
        return not self.errors


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def check_markup(svg: str, size: Optional[int] = None) -> MarkupReport:
    report = MarkupReport()

    try:
        root = ET.fromstring(svg)
    except ET.ParseError as exc:
        report.errors.append(f"not well-formed: {exc}")
        return report

    if root.tag != f"{{{SVG_NS}}}svg":
        report.errors.append(f"root element is {root.tag!r}, expected <svg> in the SVG namespace")

    if size is not None:
        expected = str(size)
        for attr in ("width", "height"):
            if root.get(attr) != expected:
                report.errors.append(f"root {attr}={root.get(attr)!r}, expected {expected!r}")
        if root.get("viewBox") != f"0 0 {size} {size}":
            report.errors.append(f"root viewBox={root.get('viewBox')!r}, expected '0 0 {size} {size}'")

    id_counts: Counter = Counter()
    for element in root.iter():
        element_id = element.get("id")
        if element_id is not None:
            id_counts[element_id] += 1

        for name, value in element.attrib.items():
            report.references.update(_URL_REF_RE.findall(value))
            if (name == XLINK_HREF or _local(name) == "href") and value.startswith("#"):
                report.references.add(value[1:])

    report.ids = set(id_counts)
    for element_id, count in sorted(id_counts.items()):
        if count > 1:
            report.errors.append(f"id {element_id!r} defined {count} times")
    for ref in sorted(report.references - report.ids):
        report.errors.append(f"reference to undefined id {ref!r}")

    return report
