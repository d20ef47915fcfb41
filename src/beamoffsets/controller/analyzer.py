"""
Beam Offset Analyzer
====================
Read-only survey of OFFT values and offsets of all beam elements.

Classification:
    NEEDS_CORRECTION: OFFT is BGG or unset ("" / 0).
    CORRECT: OFFT is BOO.
    OTHER: Any other OFFT value. The full fix still rewrites these, the
        analyzer lists them separately so they can be inspected first.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Dict, List, Optional, Tuple

from beamoffsets.config import FixOptions
from beamoffsets.controller.reporter import Reporter
from beamoffsets.errors import HostError, OffsetParseError
from beamoffsets.host.base import ElementHost, OffsetEnd
from beamoffsets.model.element import OffsetType, Vector3, normalize_offset_type, parse_vector

logger = logging.getLogger(__name__)


class OffsetStatus(StrEnum):
    NEEDS_CORRECTION = "needs correction"
    CORRECT = "already correct"
    OTHER = "other"


def classify_offset_type(offset_type: str) -> OffsetStatus:
    """Classify a normalized OFFT value."""
    if offset_type in (OffsetType.BGG, OffsetType.UNSET):
        return OffsetStatus.NEEDS_CORRECTION
    if offset_type == OffsetType.BOO:
        return OffsetStatus.CORRECT
    return OffsetStatus.OTHER


@dataclass
class AnalysisRow:
    elem_id: int
    offset_type: str
    offset_a: Vector3
    offset_b: Vector3

    @property
    def status(self) -> OffsetStatus:
        return classify_offset_type(self.offset_type)


def _format_vector(vector: Vector3) -> str:
    return " ".join(f"{v:.3f}" for v in vector)


@dataclass
class AnalysisReport:
    rows: List[AnalysisRow] = field(default_factory=list)
    skipped: List[Tuple[int, str]] = field(default_factory=list)

    def _count(self, status: OffsetStatus) -> int:
        return sum(1 for row in self.rows if row.status is status)

    @property
    def bgg(self) -> int:
        """Elements needing correction (BGG or unset)."""
        return self._count(OffsetStatus.NEEDS_CORRECTION)

    @property
    def boo(self) -> int:
        return self._count(OffsetStatus.CORRECT)

    @property
    def other(self) -> int:
        return self._count(OffsetStatus.OTHER)

    @property
    def total(self) -> int:
        return len(self.rows)

    def counts(self) -> Dict[str, int]:
        return {"bgg": self.bgg, "boo": self.boo, "other": self.other, "total": self.total}

    def format_table(self) -> str:
        """Fixed-width per-element table."""
        header = f"{'Elem ID':>10}  {'OFFT':<6}  {'Offset A':<32}  {'Offset B':<32}  Status"
        lines = [header, "-" * len(header)]
        for row in self.rows:
            offt = row.offset_type or "-"
            lines.append(
                f"{row.elem_id:>10}  {offt:<6}  {_format_vector(row.offset_a):<32}  "
                f"{_format_vector(row.offset_b):<32}  {row.status.value}"
            )
        return "\n".join(lines)

    def write_csv(self, filepath: str) -> None:
        """Export the per-element table."""
        logger.info(f"Writing offset report to: {filepath}")
        with open(filepath, mode='w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(["elem_id", "offt", "a1", "a2", "a3", "b1", "b2", "b3", "status"])
            for row in self.rows:
                writer.writerow([
                    row.elem_id, row.offset_type, *row.offset_a, *row.offset_b, row.status.value
                ])


def analyze_beams(host: ElementHost, options: Optional[FixOptions] = None) -> AnalysisReport:
    """Tabulate OFFT and offsets of every beam element. Nothing is modified."""
    options = options or FixOptions()
    reporter = Reporter(host, options)
    report = AnalysisReport()

    elem_ids = host.beam_element_ids()
    if not elem_ids:
        reporter.both("No beam elements found in model")
        return report

    for processed, elem_id in enumerate(elem_ids, start=1):
        reporter.progress("Reading beam offsets", processed, len(elem_ids))
        try:
            row = AnalysisRow(
                elem_id=elem_id,
                offset_type=normalize_offset_type(host.get_offset_type(elem_id)),
                offset_a=parse_vector(host.get_offset(elem_id, OffsetEnd.A)),
                offset_b=parse_vector(host.get_offset(elem_id, OffsetEnd.B)),
            )
        except (HostError, OffsetParseError) as e:
            report.skipped.append((elem_id, str(e)))
            reporter.element_error("reading", elem_id, e)
            continue
        report.rows.append(row)

    reporter.line(
        f"Beam elements: {report.total} total, {report.bgg} need correction (BGG/unset), "
        f"{report.boo} already BOO, {report.other} other"
    )
    reporter.line(report.format_table())
    reporter.status(f"Analyzed {report.total} beam elements: {report.bgg} need correction")
    return report
