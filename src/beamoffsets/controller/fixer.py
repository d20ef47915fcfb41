"""
Bulk Offset Correction
======================
Rewrites beam offsets for the whole model or for a single element.

The full run has three phases:
1. Collect: read OFFT and both offsets of every beam, transform and group.
2. Apply: one offset-A and one offset-B write per group, through a mark.
3. Update: one auto-update pass over every touched element, which makes the
   host re-derive orientation and switch OFFT to BOO.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Dict, List, Optional, Tuple

from beamoffsets.config import FixOptions, GROUP_MESSAGE_INTERVAL
from beamoffsets.controller.grouping import OffsetGroup, group_by_offsets
from beamoffsets.controller.reporter import Reporter
from beamoffsets.controller.transform import needs_transform, transform_offsets
from beamoffsets.errors import HostError, OffsetParseError
from beamoffsets.host.base import ElementHost, OffsetEnd
from beamoffsets.model.element import OffsetKey, OffsetPair

logger = logging.getLogger(__name__)


@dataclass
class FixResult:
    """Return object of a full correction run."""
    total_count: int = 0
    fixed_ids: List[int] = field(default_factory=list)
    groups: Dict[OffsetKey, OffsetGroup] = field(default_factory=dict)
    skipped: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def fixed_count(self) -> int:
        return len(self.fixed_ids)

    @property
    def group_count(self) -> int:
        return len(self.groups)


def read_corrected_offsets(
    host: ElementHost,
    elem_id: int,
    round_values: bool,
) -> Optional[OffsetPair]:
    """Read one element from the host and return its corrected offsets, if any."""
    offset_type = host.get_offset_type(elem_id)
    if not needs_transform(offset_type):
        return None
    return transform_offsets(
        offset_type,
        host.get_offset(elem_id, OffsetEnd.A),
        host.get_offset(elem_id, OffsetEnd.B),
        round_values=round_values,
    )


def apply_offsets(
    host: ElementHost,
    elem_ids: List[int],
    offsets: OffsetPair,
    written: List[int],
) -> None:
    """
    Write both offsets to a group through one mark.

    `written` is extended as soon as the first write succeeds, so a failure
    on the second write still leaves the group listed for auto-update.
    """
    with host.marked(elem_ids) as mark:
        host.set_offset(mark, OffsetEnd.A, offsets.offset_a)
        written.extend(elem_ids)
        host.set_offset(mark, OffsetEnd.B, offsets.offset_b)


def recompute(host: ElementHost, elem_ids: List[int], options: FixOptions) -> None:
    with host.marked(elem_ids) as mark:
        host.autoupdate(mark, options.recompute)


def fix_all_beam_offsets(host: ElementHost, options: Optional[FixOptions] = None) -> FixResult:
    """
    Fix the offsets of every beam element in the model.

    Per-element read failures are skipped and reported in `FixResult.skipped`.
    Failures of the bulk writes or of the auto-update pass propagate. Elements
    written before a failed write are still auto-updated, so their OFFT turns
    BOO and a later run does not swap them a second time.
    """
    options = options or FixOptions()
    reporter = Reporter(host, options)

    elem_ids = host.beam_element_ids()
    result = FixResult(total_count=len(elem_ids))

    if result.total_count == 0:
        reporter.line("No beam elements found in model")
        reporter.status("No beam elements found")
        return result

    reporter.both(f"Analyzing {result.total_count} beam elements...")

    # --- 1. COLLECT ---
    corrections: List[Tuple[int, OffsetPair]] = []
    for processed, elem_id in enumerate(elem_ids, start=1):
        reporter.progress("Analyzing beam offsets", processed, result.total_count)
        try:
            corrected = read_corrected_offsets(host, elem_id, options.round_offsets)
        except (HostError, OffsetParseError) as e:
            result.skipped.append((elem_id, str(e)))
            reporter.element_error("analyzing", elem_id, e)
            continue
        if corrected is not None:
            corrections.append((elem_id, corrected))

    result.groups = group_by_offsets(corrections)
    result.fixed_ids = [elem_id for elem_id, _ in corrections]

    if result.fixed_count == 0:
        reporter.line("No beam elements need fixing (all already BOO)")
        reporter.status("No beam elements need fixing")
        return result

    reporter.line(f"Found {result.fixed_count} elements to fix in {result.group_count} offset groups")
    reporter.status(f"Applying offsets to {result.fixed_count} elements in {result.group_count} groups...")

    # --- 2. APPLY ---
    written: List[int] = []
    try:
        for group_num, group in enumerate(result.groups.values(), start=1):
            if group_num % GROUP_MESSAGE_INTERVAL == 0 or group_num == result.group_count:
                reporter.status(f"Applying offset group {group_num}/{result.group_count}")
            logger.debug(f"Group {group.key}: {len(group)} elements")
            apply_offsets(host, group.element_ids, group.offsets, written)
    except HostError:
        logger.error(f"Offset write failed, auto-updating the {len(written)} element(s) already written")
        if written:
            recompute(host, written, options)
        raise

    # --- 3. UPDATE ---
    reporter.both(f"Updating {result.fixed_count} beam elements...")
    recompute(host, result.fixed_ids, options)

    reporter.both(
        f"Fixed offsets on {result.fixed_count} beam element(s) in {result.group_count} groups"
    )
    if result.skipped:
        logger.warning(f"Skipped {len(result.skipped)} element(s) that could not be read")
    return result


class FixOutcome(StrEnum):
    """Result of fixing a single element."""
    FIXED = "fixed"
    ALREADY_CORRECT = "already correct"
    SKIPPED = "skipped"


def fix_element(host: ElementHost, elem_id: int, options: Optional[FixOptions] = None) -> FixOutcome:
    """
    Fix a single element without rounding or grouping.

    A failure after the first offset write still auto-updates the element, so
    it is never left swapped but tagged BGG.
    """
    options = options or FixOptions()
    reporter = Reporter(host, options)
    try:
        corrected = read_corrected_offsets(host, elem_id, round_values=False)
        if corrected is None:
            return FixOutcome.ALREADY_CORRECT
        with host.marked([elem_id]) as mark:
            host.set_offset(mark, OffsetEnd.A, corrected.offset_a)
            try:
                host.set_offset(mark, OffsetEnd.B, corrected.offset_b)
            finally:
                host.autoupdate(mark, options.recompute)
    except (HostError, OffsetParseError) as e:
        reporter.element_error("fixing", elem_id, e)
        return FixOutcome.SKIPPED
    return FixOutcome.FIXED


def quick_fix(host: ElementHost, elem_id: int, options: Optional[FixOptions] = None) -> bool:
    """
    Returns:
        True if the element was changed, False if it was already BOO or could
        not be processed.
    """
    return fix_element(host, elem_id, options) is FixOutcome.FIXED
