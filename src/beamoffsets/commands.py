"""
Console Commands
================
The functions a user calls from the host's scripting console.

    fix_beam_offsets()   Fix all beams, returns the number of fixed elements.
    fix_beam(elem_id)    Fix one beam, returns True when it was changed.
    analyze_beams()      Read-only OFFT/offset report.

Without an explicit host, every command binds to the running HyperWorks
session.
"""
from __future__ import annotations

from typing import Optional

from beamoffsets.config import FixOptions
from beamoffsets.controller import analyzer, fixer
from beamoffsets.controller.analyzer import AnalysisReport
from beamoffsets.controller.fixer import FixOutcome, FixResult
from beamoffsets.host.base import ElementHost
from beamoffsets.host.hypermesh import session_host


def fix_beam_offsets(host: Optional[ElementHost] = None, options: Optional[FixOptions] = None) -> int:
    return fixer.fix_all_beam_offsets(session_host(host), options).fixed_count


def fix_beam(elem_id: int, host: Optional[ElementHost] = None, options: Optional[FixOptions] = None) -> bool:
    host = session_host(host)
    outcome = fixer.fix_element(host, elem_id, options)
    if outcome is FixOutcome.FIXED:
        host.console(f"Fixed beam element {elem_id}")
    elif outcome is FixOutcome.ALREADY_CORRECT:
        host.console(f"No fix needed for beam element {elem_id} (OFFT is already BOO)")
    else:
        host.console(f"Could not fix beam element {elem_id} (skipped after an error)")
    return outcome is FixOutcome.FIXED


def analyze_beams(host: Optional[ElementHost] = None, options: Optional[FixOptions] = None) -> AnalysisReport:
    return analyzer.analyze_beams(session_host(host), options)


def run_on_load(host: Optional[ElementHost] = None, options: Optional[FixOptions] = None) -> FixResult:
    """Full fix performed once when the script is loaded into the host."""
    host = session_host(host)
    host.console("")
    host.console("Running beam offset fix...")
    result = fixer.fix_all_beam_offsets(host, options)
    host.console("")
    return result
