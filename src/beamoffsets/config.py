"""
Configuration & Constants
=========================
This module serves as the central registry for host constants and run options.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (element config ids, message
   intervals, auto-update flags) scattered throughout the code.
2. Explicit options: Debug and quiet switches are passed into every operation
   as a `FixOptions` value instead of living in module globals.

Exports:
    BEAM_ELEMENT_CONFIG (int): Host config id of bar/beam elements.
    RecomputeOptions: Geometry handling flags of the auto-update pass.
    FixOptions: Per-run switches (debug, quiet, rounding).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Optional

# Global Constants
BEAM_ELEMENT_CONFIG: int = 60
DEFAULT_MARK: int = 1
PROGRESS_STEP_PERCENT: int = 5
GROUP_MESSAGE_INTERVAL: int = 10

ENV_DEBUG: str = "BEAMOFFSETS_DEBUG"
ENV_QUIET: str = "BEAMOFFSETS_QUIET"
ENV_ROUND: str = "BEAMOFFSETS_ROUND"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def env_flag(name: str, default: bool) -> bool:
    """
    Read a boolean flag from the environment.

    Unset variables return `default`. Unrecognized values raise ValueError so a
    typo does not silently flip behaviour.
    """
    raw: Optional[str] = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Environment variable {name}={raw!r} is not a boolean flag.")


@dataclass(frozen=True)
class RecomputeOptions:
    """
    Geometry handling flags of the 1D element auto-update pass.

    The defaults keep the orientation untouched, average the shell thickness,
    and re-derive the offsets for both element ends.
    """
    orient: int = 0
    allshells: int = 0
    thickness: str = "avg"
    offsetnormal: str = "pos"
    offsetlateral: str = "neg"
    adjustoffset: str = "all"
    offsetends: str = "startend"

    def as_arguments(self) -> str:
        """Render as host `key=value` arguments, in declaration order."""
        return " ".join(f"{f.name}={getattr(self, f.name)}" for f in fields(self))


@dataclass(frozen=True)
class FixOptions:
    debug: bool = False
    quiet: bool = False
    round_offsets: bool = True
    recompute: RecomputeOptions = field(default_factory=RecomputeOptions)

    @classmethod
    def from_env(cls) -> FixOptions:
        """Build options from BEAMOFFSETS_* environment variables."""
        return cls(
            debug=env_flag(ENV_DEBUG, False),
            quiet=env_flag(ENV_QUIET, False),
            round_offsets=env_flag(ENV_ROUND, True),
        )
