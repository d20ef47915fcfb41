"""
Beam Element Data
=================
Plain data structures describing a 1D element's offsets.

Classes:
    OffsetType: Known values of the offset-type tag (OFFT).
    OffsetPair: Offset vectors of both element ends.
    BeamElement: One bar/beam element as read from the host.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Sequence, Tuple

from beamoffsets.errors import OffsetParseError

Vector3 = Tuple[float, float, float]
OffsetKey = Tuple[float, float, float, float, float, float]


class OffsetType(StrEnum):
    """Offset encoding conventions of the OFFT attribute."""
    BGG = "BGG"  # global-axis offsets, as written by the converter
    BOO = "BOO"  # basic/local-axis offsets, the corrected encoding
    UNSET = ""


def normalize_offset_type(raw: Any) -> str:
    """
    Normalize an OFFT value read from the host.

    The host reports an unset tag either as an empty string or as integer 0;
    both collapse to `OffsetType.UNSET`.
    """
    if raw is None:
        return OffsetType.UNSET.value
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        if raw == 0:
            return OffsetType.UNSET.value
        # Unknown numeric tags are kept as text and classified as other
        return str(raw)
    value = str(raw).strip().strip("{}").strip().upper()
    if value == "0":
        return OffsetType.UNSET.value
    return value


def parse_vector(raw: Any) -> Vector3:
    """
    Convert a host value into a 3-component float tuple.

    Accepts any 3-element sequence or a Tcl list string ("1.0 0.0 2.0",
    optionally wrapped in braces).
    """
    if isinstance(raw, str):
        parts: Sequence[Any] = raw.replace("{", " ").replace("}", " ").split()
    elif hasattr(raw, "__len__"):
        parts = list(raw)
    else:
        raise OffsetParseError(f"Offset value {raw!r} is not a vector.")

    if len(parts) != 3:
        raise OffsetParseError(f"Offset vector needs 3 components, got {len(parts)}: {raw!r}")

    try:
        x, y, z = (float(p) for p in parts)
    except (TypeError, ValueError) as e:
        raise OffsetParseError(f"Offset vector {raw!r} has non-numeric components.") from e
    return x, y, z


@dataclass(frozen=True)
class OffsetPair:
    offset_a: Vector3
    offset_b: Vector3

    @property
    def key(self) -> OffsetKey:
        """Six components used to group elements with identical offsets."""
        return (*self.offset_a, *self.offset_b)


@dataclass
class BeamElement:
    elem_id: int
    offset_type: str = OffsetType.BGG.value
    offset_a: Vector3 = (0.0, 0.0, 0.0)
    offset_b: Vector3 = (0.0, 0.0, 0.0)

    @property
    def offsets(self) -> OffsetPair:
        return OffsetPair(self.offset_a, self.offset_b)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(id={self.elem_id}, offt='{self.offset_type}', "
            f"a={self.offset_a}, b={self.offset_b})"
        )
