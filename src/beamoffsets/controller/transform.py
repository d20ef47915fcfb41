"""
Offset Transformer
==================
Converts converter-written (BGG) beam offsets into the local-axis (BOO) layout.

The lateral offset arrives in the third component. The corrected vector
carries it in the second component and zeroes the third:

    (x, y, z) -> (x, z, 0)

Rounding to whole millimetres is optional and applies to both carried
components of both ends.
"""
from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

import numpy as np

from beamoffsets.model.element import OffsetPair, OffsetType, Vector3, normalize_offset_type, parse_vector

if TYPE_CHECKING:
    import numpy.typing as npt


def round_to_mm(value: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
    """Round to the nearest integer, halves away from zero."""
    rounded = np.sign(value) * np.floor(np.abs(value) + 0.5)
    # + 0.0 turns -0.0 into 0.0
    if np.ndim(rounded) == 0:
        return float(rounded) + 0.0
    return rounded + 0.0


def swap_offset(vector: Any, round_values: bool = False) -> Vector3:
    """Move the third component into the second and zero the third."""
    x, _, z = parse_vector(vector)
    carried = np.array([x, z], dtype=np.float64)
    if round_values:
        carried = round_to_mm(carried)
    return float(carried[0]), float(carried[1]), 0.0


def needs_transform(offset_type: Any) -> bool:
    """Everything except the corrected encoding gets transformed."""
    return normalize_offset_type(offset_type) != OffsetType.BOO


def transform_offsets(
    offset_type: Any,
    offset_a: Any,
    offset_b: Any,
    round_values: bool = False,
) -> Optional[OffsetPair]:
    """
    Compute the corrected offsets of one element.

    Args:
        offset_type: Current OFFT value.
        offset_a: Offset vector at end A.
        offset_b: Offset vector at end B.
        round_values: Round carried components to whole millimetres.

    Returns:
        The corrected pair, or None when the element is already BOO.
    """
    if not needs_transform(offset_type):
        return None
    return OffsetPair(
        offset_a=swap_offset(offset_a, round_values),
        offset_b=swap_offset(offset_b, round_values),
    )
