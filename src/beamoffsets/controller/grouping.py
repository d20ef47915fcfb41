"""
Grouping Batcher
================
Collects elements that receive identical corrected offsets.

Large models repeat a few nominal offsets (plate thickness standards) across
thousands of beams. One bulk write per distinct offset pair replaces one write
per element.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from beamoffsets.model.element import OffsetKey, OffsetPair


@dataclass
class OffsetGroup:
    offsets: OffsetPair
    element_ids: List[int] = field(default_factory=list)

    @property
    def key(self) -> OffsetKey:
        return self.offsets.key

    def __len__(self) -> int:
        return len(self.element_ids)


def group_by_offsets(corrections: Iterable[Tuple[int, OffsetPair]]) -> Dict[OffsetKey, OffsetGroup]:
    """
    Partition (element id, corrected offsets) pairs by exact offset equality.

    Groups keep the order in which their first member was seen.
    """
    groups: Dict[OffsetKey, OffsetGroup] = {}
    for elem_id, offsets in corrections:
        group = groups.get(offsets.key)
        if group is None:
            group = groups[offsets.key] = OffsetGroup(offsets)
        group.element_ids.append(elem_id)
    return groups
