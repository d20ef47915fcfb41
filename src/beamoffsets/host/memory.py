"""
In-Memory Host
==============
A host stand-in that keeps elements in a dictionary.

Why is this file needed?
------------------------
The correction logic normally runs inside the host application. This class
behaves like the host for the handful of capabilities the logic needs, and
records every write so tests can assert how many host calls were issued.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from beamoffsets.config import DEFAULT_MARK, RecomputeOptions
from beamoffsets.errors import HostError
from beamoffsets.host.base import ElementHost, OffsetEnd
from beamoffsets.model.element import BeamElement, OffsetType, Vector3

logger = logging.getLogger(__name__)


class InMemoryHost(ElementHost):
    def __init__(
        self,
        elements: Optional[Iterable[BeamElement]] = None,
        other_elements: Optional[Iterable[int]] = None,
    ) -> None:
        """
        Args:
            elements: Beam elements of the model.
            other_elements: Ids of non-beam elements (never returned as beams).
        """
        self.elements: Dict[int, BeamElement] = {}
        for element in elements or []:
            self.add(element)
        self.other_elements: Set[int] = set(other_elements or [])

        # Element ids whose attribute reads raise HostError
        self.fail_on_read: Set[int] = set()

        self.marks: Dict[int, List[int]] = {}
        self.calls: List[Tuple[Any, ...]] = []
        self.autoupdate_calls: List[Tuple[List[int], RecomputeOptions]] = []
        self.messages: List[str] = []
        self.console_lines: List[str] = []

    def add(self, element: BeamElement) -> None:
        self.elements[element.elem_id] = element

    def _element(self, elem_id: int) -> BeamElement:
        if elem_id in self.fail_on_read:
            raise HostError(f"Cannot read attributes of element {elem_id}")
        try:
            return self.elements[elem_id]
        except KeyError:
            raise HostError(f"Element {elem_id} does not exist") from None

    # --- Queries --------------------------------------------------------------
    def beam_element_ids(self) -> List[int]:
        return sorted(self.elements)

    def get_offset_type(self, elem_id: int) -> Any:
        return self._element(elem_id).offset_type

    def get_offset(self, elem_id: int, end: OffsetEnd) -> Any:
        element = self._element(elem_id)
        return element.offset_a if end is OffsetEnd.A else element.offset_b

    # --- Marks ----------------------------------------------------------------
    def create_mark(self, elem_ids: Iterable[int]) -> int:
        ids = list(elem_ids)
        unknown = [i for i in ids if i not in self.elements and i not in self.other_elements]
        if unknown:
            raise HostError(f"Cannot mark unknown elements: {unknown}")
        self.marks[DEFAULT_MARK] = ids
        self.calls.append(("createmark", DEFAULT_MARK, tuple(ids)))
        return DEFAULT_MARK

    def clear_mark(self, mark: int) -> None:
        self.marks.pop(mark, None)
        self.calls.append(("clearmark", mark))

    def _marked_ids(self, mark: int) -> List[int]:
        if mark not in self.marks:
            raise HostError(f"Mark {mark} is empty")
        return self.marks[mark]

    # --- Updates --------------------------------------------------------------
    def set_offset(self, mark: int, end: OffsetEnd, vector: Vector3) -> None:
        ids = self._marked_ids(mark)
        self.calls.append(("setvalue", mark, end.value, tuple(vector)))
        for elem_id in ids:
            element = self.elements[elem_id]
            if end is OffsetEnd.A:
                element.offset_a = tuple(vector)
            else:
                element.offset_b = tuple(vector)

    def autoupdate(self, mark: int, options: RecomputeOptions) -> None:
        ids = self._marked_ids(mark)
        self.calls.append(("autoupdate", mark, tuple(ids)))
        self.autoupdate_calls.append((list(ids), options))
        for elem_id in ids:
            self.elements[elem_id].offset_type = OffsetType.BOO.value
        logger.debug(f"Auto-updated {len(ids)} elements")

    # --- Output ---------------------------------------------------------------
    def user_message(self, text: str) -> None:
        self.messages.append(text)

    def console(self, text: str) -> None:
        self.console_lines.append(text)

    def write_count(self) -> int:
        """Number of bulk attribute writes issued so far."""
        return sum(1 for call in self.calls if call[0] == "setvalue")
