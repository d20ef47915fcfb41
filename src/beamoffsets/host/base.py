"""
Host Capability Interface
=========================
The few operations the correction logic needs from the application that owns
the model.

Why is this file needed?
------------------------
1. Decoupling: Transform, grouping and analysis never issue host commands
   themselves; they call an `ElementHost`.
2. Resource handling: `ElementHost.marked` pairs every mark with its clear,
   also when the block raises.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import StrEnum
from typing import Any, Iterable, Iterator, List

from beamoffsets.config import RecomputeOptions
from beamoffsets.model.element import Vector3


class OffsetEnd(StrEnum):
    """Element end of an offset vector, named after the host data names."""
    A = "offseta"
    B = "offsetb"


class ElementHost(ABC):
    """
    Abstract capability interface of the application owning the model.

    Implementations raise `HostError` for any failed call.
    """

    @abstractmethod
    def beam_element_ids(self) -> List[int]:
        """Ids of all bar/beam elements in the model."""
        pass

    @abstractmethod
    def get_offset_type(self, elem_id: int) -> Any:
        """Raw OFFT value of an element (string, or 0 when unset)."""
        pass

    @abstractmethod
    def get_offset(self, elem_id: int, end: OffsetEnd) -> Any:
        """Raw offset vector of one element end."""
        pass

    @abstractmethod
    def create_mark(self, elem_ids: Iterable[int]) -> int:
        """Select elements into a mark and return the mark id."""
        pass

    @abstractmethod
    def clear_mark(self, mark: int) -> None:
        pass

    @abstractmethod
    def set_offset(self, mark: int, end: OffsetEnd, vector: Vector3) -> None:
        """Write the same offset vector to every element of the mark."""
        pass

    @abstractmethod
    def autoupdate(self, mark: int, options: RecomputeOptions) -> None:
        """Recompute orientation, offsets and OFFT of the marked elements."""
        pass

    @abstractmethod
    def user_message(self, text: str) -> None:
        """Transient status bar message."""
        pass

    @abstractmethod
    def console(self, text: str) -> None:
        """Line in the scripting console."""
        pass

    @contextmanager
    def marked(self, elem_ids: Iterable[int]) -> Iterator[int]:
        """Create a mark for the duration of the block and always clear it."""
        mark = self.create_mark(elem_ids)
        try:
            yield mark
        finally:
            self.clear_mark(mark)
