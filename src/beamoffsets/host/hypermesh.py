"""
HyperMesh Host Adapter
======================
Drives a live HyperMesh session through its Tcl command layer.

Why is this file needed?
------------------------
1. Translation: It converts the abstract `ElementHost` calls (read an offset,
   write a mark, auto-update) into the host's Tcl commands.
2. Isolation: It is the only module that knows the command syntax and the
   data names (`1dofft`, `offseta`, `offsetb`).

The commands are sent through an evaluator callable. Inside HyperWorks the
embedded `hw` module provides one (`hw.evalTcl`); tests pass a recorder.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional

from beamoffsets.config import BEAM_ELEMENT_CONFIG, DEFAULT_MARK, RecomputeOptions
from beamoffsets.errors import HostError, HostUnavailableError
from beamoffsets.host.base import ElementHost, OffsetEnd
from beamoffsets.model.element import Vector3

logger = logging.getLogger(__name__)

Evaluator = Callable[[str], Any]

OFFSET_TYPE_DATANAME = "1dofft"

_TCL_SPECIAL = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "$": "\\$",
    "[": "\\[",
    "]": "\\]",
})


def tcl_quote(text: str) -> str:
    """Quote free text as a single Tcl word with no substitutions."""
    return '"' + text.translate(_TCL_SPECIAL) + '"'


def format_vector(vector: Vector3) -> str:
    """Format an offset vector as a braced Tcl list, e.g. {1.0 2.0 0.0}."""
    return "{" + " ".join(repr(float(v)) for v in vector) + "}"


def parse_id_list(raw: Any) -> List[int]:
    """Parse the id list returned by hm_getmark."""
    if raw is None:
        return []
    text = str(raw).replace("{", " ").replace("}", " ")
    try:
        return [int(token) for token in text.split()]
    except ValueError as e:
        raise HostError(f"Unexpected element id list: {raw!r}") from e


class HyperMeshHost(ElementHost):
    def __init__(self, evaluate: Evaluator, mark: int = DEFAULT_MARK) -> None:
        self._evaluate = evaluate
        self.mark = mark

    @classmethod
    def from_session(cls) -> HyperMeshHost:
        """
        Bind to the running HyperWorks session.

        Raises:
            HostUnavailableError: If not running inside HyperWorks.
        """
        try:
            import hw  # Provided by the HyperWorks embedded interpreter
        except ImportError as e:
            raise HostUnavailableError(
                "The HyperWorks 'hw' module is not available; run this inside HyperMesh."
            ) from e
        logger.debug("Bound to HyperWorks session")
        return cls(hw.evalTcl)

    def run(self, command: str) -> Any:
        """Evaluate one Tcl command, translating host failures into HostError."""
        logger.debug(f"tcl: {command}")
        try:
            return self._evaluate(command)
        except HostError:
            raise
        except Exception as e:
            raise HostError(f"Host command failed: {command}: {e}") from e

    # --- Queries --------------------------------------------------------------
    def beam_element_ids(self) -> List[int]:
        self.run(f'*createmark elems {self.mark} "by config" {BEAM_ELEMENT_CONFIG}')
        try:
            return parse_id_list(self.run(f"hm_getmark elems {self.mark}"))
        finally:
            self.clear_mark(self.mark)

    def _get_value(self, elem_id: int, dataname: str) -> Any:
        return self.run(f"hm_getvalue elems id={int(elem_id)} dataname={dataname}")

    def get_offset_type(self, elem_id: int) -> Any:
        return self._get_value(elem_id, OFFSET_TYPE_DATANAME)

    def get_offset(self, elem_id: int, end: OffsetEnd) -> Any:
        return self._get_value(elem_id, end.value)

    # --- Marks ----------------------------------------------------------------
    def create_mark(self, elem_ids: Iterable[int]) -> int:
        ids = " ".join(str(int(i)) for i in elem_ids)
        if not ids:
            raise HostError("Refusing to create an empty element mark")
        self.run(f"*createmark elems {self.mark} {ids}")
        return self.mark

    def clear_mark(self, mark: int) -> None:
        self.run(f"*clearmark elems {mark}")

    # --- Updates --------------------------------------------------------------
    def set_offset(self, mark: int, end: OffsetEnd, vector: Vector3) -> None:
        self.run(f"*setvalue elems mark={mark} STATUS=2 {end.value}={format_vector(vector)}")

    def autoupdate(self, mark: int, options: RecomputeOptions) -> None:
        self.run(f"*autoupdate1delems mark={mark} {options.as_arguments()}")

    # --- Output ---------------------------------------------------------------
    def user_message(self, text: str) -> None:
        self.run(f"hm_usermessage {tcl_quote(text)}")

    def console(self, text: str) -> None:
        # The host console is the interpreter's stdout
        print(text)


def session_host(host: Optional[ElementHost] = None) -> ElementHost:
    """Return `host`, or bind to the running HyperWorks session."""
    return host if host is not None else HyperMeshHost.from_session()
