import pytest

from beamoffsets.host.memory import InMemoryHost
from beamoffsets.model.element import BeamElement


@pytest.fixture
def three_beam_host() -> InMemoryHost:
    """One BGG beam, one BOO beam and one beam with an unset OFFT."""
    return InMemoryHost([
        BeamElement(1, "BGG", (1.0, 0.0, 2.0), (1.0, 0.0, 2.0)),
        BeamElement(2, "BOO", (5.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
        BeamElement(3, "", (0.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
    ])
