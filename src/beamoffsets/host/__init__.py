"""
Host Adapters
=============
Narrow capability interface to the application that owns the model.

Why is this package needed?
---------------------------
1. Isolation: The correction logic only talks to `ElementHost`, never to the
   host's command language directly.
2. Testability: `InMemoryHost` stands in for the application in tests, while
   `HyperMeshHost` drives the real session.
"""
from beamoffsets.host.base import ElementHost, OffsetEnd
from beamoffsets.host.memory import InMemoryHost
from beamoffsets.host.hypermesh import HyperMeshHost

__all__ = ["ElementHost", "OffsetEnd", "InMemoryHost", "HyperMeshHost"]
