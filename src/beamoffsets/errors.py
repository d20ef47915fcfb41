"""Exception hierarchy for beam offset correction."""


class BeamOffsetError(Exception):
    """Base class for all errors raised by this package."""


class HostError(BeamOffsetError):
    """A host capability failed (command error, unknown element, missing attribute)."""


class HostUnavailableError(HostError):
    """The host scripting module is not importable in this interpreter."""


class OffsetParseError(BeamOffsetError, ValueError):
    """An offset vector or offset-type value could not be interpreted."""
