"""Beam offset correction for models converted from Abaqus to OptiStruct."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("beamoffsets")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
