"""HCV colocalization — threshold estimation and colocalization of 3D confocal stacks."""

__version__ = "0.1.0"
