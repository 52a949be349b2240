"""LBX Toolkit - Extract files from SimTex LBX game archives."""

__version__ = "1.0.0"
