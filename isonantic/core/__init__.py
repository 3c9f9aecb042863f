"""Core infrastructure shared by every isonantic sub-package."""
