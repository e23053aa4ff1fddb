"""mediaconv - convert, crop, probe and preview media through external tools."""

__version__ = "0.1.0"
