"""Filesystem-facing collaborators: tag readers and library enumeration."""
