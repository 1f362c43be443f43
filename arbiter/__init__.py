"""Arbiter: compile dependency-based workflow definitions into Oozie workflows."""

__version__ = "0.1.0"
