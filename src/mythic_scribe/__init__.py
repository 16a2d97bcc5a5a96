"""Mythic Scribe - semantic context resolution for MythicMobs-style YAML scripts."""

__version__ = "0.4.0"
