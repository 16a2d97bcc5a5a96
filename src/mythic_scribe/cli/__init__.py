"""Inspection CLI for mythic-scribe."""
