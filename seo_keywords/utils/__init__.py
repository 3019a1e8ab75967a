"""Shared helpers and validators."""
