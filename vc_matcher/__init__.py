"""Presentation definition credential matching."""
