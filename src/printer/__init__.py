"""Printable puzzle sheets."""
