"""Puzzle bundle storage."""
