"""Structured event logging helpers."""
