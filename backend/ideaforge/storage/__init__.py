"""Persistence helpers for settings and documents."""
