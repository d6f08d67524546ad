"""Utility helpers for the migration tool."""
