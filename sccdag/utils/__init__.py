"""Utility helpers for sccdag."""
