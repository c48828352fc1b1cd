"""Calculation and validation helpers."""
