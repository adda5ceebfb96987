"""Stackview CLI."""
