"""Utility functions."""

from ._json_encoder import JsonEncoder

__all__ = ["JsonEncoder"]
