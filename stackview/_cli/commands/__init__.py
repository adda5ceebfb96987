"""Stackview command import aggregation."""

from ._demo import demo
from ._describe import describe
from ._terraform import terraform

__all__ = [
    "demo",
    "describe",
    "terraform",
]
