"""AWS adapters."""

from .cloudformation import StackClient
from .session import get_session

__all__ = ["StackClient", "get_session"]
