"""
Core domain models and pure functions for KVQ.

This module contains the command models and the form translation logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import Condition, Outcome, SetCommand
from .commands import InvalidCommandError, build_set_command, parse_condition, parse_expiry, split_elements

__all__ = [
    "Condition", "Outcome", "SetCommand",
    "InvalidCommandError", "build_set_command", "parse_condition", "parse_expiry", "split_elements",
]
