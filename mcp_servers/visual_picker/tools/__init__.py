"""
Picker tools.

- base: ToolError and session management
- picker: pick / resolve / highlight / verify_selector and the pick session state
"""

from .base import ToolError, get_session
from .picker import PickState, highlight, pick, resolve, verify_selector

__all__ = [
    "PickState",
    "ToolError",
    "get_session",
    "highlight",
    "pick",
    "resolve",
    "verify_selector",
]
