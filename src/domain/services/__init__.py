"""Domain services package."""

from .alerting import AlertGate, AlertPolicy, needs_alert
from .monitor_state import MonitorState
from .prompt_builder import build_contextual_prompt

__all__ = [
    "AlertGate",
    "AlertPolicy",
    "MonitorState",
    "build_contextual_prompt",
    "needs_alert",
]
