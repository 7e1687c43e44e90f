"""Conversational engine and agent tools."""

from .openai_chat_engine import Completion, OpenAIChatEngine, ToolCall
from .toolkit import Tool, Toolkit, build_monitor_toolkit, wrap_tool_output

__all__ = [
    "Completion",
    "OpenAIChatEngine",
    "Tool",
    "ToolCall",
    "Toolkit",
    "build_monitor_toolkit",
    "wrap_tool_output",
]
