"""
Agent toolkit - Infrastructure layer.

Functions the conversational engine may call through OpenAI-style
function calling. Every tool answers with a JSON envelope
``{"__tool_name__": <name>, "result": <value>}``.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from src.domain.entities.monitor import LogEntry, MonitorSnapshot
from src.domain.ports.knowledge_base import IKnowledgeBase
from src.domain.services.monitor_state import MonitorState
from src.shared import get_logger

logger = get_logger(__name__)

NO_KNOWLEDGE_FOUND = "no relevant information found in the knowledge base"
_LOG_PREVIEW_LENGTH = 200


def wrap_tool_output(name: str, result: Any) -> str:
    return json.dumps(
        {"__tool_name__": name, "result": result}, ensure_ascii=False, default=str
    )


@dataclass(frozen=True)
class Tool:
    """A named function exposed to the model.

    ``handler`` is a blocking callable; the toolkit runs it in a worker
    thread so it never stalls the event loop.
    """

    name: str
    description: str
    handler: Callable[..., Any]
    parameters: Dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    def schema(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class Toolkit:
    """Registry and executor of the tools available to one engine."""

    def __init__(self, tools: Iterable[Tool] = ()):
        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def schemas(self) -> List[Dict[str, Any]]:
        return [tool.schema() for tool in self._tools.values()]

    async def invoke(
        self, name: str, arguments: Union[str, Dict[str, Any], None] = None
    ) -> str:
        """Run a tool and return its textual output.

        Failures are reported back to the model as an error string so the
        conversation can continue.
        """
        logger.info("engine.tool.invoke", tool=name, arguments=arguments)
        output = await self._run(name, arguments)
        logger.info(
            "engine.tool.result", tool=name, result=output[:_LOG_PREVIEW_LENGTH]
        )
        return output

    async def _run(
        self, name: str, arguments: Union[str, Dict[str, Any], None]
    ) -> str:
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("engine.tool.unknown", tool=name)
            return f"Error: unknown tool '{name}'"

        try:
            kwargs = self._parse_arguments(arguments)
        except ValueError as exc:
            logger.warning("engine.tool.bad_arguments", tool=name, error=str(exc))
            return f"Error: invalid arguments for tool '{name}': {exc}"

        try:
            result = await asyncio.to_thread(tool.handler, **kwargs)
        except Exception as exc:
            logger.error("engine.tool.failed", tool=name, error=str(exc), exc_info=exc)
            return f"Error: tool '{name}' failed: {exc}"
        return wrap_tool_output(name, result)

    @staticmethod
    def _parse_arguments(
        arguments: Union[str, Dict[str, Any], None]
    ) -> Dict[str, Any]:
        if arguments is None or arguments == "":
            return {}
        if isinstance(arguments, dict):
            return arguments
        parsed = json.loads(arguments)
        if not isinstance(parsed, dict):
            raise ValueError("arguments must be a JSON object")
        return parsed


def _snapshot_to_dict(snapshot: MonitorSnapshot) -> Dict[str, Any]:
    return {
        "status": snapshot.status,
        "response_time": snapshot.response_time,
        "healthy": snapshot.healthy,
        "error_count": snapshot.error_count,
        "last_check_time": snapshot.last_check_time.isoformat(),
    }


def _log_to_dict(entry: LogEntry) -> Dict[str, Optional[str]]:
    return {"timestamp": entry.timestamp, "status": entry.status, "msg": entry.message}


def build_monitor_toolkit(
    monitor_state: MonitorState, knowledge_base: IKnowledgeBase
) -> Toolkit:
    """Tools reading the shared monitor state and the knowledge base."""

    def check_monitor_status() -> Dict[str, Any]:
        return _snapshot_to_dict(monitor_state.current_snapshot())

    def get_monitor_logs() -> List[Dict[str, Optional[str]]]:
        return [_log_to_dict(entry) for entry in monitor_state.recent_logs()]

    def is_api_healthy() -> bool:
        return monitor_state.current_snapshot().healthy

    def query_knowledge(query: str) -> str:
        documents = knowledge_base.search(query)
        if not documents:
            return NO_KNOWLEDGE_FOUND
        return "\n\n".join(documents).strip()

    return Toolkit(
        [
            Tool(
                name="check_monitor_status",
                description=(
                    "Get the current status of the monitored API: status code, "
                    "response time, health flag and error count."
                ),
                handler=check_monitor_status,
            ),
            Tool(
                name="get_monitor_logs",
                description=(
                    "Get recent monitor log entries (timestamp, status, message). "
                    "Use it to answer questions about service stability."
                ),
                handler=get_monitor_logs,
            ),
            Tool(
                name="is_api_healthy",
                description="Return true when the monitored API is currently healthy.",
                handler=is_api_healthy,
            ),
            Tool(
                name="query_knowledge",
                description=(
                    "Search the business knowledge base for platform features, "
                    "billing and terms of service."
                ),
                handler=query_knowledge,
                parameters={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Question or keywords to look up",
                        }
                    },
                    "required": ["query"],
                },
            ),
        ]
    )
