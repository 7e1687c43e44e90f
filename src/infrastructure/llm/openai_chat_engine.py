"""
OpenAI-compatible conversational engine - Infrastructure layer.

A ReAct style agent over the ``/chat/completions`` endpoint: it keeps the
conversation history in memory, lets the model call toolkit functions and
loops until the model answers without tool calls or the iteration limit
is reached.
"""

from __future__ import annotations

import json
import uuid
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

import httpx

from src.domain.entities.conversation import (
    ContentSegment,
    EngineEvent,
    EventType,
    SegmentKind,
    StreamOptions,
    TextSegment,
    ThinkingSegment,
    ToolResultSegment,
)
from src.domain.entities.errors import ConversationEngineError
from src.infrastructure.llm.toolkit import Toolkit
from src.shared import get_logger

logger = get_logger(__name__)

DEFAULT_SYSTEM_PROMPT = """You are CustomerServiceAgent, a support assistant that also watches \
the health of the platform API.

- When a message starts with a system status alert or recent monitor logs, \
use that context to explain the incident to the user.
- Use check_monitor_status, get_monitor_logs and is_api_healthy to inspect \
the monitored API before making claims about its stability.
- Use query_knowledge for questions about platform features, billing and \
terms of service, and answer from what it returns.
- Be concise and honest. If you do not know, say so."""

ITERATION_LIMIT_REPLY = (
    "I could not finish reasoning within {max_iters} steps. "
    "Please rephrase or narrow down the question."
)

_CALL_OPTIONS = StreamOptions(event_types=frozenset(EventType), incremental=False)


@dataclass
class ToolCall:
    """A function call requested by the model."""

    id: str = ""
    name: str = ""
    arguments: str = ""

    def to_message(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments or "{}"},
        }


@dataclass
class Completion:
    """One assistant message, assembled whole or from streamed deltas."""

    content: str = ""
    reasoning: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)

    @classmethod
    def from_message(cls, message: Dict[str, Any]) -> "Completion":
        calls = []
        for raw in message.get("tool_calls") or []:
            function = raw.get("function") or {}
            calls.append(
                ToolCall(
                    id=raw.get("id") or "",
                    name=function.get("name") or "",
                    arguments=function.get("arguments") or "",
                )
            )
        completion = cls(
            content=message.get("content") or "",
            reasoning=message.get("reasoning_content") or "",
            tool_calls=calls,
        )
        completion.assign_missing_ids()
        return completion

    def merge_tool_call_delta(self, delta: Dict[str, Any]) -> None:
        index = delta.get("index", len(self.tool_calls))
        while len(self.tool_calls) <= index:
            self.tool_calls.append(ToolCall())
        call = self.tool_calls[index]
        if delta.get("id"):
            call.id = delta["id"]
        function = delta.get("function") or {}
        if function.get("name"):
            call.name = function["name"]
        if function.get("arguments"):
            call.arguments += function["arguments"]

    def assign_missing_ids(self) -> None:
        for call in self.tool_calls:
            if not call.id:
                call.id = f"call_{uuid.uuid4().hex[:12]}"

    def segments(self) -> Tuple[ContentSegment, ...]:
        parts = []
        if self.reasoning:
            parts.append(ThinkingSegment(self.reasoning))
        if self.content:
            parts.append(TextSegment(self.content))
        return tuple(parts)

    def to_message(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": "assistant", "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [call.to_message() for call in self.tool_calls]
        return message


class OpenAIChatEngine:
    """Conversational engine backed by an OpenAI-compatible endpoint.

    One instance holds one conversation. Instances are cheap; the session
    registry builds one per case.

    Args:
        base_url: Endpoint root, e.g. ``http://localhost:11434/v1``.
        model_name: Model identifier sent with every completion request.
        api_key: Bearer token; omitted from requests when empty.
        toolkit: Functions offered to the model.
        stream: Request server-sent token streaming from the endpoint.
        max_iters: Upper bound on model calls per turn.
    """

    def __init__(
        self,
        base_url: str,
        model_name: str,
        api_key: Optional[str] = None,
        toolkit: Optional[Toolkit] = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        stream: bool = True,
        max_iters: int = 10,
        timeout: float = 60.0,
    ):
        if max_iters <= 0:
            raise ValueError("max_iters must be positive")
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.api_key = api_key
        self.toolkit = toolkit or Toolkit()
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.stream_enabled = stream
        self.max_iters = max_iters
        self.timeout = timeout
        self._history: List[Dict[str, Any]] = [
            {"role": "system", "content": system_prompt}
        ]

    @property
    def history(self) -> List[Dict[str, Any]]:
        return list(self._history)

    async def call(self, prompt: str) -> Optional[str]:
        reply: Optional[str] = None
        async for event in self._turn(prompt, _CALL_OPTIONS):
            if event.is_last:
                reply = "\n".join(
                    segment.text
                    for segment in event.segments
                    if segment.kind is SegmentKind.TEXT
                )
        return reply

    async def stream(
        self, prompt: str, options: StreamOptions
    ) -> AsyncIterator[EngineEvent]:
        async with aclosing(self._turn(prompt, options)) as events:
            async for event in events:
                if options.accepts(event.type):
                    yield event

    async def _turn(
        self, prompt: str, options: StreamOptions
    ) -> AsyncIterator[EngineEvent]:
        self._history.append({"role": "user", "content": prompt})
        incremental = options.incremental and self.stream_enabled

        for iteration in range(1, self.max_iters + 1):
            logger.debug("engine.iteration", iteration=iteration, model=self.model_name)
            if self.stream_enabled:
                completion = Completion()
                async for chunk in self._stream_completion(completion):
                    if incremental:
                        yield chunk
                completion.assign_missing_ids()
            else:
                completion = await self._complete()

            is_final = not completion.tool_calls
            if is_final:
                self._history.append(completion.to_message())
                if not incremental or options.include_reasoning_result:
                    yield EngineEvent(
                        EventType.REASONING, completion.segments(), is_last=True
                    )
                else:
                    yield EngineEvent(EventType.REASONING, (), is_last=True)
                return

            # An assistant step enters the history only with all its tool replies.
            outputs = [
                await self.toolkit.invoke(call.name, call.arguments)
                for call in completion.tool_calls
            ]
            self._history.append(completion.to_message())
            self._history.extend(
                {"role": "tool", "tool_call_id": call.id, "content": output}
                for call, output in zip(completion.tool_calls, outputs)
            )

            if not incremental:
                yield EngineEvent(EventType.REASONING, completion.segments())

            for call, output in zip(completion.tool_calls, outputs):
                yield EngineEvent(
                    EventType.TOOL_RESULT,
                    (
                        ToolResultSegment(
                            name=call.name,
                            output=(TextSegment(output),),
                            tool_call_id=call.id,
                        ),
                    ),
                )

        message = ITERATION_LIMIT_REPLY.format(max_iters=self.max_iters)
        logger.warning("engine.iteration_limit", max_iters=self.max_iters)
        self._history.append({"role": "assistant", "content": message})
        yield EngineEvent(EventType.OTHER, (TextSegment(message),), is_last=True)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _payload(self, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model_name,
            "messages": list(self._history),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "stream": stream,
        }
        if len(self.toolkit):
            payload["tools"] = self.toolkit.schemas()
            payload["tool_choice"] = "auto"
        return payload

    async def _complete(self) -> Completion:
        url = f"{self.base_url}/chat/completions"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url, headers=self._headers(), json=self._payload(stream=False)
                )
        except httpx.RequestError as exc:
            logger.error("engine.request.transport_error", url=url, error=str(exc))
            raise ConversationEngineError(
                f"LLM request failed: {exc}", details={"url": url}
            ) from exc

        if response.status_code >= 400:
            logger.error(
                "engine.request.http_error",
                url=url,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise ConversationEngineError(
                f"LLM endpoint returned HTTP {response.status_code}",
                details={"url": url, "body": response.text},
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ConversationEngineError(
                "LLM endpoint returned invalid JSON", details={"url": url}
            ) from exc

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise ConversationEngineError(
                "LLM endpoint returned no choices", details={"url": url}
            )
        return Completion.from_message(choices[0].get("message") or {})

    async def _stream_completion(
        self, completion: Completion
    ) -> AsyncIterator[EngineEvent]:
        """Stream one model call, yielding a REASONING event per delta.

        The deltas are also accumulated into ``completion``.
        """
        url = f"{self.base_url}/chat/completions"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                async with client.stream(
                    "POST",
                    url,
                    headers=self._headers(),
                    json=self._payload(stream=True),
                ) as response:
                    if response.status_code >= 400:
                        body = (await response.aread()).decode("utf-8", "replace")
                        logger.error(
                            "engine.stream.http_error",
                            url=url,
                            status_code=response.status_code,
                            response_text=body,
                        )
                        raise ConversationEngineError(
                            f"LLM endpoint returned HTTP {response.status_code}",
                            details={"url": url, "body": body},
                        )

                    async for line in response.aiter_lines():
                        if not line.startswith("data:"):
                            continue
                        data = line[len("data:"):].strip()
                        if data == "[DONE]":
                            break
                        event = self._apply_chunk(completion, data)
                        if event is not None:
                            yield event
        except httpx.RequestError as exc:
            logger.error("engine.stream.transport_error", url=url, error=str(exc))
            raise ConversationEngineError(
                f"LLM request failed: {exc}", details={"url": url}
            ) from exc

    @staticmethod
    def _apply_chunk(completion: Completion, data: str) -> Optional[EngineEvent]:
        try:
            chunk = json.loads(data)
        except ValueError:
            logger.warning("engine.stream.bad_chunk", data=data[:200])
            return None

        choices = chunk.get("choices") if isinstance(chunk, dict) else None
        if not choices:
            return None
        delta = choices[0].get("delta") or {}

        segments = []
        reasoning = delta.get("reasoning_content")
        if reasoning:
            completion.reasoning += reasoning
            segments.append(ThinkingSegment(reasoning))
        content = delta.get("content")
        if content:
            completion.content += content
            segments.append(TextSegment(content))
        for tool_delta in delta.get("tool_calls") or []:
            completion.merge_tool_call_delta(tool_delta)

        if not segments:
            return None
        return EngineEvent(EventType.REASONING, tuple(segments))
