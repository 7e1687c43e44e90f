"""
Stream Multiplexer - Application Layer

Translates the single event stream of one engine turn into typed frames
(reasoning, tool_result, content) ready to be delivered to a client.
Frames are produced as soon as their source event arrives and frames
with empty payloads are dropped.
"""

from __future__ import annotations

import json
from typing import Any, AsyncIterable, AsyncIterator, Dict, Iterable, List, Optional

from src.domain.entities.conversation import (
    ContentSegment,
    EngineEvent,
    EventType,
    Frame,
    FrameKind,
    SegmentKind,
)
from src.shared import get_logger

logger = get_logger(__name__)

NO_RESPONSE = "[No response]"
NO_RESULT = "[No result]"
TOOL_NAME_KEYS = ("tool_name", "__tool_name__")

_MEDIA_LABELS = {
    SegmentKind.IMAGE: "Image",
    SegmentKind.AUDIO: "Audio",
    SegmentKind.VIDEO: "Video",
}


def to_json_payload(content: Optional[str]) -> Optional[str]:
    """JSON-encode ``content`` as a string literal.

    Falls back to manual escaping when the encoder fails so that the
    frame is still delivered.
    """
    if content is None:
        return None
    try:
        return json.dumps(content, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.error("stream.serialize.failed", error=str(exc))
        escaped = (
            content.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
        )
        return f'"{escaped}"'


def join_segments(segments: Iterable[ContentSegment], kind: SegmentKind) -> str:
    parts: List[str] = []
    for segment in segments:
        if segment.kind is not kind:
            continue
        if segment.kind is SegmentKind.THINKING:
            parts.append(segment.thinking)
        elif segment.kind is SegmentKind.TEXT:
            parts.append(segment.text)
    return "\n".join(parts)


def extract_text_content(segments: Iterable[ContentSegment]) -> str:
    """Thinking then text, separated by a blank line, or a placeholder."""
    segments = list(segments)
    thinking = join_segments(segments, SegmentKind.THINKING)
    text = join_segments(segments, SegmentKind.TEXT)
    if thinking and text:
        return f"{thinking}\n\n{text}"
    return thinking or text or NO_RESPONSE


def render_output_segment(segment: ContentSegment) -> str:
    if segment.kind is SegmentKind.TEXT:
        return segment.text
    if segment.kind is SegmentKind.THINKING:
        return segment.thinking
    if segment.kind in _MEDIA_LABELS:
        return f"[{_MEDIA_LABELS[segment.kind]}: {segment.source}]"
    if segment.kind is SegmentKind.TOOL_RESULT:
        return "\n".join(render_output_segment(part) for part in segment.output)
    return str(segment)


def _unwrap_tool_output(name: Optional[str], combined: str) -> Dict[str, Any]:
    stripped = combined.strip()
    if not stripped.startswith(("{", "[")):
        return {"toolName": name, "content": combined}
    try:
        parsed = json.loads(stripped)
    except ValueError:
        return {"toolName": name, "content": combined}
    if not isinstance(parsed, dict) or "result" not in parsed:
        return {"toolName": name, "content": combined}

    tool_name = next((parsed[key] for key in TOOL_NAME_KEYS if key in parsed), None)
    if tool_name is None:
        return {"toolName": name, "content": combined}

    result = parsed["result"]
    if result is None:
        content = NO_RESULT
    else:
        content = json.dumps(result, ensure_ascii=False, indent=2)
    return {"toolName": tool_name, "content": content}


def extract_tool_content(segments: Iterable[ContentSegment]) -> str:
    """Render tool results as JSON ``{"toolName": ..., "content": ...}``.

    When an event carries several tool results the last one wins.
    """
    payload: Dict[str, Any] = {}
    for segment in segments:
        if segment.kind is not SegmentKind.TOOL_RESULT:
            continue
        if not segment.output:
            payload = {"toolName": segment.name, "content": NO_RESPONSE}
            continue
        combined = "\n".join(render_output_segment(part) for part in segment.output)
        payload = _unwrap_tool_output(segment.name, combined)

    try:
        return json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.error("stream.tool_result.serialize_failed", error=str(exc))
        return '{"toolName":"unknown","content":"[Error serializing result]"}'


class StreamMultiplexer:
    """Turns engine events into client frames, preserving order."""

    def translate_event(self, event: EngineEvent) -> List[Frame]:
        if event.type is EventType.TOOL_RESULT:
            return [
                Frame(FrameKind.TOOL_RESULT, extract_tool_content(event.segments))
            ]

        if event.type is EventType.REASONING:
            frames: List[Frame] = []
            thinking = join_segments(event.segments, SegmentKind.THINKING)
            text = join_segments(event.segments, SegmentKind.TEXT)
            if thinking:
                frames.append(Frame(FrameKind.REASONING, to_json_payload(thinking)))
            if text:
                frames.append(Frame(FrameKind.CONTENT, to_json_payload(text)))
            return frames

        return [
            Frame(
                FrameKind.CONTENT,
                to_json_payload(extract_text_content(event.segments)),
            )
        ]

    async def translate(
        self, events: AsyncIterable[EngineEvent]
    ) -> AsyncIterator[Frame]:
        async for event in events:
            for frame in self.translate_event(event):
                if frame.is_empty:
                    continue
                yield frame
