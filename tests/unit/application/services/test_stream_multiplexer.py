from __future__ import annotations

import json
from typing import AsyncIterator, List

import pytest

from src.application.services.stream_multiplexer import (
    NO_RESPONSE,
    NO_RESULT,
    StreamMultiplexer,
    extract_text_content,
    extract_tool_content,
    to_json_payload,
)
from src.domain.entities.conversation import (
    EngineEvent,
    EventType,
    Frame,
    FrameKind,
    MediaSegment,
    SegmentKind,
    TextSegment,
    ThinkingSegment,
    ToolResultSegment,
)
from tests.conftest import reasoning_event


async def _events(*events: EngineEvent) -> AsyncIterator[EngineEvent]:
    for event in events:
        yield event


async def _collect(events: AsyncIterator[EngineEvent]) -> List[Frame]:
    return [frame async for frame in StreamMultiplexer().translate(events)]


def _tool_event(name: str, output: str) -> EngineEvent:
    return EngineEvent(
        EventType.TOOL_RESULT,
        (ToolResultSegment(name=name, output=(TextSegment(output),)),),
    )


def test_to_json_payload_escapes() -> None:
    assert to_json_payload('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert to_json_payload("café") == '"café"'
    assert to_json_payload(None) is None


def _failing_dumps(*args, **kwargs):
    raise TypeError("encoder unavailable")


def test_reasoning_frames_fall_back_to_manual_escaping(monkeypatch) -> None:
    monkeypatch.setattr(
        "src.application.services.stream_multiplexer.json.dumps", _failing_dumps
    )

    frames = StreamMultiplexer().translate_event(
        reasoning_event(text="line \"one\"\nC:\\tmp", thinking="plan\r")
    )

    assert frames == [
        Frame(FrameKind.REASONING, '"plan\\r"'),
        Frame(FrameKind.CONTENT, '"line \\"one\\"\\nC:\\\\tmp"'),
    ]


def test_tool_result_frame_survives_serialization_failure(monkeypatch) -> None:
    monkeypatch.setattr(
        "src.application.services.stream_multiplexer.json.dumps", _failing_dumps
    )

    frames = StreamMultiplexer().translate_event(
        _tool_event("query_knowledge", "plain text answer")
    )

    assert frames == [
        Frame(
            FrameKind.TOOL_RESULT,
            '{"toolName":"unknown","content":"[Error serializing result]"}',
        )
    ]


def test_extract_text_content_orders_thinking_first() -> None:
    segments = (TextSegment("answer"), ThinkingSegment("plan"))
    assert extract_text_content(segments) == "plan\n\nanswer"
    assert extract_text_content(()) == NO_RESPONSE


def test_extract_tool_content_unwraps_envelope() -> None:
    output = json.dumps({"__tool_name__": "check_monitor_status", "result": {"healthy": False}})
    segment = ToolResultSegment(name="check_monitor_status", output=(TextSegment(output),))

    payload = json.loads(extract_tool_content((segment,)))

    assert payload["toolName"] == "check_monitor_status"
    assert json.loads(payload["content"]) == {"healthy": False}


def test_extract_tool_content_null_result() -> None:
    output = json.dumps({"tool_name": "lookup", "result": None})
    segment = ToolResultSegment(name="other", output=(TextSegment(output),))

    payload = json.loads(extract_tool_content((segment,)))

    assert payload == {"toolName": "lookup", "content": NO_RESULT}


def test_extract_tool_content_plain_text() -> None:
    segment = ToolResultSegment(name="query_knowledge", output=(TextSegment("Plans: Basic"),))
    payload = json.loads(extract_tool_content((segment,)))
    assert payload == {"toolName": "query_knowledge", "content": "Plans: Basic"}


def test_extract_tool_content_empty_output_and_media() -> None:
    empty = json.loads(extract_tool_content((ToolResultSegment(name="t"),)))
    assert empty == {"toolName": "t", "content": NO_RESPONSE}

    media = ToolResultSegment(
        name="snap",
        output=(MediaSegment(SegmentKind.IMAGE, "http://img/1.png"),),
    )
    rendered = json.loads(extract_tool_content((media,)))
    assert rendered["content"] == "[Image: http://img/1.png]"


@pytest.mark.asyncio
async def test_reasoning_event_splits_thinking_and_text() -> None:
    frames = await _collect(
        _events(reasoning_event(text="Hello", thinking="Checking status"))
    )

    assert frames == [
        Frame(FrameKind.REASONING, '"Checking status"'),
        Frame(FrameKind.CONTENT, '"Hello"'),
    ]


@pytest.mark.asyncio
async def test_empty_frames_are_dropped() -> None:
    frames = await _collect(_events(reasoning_event(is_last=True)))
    assert frames == []


@pytest.mark.asyncio
async def test_frame_order_follows_event_order() -> None:
    frames = await _collect(
        _events(
            reasoning_event(thinking="first"),
            _tool_event("is_api_healthy", '{"__tool_name__": "is_api_healthy", "result": false}'),
            reasoning_event(text="done", is_last=True),
        )
    )

    assert [frame.kind for frame in frames] == [
        FrameKind.REASONING,
        FrameKind.TOOL_RESULT,
        FrameKind.CONTENT,
    ]
    assert json.loads(frames[1].data) == {"toolName": "is_api_healthy", "content": "false"}


@pytest.mark.asyncio
async def test_other_event_becomes_content() -> None:
    frames = await _collect(
        _events(EngineEvent(EventType.OTHER, (TextSegment("limit reached"),), is_last=True))
    )
    assert frames == [Frame(FrameKind.CONTENT, '"limit reached"')]


@pytest.mark.asyncio
async def test_frames_are_produced_before_stream_ends() -> None:
    emitted = []

    async def slow_events() -> AsyncIterator[EngineEvent]:
        emitted.append("first")
        yield reasoning_event(text="partial")
        emitted.append("second")
        yield reasoning_event(text="rest")

    frames = StreamMultiplexer().translate(slow_events())
    first = await frames.__anext__()

    assert first.data == '"partial"'
    assert emitted == ["first"]
    await frames.aclose()
