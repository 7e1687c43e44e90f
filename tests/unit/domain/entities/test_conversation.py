from __future__ import annotations

import pytest

from src.domain.entities.conversation import (
    EventType,
    Frame,
    FrameKind,
    MediaSegment,
    SegmentKind,
    StreamOptions,
    TextSegment,
    ThinkingSegment,
    ToolResultSegment,
)


def test_segments_carry_fixed_kind() -> None:
    assert TextSegment("a").kind is SegmentKind.TEXT
    assert ThinkingSegment("b").kind is SegmentKind.THINKING
    assert ToolResultSegment(name="t").kind is SegmentKind.TOOL_RESULT


def test_media_segment_rejects_non_media_kind() -> None:
    assert MediaSegment(SegmentKind.IMAGE, "http://x/img.png").source.endswith(".png")
    with pytest.raises(ValueError):
        MediaSegment(SegmentKind.TEXT, "nope")


def test_stream_options_defaults_accept_reasoning_and_tools() -> None:
    options = StreamOptions()
    assert options.incremental is True
    assert options.accepts(EventType.REASONING)
    assert options.accepts(EventType.TOOL_RESULT)
    assert not options.accepts(EventType.OTHER)


def test_frame_to_sse_and_emptiness() -> None:
    frame = Frame(FrameKind.CONTENT, '"hello"')
    assert frame.to_sse() == 'event: content\ndata: "hello"\n\n'
    assert not frame.is_empty
    assert Frame(FrameKind.REASONING, "").is_empty
    assert Frame(FrameKind.REASONING, None).is_empty
