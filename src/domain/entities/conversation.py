"""
Conversation domain entities.

Types exchanged with the conversational engine: typed content segments,
the events an engine emits while it works on a turn, the options that
select which events are emitted, and the frames streamed to clients.

Content segments form a closed set. Each variant carries a fixed
``kind`` discriminator so consumers branch on ``segment.kind`` rather
than on the runtime class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union


class SegmentKind(str, Enum):
    TEXT = "text"
    THINKING = "thinking"
    TOOL_RESULT = "tool_result"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


MEDIA_KINDS = frozenset({SegmentKind.IMAGE, SegmentKind.AUDIO, SegmentKind.VIDEO})


@dataclass(frozen=True, slots=True)
class TextSegment:
    text: str
    kind: SegmentKind = field(default=SegmentKind.TEXT, init=False)


@dataclass(frozen=True, slots=True)
class ThinkingSegment:
    thinking: str
    kind: SegmentKind = field(default=SegmentKind.THINKING, init=False)


@dataclass(frozen=True, slots=True)
class MediaSegment:
    """Non-text payload referenced by its source (URL, path or data URI)."""

    kind: SegmentKind
    source: str

    def __post_init__(self) -> None:
        if self.kind not in MEDIA_KINDS:
            raise ValueError(f"{self.kind} is not a media segment kind")


@dataclass(frozen=True, slots=True)
class ToolResultSegment:
    """Output of one tool invocation, itself made of content segments."""

    name: str
    output: Tuple["ContentSegment", ...] = ()
    tool_call_id: Optional[str] = None
    kind: SegmentKind = field(default=SegmentKind.TOOL_RESULT, init=False)


ContentSegment = Union[TextSegment, ThinkingSegment, MediaSegment, ToolResultSegment]


class EventType(str, Enum):
    """Tag of an engine event."""

    REASONING = "reasoning"
    TOOL_RESULT = "tool_result"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class EngineEvent:
    """One unit of progress reported by the engine during a turn."""

    type: EventType
    segments: Tuple[ContentSegment, ...] = ()
    is_last: bool = False


@dataclass(frozen=True, slots=True)
class StreamOptions:
    """Selects which events an engine emits while streaming a turn.

    Attributes:
        event_types: Event tags to emit; others are suppressed.
        incremental: Emit partial reasoning chunks as they arrive instead
            of one event per completed reasoning step.
        include_reasoning_result: In incremental mode, also emit the
            completed reasoning message after its chunks.
    """

    event_types: FrozenSet[EventType] = frozenset(
        {EventType.REASONING, EventType.TOOL_RESULT}
    )
    incremental: bool = True
    include_reasoning_result: bool = False

    def accepts(self, event_type: EventType) -> bool:
        return event_type in self.event_types


class FrameKind(str, Enum):
    REASONING = "reasoning"
    TOOL_RESULT = "tool_result"
    CONTENT = "content"


@dataclass(frozen=True, slots=True)
class Frame:
    """One externally deliverable unit of streamed output.

    ``data`` is already JSON encoded. Frames with empty data are never
    delivered.
    """

    kind: FrameKind
    data: Optional[str]

    @property
    def is_empty(self) -> bool:
        return not self.data

    def to_sse(self) -> str:
        return f"event: {self.kind.value}\ndata: {self.data}\n\n"
