"""Domain port for the conversational engine."""

from __future__ import annotations

from typing import AsyncGenerator, Callable, Optional, Protocol

from src.domain.entities.conversation import EngineEvent, StreamOptions


class IConversationalEngine(Protocol):
    """A stateful conversation partner that reasons and calls tools.

    One instance holds one conversation's memory; the session registry
    keeps one instance per case.
    """

    async def call(self, prompt: str) -> Optional[str]:
        """Run a full turn and return the final reply text."""
        ...

    def stream(
        self, prompt: str, options: StreamOptions
    ) -> AsyncGenerator[EngineEvent, None]:
        """Run a full turn, yielding events as they are produced.

        Closing the generator aborts the turn and any upstream request.
        """
        ...


EngineFactory = Callable[[], IConversationalEngine]
