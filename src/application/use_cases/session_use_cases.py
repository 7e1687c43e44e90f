"""Use cases operating on conversation sessions."""

import structlog

from src.application.dtos.case_dto import SessionResetDTO
from src.application.services.session_registry import SessionRegistry
from src.domain.entities.errors import InvalidCaseRequestError

logger = structlog.get_logger(__name__)


class ResetSessionUseCase:
    """Drops the conversation memory of a case.

    Resetting an unknown case is not an error; the next request for it
    starts a fresh session either way.
    """

    def __init__(self, session_registry: SessionRegistry) -> None:
        self._session_registry = session_registry

    async def execute(self, case_id: str) -> SessionResetDTO:
        if not case_id or not case_id.strip():
            raise InvalidCaseRequestError("case_id")
        self._session_registry.reset(case_id)
        return SessionResetDTO(
            status="success", message=f"Session {case_id} has been reset"
        )
