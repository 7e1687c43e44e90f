"""
Application Use Cases - Batch Processing

Runs a file of cases through the non-streaming case pipeline and writes
the results next to it.
"""

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import ValidationError

from src.application.dtos.case_dto import BatchResultDTO, CaseRequestDTO, CaseResultDTO
from src.application.use_cases.process_case_use_case import ProcessCaseUseCase
from src.domain.entities.case import BatchSummary, CaseRequest, CaseResult
from src.domain.entities.errors import BatchProcessingError

logger = structlog.get_logger(__name__)


class ProcessBatchUseCase:
    """Processes every case of a JSON array file sequentially.

    The whole file is validated before the first case runs, so a malformed
    entry never leaves a batch half processed with alerts already fired.
    """

    def __init__(
        self,
        process_case_use_case: ProcessCaseUseCase,
        default_input_path: str,
        default_output_path: str,
    ) -> None:
        self._process_case = process_case_use_case
        self._default_input_path = default_input_path
        self._default_output_path = default_output_path

    async def execute(
        self,
        input_file: Optional[str] = None,
        output_file: Optional[str] = None,
    ) -> BatchResultDTO:
        input_path = Path(input_file or self._default_input_path)
        output_path = Path(output_file or self._default_output_path)

        cases = await asyncio.to_thread(self._read_cases, input_path)
        for case_request in cases:
            ProcessCaseUseCase.validate(case_request)

        logger.info("batch.start", input_file=str(input_path), total_cases=len(cases))
        results: List[CaseResult] = []
        for case_request in cases:
            results.append(await self._process_case.execute(case_request))

        await asyncio.to_thread(self._write_results, output_path, results)

        summary = BatchSummary.from_results(results)
        logger.info(
            "batch.complete",
            output_file=str(output_path),
            total_cases=summary.total_cases,
            successful_replies=summary.successful_replies,
            alerts_triggered=summary.alerts_triggered,
        )
        return BatchResultDTO.from_domain(summary, str(input_path), str(output_path))

    @staticmethod
    def _read_cases(path: Path) -> List[CaseRequest]:
        if not path.exists():
            logger.warning("batch.input.missing", input_file=str(path))
            return []

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise BatchProcessingError(
                f"Unable to read batch input {path}: {exc}",
                details={"input_file": str(path)},
            ) from exc

        if not isinstance(raw, list):
            raise BatchProcessingError(
                f"Batch input {path} must contain a JSON array",
                details={"input_file": str(path)},
            )

        try:
            return [CaseRequestDTO.model_validate(item).to_domain() for item in raw]
        except ValidationError as exc:
            raise BatchProcessingError(
                f"Invalid case in batch input {path}: {exc}",
                details={"input_file": str(path), "errors": exc.errors()},
            ) from exc

    @staticmethod
    def _write_results(path: Path, results: List[CaseResult]) -> None:
        payload = [
            CaseResultDTO.from_domain(result).model_dump(mode="json")
            for result in results
        ]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise BatchProcessingError(
                f"Unable to write batch output {path}: {exc}",
                details={"output_file": str(path)},
            ) from exc
