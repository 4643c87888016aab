"""
Analysis service: select adapter -> parse -> validate -> sample -> infer -> assemble.

Orchestrates the adapter registry, domain validators, field inference, and
result assembly. Each call is independent; the service holds only its clock
and adapter tuple. Uses structured logging (LogContext, get_logger("services.*")).
"""

from __future__ import annotations

from typing import AsyncIterable, Sequence
from uuid import uuid4

from data_profiler.adapters import SourceAdapter, TxtSourceAdapter, default_adapters
from data_profiler.adapters.base import ParsedSource
from data_profiler.domain.clock import Clock, SystemClock
from data_profiler.domain.inference import infer_fields
from data_profiler.domain.source import RawSource
from data_profiler.domain.types import AnalysisResult, ParseOptions
from data_profiler.domain.validators import (
    ensure_valid,
    validate_fixed_widths,
    validate_options,
)
from data_profiler.exceptions import UnsupportedFormatError, ValidationFailedError
from data_profiler.logging_config import LogContext, get_logger
from data_profiler.services.assembler import assemble_result, sample_records

logger = get_logger("services.analysis_service")


class AnalysisService:
    """Profiles one source per call. Uses clock for ``dateAnalyzed`` and an ordered adapter registry."""

    def __init__(
        self,
        clock: Clock | None = None,
        adapters: Sequence[SourceAdapter] | None = None,
    ):
        self._clock = clock or SystemClock()
        self._adapters = tuple(adapters) if adapters is not None else default_adapters()

    @property
    def adapters(self) -> tuple[SourceAdapter, ...]:
        return self._adapters

    def supports(self, file_name: str) -> bool:
        return any(a.supports(file_name) for a in self._adapters)

    def select_adapter(
        self, file_name: str | None = None, source_type: str | None = None
    ) -> SourceAdapter:
        """Adapter by explicit source type, else the first claiming the file name."""
        for adapter in self._adapters:
            if source_type is not None:
                if adapter.source_type == source_type:
                    return adapter
            elif file_name and adapter.supports(file_name):
                return adapter
        raise UnsupportedFormatError(source_type or file_name)

    def analyze(
        self,
        source: RawSource | str | bytes,
        options: ParseOptions | None = None,
    ) -> AnalysisResult:
        """Profile a fully materialized source.

        Raises:
            UnsupportedFormatError: no adapter for the file name / source type.
            InvalidFormatError, EmptySourceError, MissingRecordCollectionError:
                the adapter could not produce a matrix.
            ValidationFailedError: options, headers, or records are invalid.
        """
        options = options or ParseOptions()
        if not isinstance(source, RawSource):
            source = RawSource.of(source, file_name=options.file_name)
        file_name = options.file_name or source.file_name
        adapter = self.select_adapter(file_name, source.source_type)

        with LogContext.bind(
            run_id=str(uuid4()), file_name=file_name, source_type=adapter.source_type
        ):
            logger.info("analysis started", extra={"adapter": type(adapter).__name__})
            self._check_layout(options)
            parsed = adapter.parse(source, options)
            return self._profile(parsed, options, file_name)

    async def analyze_stream(
        self,
        chunks: AsyncIterable[bytes],
        options: ParseOptions | None = None,
    ) -> AnalysisResult:
        """Profile delimited/fixed-width text pushed as async byte chunks."""
        options = options or ParseOptions()
        adapter = self.select_adapter(options.file_name, None if options.file_name else "txt")
        if not isinstance(adapter, TxtSourceAdapter):
            raise UnsupportedFormatError(options.file_name)

        with LogContext.bind(
            run_id=str(uuid4()), file_name=options.file_name, source_type=adapter.source_type
        ):
            logger.info("stream analysis started", extra={"adapter": type(adapter).__name__})
            self._check_layout(options)
            parsed = await adapter.parse_stream(chunks, options)
            return self._profile(parsed, options, options.file_name)

    @staticmethod
    def _log_rejection(error: ValidationFailedError) -> None:
        logger.warning(
            "validation failed",
            extra={"error_codes": [err.code for err in error.errors]},
        )

    def _check_layout(self, options: ParseOptions) -> None:
        """Bad fixed widths leave nothing to parse; report the option problems up front."""
        if validate_fixed_widths(options.fixed_widths):
            error = ValidationFailedError(validate_options(options))
            self._log_rejection(error)
            raise error

    def _profile(
        self, parsed: ParsedSource, options: ParseOptions, file_name: str | None
    ) -> AnalysisResult:
        try:
            ensure_valid(options, parsed.headers, parsed.records)
        except ValidationFailedError as e:
            self._log_rejection(e)
            raise

        analyzed = sample_records(parsed.records, options.sample_size)
        fields = infer_fields(parsed.headers, analyzed, options)
        result = assemble_result(
            source_type=parsed.source_type,
            total_records=parsed.row_count,
            fields=fields,
            options=options,
            analyzed_at=self._clock.now_utc(),
            file_name=file_name,
        )
        logger.info(
            "analysis complete",
            extra={
                "total_records": result.total_records,
                "analyzed_records": len(analyzed),
                "field_count": len(fields),
            },
        )
        return result
