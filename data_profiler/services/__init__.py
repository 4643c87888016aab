"""Services: analysis orchestration and result assembly."""

from data_profiler.services.analysis_service import AnalysisService
from data_profiler.services.assembler import assemble_result, sample_records

__all__ = ["AnalysisService", "assemble_result", "sample_records"]
