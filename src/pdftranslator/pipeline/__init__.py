"""Translation pipeline: run context, stage orchestration and housekeeping."""

from .context import PipelineResult, RunContext, Stage, TranslationRequest
from .housekeeping import cleanup_run, sweep_expired
from .orchestrator import PdfTranslationPipeline, translate_pdf

__all__ = [
    "PdfTranslationPipeline",
    "PipelineResult",
    "RunContext",
    "Stage",
    "TranslationRequest",
    "cleanup_run",
    "sweep_expired",
    "translate_pdf",
]
