from .context import RequestContext
from .dispatcher import Pipeline, PipelineError, Stage, Endpoint
from .stages import logging_stage, echo_logged, diagnostics_pipeline

__all__ = [
    "RequestContext",
    "Pipeline",
    "PipelineError",
    "Stage",
    "Endpoint",
    "logging_stage",
    "echo_logged",
    "diagnostics_pipeline",
]
