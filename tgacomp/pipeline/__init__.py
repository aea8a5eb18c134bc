from .operations import DEFAULT_REGISTRY, Operation, OperationRegistry
from .runner import PipelineRunner, RunSettings, StepResult, run_pipeline
from .steps import DATA_PATH, Pipeline, PipelineStep

__all__ = [
    "DATA_PATH",
    "DEFAULT_REGISTRY",
    "Operation",
    "OperationRegistry",
    "Pipeline",
    "PipelineRunner",
    "PipelineStep",
    "run_pipeline",
    "RunSettings",
    "StepResult",
]
