from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..codec import Image, read_tga, write_tga
from ..errors import PipelineError
from ..rendering import save_preview
from .steps import REFERENCE_PREFIX, Pipeline, PipelineStep, is_reference

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_SUFFIX = ".png"


@dataclass
class RunSettings:
    base_dir: str = "."
    write_outputs: bool = True
    preview_dir: Optional[str] = None


@dataclass(frozen=True)
class StepResult:
    step: PipelineStep
    image: Image
    output_path: Optional[str]


class PipelineRunner:
    def __init__(self, pipeline: Pipeline, settings: Optional[RunSettings] = None) -> None:
        self.pipeline = pipeline
        self.settings = settings or RunSettings()
        self._files: Dict[str, Image] = {}

    def run(self) -> List[StepResult]:
        results: Dict[str, Image] = {}
        completed: List[StepResult] = []
        for step in self.pipeline.steps:
            images = [self._resolve_input(item, results) for item in step.inputs]
            operation = self.pipeline.registry.get(step.operation)
            logger.info("step %s: %s(%s)", step.name, step.operation, ", ".join(step.inputs))
            image = operation.apply(images, step.params)
            results[step.name] = image
            output_path = self._write_output(step, image)
            completed.append(StepResult(step, image, output_path))
        return completed

    def resolve_path(self, path: str) -> str:
        return os.path.join(self.settings.base_dir, path)

    def _resolve_input(self, item: str, results: Dict[str, Image]) -> Image:
        if is_reference(item):
            name = item[len(REFERENCE_PREFIX) :]
            if name not in results:
                raise PipelineError(f"No result named '{name}'")
            return results[name]
        path = self.resolve_path(item)
        cached = self._files.get(path)
        if cached is None:
            cached = read_tga(path)
            self._files[path] = cached
        return cached

    def _write_output(self, step: PipelineStep, image: Image) -> Optional[str]:
        if not step.output or not self.settings.write_outputs:
            return None
        path = self.resolve_path(step.output)
        write_tga(path, image)
        logger.info("wrote %s", path)
        if self.settings.preview_dir:
            stem = os.path.splitext(os.path.basename(step.output))[0]
            save_preview(image, os.path.join(self.settings.preview_dir, stem + DEFAULT_PREVIEW_SUFFIX))
        return path


def run_pipeline(pipeline: Pipeline, settings: Optional[RunSettings] = None) -> List[StepResult]:
    return PipelineRunner(pipeline, settings).run()
