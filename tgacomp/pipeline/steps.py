from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..errors import PipelineError
from .operations import DEFAULT_REGISTRY, OperationRegistry

DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "default_pipeline.json"
REFERENCE_PREFIX = "@"


def is_reference(value: str) -> bool:
    return value.startswith(REFERENCE_PREFIX)


@dataclass(frozen=True)
class PipelineStep:
    """One operation applied to file or step-reference inputs."""

    name: str
    operation: str
    inputs: List[str]
    output: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], index: int) -> "PipelineStep":
        if not isinstance(raw, Mapping):
            raise PipelineError(f"Step {index} must be an object")
        if "operation" not in raw:
            raise PipelineError(f"Step {index} has no 'operation'")
        if not isinstance(raw["operation"], str):
            raise PipelineError(f"Step {index} 'operation' must be a string")
        params = raw.get("params") or {}
        if not isinstance(params, Mapping):
            raise PipelineError(f"Step {index} 'params' must be an object")
        inputs = raw.get("inputs", [])
        if not isinstance(inputs, list) or not all(isinstance(item, str) for item in inputs):
            raise PipelineError(f"Step {index} 'inputs' must be a list of strings")
        output = raw.get("output")
        name = raw.get("name")
        if not name:
            name = os.path.splitext(os.path.basename(output))[0] if output else f"step{index}"
        return cls(
            name=name,
            operation=raw["operation"],
            inputs=list(inputs),
            output=output,
            params=dict(params),
        )


class Pipeline:
    _cache: Dict[Path, "Pipeline"] = {}

    def __init__(self, steps: Iterable[PipelineStep], registry: OperationRegistry = DEFAULT_REGISTRY) -> None:
        self._steps = list(steps)
        self.registry = registry
        self.validate()

    @classmethod
    def from_data(cls, raw: Any, registry: OperationRegistry = DEFAULT_REGISTRY) -> "Pipeline":
        if isinstance(raw, Mapping):
            raw = raw.get("steps")
        if not isinstance(raw, list):
            raise PipelineError("Pipeline must be a list of steps or an object with a 'steps' list")
        return cls([PipelineStep.from_dict(item, index) for index, item in enumerate(raw, start=1)], registry)

    @classmethod
    def load(cls, path: Path = DATA_PATH) -> "Pipeline":
        key = Path(path).resolve()
        cached = cls._cache.get(key)
        if cached:
            return cached
        try:
            raw = json.loads(key.read_text(encoding="utf-8"))
        except OSError as exc:
            raise PipelineError(f"Cannot read pipeline {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise PipelineError(f"Invalid pipeline JSON in {path}: {exc}") from exc
        pipeline = cls.from_data(raw)
        cls._cache[key] = pipeline
        return pipeline

    @property
    def steps(self) -> List[PipelineStep]:
        return list(self._steps)

    def get(self, name: str) -> Optional[PipelineStep]:
        for step in self._steps:
            if step.name == name:
                return step
        return None

    def validate(self) -> None:
        """Check operations, arities, params and that references point backwards."""
        seen = set()
        for step in self._steps:
            if step.name in seen:
                raise PipelineError(f"Duplicate step name '{step.name}'")
            self.registry.get(step.operation).check(step.inputs, step.params)
            for item in step.inputs:
                if is_reference(item) and item[len(REFERENCE_PREFIX) :] not in seen:
                    raise PipelineError(f"Step '{step.name}' references unknown or later step '{item}'")
            seen.add(step.name)
