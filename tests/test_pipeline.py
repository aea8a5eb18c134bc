from __future__ import annotations

import json

import pytest

from conftest import solid
from tgacomp.codec import Pixel, read_tga
from tgacomp.errors import ImageIOError, PipelineError
from tgacomp.pipeline import DATA_PATH, DEFAULT_REGISTRY, Pipeline, PipelineRunner, RunSettings, run_pipeline


def test_default_pipeline_loads():
    pipeline = Pipeline.load(DATA_PATH)
    names = [step.name for step in pipeline.steps]
    assert names[0] == "part1"
    assert "extracredit" in names
    assert pipeline.get("part3").inputs[1] == "@part3_multiply"


def test_registry_lists_operations():
    assert "multiply" in DEFAULT_REGISTRY.names
    assert "tile" in DEFAULT_REGISTRY.names
    with pytest.raises(PipelineError):
        DEFAULT_REGISTRY.get("blur")


def test_step_name_defaults_to_output_stem():
    pipeline = Pipeline.from_data([{"operation": "flip", "inputs": ["a.tga"], "output": "out/flipped.tga"}])
    assert pipeline.steps[0].name == "flipped"


@pytest.mark.parametrize(
    "raw",
    [
        [{"operation": "blur", "inputs": ["a.tga"]}],
        [{"operation": "multiply", "inputs": ["a.tga"]}],
        [{"operation": "add_channel", "inputs": ["a.tga"], "params": {"channel": "red"}}],
        [{"operation": "flip", "inputs": ["@later"]}, {"name": "later", "operation": "flip", "inputs": ["a.tga"]}],
        [{"name": "x", "operation": "flip", "inputs": ["a.tga"]}, {"name": "x", "operation": "flip", "inputs": ["a.tga"]}],
        {"no_steps": []},
        [{"inputs": ["a.tga"]}],
        [{"operation": ["flip"], "inputs": ["a.tga"]}],
        [{"operation": "flip", "inputs": ["a.tga"], "params": ["channel", "red"]}],
        [{"operation": "extract_channel", "inputs": ["a.tga"], "params": {"channel": "alpha"}}],
        [{"operation": "add_channel", "inputs": ["a.tga"], "params": {"channel": "red", "amount": "lots"}}],
        [{"operation": "scale_channel", "inputs": ["a.tga"], "params": {"channel": "red", "factor": None}}],
        [{"operation": "set_channel", "inputs": ["a.tga"], "params": {"channel": "blue", "value": [0]}}],
    ],
)
def test_invalid_pipelines(raw):
    with pytest.raises(PipelineError):
        Pipeline.from_data(raw)


def test_run_chains_results(tmp_path, write_image):
    write_image("input/layer.tga", solid(2, 2, (100, 100, 100)))
    write_image("input/pattern.tga", solid(2, 2, (255, 255, 255)))
    write_image("input/text.tga", solid(2, 2, (0, 0, 0)))
    pipeline = Pipeline.from_data(
        {
            "steps": [
                {"name": "mul", "operation": "multiply", "inputs": ["input/layer.tga", "input/pattern.tga"]},
                {"operation": "screen", "inputs": ["input/text.tga", "@mul"], "output": "output/result.tga"},
            ]
        }
    )
    results = run_pipeline(pipeline, RunSettings(base_dir=str(tmp_path)))
    assert [result.step.name for result in results] == ["mul", "result"]
    assert results[0].output_path is None
    written = read_tga(str(tmp_path / "output" / "result.tga"))
    assert written.pixels == [Pixel.gray(100)] * 4


def test_run_without_writing(tmp_path, write_image):
    write_image("in.tga", solid(1, 1, (1, 2, 3)))
    pipeline = Pipeline.from_data([{"operation": "flip", "inputs": ["in.tga"], "output": "out.tga"}])
    results = PipelineRunner(pipeline, RunSettings(base_dir=str(tmp_path), write_outputs=False)).run()
    assert results[0].image.pixels == [Pixel(1, 2, 3)]
    assert not (tmp_path / "out.tga").exists()


def test_run_with_params_and_preview(tmp_path, write_image):
    write_image("car.tga", solid(2, 1, (10, 60, 70)))
    pipeline = Pipeline.from_data(
        [
            {
                "operation": "add_channel",
                "inputs": ["car.tga"],
                "output": "part6.tga",
                "params": {"channel": "green", "amount": 200},
            }
        ]
    )
    preview_dir = tmp_path / "previews"
    run_pipeline(pipeline, RunSettings(base_dir=str(tmp_path), preview_dir=str(preview_dir)))
    assert read_tga(str(tmp_path / "part6.tga")).pixels == [Pixel(10, 255, 70)] * 2
    assert (preview_dir / "part6.png").is_file()


def test_run_missing_input(tmp_path):
    pipeline = Pipeline.from_data([{"operation": "flip", "inputs": ["nope.tga"]}])
    with pytest.raises(ImageIOError):
        run_pipeline(pipeline, RunSettings(base_dir=str(tmp_path)))


def test_load_from_file(tmp_path):
    path = tmp_path / "pipeline.json"
    path.write_text(json.dumps([{"operation": "flip", "inputs": ["a.tga"]}]), encoding="utf-8")
    assert Pipeline.load(path).steps[0].operation == "flip"


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(PipelineError):
        Pipeline.load(path)


def test_bad_channel_is_rejected_before_any_output_is_written(tmp_path, write_image):
    write_image("in.tga", solid(1, 1, (1, 2, 3)))
    raw = [
        {"operation": "flip", "inputs": ["in.tga"], "output": "first.tga"},
        {"operation": "extract_channel", "inputs": ["@first"], "output": "second.tga", "params": {"channel": "alpha"}},
    ]
    with pytest.raises(PipelineError):
        run_pipeline(Pipeline.from_data(raw), RunSettings(base_dir=str(tmp_path)))
    assert not (tmp_path / "first.tga").exists()
