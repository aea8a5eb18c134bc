from __future__ import annotations

import json

from conftest import solid
from tgacomp.cli import main


def test_list_operations(capsys):
    assert main(["--list-operations"]) == 0
    out = capsys.readouterr().out.split()
    assert "overlay" in out
    assert "quadrants" in out


def test_info(write_image, capsys):
    path = write_image("img.tga", solid(3, 2, (0, 0, 0)))
    assert main(["--info", path]) == 0
    out = capsys.readouterr().out
    assert "size: 3x2" in out
    assert "pixels: 6" in out


def test_info_missing_file(tmp_path, capsys):
    assert main(["--info", str(tmp_path / "missing.tga")]) == 2
    assert "missing.tga" in capsys.readouterr().err


def test_compare_exit_codes(write_image):
    a = write_image("a.tga", solid(1, 1, (1, 1, 1)))
    b = write_image("b.tga", solid(1, 1, (2, 1, 1)))
    assert main(["--compare", a, a]) == 0
    assert main(["--compare", a, b]) == 1


def test_run_pipeline_and_compare(tmp_path, write_image, capsys):
    write_image("input/in.tga", solid(2, 2, (7, 8, 9)))
    write_image("examples/EXAMPLE_out.tga", solid(2, 2, (7, 8, 9)))
    pipeline = tmp_path / "pipeline.json"
    pipeline.write_text(
        json.dumps([{"operation": "flip", "inputs": ["input/in.tga"], "output": "output/out.tga"}]),
        encoding="utf-8",
    )
    status = main([str(pipeline), "--base-dir", str(tmp_path), "--compare-dir", str(tmp_path / "examples")])
    assert status == 0
    assert "out:" in capsys.readouterr().out
    assert (tmp_path / "output" / "out.tga").is_file()


def test_base_dir_from_environment(tmp_path, write_image, monkeypatch):
    write_image("in.tga", solid(1, 1, (1, 1, 1)))
    pipeline = tmp_path / "pipeline.json"
    pipeline.write_text(json.dumps([{"operation": "flip", "inputs": ["in.tga"], "output": "out.tga"}]), encoding="utf-8")
    monkeypatch.setenv("TGACOMP_BASE_DIR", str(tmp_path))
    assert main([str(pipeline)]) == 0
    assert (tmp_path / "out.tga").is_file()


def test_default_pipeline_without_inputs_fails_cleanly(tmp_path):
    assert main(["--base-dir", str(tmp_path)]) == 2
