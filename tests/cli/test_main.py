# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the shapegen CLI entry point."""

import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from shapegen.cli.main import main
from shapegen.logging import LOGGER_NAME

DATA_DIR = Path(__file__).parent.parent / "data"

# ###############
# Helpers
# ###############


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo the handlers the generate command installs on the package logger."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Run the CLI with *args* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["shapegen", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


def _write_model(path: Path, shapes: dict[str, object]) -> Path:
    path.write_text(json.dumps({"smithy": "2.0", "shapes": shapes}), encoding="utf-8")
    return path


# ###############
# Tests
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "generate" in capsys.readouterr().out


# -------- generate tests --------


def test_generate_writes_the_output_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """generate writes smithy-generated.rs into the output directory."""
    out = tmp_path / "out"
    assert _run(monkeypatch, "generate", str(DATA_DIR / "structures.json"), "--output-dir", str(out)) == 0
    generated = out / "smithy-generated.rs"
    assert generated.exists()
    text = generated.read_text(encoding="utf-8")
    assert text.startswith("use smithy4rs_core::")
    assert "pub struct S {" in text
    assert f"Wrote '{generated}'." in capsys.readouterr().out


def test_generate_defaults_to_the_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without --output-dir the file is written to the working directory."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(DATA_DIR / "structures.json")) == 0
    assert (tmp_path / "smithy-generated.rs").exists()


def test_generate_uses_the_settings_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings from --config change the output file name and drop doc comments."""
    config = tmp_path / "shapegen.yaml"
    config.write_text("output-file: types.rs\ndocumentation: false\n", encoding="utf-8")
    args = ["generate", str(DATA_DIR / "structures.json"), "--config", str(config), "--output-dir", str(tmp_path)]
    assert _run(monkeypatch, *args) == 0
    text = (tmp_path / "types.rs").read_text(encoding="utf-8")
    assert "///" not in text
    assert not (tmp_path / "smithy-generated.rs").exists()


def test_generate_fails_on_an_invalid_settings_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """An unknown setting is reported and nothing is written."""
    config = tmp_path / "shapegen.yaml"
    config.write_text("colour: blue\n", encoding="utf-8")
    args = ["generate", str(DATA_DIR / "structures.json"), "--config", str(config), "--output-dir", str(tmp_path)]
    assert _run(monkeypatch, *args) == 1
    assert "Error:" in capsys.readouterr().err
    assert not (tmp_path / "smithy-generated.rs").exists()


def test_generate_fails_on_a_missing_settings_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    args = ["generate", str(DATA_DIR / "structures.json"), "--config", str(tmp_path / "missing.yaml")]
    assert _run(monkeypatch, *args) == 1
    assert "Settings file not found" in capsys.readouterr().err


def test_generate_fails_on_an_unsupported_model(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """A model with an unsupported version is rejected."""
    assert _run(monkeypatch, "generate", str(DATA_DIR / "invalid_version.json"), "--output-dir", str(tmp_path)) == 1
    assert "unsupported model version" in capsys.readouterr().err


def test_generate_fails_on_an_unresolved_reference(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """Generation errors abort the run before any file is written."""
    model = _write_model(
        tmp_path / "model.json",
        {"com.test#S": {"type": "structure", "members": {"m": {"target": "com.test#Missing"}}}},
    )
    out = tmp_path / "out"
    assert _run(monkeypatch, "generate", str(model), "--output-dir", str(out)) == 1
    assert "Could not find shape 'com.test#Missing'" in capsys.readouterr().err
    assert not out.exists()


def test_generate_fails_on_an_empty_model(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    model = _write_model(tmp_path / "model.json", {})
    assert _run(monkeypatch, "generate", str(model), "--output-dir", str(tmp_path)) == 1
    assert "no shapes found in closure" in capsys.readouterr().err


def test_generate_fails_if_output_is_a_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert _run(monkeypatch, "generate", str(DATA_DIR / "structures.json"), "--output-dir", str(blocker)) == 1
    assert "is not a directory" in capsys.readouterr().err


def test_generate_reports_when_nothing_is_generated(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """A service without operations yields no files."""
    model = _write_model(tmp_path / "model.json", {"com.test#Empty": {"type": "service"}})
    assert _run(monkeypatch, "generate", str(model), "--output-dir", str(tmp_path / "out")) == 0
    assert "No shapes to generate." in capsys.readouterr().out


def test_generate_verbose_logs_to_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """--verbose with --log-file records debug output in the file."""
    log_file = tmp_path / "shapegen.log"
    args = ["generate", str(DATA_DIR / "structures.json"), "-v", "--log-file", str(log_file)]
    args += ["--output-dir", str(tmp_path)]
    assert _run(monkeypatch, *args) == 0
    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG" in text
    assert "Generated 1 file(s)" in text


# -------- closure tests --------


def test_closure_lists_top_level_shapes(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "closure", str(DATA_DIR / "structures.json")) == 0
    out = capsys.readouterr().out
    assert "Top-level shapes (6):" in out
    assert "  com.test#S (structure)" in out
    assert "  com.test#Name (string)" in out
    assert "Synthetic operations (5):" in out
    assert "  smithy.synthetic#SOperation" in out


def test_closure_of_a_service_model(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "closure", str(DATA_DIR / "operations.json")) == 0
    out = capsys.readouterr().out
    assert "Top-level shapes (1):\n  com.test#Shop (service)\n" in out
    assert "Synthetic operations (1):\n  com.test#GetItem\n" in out


def test_closure_fails_on_a_missing_model(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "closure", str(tmp_path / "missing.json")) == 1
    assert "Error:" in capsys.readouterr().err
