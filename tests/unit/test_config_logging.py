import json
import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path

from objtasks.utils.config import LogLevel, Settings, get_settings
from objtasks.utils.logger import (
    attach_file_logger,
    bind,
    detach_file_logger,
    get_logger,
    log_with_context,
    unbind,
)

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_settings_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("JSON_INDENT", "4")
    monkeypatch.setenv("RECIPES_DIR", str(tmp_path / "r"))
    s = Settings()
    assert s.LOG_LEVEL is LogLevel.DEBUG
    assert s.JSON_INDENT == 4
    assert s.RECIPES_DIR == tmp_path / "r"


def test_relative_paths_made_absolute(monkeypatch):
    monkeypatch.setenv("LOG_FILE", "logs/out.log")
    s = Settings()
    assert s.LOG_FILE.is_absolute()
    assert s.LOG_FILE.name == "out.log"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_file_logger_writes_json_with_bound_context(tmp_path: Path):
    path = tmp_path / "logs" / "run.log"
    handler = attach_file_logger(path, level=logging.INFO)
    bind(recipe_file="demo.yaml")
    try:
        get_logger("objtasks.test").info("hello")
    finally:
        unbind("recipe_file")
        detach_file_logger(handler)

    record = json.loads(path.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["msg"] == "hello"
    assert record["level"] == "INFO"
    assert record["recipe_file"] == "demo.yaml"


def test_get_logger_keeps_outside_names_under_package():
    assert get_logger("__main__").logger.name == "objtasks.__main__"
    assert get_logger("objtasks.cli").logger.name == "objtasks.cli"
    assert get_logger().logger.name == "objtasks"


def test_log_with_context_merges_bound_and_scoped(tmp_path: Path):
    path = tmp_path / "scoped.log"
    handler = attach_file_logger(path, level=logging.INFO)
    bind(recipe_file="nav.yaml")
    try:
        scoped = log_with_context(get_logger("objtasks.test"), recipe="nav_link")
        scoped.info("rendering")
        get_logger("objtasks.test").info("plain")
    finally:
        unbind("recipe_file")
        detach_file_logger(handler)

    scoped_rec, plain_rec = [json.loads(l) for l in path.read_text(encoding="utf-8").strip().splitlines()]
    assert scoped_rec["recipe"] == "nav_link"
    assert scoped_rec["recipe_file"] == "nav.yaml"
    assert "recipe" not in plain_rec


def _run_validate_script(cwd: Path) -> str:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    env["COLUMNS"] = "200"
    for key in ("RECIPES_DIR", "LOG_LEVEL", "LOG_TO_FILE"):
        env.pop(key, None)
    proc = subprocess.run(
        [sys.executable, str(REPO_ROOT / "scripts" / "validate_recipes.py")],
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert proc.returncode == 0, proc.stderr
    return proc.stdout + proc.stderr


def test_validate_script_reports_count(tmp_path: Path):
    recipes = tmp_path / "recipes"
    recipes.mkdir()
    (recipes / "nav.yaml").write_text(
        textwrap.dedent(
            """
            name: one
            selector: {element: a}
            ---
            name: two
            selector: {id: main}
            """
        ),
        encoding="utf-8",
    )
    assert "Validated 2 recipe(s)." in _run_validate_script(tmp_path)


def test_validate_script_reports_missing_dir(tmp_path: Path):
    assert "No recipes directory found" in _run_validate_script(tmp_path)
