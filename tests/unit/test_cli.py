import io
import zipfile

import pytest
from aioresponses import aioresponses

from kb_export import cli
from kb_export.session import ConsolePrompter

BASE = "https://api.voiceflow.com/v1/knowledge-base"


def scripted_prompter(*answers):
    remaining = list(answers)

    def fake_input(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return ConsolePrompter(fake_input, io.StringIO())


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("KB_EXPORT_DIR", "KB_EXPORT_LOG_LEVEL", "KB_EXPORT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_main_success_exit_code_and_output(tmp_path):
    prompter = scripted_prompter("", "bad-key", "VF.DM.good")
    with aioresponses() as m:
        m.get(f"{BASE}/docs?page=1&limit=100", payload={"total": 1, "data": [
            {"documentID": "d1", "status": {"type": "SUCCESS"}, "data": {"type": "url", "name": "Intro"}},
        ]})
        m.get(f"{BASE}/docs/d1", payload={"chunks": [{"content": "hello"}]})
        code = cli.main(["--export-dir", str(tmp_path)], prompter=prompter)

    assert code == 0
    assert prompter.closed
    (run_dir,) = list(tmp_path.iterdir())
    assert (run_dir / "intro.txt").read_text() == "hello"
    (zip_path,) = list((run_dir / "zip").glob("exported_docs_*.zip"))
    with zipfile.ZipFile(zip_path) as zf:
        assert zf.namelist() == ["intro.txt"]


def test_main_custom_domain_used_for_requests(tmp_path):
    prompter = scripted_prompter("eu", "VF.DM.good")
    with aioresponses() as m:
        m.get("https://api.eu.voiceflow.com/v1/knowledge-base/docs?page=1&limit=100",
              payload={"total": 0, "data": []})
        code = cli.main(["--export-dir", str(tmp_path)], prompter=prompter)
    assert code == 0


def test_main_api_failure_returns_nonzero(tmp_path, capsys):
    prompter = scripted_prompter("", "VF.DM.good")
    with aioresponses() as m:
        m.get(f"{BASE}/docs?page=1&limit=100", status=403)
        code = cli.main(["--export-dir", str(tmp_path)], prompter=prompter)

    assert code == 1
    assert prompter.closed
    assert "HTTP 403" in capsys.readouterr().err


def test_main_end_of_input_returns_nonzero(tmp_path, capsys):
    prompter = scripted_prompter("")
    code = cli.main(["--export-dir", str(tmp_path)], prompter=prompter)
    assert code == 1
    assert prompter.closed
    assert "input ended" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


def test_main_invalid_env_config(monkeypatch, capsys):
    monkeypatch.setenv("KB_EXPORT_TIMEOUT", "soon")
    code = cli.main([], prompter=scripted_prompter())
    assert code == 2
    assert "KB_EXPORT_TIMEOUT" in capsys.readouterr().err


def test_parser_normalizes_log_level():
    args = cli.build_parser().parse_args(["--log-level", "debug"])
    assert args.log_level == "DEBUG"


@pytest.mark.parametrize("level, expected_format", [
    ("INFO", "%(message)s"),
    ("DEBUG", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
])
def test_setup_logging_writes_progress_to_stdout(monkeypatch, level, expected_format):
    import logging
    import sys

    from kb_export.config import ExportConfig

    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    cli.setup_logging(ExportConfig(log_level=level))

    assert captured["stream"] is sys.stdout
    assert captured["format"] == expected_format
    assert captured["level"] == getattr(logging, level)
