import json
import logging

import pytest

from datemath.utils.io.paths import ProjectRootNotFoundError, project_root, resolve_in_project
from datemath.utils.jsonlog import JsonFormatter, build_logger


def test_project_root_walks_up_to_marker(tmp_path):
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert project_root(nested) == tmp_path.resolve()
    assert resolve_in_project("conf/base", nested) == tmp_path.resolve() / "conf/base"
    assert resolve_in_project(tmp_path / "x.csv", nested) == tmp_path / "x.csv"


def test_project_root_not_found(tmp_path):
    with pytest.raises(ProjectRootNotFoundError):
        project_root(tmp_path, marker="__no_such_marker__.toml")


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "counted %s", (3,), None)
    record.to_date = "2024-01-07"
    record.obj = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "counted 3"
    assert payload["level"] == "INFO"
    assert payload["to_date"] == "2024-01-07"
    assert payload["obj"].startswith("<object")
    assert "args" not in payload


def test_build_logger_writes_jsonl(tmp_path):
    log_path = tmp_path / "logs" / "run.jsonl"
    logger = build_logger("datemath_test_logger", log_path)
    logger.info("done", extra={"non_business_days": 2})
    for h in logger.handlers:
        h.flush()

    line = log_path.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["non_business_days"] == 2
    assert logger.propagate is False
