import logging

import pandas as pd

from datemath.hooks import DataObservabilityHooks
from datemath.pipeline_registry import register_pipelines
from datemath.pipelines.business_days.pipeline import create_pipeline


class FakeNode:
    def __init__(self, name: str):
        self.name = name


def test_business_days_pipeline_nodes():
    names = {n.name for n in create_pipeline().nodes}
    assert names == {
        "trusted_build_date_ranges",
        "compute_non_business_days",
        "validate_business_days",
        "normalize_db_intervals",
    }


def test_register_pipelines_default_is_business_days():
    pipelines = register_pipelines()
    assert set(pipelines) == {"business_days", "__default__"}
    assert {n.name for n in pipelines["__default__"].nodes} == {n.name for n in pipelines["business_days"].nodes}


def test_hooks_log_dataframe_outputs(caplog):
    hooks = DataObservabilityHooks()
    node = FakeNode("compute_non_business_days")
    df = pd.DataFrame({"non_business_days": [2, 4]})

    with caplog.at_level(logging.INFO, logger="datemath.hooks"):
        hooks.before_node_run(node=node, inputs={}, is_async=False)
        hooks.after_node_run(node=node, outputs={"business_days__pre": df, "other": 1}, inputs={})

    assert "Starting node: compute_non_business_days" in caplog.text
    assert "shape=(2, 1)" in caplog.text
    assert "total=6 max=4" in caplog.text


def test_hooks_warn_on_empty_output(caplog):
    hooks = DataObservabilityHooks()
    with caplog.at_level(logging.INFO, logger="datemath.hooks"):
        hooks.after_node_run(node=FakeNode("n"), outputs={"x": pd.DataFrame()}, inputs={})
    assert any(r.levelno == logging.WARNING and "EMPTY" in r.getMessage() for r in caplog.records)
