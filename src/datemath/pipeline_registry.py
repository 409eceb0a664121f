# src/datemath/pipeline_registry.py
from __future__ import annotations

from kedro.pipeline import Pipeline

from datemath.pipelines.business_days.pipeline import create_pipeline as business_days_pipeline


def register_pipelines() -> dict[str, Pipeline]:
    business_days = business_days_pipeline()

    pipelines = {
        "business_days": business_days,
    }
    pipelines["__default__"] = pipelines["business_days"]

    return pipelines
