from __future__ import annotations

from kedro.pipeline import Pipeline, node

from datemath.pipelines.business_days.nodes import (
    build_date_ranges_trusted,
    compute_non_business_days,
    normalize_db_intervals,
    validate_business_days,
)


def create_pipeline(**kwargs) -> Pipeline:
    return Pipeline(
        [
            node(
                func=build_date_ranges_trusted,
                inputs=["raw_date_ranges", "params:business_days"],
                outputs="trusted_date_ranges",
                name="trusted_build_date_ranges",
            ),
            node(
                func=compute_non_business_days,
                inputs=["trusted_date_ranges", "params:business_days"],
                outputs="business_days__pre",
                name="compute_non_business_days",
            ),
            node(
                func=validate_business_days,
                inputs="business_days__pre",
                outputs="business_days",
                name="validate_business_days",
            ),
            node(
                func=normalize_db_intervals,
                inputs=["raw_db_intervals", "params:business_days"],
                outputs="db_intervals_normalized",
                name="normalize_db_intervals",
            ),
        ]
    )
