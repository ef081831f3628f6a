"""
Diagnostics route backed by the request pipeline.

`GET /test` runs the logging stage and then the echo stage, so a healthy
pipeline always answers `{"logged": true}`.
"""

from fastapi import APIRouter

from ...pipeline import diagnostics_pipeline

router = APIRouter(tags=["diagnostics"])

router.add_api_route(
    "/test",
    diagnostics_pipeline().as_endpoint(),
    methods=["GET"],
    name="diagnostics",
    include_in_schema=False,
)
