"""Processing pipelines for repo-hygiene."""

from repo_hygiene.pipelines.inspection import InspectionPipeline

__all__ = ["InspectionPipeline"]
