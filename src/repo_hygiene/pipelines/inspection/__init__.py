from repo_hygiene.pipelines.inspection.pipeline import InspectionPipeline

__all__ = ["InspectionPipeline"]
