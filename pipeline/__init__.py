"""Pipeline execution modules for the recommendation engine."""

from .errors import PipelineError
from .runner import RecommendationPipeline, build_pipeline, run_pipeline

__all__ = ['PipelineError', 'RecommendationPipeline', 'build_pipeline', 'run_pipeline']
