"""Pydantic models for API I/O."""

from .assignment import (
    AssignedPlayerResponse,
    AssignmentRequest,
    AssignmentResponse,
    FairnessResponse,
    OptimizationResponse,
    TeamResponse,
)
from .preview import MetricRangeResponse, PlayersPreviewResponse

__all__ = [
    "AssignedPlayerResponse",
    "AssignmentRequest",
    "AssignmentResponse",
    "FairnessResponse",
    "MetricRangeResponse",
    "OptimizationResponse",
    "PlayersPreviewResponse",
    "TeamResponse",
]
