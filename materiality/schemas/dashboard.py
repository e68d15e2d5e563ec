"""Schemas for the assessment summary dashboard."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RoadmapEntry(BaseModel):
    """Disclosure metrics owed for one material topic."""

    topic_id: str
    topic_name: str
    industry_code: str
    metrics: list[str]


class MaterialTopicSummary(BaseModel):
    topic_id: str
    topic_name: str
    magnitude: str
    likelihood: str
    horizon: str


class DashboardSummary(BaseModel):
    """Derived statistics for the topics in scope."""

    total_topics: int
    material_count: int
    omitted_count: int = Field(..., description="Everything not material, undecided included")
    undecided_count: int = Field(..., description="Subset of omitted_count with no decision yet")
    matrix: dict[str, dict[str, int]] = Field(
        ..., description="matrix[magnitude][likelihood] -> count of material topics"
    )
    material_topics: list[MaterialTopicSummary]
    disclosure_roadmap: list[RoadmapEntry]
    total_metrics: int
