"""Schemas for SASB reference data — industries and topics."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Industry(BaseModel):
    """A SASB industry."""

    model_config = {"frozen": True}

    code: str = Field(..., description="SASB industry code e.g. TC-SI")
    name: str
    sector: str


class Topic(BaseModel):
    """An assessable disclosure topic belonging to one industry."""

    model_config = {"frozen": True}

    id: str
    industry_code: str
    name: str
    description: str
    associated_metrics: tuple[str, ...] = ()


class TopicScopeResponse(BaseModel):
    """Topics in scope for a set of industries."""

    industry_codes: list[str]
    total_topics: int
    topics: list[Topic]
