"""Reference data endpoints — industries, topics and default configuration."""

from __future__ import annotations

from fastapi import APIRouter, Query

from materiality.schemas.configuration import ThresholdConfiguration, default_configuration
from materiality.schemas.reference import Industry, TopicScopeResponse
from materiality.services import catalog

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/industries", response_model=list[Industry])
async def list_industries() -> list[Industry]:
    """List every SASB industry that can be selected."""
    return catalog.list_industries()


@router.get("/topics", response_model=TopicScopeResponse)
async def list_topics(
    industries: str = Query(default="", description="Comma-separated industry codes"),
) -> TopicScopeResponse:
    """List the topics in scope for a set of industries."""
    codes = [c.strip() for c in industries.split(",") if c.strip()]
    for code in codes:
        catalog.get_industry(code)

    topics = catalog.topics_for_industries(codes)
    return TopicScopeResponse(
        industry_codes=list(dict.fromkeys(codes)),
        total_topics=len(topics),
        topics=topics,
    )


@router.get("/config/default", response_model=ThresholdConfiguration)
async def get_default_configuration() -> ThresholdConfiguration:
    """The configuration new assessments start from."""
    return default_configuration()
