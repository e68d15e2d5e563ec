"""Schemas for AI-drafted risk narratives."""

from __future__ import annotations

from pydantic import BaseModel


class NarrativeSuggestion(BaseModel):
    """Text returned by the narrative service, or the fallback text."""

    text: str
    is_fallback: bool = False


class NarrativeResponse(BaseModel):
    """Outcome of requesting a narrative for a session topic."""

    session_id: str
    topic_id: str
    text: str
    is_fallback: bool
    applied: bool
