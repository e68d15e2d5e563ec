"""Wizard sessions — the editable working copy between the API and the registry.

The Finalized edit lock is enforced here: every mutation goes through
``_editable`` before it reaches the record store.
"""

from __future__ import annotations

import uuid

import structlog

from materiality.errors import AssessmentLockedError, NotFoundError
from materiality.schemas.assessment import (
    AssessmentPatch,
    AssessmentRecord,
    ClassifyRequest,
    ValidationIssue,
)
from materiality.schemas.configuration import ScoreLabels, ThresholdConfiguration
from materiality.schemas.dashboard import DashboardSummary
from materiality.schemas.narrative import NarrativeResponse
from materiality.schemas.reference import Topic
from materiality.schemas.saved import AssessmentData, AssessmentSnapshot, SavedAssessment
from materiality.schemas.session import ScopeUpdate, SessionResponse, WizardSession
from materiality.services import catalog, records, scoring
from materiality.services.dashboard import compute_dashboard
from materiality.services.narrative_client import NarrativeClient
from materiality.services.registry import AssessmentRegistry
from materiality.store import DataStore

logger = structlog.get_logger("materiality.wizard")


def active_topics(session: WizardSession) -> list[Topic]:
    """Topics for the primary and secondary industries, without duplicates."""
    return catalog.topics_for_industries(session.industry_codes)


class WizardService:
    """Operations on open wizard sessions."""

    def __init__(
        self,
        store: DataStore,
        registry: AssessmentRegistry,
        narrative_client: NarrativeClient | None = None,
    ) -> None:
        self.store = store
        self.registry = registry
        self.narrative_client = narrative_client

    # Session lifecycle

    def new_session(self) -> WizardSession:
        session = WizardSession(id=str(uuid.uuid4()))
        self.store.add_session(session)
        logger.info("session_started", session_id=session.id)
        return session

    def open_session(self, assessment_id: str) -> WizardSession:
        """Open a saved assessment for editing (read-only when finalized)."""
        saved = self.registry.get(assessment_id)
        data = saved.data.model_copy(deep=True)
        session = WizardSession(
            id=str(uuid.uuid4()),
            assessment_id=saved.id,
            assessment_name=saved.assessment_name,
            reporting_year=saved.reporting_year,
            timeline=saved.timeline,
            primary_industry=data.primary_industry,
            secondary_industries=data.secondary_industries,
            config=data.config,
            assessments=data.assessments,
            status=saved.status,
        )
        self.store.add_session(session)
        logger.info(
            "session_opened",
            session_id=session.id,
            assessment_id=saved.id,
            read_only=session.read_only,
        )
        return session

    def get_session(self, session_id: str) -> WizardSession:
        session = self.store.get_session(session_id)
        if session is None:
            raise NotFoundError(f"Session '{session_id}' not found")
        return session

    def close_session(self, session_id: str) -> None:
        if self.store.remove_session(session_id) is None:
            raise NotFoundError(f"Session '{session_id}' not found")
        logger.info("session_closed", session_id=session_id)

    def _editable(self, session_id: str) -> WizardSession:
        session = self.get_session(session_id)
        if session.read_only:
            raise AssessmentLockedError(
                "Assessment is finalized and cannot be edited",
                details={"session_id": session_id, "assessment_id": session.assessment_id},
            )
        return session

    def _topic_in_scope(self, session: WizardSession, topic_id: str) -> Topic:
        for topic in active_topics(session):
            if topic.id == topic_id:
                return topic
        raise NotFoundError(f"Topic '{topic_id}' is not in scope for this assessment")

    def describe(self, session_id: str) -> SessionResponse:
        session = self.get_session(session_id)
        return SessionResponse(
            id=session.id,
            assessment_id=session.assessment_id,
            assessment_name=session.assessment_name,
            reporting_year=session.reporting_year,
            timeline=session.timeline,
            status=session.status,
            read_only=session.read_only,
            primary_industry=session.primary_industry,
            secondary_industries=session.secondary_industries,
            config=session.config,
            topics=[records.topic_view(t, session.assessments) for t in active_topics(session)],
        )

    # Scope and configuration

    def update_scope(self, session_id: str, update: ScopeUpdate) -> WizardSession:
        """Apply general settings and industry selection.

        Secondary industries never include the primary and are de-duplicated.
        Records for topics that fall out of scope are kept.
        """
        session = self._editable(session_id)
        fields = update.model_fields_set

        # Resolve every industry code before touching the session
        primary = session.primary_industry
        if "primary_industry_code" in fields:
            code = update.primary_industry_code
            primary = catalog.get_industry(code) if code else None

        codes = (
            update.secondary_industry_codes
            if update.secondary_industry_codes is not None
            else [i.code for i in session.secondary_industries]
        )
        primary_code = primary.code if primary else None
        secondary = [
            catalog.get_industry(code)
            for code in dict.fromkeys(codes)
            if code != primary_code
        ]

        if "assessment_name" in fields and update.assessment_name is not None:
            session.assessment_name = update.assessment_name
        if "reporting_year" in fields and update.reporting_year is not None:
            session.reporting_year = update.reporting_year
        if "timeline" in fields:
            session.timeline = update.timeline
        session.primary_industry = primary
        session.secondary_industries = secondary

        logger.info("scope_updated", session_id=session_id, industries=session.industry_codes)
        return session

    def update_config(self, session_id: str, config: ThresholdConfiguration) -> ThresholdConfiguration:
        """Replace the scoring configuration; invalid ones leave the old in place."""
        session = self._editable(session_id)
        session.config = config.validate_thresholds()
        logger.info("config_updated", session_id=session_id)
        return session.config

    def labels(self, session_id: str) -> ScoreLabels:
        return scoring.score_labels(self.get_session(session_id).config)

    # Topic records

    def set_materiality(self, session_id: str, topic_id: str, value: bool) -> AssessmentRecord:
        session = self._editable(session_id)
        self._topic_in_scope(session, topic_id)
        return records.set_materiality(session.assessments, topic_id, value)

    def update_record(self, session_id: str, topic_id: str, patch: AssessmentPatch) -> AssessmentRecord:
        session = self._editable(session_id)
        self._topic_in_scope(session, topic_id)
        return records.update_record(session.assessments, topic_id, patch)

    def classify(self, session_id: str, topic_id: str, request: ClassifyRequest) -> AssessmentRecord:
        """Derive score buckets from raw values using the current configuration."""
        session = self._editable(session_id)
        self._topic_in_scope(session, topic_id)
        scores = scoring.classify_inputs(
            session.config,
            magnitude_value=request.magnitude_value,
            likelihood_value=request.likelihood_value,
            horizon_years=request.horizon_years,
        )
        return records.apply_scores(session.assessments, topic_id, scores)

    async def suggest_narrative(self, session_id: str, topic_id: str) -> NarrativeResponse:
        """Fetch an AI-drafted risk description and apply it if still relevant.

        No lock is held while waiting. The result is dropped if, by the time it
        arrives, the session was closed, finalized or the topic left scope.
        """
        session = self._editable(session_id)
        topic = self._topic_in_scope(session, topic_id)
        if self.narrative_client is None:
            raise RuntimeError("Narrative client is not configured")

        suggestion = await self.narrative_client.suggest(
            topic.name, catalog.industry_name(topic.industry_code)
        )

        current = self.store.get_session(session_id)
        applied = (
            current is session
            and not current.read_only
            and topic in active_topics(current)
        )
        if applied:
            records.update_record(
                current.assessments,
                topic_id,
                AssessmentPatch(risk_description=suggestion.text),
            )
        else:
            logger.info("narrative_discarded", session_id=session_id, topic_id=topic_id)

        return NarrativeResponse(
            session_id=session_id,
            topic_id=topic_id,
            text=suggestion.text,
            is_fallback=suggestion.is_fallback,
            applied=applied,
        )

    # Derived views

    def dashboard(self, session_id: str) -> DashboardSummary:
        session = self.get_session(session_id)
        return compute_dashboard(active_topics(session), session.assessments)

    def warnings(self, session_id: str) -> list[ValidationIssue]:
        session = self.get_session(session_id)
        return records.collect_warnings(active_topics(session), session.assessments)

    # Persistence

    def snapshot(self, session: WizardSession) -> AssessmentSnapshot:
        return AssessmentSnapshot(
            assessment_name=session.assessment_name,
            reporting_year=session.reporting_year,
            timeline=session.timeline,
            data=AssessmentData(
                primary_industry=session.primary_industry,
                secondary_industries=session.secondary_industries,
                config=session.config,
                assessments=session.assessments,
            ),
        )

    def save(self, session_id: str) -> SavedAssessment:
        session = self._editable(session_id)
        saved = self.registry.save(session.assessment_id, self.snapshot(session))
        session.assessment_id = saved.id
        session.status = saved.status
        return saved

    def finalize(self, session_id: str) -> tuple[SavedAssessment, list[ValidationIssue]]:
        """Finalize the session's assessment and lock the session.

        Completeness problems are returned as warnings; they do not block.
        """
        session = self._editable(session_id)
        issues = records.collect_warnings(active_topics(session), session.assessments)
        saved = self.registry.finalize(session.assessment_id, self.snapshot(session))
        session.assessment_id = saved.id
        session.status = saved.status
        if issues:
            logger.warning("finalized_with_warnings", assessment_id=saved.id, warnings=len(issues))
        return saved, issues
