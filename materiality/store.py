"""In-memory data store for the Materiality Workbench.

Holds saved assessments and open wizard sessions for the lifetime of the
process. Services receive the store through dependency injection and only
touch saved assessments through ``get`` / ``list`` / ``upsert``.
"""

from __future__ import annotations

from datetime import timedelta

from materiality.schemas.common import AssessmentStatus, utcnow
from materiality.schemas.saved import AssessmentData, SavedAssessment
from materiality.schemas.session import WizardSession
from materiality.services.catalog import get_industry


class DataStore:
    """In-memory store for saved assessments and wizard sessions."""

    def __init__(self) -> None:
        self.saved_assessments: dict[str, SavedAssessment] = {}
        self.sessions: dict[str, WizardSession] = {}

    def reset(self) -> None:
        """Clear all data — used in tests."""
        self.__init__()

    # Saved assessments

    def get(self, assessment_id: str) -> SavedAssessment | None:
        """Return a saved assessment by id, or None."""
        return self.saved_assessments.get(assessment_id)

    def list(self) -> list[SavedAssessment]:
        """Return all saved assessments, most recently modified first."""
        return sorted(
            self.saved_assessments.values(),
            key=lambda a: a.last_modified,
            reverse=True,
        )

    def upsert(self, assessment: SavedAssessment) -> SavedAssessment:
        """Insert or replace a saved assessment keyed by its id."""
        self.saved_assessments[assessment.id] = assessment
        return assessment

    # Wizard sessions

    def get_session(self, session_id: str) -> WizardSession | None:
        return self.sessions.get(session_id)

    def add_session(self, session: WizardSession) -> WizardSession:
        self.sessions[session.id] = session
        return session

    def remove_session(self, session_id: str) -> WizardSession | None:
        return self.sessions.pop(session_id, None)

    def seed_demo(self) -> None:
        """Load the sample finalized assessment shown on first launch."""
        self.upsert(SavedAssessment(
            id="mock-1",
            assessment_name="Diginex Global Materiality Assessment",
            reporting_year="2024",
            version=1,
            status=AssessmentStatus.FINALIZED,
            last_modified=utcnow() - timedelta(days=1),
            data=AssessmentData(primary_industry=get_industry("TC-SI")),
        ))


# Global singleton — replaced in tests
data_store = DataStore()
