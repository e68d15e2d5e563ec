"""Saved Assessment Registry — versioned snapshots and their status lifecycle.

    Draft --finalize--> Finalized --request_reassessment--> Re-assessment Required
    Re-assessment Required --save--> Draft
    Re-assessment Required / Draft --finalize--> Finalized

``version`` starts at 1 and only moves on re-assessment requests.
"""

from __future__ import annotations

import uuid
from typing import Protocol

import structlog

from materiality.errors import AssessmentLockedError, InvalidTransitionError, NotFoundError
from materiality.schemas.common import AssessmentStatus, utcnow
from materiality.schemas.saved import AssessmentSnapshot, SavedAssessment

logger = structlog.get_logger("materiality.registry")

UNTITLED_ASSESSMENT = "Untitled Assessment"


class AssessmentRepository(Protocol):
    """Persistence the registry needs: a mapping id -> SavedAssessment."""

    def get(self, assessment_id: str) -> SavedAssessment | None: ...

    def list(self) -> list[SavedAssessment]: ...

    def upsert(self, assessment: SavedAssessment) -> SavedAssessment: ...


def _new_id() -> str:
    return str(uuid.uuid4())


class AssessmentRegistry:
    """Creates, saves, finalizes and reopens saved assessments."""

    def __init__(self, repository: AssessmentRepository) -> None:
        self.repository = repository

    def get(self, assessment_id: str) -> SavedAssessment:
        assessment = self.repository.get(assessment_id)
        if assessment is None:
            raise NotFoundError(f"Assessment '{assessment_id}' not found")
        return assessment

    def list(self) -> list[SavedAssessment]:
        return self.repository.list()

    def _build(
        self,
        assessment_id: str,
        snapshot: AssessmentSnapshot,
        status: AssessmentStatus,
        version: int,
        reason: str | None,
    ) -> SavedAssessment:
        return SavedAssessment(
            id=assessment_id,
            assessment_name=snapshot.assessment_name.strip() or UNTITLED_ASSESSMENT,
            reporting_year=snapshot.reporting_year,
            timeline=snapshot.timeline,
            version=version,
            status=status,
            last_modified=utcnow(),
            re_assessment_reason=reason,
            data=snapshot.data.model_copy(deep=True),
        )

    def create_draft(self, snapshot: AssessmentSnapshot) -> SavedAssessment:
        """Store a snapshot under a fresh id as version 1 Draft."""
        assessment = self._build(_new_id(), snapshot, AssessmentStatus.DRAFT, 1, None)
        self.repository.upsert(assessment)
        logger.info("assessment_created", assessment_id=assessment.id)
        return assessment

    def save(self, assessment_id: str | None, snapshot: AssessmentSnapshot) -> SavedAssessment:
        """Save a snapshot as Draft.

        With no id this creates a new draft. Otherwise the snapshot replaces
        the stored one and keeps its version. Finalized assessments must be
        reopened through a re-assessment request first.
        """
        if assessment_id is None:
            return self.create_draft(snapshot)

        existing = self.get(assessment_id)
        if existing.status == AssessmentStatus.FINALIZED:
            raise AssessmentLockedError(
                f"Assessment '{assessment_id}' is finalized; request a re-assessment to edit it"
            )

        assessment = self._build(
            assessment_id,
            snapshot,
            AssessmentStatus.DRAFT,
            existing.version,
            existing.re_assessment_reason,
        )
        self.repository.upsert(assessment)
        logger.info("assessment_saved", assessment_id=assessment_id, version=assessment.version)
        return assessment

    def finalize(self, assessment_id: str | None, snapshot: AssessmentSnapshot) -> SavedAssessment:
        """Save a snapshot as Finalized, keeping its version.

        An already finalized assessment is locked like it is for ``save``.
        """
        if assessment_id is None:
            assessment = self._build(_new_id(), snapshot, AssessmentStatus.FINALIZED, 1, None)
        else:
            existing = self.get(assessment_id)
            if existing.status == AssessmentStatus.FINALIZED:
                raise AssessmentLockedError(
                    f"Assessment '{assessment_id}' is already finalized; request a re-assessment to edit it"
                )
            assessment = self._build(
                assessment_id,
                snapshot,
                AssessmentStatus.FINALIZED,
                existing.version,
                existing.re_assessment_reason,
            )
        self.repository.upsert(assessment)
        logger.info("assessment_finalized", assessment_id=assessment.id, version=assessment.version)
        return assessment

    def request_reassessment(self, assessment_id: str, reason: str) -> SavedAssessment:
        """Reopen a finalized assessment and bump its version.

        Only Finalized assessments can be reopened; anything else is rejected
        and left untouched.
        """
        if not reason or not reason.strip():
            raise ValueError("A re-assessment reason is required")

        existing = self.get(assessment_id)
        if existing.status != AssessmentStatus.FINALIZED:
            raise InvalidTransitionError(
                f"Only finalized assessments can be re-assessed (status is '{existing.status.value}')",
                details={"status": existing.status.value},
            )

        assessment = existing.model_copy(update={
            "status": AssessmentStatus.RE_ASSESSMENT_REQUIRED,
            "re_assessment_reason": reason.strip(),
            "version": existing.version + 1,
            "last_modified": utcnow(),
        })
        self.repository.upsert(assessment)
        logger.info(
            "reassessment_requested",
            assessment_id=assessment_id,
            version=assessment.version,
        )
        return assessment
