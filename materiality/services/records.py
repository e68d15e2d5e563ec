"""Assessment record transitions and derived completeness state."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from materiality.schemas.assessment import (
    AssessmentPatch,
    AssessmentRecord,
    TopicAssessment,
    ValidationIssue,
)
from materiality.schemas.common import ScoreLevel, utcnow
from materiality.schemas.reference import Topic

Records = dict[str, AssessmentRecord]


def default_record(topic_id: str) -> AssessmentRecord:
    """Record for a topic nobody has touched yet."""
    return AssessmentRecord(topic_id=topic_id)


def _store(
    records: Records,
    existing: AssessmentRecord,
    changes: dict[str, Any],
    now: datetime | None,
) -> AssessmentRecord:
    merged = existing.model_dump()
    merged.update(changes)
    merged["last_updated"] = now or utcnow()
    record = AssessmentRecord.model_validate(merged)
    records[record.topic_id] = record
    return record


def set_materiality(
    records: Records,
    topic_id: str,
    value: bool,
    now: datetime | None = None,
) -> AssessmentRecord:
    """Mark a topic material (True) or omitted (False).

    Fields of the inactive branch are kept so a user can toggle back and
    forth without losing what they typed.
    """
    existing = records.get(topic_id) or default_record(topic_id)
    return _store(records, existing, {"is_material": value}, now)


def update_record(
    records: Records,
    topic_id: str,
    patch: AssessmentPatch,
    now: datetime | None = None,
) -> AssessmentRecord:
    """Merge the fields present in ``patch`` into the topic's record.

    ``scores`` and ``ifrs_bridge`` merge per sub-field. A null score level
    leaves that score unchanged; a null bridge field clears it.
    """
    existing = records.get(topic_id) or default_record(topic_id)
    changes = patch.model_dump(exclude_unset=True)

    if "scores" in changes:
        scores = existing.scores.model_dump()
        scores.update({k: v for k, v in (changes["scores"] or {}).items() if v is not None})
        changes["scores"] = scores

    if "ifrs_bridge" in changes:
        bridge = existing.ifrs_bridge.model_dump()
        bridge.update(changes["ifrs_bridge"] or {})
        changes["ifrs_bridge"] = bridge

    if "value_chain" in changes and changes["value_chain"] is None:
        changes["value_chain"] = []

    return _store(records, existing, changes, now)


def apply_scores(
    records: Records,
    topic_id: str,
    scores: dict[str, ScoreLevel],
    now: datetime | None = None,
) -> AssessmentRecord:
    """Overwrite the given score buckets on a topic's record."""
    existing = records.get(topic_id) or default_record(topic_id)
    merged_scores = existing.scores.model_dump()
    merged_scores.update(scores)
    return _store(records, existing, {"scores": merged_scores}, now)


def is_complete(record: AssessmentRecord | None) -> bool:
    """Whether the record's active branch has all required fields."""
    if record is None or record.is_material is None:
        return False
    if record.is_material is False:
        return record.omission_reason is not None and bool((record.justification or "").strip())
    return bool(record.value_chain) and record.ifrs_bridge.statement_link is not None


def record_status(record: AssessmentRecord | None) -> str:
    """Status badge: undecided, omitted, incomplete or complete."""
    if record is None or record.is_material is None:
        return "undecided"
    if record.is_material is False:
        return "omitted"
    return "complete" if is_complete(record) else "incomplete"


def topic_view(topic: Topic, records: Records) -> TopicAssessment:
    """Combine a topic with its record, defaulting untouched topics."""
    record = records.get(topic.id) or default_record(topic.id)
    return TopicAssessment(
        topic_id=topic.id,
        topic_name=topic.name,
        industry_code=topic.industry_code,
        record=record,
        is_complete=is_complete(record),
        status=record_status(record),
    )


def collect_warnings(topics: list[Topic], records: Records) -> list[ValidationIssue]:
    """List completeness problems for the topics in scope.

    These are reported at finalize time and never block it.
    """
    issues: list[ValidationIssue] = []

    def _add(topic: Topic, issue: str) -> None:
        issues.append(ValidationIssue(topic_id=topic.id, topic_name=topic.name, issue=issue))

    for topic in topics:
        record = records.get(topic.id)
        if record is None or record.is_material is None:
            _add(topic, "Materiality has not been decided")
        elif record.is_material is False:
            if record.omission_reason is None:
                _add(topic, "Omitted topic has no omission reason")
            if not (record.justification or "").strip():
                _add(topic, "Omitted topic has no justification")
        else:
            if not record.value_chain:
                _add(topic, "Material topic has no value chain stage")
            if record.ifrs_bridge.statement_link is None:
                _add(topic, "Material topic is not linked to a financial statement")

    return issues
