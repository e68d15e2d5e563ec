"""Aggregation/Dashboard Engine — summary statistics over assessment records.

Every function here is a pure function of (topics, records).
"""

from __future__ import annotations

from materiality.schemas.assessment import AssessmentRecord
from materiality.schemas.common import SCORE_ORDER
from materiality.schemas.dashboard import DashboardSummary, MaterialTopicSummary, RoadmapEntry
from materiality.schemas.reference import Topic


def partition_topics(
    topics: list[Topic], records: dict[str, AssessmentRecord]
) -> tuple[list[Topic], list[Topic]]:
    """Split topics into (material, omitted).

    Anything not explicitly material counts as omitted, including undecided
    topics and topics without a record.
    """
    material: list[Topic] = []
    omitted: list[Topic] = []
    for topic in topics:
        record = records.get(topic.id)
        if record is not None and record.is_material is True:
            material.append(topic)
        else:
            omitted.append(topic)
    return material, omitted


def count_undecided(topics: list[Topic], records: dict[str, AssessmentRecord]) -> int:
    """Count topics with no materiality decision yet."""
    return sum(
        1 for t in topics
        if records.get(t.id) is None or records[t.id].is_material is None
    )


def compute_matrix(
    material_topics: list[Topic], records: dict[str, AssessmentRecord]
) -> dict[str, dict[str, int]]:
    """Cross-tabulate material topics by magnitude and likelihood.

    Returns:
        Nested dict ``matrix[magnitude][likelihood]`` with all nine cells.
    """
    matrix = {mag.value: {like.value: 0 for like in SCORE_ORDER} for mag in SCORE_ORDER}
    for topic in material_topics:
        scores = records[topic.id].scores
        matrix[scores.magnitude.value][scores.likelihood.value] += 1
    return matrix


def compute_roadmap(material_topics: list[Topic]) -> list[RoadmapEntry]:
    """List the disclosure metrics owed for each material topic."""
    return [
        RoadmapEntry(
            topic_id=t.id,
            topic_name=t.name,
            industry_code=t.industry_code,
            metrics=list(t.associated_metrics),
        )
        for t in material_topics
    ]


def compute_dashboard(
    topics: list[Topic], records: dict[str, AssessmentRecord]
) -> DashboardSummary:
    """Compute the full dashboard for the topics in scope.

    Args:
        topics: Topics already filtered to the selected industries.
        records: Assessment records keyed by topic id.

    Returns:
        DashboardSummary with counts, matrix and disclosure roadmap.
    """
    material, omitted = partition_topics(topics, records)
    roadmap = compute_roadmap(material)

    material_summaries = [
        MaterialTopicSummary(
            topic_id=t.id,
            topic_name=t.name,
            magnitude=records[t.id].scores.magnitude.value,
            likelihood=records[t.id].scores.likelihood.value,
            horizon=records[t.id].scores.horizon.value,
        )
        for t in material
    ]

    return DashboardSummary(
        total_topics=len(topics),
        material_count=len(material),
        omitted_count=len(omitted),
        undecided_count=count_undecided(topics, records),
        matrix=compute_matrix(material, records),
        material_topics=material_summaries,
        disclosure_roadmap=roadmap,
        total_metrics=sum(len(entry.metrics) for entry in roadmap),
    )
