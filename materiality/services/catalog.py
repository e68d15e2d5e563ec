"""Topic Catalog — static SASB industries and disclosure topics."""

from __future__ import annotations

from materiality.errors import NotFoundError
from materiality.schemas.reference import Industry, Topic


INDUSTRIES: list[Industry] = [
    Industry(code="TC-SI", name="Software & IT Services", sector="Technology & Communications"),
    Industry(code="TC-HW", name="Hardware", sector="Technology & Communications"),
    Industry(code="CG-MR", name="Multiline Retail", sector="Consumer Goods"),
    Industry(code="CG-AA", name="Apparel, Accessories & Footwear", sector="Consumer Goods"),
    Industry(code="EM-EP", name="Exploration & Production", sector="Extractives & Minerals Processing"),
    Industry(code="FB-RN", name="Restaurants", sector="Food & Beverage"),
    Industry(code="TR-MT", name="Marine Transportation", sector="Transportation"),
    Industry(code="FN-CB", name="Commercial Banks", sector="Financials"),
]

TOPICS: list[Topic] = [
    Topic(
        id="TC-SI-001",
        industry_code="TC-SI",
        name="Environmental Footprint of Hardware Infrastructure",
        description="Energy and water usage of data centers.",
        associated_metrics=("TC-SI-130a.1", "TC-SI-130a.2", "TC-SI-130a.3"),
    ),
    Topic(
        id="TC-SI-002",
        industry_code="TC-SI",
        name="Data Privacy & Freedom of Expression",
        description="Management of risks related to collection and use of user data.",
        associated_metrics=("TC-SI-220a.1", "TC-SI-220a.2", "TC-SI-220a.3"),
    ),
    Topic(
        id="TC-SI-003",
        industry_code="TC-SI",
        name="Data Security",
        description="Identifying and addressing security threats.",
        associated_metrics=("TC-SI-230a.1", "TC-SI-230a.2"),
    ),
    Topic(
        id="CG-AA-001",
        industry_code="CG-AA",
        name="Management of Chemicals in Products",
        description="Use of restricted substances in manufacturing.",
        associated_metrics=("CG-AA-250a.1", "CG-AA-250a.2"),
    ),
    Topic(
        id="CG-AA-002",
        industry_code="CG-AA",
        name="Labor Conditions in the Supply Chain",
        description="Human rights and fair labor practices.",
        associated_metrics=("CG-AA-430a.1", "CG-AA-430a.2"),
    ),
    Topic(
        id="EM-EP-001",
        industry_code="EM-EP",
        name="Greenhouse Gas Emissions",
        description="Direct scope 1 emissions and methane management.",
        associated_metrics=("EM-EP-110a.1", "EM-EP-110a.2"),
    ),
]

_INDUSTRIES_BY_CODE = {i.code: i for i in INDUSTRIES}
_TOPICS_BY_ID = {t.id: t for t in TOPICS}


def list_industries() -> list[Industry]:
    """Return every known industry."""
    return list(INDUSTRIES)


def get_industry(code: str) -> Industry:
    """Look up an industry by its SASB code."""
    try:
        return _INDUSTRIES_BY_CODE[code]
    except KeyError:
        raise NotFoundError(f"Industry '{code}' not found") from None


def get_topic(topic_id: str) -> Topic:
    """Look up a topic by id."""
    try:
        return _TOPICS_BY_ID[topic_id]
    except KeyError:
        raise NotFoundError(f"Topic '{topic_id}' not found") from None


def industry_name(code: str) -> str:
    """Return the industry's display name, or the code when unknown."""
    industry = _INDUSTRIES_BY_CODE.get(code)
    return industry.name if industry else code


def topics_for_industries(codes: list[str]) -> list[Topic]:
    """Return the topics belonging to any of the given industries.

    The result is the union over all codes, in catalog order, with no
    duplicates even when a code is repeated.

    Args:
        codes: SASB industry codes, primary first.

    Returns:
        List of topics in scope.
    """
    wanted = set(codes)
    return [t for t in TOPICS if t.industry_code in wanted]
