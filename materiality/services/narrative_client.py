"""Client for the external narrative suggestion service."""

from __future__ import annotations

import httpx
import structlog

from materiality.schemas.narrative import NarrativeSuggestion

logger = structlog.get_logger("materiality.narrative")

FALLBACK_NARRATIVE = (
    "The narrative service is currently unavailable or is not configured."
)
EMPTY_NARRATIVE = "No suggestion generated."


class NarrativeClientError(Exception):
    """Raised when the narrative service cannot produce a suggestion."""


class NarrativeClient:
    """HTTP client for the risk narrative proxy.

    ``suggest`` never raises: every failure degrades to the fallback text.
    """

    def __init__(
        self,
        service_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        context: str = "financial materiality",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.service_url = service_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.context = context
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.service_url)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _request(self, topic_name: str, industry_name: str, context: str) -> str:
        """POST the request and return the generated text."""
        if not self.is_configured:
            raise NarrativeClientError("Narrative service URL is not configured")

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            response = await client.post(
                self.service_url,
                headers=self._headers(),
                json={
                    "topic_name": topic_name,
                    "industry_name": industry_name,
                    "context": context,
                },
            )
            if not response.is_success:
                raise NarrativeClientError(
                    f"Narrative service returned {response.status_code}: {response.text[:200]}"
                )
            try:
                data = response.json()
            except ValueError as exc:
                raise NarrativeClientError("Narrative service returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise NarrativeClientError("Narrative service returned an unexpected payload")
        text = data.get("text")
        if text is not None and not isinstance(text, str):
            raise NarrativeClientError("Narrative service returned non-text content")
        return (text or "").strip()

    async def suggest(
        self,
        topic_name: str,
        industry_name: str,
        context: str | None = None,
    ) -> NarrativeSuggestion:
        """Ask the service for a short risk description for a topic."""
        try:
            text = await self._request(topic_name, industry_name, context or self.context)
        except (NarrativeClientError, httpx.HTTPError) as exc:
            logger.warning(
                "narrative_fallback",
                topic=topic_name,
                industry=industry_name,
                error=str(exc),
            )
            return NarrativeSuggestion(text=FALLBACK_NARRATIVE, is_fallback=True)

        logger.info("narrative_generated", topic=topic_name, industry=industry_name)
        return NarrativeSuggestion(text=text or EMPTY_NARRATIVE)
