"""Flowise prediction API transport.

Sends a question and its answered history to a Flowise chatflow and turns
whatever comes back into an AnswerPayload. Every failure, from a refused
connection to a body without answer text, surfaces as TransportError.

Each call is attempted once. There is no caching and no retry; the only
limit on a call's duration is the configured client timeout.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ragchat.config import ClientConfig, get_client_config
from ragchat.models.schemas import AnswerPayload, CitationRecord, HistoryTurn
from ragchat.transport.base import TransportError, require_query

logger = logging.getLogger(__name__)

# Flowise role names for prior turns
USER_ROLE = "userMessage"
ASSISTANT_ROLE = "apiMessage"


def build_payload(query: str, history: Sequence[HistoryTurn]) -> dict[str, Any]:
    """Build the prediction request body.

    Each answered turn becomes a userMessage/apiMessage pair.
    """
    messages: list[dict[str, str]] = []
    for turn in history:
        messages.append({"role": USER_ROLE, "content": turn.question})
        messages.append({"role": ASSISTANT_ROLE, "content": turn.answer})
    return {"question": query, "history": messages}


def _parse_source(item: Any) -> CitationRecord | None:
    if not isinstance(item, dict):
        logger.warning(f"Dropping malformed source document: {type(item).__name__}")
        return None

    excerpt = item.get("pageContent")
    metadata = item.get("metadata")
    return CitationRecord(
        excerpt=excerpt if isinstance(excerpt, str) else "",
        metadata=metadata if isinstance(metadata, dict) else {},
    )


def normalize_answer(body: Any) -> AnswerPayload:
    """Normalize a decoded prediction response.

    Args:
        body: Decoded JSON body returned by Flowise.

    Returns:
        AnswerPayload with text and citations.

    Raises:
        TransportError: If the body carries no answer text.
    """
    # Some chatflows reply with a bare JSON string
    if isinstance(body, str):
        return AnswerPayload(text=body)

    if not isinstance(body, dict):
        raise TransportError("Malformed response: expected a JSON object")

    text = body.get("text")
    if not isinstance(text, str):
        raise TransportError("Malformed response: missing 'text' field")

    raw_sources = body.get("sourceDocuments")
    if raw_sources is None:
        raw_sources = []
    elif not isinstance(raw_sources, list):
        logger.warning("Ignoring non-list sourceDocuments in response")
        raw_sources = []

    sources = [record for record in map(_parse_source, raw_sources) if record is not None]
    return AnswerPayload(text=text, source_documents=sources)


def _error_detail(response: httpx.Response) -> str | None:
    """Extract a human-readable reason from an error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return None

    if isinstance(data, str):
        return data or None
    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return None


class FlowiseTransport:
    """Transport for a single Flowise chatflow.

    Owns its httpx client unless one is injected, in which case the caller
    remains responsible for closing it.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            client: Optional preconfigured HTTP client.
        """
        self._config = config or get_client_config()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._config.timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    async def send(self, query: str, history: Sequence[HistoryTurn]) -> AnswerPayload:
        """Ask the chatflow a question.

        Args:
            query: The user's question.
            history: Answered turns, oldest first.

        Returns:
            Normalized answer with citations.

        Raises:
            EmptyQueryError: If the query is blank.
            TransportError: On network failure, error status, or malformed body.
        """
        query = require_query(query)
        payload = build_payload(query, history)
        logger.debug(
            f"POST {self._config.prediction_url} ({len(history)} history turns)"
        )

        try:
            response = await self._client.post(
                self._config.prediction_url,
                json=payload,
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            code = e.response.status_code
            detail = _error_detail(e.response)
            message = f"HTTP {code}: {detail}" if detail else f"HTTP {code}"
            logger.warning(f"Prediction request rejected: {message}")
            raise TransportError(message) from e
        except httpx.RequestError as e:
            logger.warning(f"Prediction request failed: {e!r}")
            raise TransportError(f"Connection failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError("Malformed response: body is not valid JSON") from e

        return normalize_answer(body)

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "FlowiseTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
