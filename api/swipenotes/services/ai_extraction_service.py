from swipenotes.core.config import settings
from swipenotes.core.exceptions import AIServiceError, AIExtractionTimeoutError, MalformedAIResponseError
from dataclasses import dataclass, field
import requests
import logging
import json
import re
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


@dataclass
class ExtractedCard:
    """One card proposed by the AI service."""
    content: str
    suggested_tags: List[str] = field(default_factory=list)


class AIExtractor(Protocol):
    """Capability that segments a document into cards with suggested tags."""

    def extract(self, content: str, existing_tags: List[str]) -> List[ExtractedCard]:
        ...


def parse_extraction_payload(text: str) -> List[ExtractedCard]:
    """
    Parse the model output into extracted cards.

    Expected shape: a JSON array of {"content": str, "tags": [str, ...]}
    objects ("suggested_tags" is accepted as well). Markdown code fences
    around the JSON are tolerated.

    Raises:
        MalformedAIResponseError: If the text is not JSON of that shape
    """
    cleaned = _CODE_FENCE_RE.sub("", text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedAIResponseError(f"AI response is not valid JSON: {e}")

    if isinstance(data, dict) and "cards" in data:
        data = data["cards"]
    if not isinstance(data, list):
        raise MalformedAIResponseError(f"AI response must be a JSON array, got {type(data).__name__}")

    cards = []
    for index, item in enumerate(data):
        if not isinstance(item, dict) or not isinstance(item.get("content"), str):
            raise MalformedAIResponseError(f"AI card #{index} has no string 'content'")
        tags = item.get("tags", item.get("suggested_tags", []))
        if tags is None:
            tags = []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise MalformedAIResponseError(f"AI card #{index} has invalid tags: {tags!r}")
        cards.append(ExtractedCard(content=item["content"], suggested_tags=tags))
    return cards


class GeminiExtractionService:
    """AI extraction using Google Generative AI (Gemini) API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = api_key if api_key is not None else settings.google_gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout if timeout is not None else settings.ai_request_timeout_seconds

        if not self.api_key:
            logger.warning("Google Gemini API key not configured. AI extraction will fail.")

    def _build_prompt(self, content: str, existing_tags: List[str]) -> str:
        tag_hint = ", ".join(existing_tags) if existing_tags else "(none yet)"
        return (
            "This is for a flashcard study app. Split the following notes into self-contained study cards. "
            "Each card should cover one idea and stay under 250 words. "
            "For each card suggest up to 5 short tags, reusing these existing tags where they fit: "
            f"{tag_hint}. "
            "Respond with ONLY a JSON array of objects with keys \"content\" (string) and \"tags\" (array of strings).\n\n"
            f"NOTES:\n{content}"
        )

    def extract(self, content: str, existing_tags: List[str]) -> List[ExtractedCard]:
        """
        Ask Gemini to segment content into cards.

        Args:
            content: Whole raw document text
            existing_tags: Tag names already in the vocabulary

        Returns:
            List of ExtractedCard (possibly empty)

        Raises:
            AIExtractionTimeoutError: If the request timed out
            AIServiceError: If the API key is missing or the request failed
            MalformedAIResponseError: If the response could not be parsed
        """
        if not self.api_key:
            raise AIServiceError("Google Gemini API key not configured. Please set GOOGLE_GEMINI_API_KEY.")

        payload = {
            "contents": [{
                "parts": [{
                    "text": self._build_prompt(content, existing_tags)
                }]
            }],
            "generationConfig": {
                "temperature": 0.3,
                "maxOutputTokens": 8192,
                "responseMimeType": "application/json",
            }
        }

        url = f"{GEMINI_BASE_URL}/{self.model_name}:generateContent"
        logger.debug(f"Requesting AI extraction from {self.model_name} for {len(content)} characters")

        try:
            response = requests.post(
                f"{url}?key={self.api_key}",
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error(f"AI extraction timed out after {self.timeout}s")
            raise AIExtractionTimeoutError(f"AI extraction timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            error_msg = f"AI extraction request failed: {str(e)}"
            if getattr(e, "response", None) is not None:
                error_msg += f" - Status: {e.response.status_code}"
            logger.error(error_msg)
            raise AIServiceError(error_msg) from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedAIResponseError(f"AI response body is not JSON: {e}")

        candidates = data.get("candidates") or []
        if not candidates:
            logger.error(f"Unexpected API response format. Response: {data}")
            raise MalformedAIResponseError("AI response contains no candidates")

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            finish_reason = candidate.get("finishReason", "UNKNOWN")
            raise MalformedAIResponseError(f"AI response has no text (finish reason: {finish_reason})")

        cards = parse_extraction_payload(text)
        logger.info(f"AI extraction returned {len(cards)} card(s)")
        return cards
