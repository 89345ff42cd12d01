"""
Gemini Narrative Client

Wrapper around LangChain's Gemini chat model for the optional AI narrative
of a MAPA study. The narrative explains; it never replaces the
deterministic interpretation, which remains the fallback whenever this
client raises ExternalServiceError.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from mapa.config import settings
from mapa.utils import ExternalServiceError, get_logger

logger = get_logger(__name__)


@dataclass
class NarrativeConfig:
    """Configuration for the narrative client."""
    api_key: Optional[str] = None
    model: str = "gemini-2.5-flash"
    temperature: float = 0.3
    max_output_tokens: int = 2000
    request_timeout_seconds: float = 30.0
    max_retries: int = 1

    @classmethod
    def from_settings(cls, source=None) -> "NarrativeConfig":
        source = source or settings
        return cls(
            api_key=source.gemini_api_key if source.narrative_enabled else None,
            model=source.gemini_model,
            temperature=source.narrative_temperature,
            max_output_tokens=source.narrative_max_output_tokens,
            request_timeout_seconds=source.narrative_timeout_seconds,
        )


@dataclass
class NarrativeResponse:
    """Text returned by the model plus usage metadata."""
    text: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "model": self.model,
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "latency_ms": round(self.latency_ms, 2),
        }


class NarrativeClient:
    """
    Client for Gemini narrative generation.

    Unconfigured (no API key) is a normal state: is_available is False and
    every generate call raises ExternalServiceError.
    """

    def __init__(self, config: Optional[NarrativeConfig] = None):
        self.config = config or NarrativeConfig.from_settings()
        self._llm = None
        self._request_count = 0
        self._failure_count = 0
        self._last_request_time: Optional[datetime] = None

        self._initialize()

    def _initialize(self):
        if not self.config.api_key:
            logger.info("No Gemini API key configured - AI narrative disabled")
            return

        try:
            self._llm = ChatGoogleGenerativeAI(
                model=self.config.model,
                temperature=self.config.temperature,
                max_output_tokens=self.config.max_output_tokens,
                timeout=self.config.request_timeout_seconds,
                max_retries=self.config.max_retries,
                google_api_key=self.config.api_key,
            )
            logger.info(f"Gemini narrative client initialized with model: {self.config.model}")
        except Exception as e:
            logger.error(f"Failed to initialize Gemini client: {e}")
            self._llm = None

    @property
    def is_available(self) -> bool:
        return self._llm is not None

    def _build_messages(self, prompt: str, system_instruction: Optional[str]):
        if system_instruction:
            return [("system", system_instruction), ("human", prompt)]
        return [("human", prompt)]

    def _to_response(self, response, started: datetime) -> NarrativeResponse:
        latency = (datetime.now() - started).total_seconds() * 1000
        text = response.content if hasattr(response, "content") else str(response)
        if not isinstance(text, str) or not text.strip():
            raise ExternalServiceError(
                "Narrative service returned an empty response",
                details={"model": self.config.model},
            )

        usage = getattr(response, "usage_metadata", None) or {}
        self._request_count += 1
        self._last_request_time = datetime.now()
        return NarrativeResponse(
            text=text.strip(),
            model=self.config.model,
            prompt_tokens=usage.get("input_tokens", 0),
            completion_tokens=usage.get("output_tokens", 0),
            latency_ms=latency,
        )

    def _require_available(self):
        if not self.is_available:
            raise ExternalServiceError(
                "Narrative service is not configured",
                details={"reason": "missing_api_key"},
            )

    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> NarrativeResponse:
        """
        Generate narrative text synchronously.

        Raises:
            ExternalServiceError: unconfigured, request failure, or empty reply
        """
        self._require_available()
        started = datetime.now()
        try:
            response = self._llm.invoke(self._build_messages(prompt, system_instruction))
        except Exception as e:
            self._failure_count += 1
            logger.error(f"Gemini narrative generation failed: {e}")
            raise ExternalServiceError(
                f"Narrative generation failed: {e}",
                details={"model": self.config.model},
            ) from e
        return self._to_response(response, started)

    async def generate_async(
        self, prompt: str, system_instruction: Optional[str] = None
    ) -> NarrativeResponse:
        """
        Async variant using LangChain's ainvoke, so the event loop is not
        blocked during the HTTP round-trip.
        """
        self._require_available()
        started = datetime.now()
        try:
            response = await self._llm.ainvoke(self._build_messages(prompt, system_instruction))
        except Exception as e:
            self._failure_count += 1
            logger.error(f"Async Gemini narrative generation failed: {e}")
            raise ExternalServiceError(
                f"Narrative generation failed: {e}",
                details={"model": self.config.model},
            ) from e
        return self._to_response(response, started)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "is_available": self.is_available,
            "model": self.config.model,
            "request_count": self._request_count,
            "failure_count": self._failure_count,
            "last_request": self._last_request_time.isoformat() if self._last_request_time else None,
        }
