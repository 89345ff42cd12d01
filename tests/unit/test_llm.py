"""
Unit Tests for the Gemini Narrative Client and Prompt
"""
from unittest.mock import AsyncMock, Mock, patch

import pytest

from mapa.config import Settings
from mapa.core.llm import (
    NarrativeClient,
    NarrativeConfig,
    SYSTEM_INSTRUCTION,
    build_analysis_prompt,
)
from mapa.utils import ExternalServiceError


@pytest.fixture
def configured_client():
    """Client with a fake key and the LangChain model patched out."""
    with patch("mapa.core.llm.gemini_client.ChatGoogleGenerativeAI") as chat_cls:
        client = NarrativeClient(NarrativeConfig(api_key="test-key"))
        yield client, chat_cls.return_value


class TestNarrativeConfig:

    def test_from_settings(self):
        config = NarrativeConfig.from_settings(Settings(
            gemini_api_key="abc", gemini_model="gemini-test", narrative_timeout_seconds=5,
        ))

        assert config.api_key == "abc"
        assert config.model == "gemini-test"
        assert config.request_timeout_seconds == 5

    def test_disabled_drops_key(self):
        config = NarrativeConfig.from_settings(Settings(gemini_api_key="abc", narrative_enabled=False))
        assert config.api_key is None


class TestNarrativeClient:

    def test_unconfigured_is_unavailable(self):
        client = NarrativeClient(NarrativeConfig(api_key=None))

        assert client.is_available is False
        with pytest.raises(ExternalServiceError):
            client.generate("prompt")

    async def test_unconfigured_async_raises(self):
        client = NarrativeClient(NarrativeConfig(api_key=None))

        with pytest.raises(ExternalServiceError):
            await client.generate_async("prompt")

    def test_generate(self, configured_client):
        client, llm = configured_client
        llm.invoke.return_value = Mock(
            content="  Narrative text  ",
            usage_metadata={"input_tokens": 120, "output_tokens": 80},
        )

        response = client.generate("prompt", SYSTEM_INSTRUCTION)

        assert response.text == "Narrative text"
        assert response.prompt_tokens == 120
        assert response.completion_tokens == 80
        messages = llm.invoke.call_args[0][0]
        assert messages[0] == ("system", SYSTEM_INSTRUCTION)
        assert messages[1] == ("human", "prompt")
        assert client.get_stats()["request_count"] == 1

    def test_generate_failure_wrapped(self, configured_client):
        client, llm = configured_client
        llm.invoke.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(ExternalServiceError) as exc_info:
            client.generate("prompt")

        assert "quota exceeded" in exc_info.value.message
        assert client.get_stats()["failure_count"] == 1

    def test_empty_reply_is_an_error(self, configured_client):
        client, llm = configured_client
        llm.invoke.return_value = Mock(content="   ", usage_metadata=None)

        with pytest.raises(ExternalServiceError):
            client.generate("prompt")

    async def test_generate_async(self, configured_client):
        client, llm = configured_client
        llm.ainvoke = AsyncMock(return_value=Mock(content="Async narrative", usage_metadata={}))

        response = await client.generate_async("prompt")

        assert response.text == "Async narrative"
        assert llm.ainvoke.call_args[0][0] == [("human", "prompt")]


class TestAnalysisPrompt:

    def test_prompt_contents(self, patient, hypertensive_study):
        prompt = build_analysis_prompt(patient, hypertensive_study)

        assert "58" in prompt
        assert "135/85" in prompt
        assert "Type 2 diabetes" in prompt
        assert "<130/80" in prompt

    def test_prompt_omits_patient_name_and_rut(self, patient, hypertensive_study):
        prompt = build_analysis_prompt(patient, hypertensive_study)

        assert patient.full_name not in prompt
        assert patient.identity_number not in prompt
