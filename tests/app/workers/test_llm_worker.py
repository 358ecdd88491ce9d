"""Tests for the LiteLLM-backed chat model adapter."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.schemas.intent import ClassificationReply
from app.workers.llm import LLMRunner


@pytest.mark.asyncio
@patch("app.workers.llm.Agent")
@patch("app.workers.llm.OpenAIChatModel")
@patch("app.workers.llm.LiteLLMProvider")
async def test_llm_runner_complete_requests_structured_output(mock_provider, mock_model, mock_agent):
    reply = ClassificationReply(message="Olá!", codes="9001", wait_for_response=False)
    agent = MagicMock()
    agent.run = AsyncMock(return_value=MagicMock(output=reply))
    mock_agent.return_value = agent

    runner = LLMRunner("gpt-4o-mini", api_key="sk-test", api_base="http://litellm.test")
    payload = await runner.complete("Classifique.", ClassificationReply)

    mock_provider.assert_called_once_with(api_key="sk-test", api_base="http://litellm.test")
    mock_model.assert_called_once_with("gpt-4o-mini", provider=mock_provider.return_value)
    agent.run.assert_awaited_once_with("Classifique.", output_type=ClassificationReply)
    assert payload == {
        "message": "Olá!",
        "codes": "9001",
        "wait_for_response": False,
        "conversation_context": None,
    }


@pytest.mark.asyncio
@patch("app.workers.llm.Agent")
@patch("app.workers.llm.OpenAIChatModel")
@patch("app.workers.llm.LiteLLMProvider")
async def test_llm_runner_propagates_validation_failures(mock_provider, mock_model, mock_agent):
    agent = MagicMock()
    agent.run = AsyncMock(side_effect=RuntimeError("Exceeded maximum retries for output validation"))
    mock_agent.return_value = agent

    runner = LLMRunner("gpt-4o-mini")
    with pytest.raises(RuntimeError):
        await runner.complete("Classifique.", ClassificationReply)
