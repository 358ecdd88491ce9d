"""Tests for LLMClassifierAdapter."""

import pytest

from app.schemas.intent import ClassificationReply
from app.services.llm_classifier import (
    FALLBACK_MESSAGE,
    LLMClassifierAdapter,
    build_classification_prompt,
    parse_action_codes,
)
from tests.fixtures.fakes import FakeChatModel


def test_parse_action_codes_drops_non_numeric_tokens():
    assert parse_action_codes("1001, 2001,x,3001") == [1001, 2001, 3001]


def test_parse_action_codes_is_idempotent_over_its_output():
    codes = parse_action_codes("5001 , 2002")
    assert parse_action_codes(",".join(str(c) for c in codes)) == codes


@pytest.mark.parametrize("raw", [None, "", " , ,", "abc"])
def test_parse_action_codes_empty(raw):
    assert parse_action_codes(raw) == []


def test_parse_action_codes_accepts_lists():
    assert parse_action_codes([7001, "8001", "nope"]) == [7001, 8001]


@pytest.mark.parametrize("raw", ["1_001", "１００１", "+1001", "10.01", "--5", "-"])
def test_parse_action_codes_only_accepts_plain_ascii_digits(raw):
    assert parse_action_codes(raw) == []


def test_parse_action_codes_keeps_ascii_codes_next_to_rejected_ones():
    assert parse_action_codes("1_001, 2001") == [2001]


def test_prompt_embeds_context_and_message():
    prompt = build_classification_prompt("quero falar com alguÃ©m", "menu_selection")
    assert "CONTEXTO ATUAL: menu_selection" in prompt
    assert "MENSAGEM DO USUÃRIO: quero falar com alguÃ©m" in prompt
    assert "9001 - Falar com atendente humano" in prompt


def test_prompt_uses_nenhum_without_context():
    prompt = build_classification_prompt("oi", None)
    assert "CONTEXTO ATUAL: nenhum" in prompt


def test_prompt_is_deterministic():
    assert build_classification_prompt("oi", "x") == build_classification_prompt("oi", "x")


@pytest.mark.asyncio
async def test_classify_with_model_parses_payload():
    model = FakeChatModel(
        payload={
            "message": "Vou chamar um atendente.",
            "codes": "9001",
            "wait_for_response": False,
            "conversation_context": "human_support",
        }
    )
    adapter = LLMClassifierAdapter(model, timeout_seconds=1)

    result = await adapter.classify_with_model("quero falar com uma pessoa", "menu_selection")

    assert model.call_count == 1
    assert model.output_types[0] is ClassificationReply
    assert "CONTEXTO ATUAL: menu_selection" in model.prompts[0]
    assert result.reply_message == "Vou chamar um atendente."
    assert result.action_codes == [9001]
    assert result.wait_for_response is False
    assert result.conversation_context == "human_support"


@pytest.mark.asyncio
async def test_classify_with_model_unwraps_response_envelope():
    model = FakeChatModel(
        payload={
            "response": {
                "message": "Aqui estÃ£o os cupons.",
                "codes": "5002, 5001",
                "wait_for_response": "false",
                "conversation_context": "",
            }
        }
    )
    result = await LLMClassifierAdapter(model).classify_with_model("cupom", None)
    assert result.action_codes == [5002, 5001]
    assert result.wait_for_response is False
    assert result.conversation_context is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"codes": "1001", "wait_for_response": True},
        {"message": "oi", "wait_for_response": True},
        {"message": "", "codes": "", "wait_for_response": True},
        ["not", "a", "dict"],
        "plain text",
    ],
)
async def test_classify_with_model_falls_back_on_malformed_payload(payload):
    model = FakeChatModel(payload=payload)
    result = await LLMClassifierAdapter(model).classify_with_model("???", None)
    assert result.reply_message == FALLBACK_MESSAGE
    assert result.action_codes == []
    assert result.wait_for_response is True


@pytest.mark.asyncio
async def test_classify_with_model_falls_back_on_model_error():
    model = FakeChatModel(error=RuntimeError("401 Unauthorized"))
    result = await LLMClassifierAdapter(model).classify_with_model("oi", None)
    assert result.reply_message == FALLBACK_MESSAGE
    assert result.action_codes == []
    assert result.wait_for_response is True


@pytest.mark.asyncio
async def test_classify_with_model_falls_back_on_timeout():
    model = FakeChatModel(payload={"message": "tarde demais", "codes": "", "wait_for_response": True}, delay=1)
    adapter = LLMClassifierAdapter(model, timeout_seconds=0.01)

    result = await adapter.classify_with_model("oi", None)

    assert result.reply_message == FALLBACK_MESSAGE
    assert result.wait_for_response is True

