"""Tests for the live and simulated generation backends."""

from enum import Enum
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from pipeline.backends import LiveBackend, SimulatedBackend, select_backend
from pipeline.errors import GenerationFailure
from state.schemas import GenerationStatus


class Kind(str, Enum):
    ONE = "one"
    TWO = "two"


RESPONSES = {Kind.ONE: "## One\nbody"}


def _llm(**kwargs):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(**kwargs)
    return llm


# ── Simulated ─────────────────────────────────

@pytest.mark.asyncio
async def test_simulated_returns_canned_text():
    backend = SimulatedBackend(RESPONSES, Kind.ONE)
    assert backend.status is GenerationStatus.NOT_STARTED

    assert await backend.generate("ignored prompt") == "## One\nbody"
    assert backend.status is GenerationStatus.COMPLETED


@pytest.mark.asyncio
async def test_simulated_unknown_variant_fails():
    backend = SimulatedBackend(RESPONSES, Kind.TWO)
    with pytest.raises(GenerationFailure):
        await backend.generate("prompt")
    assert backend.status is GenerationStatus.FAILED


@pytest.mark.asyncio
async def test_backend_is_single_use():
    backend = SimulatedBackend(RESPONSES, Kind.ONE)
    await backend.generate("prompt")
    with pytest.raises(GenerationFailure, match="already used"):
        await backend.generate("prompt")
    assert backend.status is GenerationStatus.COMPLETED


# ── Live ──────────────────────────────────────

@pytest.mark.asyncio
async def test_live_sends_system_and_user_messages():
    llm = _llm(return_value=AIMessage(content="## Result\nok"))
    backend = LiveBackend(system_prompt="You are a test agent.", llm=llm)

    assert await backend.generate("the prompt") == "## Result\nok"
    assert backend.status is GenerationStatus.COMPLETED

    messages = llm.ainvoke.await_args.args[0]
    assert isinstance(messages[0], SystemMessage)
    assert messages[0].content == "You are a test agent."
    assert isinstance(messages[1], HumanMessage)
    assert messages[1].content == "the prompt"


@pytest.mark.asyncio
async def test_live_flattens_content_parts():
    content = [{"type": "text", "text": "part one, "}, {"type": "text", "text": "part two"}]
    backend = LiveBackend(llm=_llm(return_value=AIMessage(content=content)))
    assert await backend.generate("prompt") == "part one, part two"


@pytest.mark.asyncio
async def test_live_error_becomes_generation_failure():
    backend = LiveBackend(llm=_llm(side_effect=RuntimeError("quota exceeded")))

    with pytest.raises(GenerationFailure, match="quota exceeded") as exc_info:
        await backend.generate("prompt")

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert backend.status is GenerationStatus.FAILED


@pytest.mark.asyncio
async def test_live_empty_response_fails():
    backend = LiveBackend(llm=_llm(return_value=AIMessage(content="   ")))
    with pytest.raises(GenerationFailure, match="empty"):
        await backend.generate("prompt")
    assert backend.status is GenerationStatus.FAILED


def test_select_backend():
    assert isinstance(select_backend(False, Kind.ONE, RESPONSES), SimulatedBackend)
    live = select_backend(True, Kind.ONE, RESPONSES, system_prompt="sys", llm=_llm())
    assert isinstance(live, LiveBackend)
    assert live.system_prompt == "sys"


@pytest.mark.asyncio
async def test_live_client_built_with_configured_key(monkeypatch):
    client = MagicMock(return_value=_llm(return_value=AIMessage(content="ok")))
    monkeypatch.setattr("pipeline.backends.ChatGoogleGenerativeAI", client)
    monkeypatch.setattr("pipeline.backends.GOOGLE_API_KEY", "test-key")

    backend = LiveBackend(model="gemini-test", temperature=0.1)
    assert await backend.generate("prompt") == "ok"
    client.assert_called_once_with(model="gemini-test", temperature=0.1, google_api_key="test-key")
