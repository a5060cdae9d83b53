"""
DevMind — Generation Backends
The two ways a pipeline obtains its response text: a live chat model or a
deterministic simulation keyed by task variant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import AGENT_MODEL, AGENT_TEMPERATURE, GOOGLE_API_KEY
from pipeline.errors import GenerationFailure
from state.schemas import GenerationStatus


class GenerationBackend(ABC):
    """
    Produces one text completion per task.

    `status` moves NOT_STARTED → REQUESTED → COMPLETED | FAILED and is never
    reset; a retry means running the whole pipeline again.
    """

    def __init__(self) -> None:
        self.status = GenerationStatus.NOT_STARTED

    async def generate(self, prompt: str) -> str:
        if self.status is not GenerationStatus.NOT_STARTED:
            raise GenerationFailure(f"Backend already used (status: {self.status.value})")
        self.status = GenerationStatus.REQUESTED
        try:
            text = await self._generate(prompt)
        except GenerationFailure:
            self.status = GenerationStatus.FAILED
            raise
        except Exception as e:
            self.status = GenerationStatus.FAILED
            raise GenerationFailure(f"{type(e).__name__}: {e}") from e
        self.status = GenerationStatus.COMPLETED
        return text

    @abstractmethod
    async def _generate(self, prompt: str) -> str:
        ...


# ──────────────────────────────────────────────
# Live
# ──────────────────────────────────────────────

def _message_text(content: Any) -> str:
    """Flatten a chat message's content (plain string or list of parts)."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


class LiveBackend(GenerationBackend):
    """Sends the prompt to a LangChain chat model."""

    def __init__(
        self,
        system_prompt: str = "",
        model: str | None = None,
        temperature: float | None = None,
        llm: Any = None,
    ):
        super().__init__()
        self.system_prompt = system_prompt
        self.model = model or AGENT_MODEL
        self.temperature = AGENT_TEMPERATURE if temperature is None else temperature
        self.llm = llm

    async def _generate(self, prompt: str) -> str:
        # Built on first use so a missing API key surfaces as a GenerationFailure
        if self.llm is None:
            options = {"google_api_key": GOOGLE_API_KEY} if GOOGLE_API_KEY else {}
            self.llm = ChatGoogleGenerativeAI(model=self.model, temperature=self.temperature, **options)

        messages = []
        if self.system_prompt:
            messages.append(SystemMessage(content=self.system_prompt))
        messages.append(HumanMessage(content=prompt))

        response = await self.llm.ainvoke(messages)
        text = _message_text(getattr(response, "content", None))
        if not text.strip():
            raise GenerationFailure("Model returned an empty response")
        return text


# ──────────────────────────────────────────────
# Simulated
# ──────────────────────────────────────────────

class SimulatedBackend(GenerationBackend):
    """Returns canned text for the task's variant; the prompt is ignored."""

    def __init__(self, responses: Mapping[Enum, str], variant: Enum):
        super().__init__()
        self.responses = responses
        self.variant = variant

    async def _generate(self, prompt: str) -> str:
        if self.variant not in self.responses:
            raise GenerationFailure(f"No simulated response for variant '{self.variant.value}'")
        return self.responses[self.variant]


def select_backend(
    live: bool,
    variant: Enum,
    simulated_responses: Mapping[Enum, str],
    system_prompt: str = "",
    llm: Optional[Any] = None,
) -> GenerationBackend:
    """Build the backend for one task. `live` is decided by the caller up front."""
    if live:
        return LiveBackend(system_prompt=system_prompt, llm=llm)
    return SimulatedBackend(simulated_responses, variant)
