"""
DevMind — State Schemas
Centralized state definitions and Pydantic models for pipeline I/O.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict


# ──────────────────────────────────────────────
# Task Input
# ──────────────────────────────────────────────

class AgentTask(BaseModel):
    """A single agent invocation."""
    model_config = ConfigDict(frozen=True)

    raw_spec: str = Field(description="Free-text task specification")
    source_path: Optional[str] = Field(
        default=None,
        description="Optional path of a source artifact to embed in the prompt",
    )


# ──────────────────────────────────────────────
# Extraction Models
# ──────────────────────────────────────────────

class CodeBlock(BaseModel):
    """A fenced code block found in a generation result."""
    model_config = ConfigDict(frozen=True)

    language: str = Field(description="Language tag declared on the opening fence")
    body: str = Field(description="Block content without the fences")


class ExtractedArtifactSet(BaseModel):
    """Sections and code blocks parsed out of a generation result."""
    model_config = ConfigDict(frozen=True)

    sections: dict[str, str] = Field(
        default_factory=dict,
        description="Requested section title → body ('' when absent)",
    )
    code_blocks: list[CodeBlock] = Field(
        default_factory=list,
        description="Matching fenced blocks in document order",
    )


# ──────────────────────────────────────────────
# Output Models
# ──────────────────────────────────────────────

class OutputFile(BaseModel):
    """One entry of an output manifest."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(description="File path relative to the agent output directory")
    content: str = Field(default="", description="Exact file content")
    executable: bool = Field(default=False, description="Mark the file executable")


class GenerationStatus(str, Enum):
    NOT_STARTED = "not_started"
    REQUESTED = "requested"
    COMPLETED = "completed"
    FAILED = "failed"


# ──────────────────────────────────────────────
# LangGraph Pipeline State
# ──────────────────────────────────────────────

class PipelineState(TypedDict):
    """State flowing through one agent pipeline run."""

    # Input
    task: AgentTask

    # Prompt inputs
    context: dict[str, str]                        # context document name → text
    variant: Optional[Enum]                        # classification for this task
    source: str                                    # source artifact content ('' if none)
    prompt: str                                    # assembled prompt envelope

    # Generation & extraction
    response: str                                  # raw generation result
    artifacts: Optional[ExtractedArtifactSet]

    # Output
    manifest: list[OutputFile]
    written_paths: list[str]
