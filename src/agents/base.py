"""
DevMind — Base Agent
Abstract base class defining the shared pipeline configuration for all
specialist agents. Every agent inherits from this and implements
`build_manifest`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from config import settings
from config.prompts import build_agent_prompt
from graph.builder import build_pipeline, initial_state
from pipeline.backends import GenerationBackend, select_backend
from pipeline.classifier import classify
from pipeline.extractor import DEFAULT_CODE_LANGUAGES, extract_artifacts
from state.schemas import AgentTask, ExtractedArtifactSet, OutputFile, PipelineState


class BaseAgent(ABC):
    """
    Abstract specialist agent.

    Subclasses must:
        1. Set `name`, `title`, `system_prompt` and `output_subdir`.
        2. Set `variants` (an Enum), `keyword_table` and `default_variant`.
        3. Set `section_titles` and, if needed, `code_languages`.
        4. Provide `simulated_responses` for every variant.
        5. Implement `build_manifest()`.
    """

    name: str = "base"
    title: str = "Base Agent"
    system_prompt: str = ""
    output_subdir: str = "output"

    variants: type[Enum]
    keyword_table: Mapping[Enum, Sequence[str]] = {}
    default_variant: Enum
    variant_descriptions: Mapping[Enum, str] = {}

    context_documents: Sequence[str] = settings.CONTEXT_DOCUMENTS
    deliverables: Sequence[str] = ()
    section_titles: Sequence[str] = ()
    code_languages: Optional[Sequence[str]] = DEFAULT_CODE_LANGUAGES
    simulated_responses: Mapping[Enum, str] = {}

    # ── Pipeline Stages ───────────────────────

    def classify(self, spec: str) -> Enum:
        return classify(spec, self.keyword_table, self.default_variant)

    def describe_variant(self, variant: Enum) -> str:
        description = self.variant_descriptions.get(variant)
        return f"{variant.value} ({description})" if description else variant.value

    def build_prompt(
        self,
        context: Mapping[str, str],
        variant: Enum,
        spec: str,
        source_content: Optional[str] = None,
    ) -> str:
        return build_agent_prompt(
            context,
            self.describe_variant(variant),
            spec,
            source_content,
            agent_title=self.title,
            deliverables=self.deliverables,
            section_titles=self.section_titles,
            code_languages=self.code_languages or (),
        )

    def make_backend(self, live: bool, variant: Enum, llm: Optional[Any] = None) -> GenerationBackend:
        return select_backend(
            live,
            variant,
            self.simulated_responses,
            system_prompt=self.system_prompt,
            llm=llm,
        )

    def extract(self, response: str) -> ExtractedArtifactSet:
        return extract_artifacts(response, self.section_titles, self.code_languages)

    @abstractmethod
    def build_manifest(
        self,
        task: AgentTask,
        variant: Enum,
        artifacts: ExtractedArtifactSet,
    ) -> list[OutputFile]:
        """Map extracted artifacts to this agent's fixed set of output files."""

    # ── Execution ─────────────────────────────

    async def run(
        self,
        task: AgentTask | str,
        live: bool = False,
        context_dir: Path | str | None = None,
        output_dir: Path | str | None = None,
        llm: Optional[Any] = None,
    ) -> PipelineState:
        """
        Public entry point. Runs the full pipeline for one task.

        Args:
            task: The task, or a bare spec string.
            live: Use the live model instead of the simulated backend.
            context_dir: Directory holding the context documents.
            output_dir: Root under which `output_subdir` is written.
            llm: Optional chat model to use in live mode.

        Returns:
            The final pipeline state, including `written_paths`.

        Raises:
            GenerationFailure, WriteFailure
        """
        if isinstance(task, str):
            task = AgentTask(raw_spec=task)

        print(f"  🔧 [{self.name.upper()}] Starting: \"{task.raw_spec}\"")
        graph = build_pipeline(
            self,
            live=live,
            context_dir=settings.CONTEXT_DIR if context_dir is None else context_dir,
            output_dir=settings.OUTPUT_DIR if output_dir is None else output_dir,
            llm=llm,
        )
        final_state = await graph.ainvoke(initial_state(task))
        print(f"  ✅ [{self.name.upper()}] Complete.")
        return final_state

    # ── Helpers ────────────────────────────────

    def report(self, heading: str, body: str) -> str:
        """Markdown report file content: a top-level heading over the extracted body."""
        return f"# {heading}\n\n{body}"
