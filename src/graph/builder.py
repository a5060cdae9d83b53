"""
DevMind — Graph Builder
Constructs and compiles the LangGraph pipeline one agent runs per task.

Flow:
    START → load_context → classify → read_source → assemble → generate → extract → write → END
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from langgraph.graph import END, StateGraph

from pipeline.context import load_context, read_source, resolve_source_path
from pipeline.writer import write_artifacts
from state.schemas import AgentTask, PipelineState

if TYPE_CHECKING:
    from agents.base import BaseAgent


# ──────────────────────────────────────────────
# Stage Nodes
# ──────────────────────────────────────────────
# Each stage is a closure over the agent that reads what earlier stages
# produced and returns only the keys it owns.

def _make_nodes(
    agent: BaseAgent,
    live: bool,
    context_dir: Path,
    output_dir: Path,
    llm: Optional[Any],
) -> dict[str, Any]:
    tag = f"[{agent.name.upper()}]"

    def load_context_node(state: PipelineState) -> dict:
        print(f"  📚 {tag} Loading context from {context_dir}...")
        return {"context": load_context(agent.context_documents, context_dir)}

    def classify_node(state: PipelineState) -> dict:
        variant = agent.classify(state["task"].raw_spec)
        print(f"  🏷️ {tag} Variant: {variant.value}")
        return {"variant": variant}

    def read_source_node(state: PipelineState) -> dict:
        task = state["task"]
        return {"source": read_source(resolve_source_path(task.raw_spec, task.source_path))}

    def assemble_node(state: PipelineState) -> dict:
        prompt = agent.build_prompt(
            state["context"], state["variant"], state["task"].raw_spec, state["source"]
        )
        return {"prompt": prompt}

    async def generate_node(state: PipelineState) -> dict:
        backend = agent.make_backend(live, state["variant"], llm=llm)
        mode = "live" if live else "simulated"
        print(f"  🤖 {tag} Generating ({mode} mode)...")
        return {"response": await backend.generate(state["prompt"])}

    def extract_node(state: PipelineState) -> dict:
        return {"artifacts": agent.extract(state["response"])}

    def write_node(state: PipelineState) -> dict:
        manifest = agent.build_manifest(state["task"], state["variant"], state["artifacts"])
        written = write_artifacts(output_dir / agent.output_subdir, manifest)
        return {"manifest": manifest, "written_paths": [str(p) for p in written]}

    return {
        "load_context": load_context_node,
        "classify": classify_node,
        "read_source": read_source_node,
        "assemble": assemble_node,
        "generate": generate_node,
        "extract": extract_node,
        "write": write_node,
    }


# ──────────────────────────────────────────────
# Graph Construction
# ──────────────────────────────────────────────

def build_pipeline(
    agent: BaseAgent,
    live: bool,
    context_dir: Path | str,
    output_dir: Path | str,
    llm: Optional[Any] = None,
):
    """
    Build and compile the pipeline graph for one agent.

    `live` selects the generation backend for every run of this graph.
    Returns a compiled LangGraph ready for .ainvoke().
    """
    workflow = StateGraph(PipelineState)

    nodes = _make_nodes(agent, live, Path(context_dir), Path(output_dir), llm)
    for name, node in nodes.items():
        workflow.add_node(name, node)

    # Strictly sequential: each stage runs after the previous one
    names = list(nodes)
    workflow.set_entry_point(names[0])
    for current, following in zip(names, names[1:]):
        workflow.add_edge(current, following)
    workflow.add_edge(names[-1], END)

    return workflow.compile()


def initial_state(task: AgentTask) -> PipelineState:
    return {
        "task": task,
        "context": {},
        "variant": None,
        "source": "",
        "prompt": "",
        "response": "",
        "artifacts": None,
        "manifest": [],
        "written_paths": [],
    }
