"""End-to-end pipeline runs against a temporary workspace."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from agents import get_agent
from agents.security import ANALYSIS_SECTION, FIXES_SECTION, SecurityVariant
from pipeline.errors import GenerationFailure
from state.schemas import AgentTask


SPEC = "Review our REST endpoints for injection risks"


@pytest.fixture
def workspace(tmp_path):
    context_dir = tmp_path / "context"
    context_dir.mkdir()
    (context_dir / "core.md").write_text("Node.js + Express service.", encoding="utf-8")
    return tmp_path


@pytest.mark.asyncio
async def test_simulated_security_run(workspace):
    agent = get_agent("security")

    state = await agent.run(
        AgentTask(raw_spec=SPEC),
        live=False,
        context_dir=workspace / "context",
        output_dir=workspace / "out",
    )

    assert state["variant"] is SecurityVariant.API
    assert state["artifacts"].sections[ANALYSIS_SECTION]
    assert state["artifacts"].sections[FIXES_SECTION]
    assert "[context 'rules.md' not found]" in state["prompt"]
    assert "Node.js + Express service." in state["prompt"]

    out = workspace / "out" / "security"
    assert sorted(p.name for p in out.iterdir()) == [
        "security-analysis.md",
        "security-config.js",
        "security-fixes.md",
    ]
    assert (out / "security-analysis.md").read_text(encoding="utf-8").startswith(f"# Análisis de Seguridad: {SPEC}")
    assert (out / "security-config.js").read_text(encoding="utf-8") == state["artifacts"].code_blocks[0].body
    assert state["written_paths"] == [str(p) for p in [
        (out / "security-analysis.md").resolve(),
        (out / "security-fixes.md").resolve(),
        (out / "security-config.js").resolve(),
    ]]


@pytest.mark.asyncio
async def test_source_file_is_embedded(workspace):
    source = workspace / "routes.js"
    source.write_text("app.get('/users', handler);", encoding="utf-8")

    state = await get_agent("security").run(
        AgentTask(raw_spec=SPEC, source_path=str(source)),
        context_dir=workspace / "context",
        output_dir=workspace / "out",
    )

    assert state["source"] == "app.get('/users', handler);"
    assert "# Source\n```\napp.get('/users', handler);\n```" in state["prompt"]


@pytest.mark.asyncio
async def test_live_run_uses_model_output(workspace):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=(
        "## Diseño de Base de Datos\nUsers and orders.\n\n"
        "```js\n// models\nconst User = {};\n```\n"
    )))

    state = await get_agent("database").run(
        "Design a PostgreSQL schema for orders",
        live=True,
        context_dir=workspace / "context",
        output_dir=workspace / "out",
        llm=llm,
    )

    assert state["variant"].value == "sql"
    out = workspace / "out" / "database"
    assert (out / "db-design.md").read_text(encoding="utf-8").endswith("Users and orders.")
    assert (out / "models" / "models.js").read_text(encoding="utf-8") == "// models\nconst User = {};"
    # Only one block: every code file falls back to it
    assert (out / "queries.js").read_text(encoding="utf-8") == "// models\nconst User = {};"


@pytest.mark.asyncio
async def test_live_failure_writes_nothing(workspace):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=RuntimeError("service unavailable"))

    with pytest.raises(GenerationFailure, match="service unavailable"):
        await get_agent("security").run(
            SPEC,
            live=True,
            context_dir=workspace / "context",
            output_dir=workspace / "out",
            llm=llm,
        )

    assert not (workspace / "out").exists()


@pytest.mark.asyncio
async def test_devops_script_written_executable(workspace):
    await get_agent("devops").run(
        "Dockerfile and docker-compose for the API",
        context_dir=workspace / "context",
        output_dir=workspace / "out",
    )

    script = workspace / "out" / "devops" / "deploy.sh"
    assert script.stat().st_mode & 0o111
    assert "docker compose" in script.read_text(encoding="utf-8")
