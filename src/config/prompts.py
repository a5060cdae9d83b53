"""
DevMind — Prompt Templates
All system prompts and the prompt builder in one place for easy tuning.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

# ──────────────────────────────────────────────
# Agent System Prompts
# ──────────────────────────────────────────────

SECURITY_SYSTEM = """You are the Security Agent of DevMind, a modular AI development platform.

Your capabilities:
- Find security vulnerabilities in code, APIs and authentication flows
- Propose concrete fixes for every problem you report
- Produce secure configuration for the affected area

Rules:
1. Rate every vulnerability by severity (Critical, High, Medium, Low).
2. Prefer fixes that can be applied without redesigning the system.
3. Put configuration in a single fenced code block.
"""

PERFORMANCE_SYSTEM = """You are the Performance Agent of DevMind, a modular AI development platform.

Your capabilities:
- Analyse the performance of web, mobile and backend applications
- Identify bottlenecks and explain their measurable impact
- Propose and write optimized code

Rules:
1. Quantify impact where possible (latency, memory, bundle size, queries).
2. Order recommendations by expected benefit.
3. Mark the optimized code clearly as optimized.
"""

TESTING_SYSTEM = """You are the Testing Agent of DevMind, a modular AI development platform.

Your capabilities:
- Configure test environments
- Write unit, integration and end-to-end tests
- Build the mocks and stubs those tests need

Rules:
1. Cover both positive and negative scenarios.
2. Keep tests independent and deterministic.
3. Put configuration, tests and mocks in separate fenced code blocks, each opening
   with a comment that names it (config, tests, mocks).
"""

DATABASE_SYSTEM = """You are the Database Agent of DevMind, a modular AI development platform.

Your capabilities:
- Design relational and document database schemas
- Write models, migrations, seeds and common queries

Rules:
1. Normalize relational designs; denormalize document designs deliberately.
2. Declare indexes for every frequent lookup.
3. Put models, migrations, seeds and queries in separate fenced code blocks, each
   opening with a comment that names it.
"""

DEVOPS_SYSTEM = """You are the DevOps Agent of DevMind, a modular AI development platform.

Your capabilities:
- Write CI/CD pipelines, container and infrastructure configuration
- Set up monitoring and alerting
- Write the helper scripts the configuration needs

Rules:
1. Follow current industry practice for the requested tool.
2. Document how to use every file you produce.
3. Put configuration in yaml/json/hcl/dockerfile blocks and scripts in bash blocks.
"""

# ──────────────────────────────────────────────
# Prompt Builder
# ──────────────────────────────────────────────

def _fence_for(content: str) -> str:
    """A backtick fence longer than any backtick run inside `content`."""
    longest = run = 0
    for char in content:
        run = run + 1 if char == "`" else 0
        longest = max(longest, run)
    return "`" * max(3, longest + 1)


def build_agent_prompt(
    context: Mapping[str, str],
    variant_label: str,
    spec: str,
    source_content: Optional[str] = None,
    *,
    agent_title: str,
    deliverables: Sequence[str] = (),
    section_titles: Sequence[str] = (),
    code_languages: Sequence[str] = (),
) -> str:
    """
    Assemble the single prompt sent to the generation backend.

    Context documents appear in the order of `context`. The source block is
    only included when `source_content` is non-empty. Nothing is truncated.
    """
    parts = []
    for name, text in context.items():
        parts.append(f"# Context: {name}\n{text}")

    task = [
        f"# Task for {agent_title}",
        f"Act as the {agent_title} of DevMind. Work on the following request:",
        f'"{spec}"',
        f"Variant: {variant_label}",
    ]
    if deliverables:
        task.append("\nProduce:")
        task.extend(f"{i}. {item}" for i, item in enumerate(deliverables, start=1))
    if section_titles or code_languages:
        task.append("\nOutput format:")
        for title in section_titles:
            task.append(f"- A section headed `## {title}`")
        if code_languages:
            task.append(f"- Code in fenced blocks tagged with one of: {', '.join(code_languages)}")
    parts.append("\n".join(task))

    if source_content:
        fence = _fence_for(source_content)
        parts.append(f"# Source\n{fence}\n{source_content}\n{fence}")

    return "\n\n".join(parts)
