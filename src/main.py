"""
DevMind — Entry Point
Run one specialist agent from the command line.

Usage:
    devmind security "Review our REST endpoints for injection risks"
    devmind performance "Optimize the product list" src/ProductList.jsx
    DEVMIND_REAL_MODE=1 devmind devops "GitHub Actions pipeline for a Node app"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from agents import AGENT_REGISTRY, get_agent
from config import settings
from pipeline.errors import GenerationFailure, WriteFailure
from state.schemas import AgentTask


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="devmind", description="DevMind: specialist development agents")
    ap.add_argument("family", choices=sorted(AGENT_REGISTRY), help="Agent to run")
    ap.add_argument("spec", help="Free-text task specification")
    ap.add_argument("source_path", nargs="?", default=None, help="Optional source file to analyse")
    args = ap.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    agent = get_agent(args.family)
    task = AgentTask(raw_spec=args.spec, source_path=args.source_path)

    print(f"\n{'='*60}")
    print(f"🧠 DEVMIND — {agent.title}")
    print(f"{'='*60}")
    print(f"📌 Task: {task.raw_spec}")
    print(f"⚙️ Mode: {'live' if settings.REAL_MODE else 'simulated'}\n")

    try:
        final_state = asyncio.run(agent.run(task, live=settings.REAL_MODE))
    except (GenerationFailure, WriteFailure) as e:
        print(f"\n❌ {type(e).__name__}: {e}")
        return 1

    print("\n📋 FILES WRITTEN:")
    print("-" * 60)
    for path in final_state["written_paths"]:
        print(f"  {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
