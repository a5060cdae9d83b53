"""
DevMind — Settings
Environment config, model parameters, and pipeline locations.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ──────────────────────────────────────────────
# API Keys
# ──────────────────────────────────────────────
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")

# ──────────────────────────────────────────────
# Model Configuration
# ──────────────────────────────────────────────
AGENT_MODEL = os.getenv("AGENT_MODEL", "gemini-2.0-flash")
AGENT_TEMPERATURE = float(os.getenv("AGENT_TEMPERATURE", "0.4"))

# ──────────────────────────────────────────────
# Generation Mode
# ──────────────────────────────────────────────
# Read once at import. Callers pass it into the pipeline explicitly.
TRUTHY_VALUES = {"1", "true", "yes", "on"}


def parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in TRUTHY_VALUES


REAL_MODE = parse_bool(os.getenv("DEVMIND_REAL_MODE"))

# ──────────────────────────────────────────────
# Locations
# ──────────────────────────────────────────────
CONTEXT_DIR = Path(os.getenv("DEVMIND_CONTEXT_DIR", "context"))
OUTPUT_DIR = Path(os.getenv("DEVMIND_OUTPUT_DIR", "."))

# Context documents every agent reads, in prompt order
CONTEXT_DOCUMENTS = ("core.md", "rules.md")

# ──────────────────────────────────────────────
# Logging
# ──────────────────────────────────────────────
LOG_LEVEL = os.getenv("DEVMIND_LOG_LEVEL", "WARNING").upper()
