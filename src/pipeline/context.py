"""
DevMind — Context Loader
Reads named project context documents. Missing documents never fail a task;
they are replaced with a placeholder and reported as warnings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from pipeline.errors import MissingContext, SourceReadFailure

logger = logging.getLogger(__name__)


def missing_placeholder(name: str) -> str:
    return f"[context '{name}' not found]"


def _read_context_file(context_dir: Path, name: str) -> str:
    path = context_dir / name
    if not path.is_file():
        raise MissingContext(name)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MissingContext(name, reason=str(e)) from e


def load_context(names: Iterable[str], context_dir: Path | str) -> dict[str, str]:
    """
    Build the context bundle for a task.

    Returns an ordered mapping name → text, in the order the names were given.
    Unavailable documents map to a placeholder naming them.
    """
    context_dir = Path(context_dir)
    bundle: dict[str, str] = {}
    for name in names:
        try:
            bundle[name] = _read_context_file(context_dir, name)
        except MissingContext as e:
            logger.warning("%s (looked in %s)", e, context_dir)
            bundle[name] = missing_placeholder(name)
    return bundle


def resolve_source_path(raw_spec: str, source_path: str | None) -> str | None:
    """The explicit source path, or the spec itself when it names an existing file."""
    if source_path:
        return source_path
    candidate = raw_spec.strip()
    if candidate and "\n" not in candidate:
        try:
            if Path(candidate).is_file():
                return candidate
        except OSError:
            # Spec text too long or malformed to be a path
            return None
    return None


def _read_source_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadFailure(path, str(e)) from e


def read_source(path: str | None) -> str:
    """Read the optional source artifact. Unreadable sources yield ''."""
    if not path:
        return ""
    try:
        return _read_source_file(path)
    except SourceReadFailure as e:
        logger.warning("%s; continuing without source", e)
        return ""
