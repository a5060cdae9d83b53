"""
DevMind — Artifact Writer
Persists an output manifest under an agent's output directory.

Every file is written to a temporary sibling and moved into place, so a path
either holds the complete new content or is left as it was. The first failure
aborts the run; files already written stay on disk.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from pipeline.errors import WriteFailure
from state.schemas import OutputFile

logger = logging.getLogger(__name__)

FILE_MODE = 0o644
EXECUTABLE_MODE = 0o755


def _resolve_target(output_dir: Path, relative: str) -> Path:
    candidate = Path(relative)
    if not relative or candidate.is_absolute():
        raise WriteFailure(relative, "manifest paths must be relative to the output directory")
    target = (output_dir / candidate).resolve()
    if output_dir.resolve() not in target.parents:
        raise WriteFailure(relative, "path escapes the output directory")
    return target


def _atomic_write(target: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def write_artifacts(output_dir: Path | str, manifest: Iterable[OutputFile]) -> list[Path]:
    """
    Write every manifest entry, overwriting existing files.

    Returns the written paths in manifest order.
    Raises WriteFailure on the first directory or file that cannot be written.
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteFailure(str(output_dir), str(e)) from e

    written: list[Path] = []
    for entry in manifest:
        target = _resolve_target(output_dir, entry.path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            _atomic_write(target, entry.content)
        except (OSError, UnicodeError) as e:
            raise WriteFailure(str(target), str(e)) from e

        if entry.executable:
            try:
                target.chmod(EXECUTABLE_MODE)
            except OSError as e:
                logger.warning("Could not mark %s executable: %s", target, e)

        written.append(target)
    return written
