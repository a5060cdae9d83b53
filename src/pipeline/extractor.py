"""
DevMind — Response Extractor
Parses free-text generation results into named markdown sections and fenced
code blocks.

The text is scanned line by line. Fenced blocks are located first so that
`## ` lines inside code never count as headings, and fences that are never
closed are treated as plain text. Nothing here raises on missing structure:
absent sections and blocks resolve to empty strings.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable, NamedTuple, Optional, Sequence

from state.schemas import CodeBlock, ExtractedArtifactSet

logger = logging.getLogger(__name__)

DEFAULT_CODE_LANGUAGES = ("js", "javascript", "typescript", "ts")

_FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_HEADING = re.compile(r"^ {0,3}##[ \t]+(.*)$")
_NUMBERING = re.compile(r"^\d+[.)]\s*")


class _Fence(NamedTuple):
    start: int      # line index of the opening fence
    end: int        # line index of the closing fence
    language: str


def _normalize(text: str) -> str:
    return unicodedata.normalize("NFC", text).casefold()


def _find_closing(lines: Sequence[str], start: int, marker: str) -> Optional[int]:
    for j in range(start, len(lines)):
        closing = _FENCE_CLOSE.match(lines[j])
        if closing and closing.group(1)[0] == marker[0] and len(closing.group(1)) >= len(marker):
            return j
    return None


def _find_fences(lines: Sequence[str]) -> list[_Fence]:
    fences: list[_Fence] = []
    i = 0
    while i < len(lines):
        opening = _FENCE_OPEN.match(lines[i])
        if opening:
            marker, info = opening.group(1), opening.group(2).strip()
            # A backtick fence never carries backticks in its info string
            if not (marker[0] == "`" and "`" in info):
                end = _find_closing(lines, i + 1, marker)
                if end is not None:
                    language = info.split()[0].lower() if info else ""
                    fences.append(_Fence(i, end, language))
                    i = end + 1
                    continue
        i += 1
    return fences


def _headings(lines: Sequence[str], fences: Iterable[_Fence]) -> list[tuple[int, str]]:
    """Level-two headings outside fenced blocks, as (line index, heading text)."""
    fenced = set()
    for fence in fences:
        fenced.update(range(fence.start, fence.end + 1))

    found = []
    for i, line in enumerate(lines):
        if i in fenced:
            continue
        match = _HEADING.match(line)
        if match:
            found.append((i, match.group(1).strip().rstrip("#").strip()))
    return found


def _trim_blank_lines(lines: Sequence[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end]).rstrip()


# ──────────────────────────────────────────────
# Sections
# ──────────────────────────────────────────────

def _title_matches(heading: str, title: str) -> bool:
    title = _normalize(title.strip())
    if not title:
        return False
    heading = _NUMBERING.sub("", _normalize(heading))
    return heading.startswith(title)


def extract_sections(text: str, titles: Sequence[str]) -> dict[str, str]:
    """
    Map each requested title to the body under its `## ` heading.

    A heading matches when its text starts with the title, case-insensitively.
    The body runs to the next `## ` heading or the end of the text and is
    stripped of surrounding whitespace. Missing titles map to ''.
    """
    lines = (text or "").splitlines()
    headings = _headings(lines, _find_fences(lines))

    sections: dict[str, str] = {}
    for title in titles:
        sections[title] = ""
        for position, (index, heading) in enumerate(headings):
            if _title_matches(heading, title):
                stop = headings[position + 1][0] if position + 1 < len(headings) else len(lines)
                sections[title] = "\n".join(lines[index + 1:stop]).strip()
                break
        else:
            logger.debug("Section '%s' not found in response", title)
    return sections


# ──────────────────────────────────────────────
# Code Blocks
# ──────────────────────────────────────────────

def extract_code_blocks(
    text: str,
    language_hints: Optional[Iterable[str]] = DEFAULT_CODE_LANGUAGES,
) -> list[CodeBlock]:
    """
    Collect fenced code blocks tagged with one of `language_hints`.

    Blocks are returned in document order. Passing `None` accepts every
    closed fenced block, tagged or not.
    """
    lines = (text or "").splitlines()
    accepted = None if language_hints is None else {hint.lower() for hint in language_hints}

    blocks = []
    for fence in _find_fences(lines):
        if accepted is not None and fence.language not in accepted:
            continue
        blocks.append(CodeBlock(
            language=fence.language,
            body=_trim_blank_lines(lines[fence.start + 1:fence.end]),
        ))
    return blocks


def _hint_forms(hint: str) -> set[str]:
    hint = hint.strip().lower()
    forms = {hint, hint + "s"}
    if hint.endswith("s") and len(hint) > 1:
        forms.add(hint[:-1])
    return forms


def select_code_block(blocks: Sequence[CodeBlock], content_hint: Optional[str]) -> str:
    """
    Pick the block whose body mentions `content_hint`.

    Matching is a case-insensitive substring test that also accepts the
    singular or plural form of the hint. Falls back to the first block, then
    to ''.
    """
    if not blocks:
        logger.debug("No code blocks to select '%s' from", content_hint)
        return ""
    if content_hint and content_hint.strip():
        forms = _hint_forms(content_hint)
        for block in blocks:
            body = block.body.lower()
            if any(form in body for form in forms):
                return block.body
        logger.debug("No code block mentions '%s'; using the first block", content_hint)
    return blocks[0].body


def extract_artifacts(
    text: str,
    titles: Sequence[str],
    language_hints: Optional[Iterable[str]] = DEFAULT_CODE_LANGUAGES,
) -> ExtractedArtifactSet:
    return ExtractedArtifactSet(
        sections=extract_sections(text, titles),
        code_blocks=extract_code_blocks(text, language_hints),
    )
