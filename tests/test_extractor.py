"""Tests for section and code block extraction."""

from pipeline.extractor import (
    extract_artifacts,
    extract_code_blocks,
    extract_sections,
    select_code_block,
)
from state.schemas import CodeBlock


RESPONSE = """Intro text.

## Análisis de Vulnerabilidades

### 1. Inyección SQL
**Severidad: Crítica**

## Correcciones Recomendadas

1. Usar consultas parametrizadas.

## Configuración Segura

```javascript
// security config
module.exports = { strict: true };
```
"""


# ── Sections ──────────────────────────────────

def test_single_heading_round_trip():
    assert extract_sections("## Title\nB", ["Title"]) == {"Title": "B"}


def test_sections_run_to_next_heading():
    sections = extract_sections(RESPONSE, ["Análisis de Vulnerabilidades", "Correcciones Recomendadas"])
    assert sections["Análisis de Vulnerabilidades"] == "### 1. Inyección SQL\n**Severidad: Crítica**"
    assert sections["Correcciones Recomendadas"] == "1. Usar consultas parametrizadas."


def test_missing_section_is_empty():
    assert extract_sections(RESPONSE, ["Resumen"]) == {"Resumen": ""}
    assert extract_sections("", ["Anything"]) == {"Anything": ""}


def test_heading_match_is_case_insensitive_and_ignores_numbering():
    text = "## 2. correcciones recomendadas (prioridad alta)\nFix it."
    assert extract_sections(text, ["Correcciones Recomendadas"]) == {"Correcciones Recomendadas": "Fix it."}


def test_headings_inside_fences_are_ignored():
    text = "## A\n```python\n## not a heading\n```\nmore\n## B\nb"
    sections = extract_sections(text, ["A", "B", "not a heading"])
    assert sections["A"] == "```python\n## not a heading\n```\nmore"
    assert sections["B"] == "b"
    assert sections["not a heading"] == ""


def test_deeper_headings_stay_in_body():
    text = "## Top\n### Sub\nbody\n## Next\nx"
    assert extract_sections(text, ["Top"])["Top"] == "### Sub\nbody"


# ── Code Blocks ───────────────────────────────

def test_code_block_body_is_fenced_content():
    blocks = extract_code_blocks(RESPONSE)
    assert blocks == [CodeBlock(language="javascript", body="// security config\nmodule.exports = { strict: true };")]


def test_language_filter():
    text = "```python\nprint(1)\n```\n```js\nconsole.log(1)\n```"
    assert [b.body for b in extract_code_blocks(text)] == ["console.log(1)"]
    assert [b.language for b in extract_code_blocks(text, None)] == ["python", "js"]


def test_unclosed_fence_is_ignored():
    text = "```js\nconst a = 1;\n```\n```js\nconst b = 2;"
    assert [b.body for b in extract_code_blocks(text)] == ["const a = 1;"]


def test_tilde_fence_and_longer_closing():
    text = "~~~yaml\nkey: value\n~~~~\n"
    blocks = extract_code_blocks(text, ["yaml"])
    assert blocks == [CodeBlock(language="yaml", body="key: value")]


def test_inner_shorter_fence_does_not_close_block():
    text = "````markdown\n```js\nx\n```\n````"
    blocks = extract_code_blocks(text, None)
    assert len(blocks) == 1
    assert blocks[0].body == "```js\nx\n```"


def test_select_without_blocks_is_empty():
    assert select_code_block([], "config") == ""


def test_select_falls_back_to_first_block():
    blocks = [CodeBlock(language="js", body="first"), CodeBlock(language="js", body="second")]
    assert select_code_block(blocks, "nothing here") == "first"
    assert select_code_block(blocks, None) == "first"


def test_select_matches_plural_and_singular_hints():
    blocks = [
        CodeBlock(language="js", body="// the model"),
        CodeBlock(language="js", body="// seed data"),
    ]
    assert select_code_block(blocks, "models") == "// the model"
    assert select_code_block(blocks, "seeds") == "// seed data"
    assert select_code_block(blocks, "SEED") == "// seed data"


def test_extract_artifacts_combines_both():
    artifacts = extract_artifacts(RESPONSE, ["Correcciones Recomendadas"])
    assert artifacts.sections == {"Correcciones Recomendadas": "1. Usar consultas parametrizadas."}
    assert len(artifacts.code_blocks) == 1


def test_blank_title_matches_nothing():
    assert extract_sections(RESPONSE, ["", "   "]) == {"": "", "   ": ""}
