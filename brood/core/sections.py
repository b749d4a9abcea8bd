"""Delimited prompt sections.

    --- NAME ---
    body
    --- END NAME ---
"""
import re

_SECTION_RE = re.compile(r"--- (?!END )([A-Z][A-Z ]*) ---\n(.*?)--- END \1 ---", re.DOTALL)


def render_sections(base_prompt: str, sections: list[tuple[str, str]]) -> str:
    """Append each (name, body) to the base prompt in delimited form."""
    text = base_prompt
    for name, body in sections:
        text += f"\n\n--- {name} ---\n{body}\n--- END {name} ---"
    return text


def parse_sections(prompt: str) -> list[tuple[str, str]]:
    """Recover (name, body) pairs from a rendered prompt."""
    return [(m.group(1), m.group(2).strip()) for m in _SECTION_RE.finditer(prompt or "")]


def extract_section(prompt: str, name: str) -> str | None:
    """Trimmed body of the named section, or None. Exact and case-sensitive."""
    start = f"--- {name} ---"
    end = f"--- END {name} ---"
    text = prompt or ""
    i = text.find(start)
    if i < 0:
        return None
    j = text.find(end, i + len(start))
    if j < 0:
        return None
    return text[i + len(start):j].strip()
