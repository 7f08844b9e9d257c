"""
Lenient parsing of JSON-like text copied out of source code or a console.

Handles assignment prefixes (`const x = ...;`), `export`, `as const`,
console prefixes (`Object {`, `Array [`), single object members
(`"key": {...}`), comments, trailing commas, single-quoted strings and bare
object keys.
"""

import json
import re
from typing import Any

from .errors import InputError

_MEMBER = re.compile(r"""^(?:["'][^"']+["']|[A-Za-z_$][A-Za-z0-9_$]*)\s*:\s*[\s\S]+$""")
_AS_CONST = re.compile(r"\s+as\s+const\s*;?$", re.IGNORECASE)
_TRAILING_SEMICOLON = re.compile(r";\s*$", re.MULTILINE)
_BARE_KEY = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

# JavaScript-only literals and the JSON values that stand in for them
_JS_LITERALS = {"undefined": "null", "NaN": "null", "Infinity": "null"}


def sanitize_selection(selection: str) -> str:
    """
    Reduce a selection to the JSON-like value it contains.
    Text that already starts with `{` or `[` is returned unchanged (trimmed).
    """
    text = selection.strip()
    if text.startswith("{") or text.startswith("["):
        return text

    if text.startswith("Object {"):
        return re.sub(r"^Object\s+", "", text)
    if text.startswith("Array ["):
        return re.sub(r"^Array\s+", "", text)

    candidate = re.sub(r"^export\s+", "", text)

    eq_index = candidate.find("=")
    if eq_index != -1:
        candidate = candidate[eq_index + 1:]

    candidate = _AS_CONST.sub("", candidate)
    candidate = _TRAILING_SEMICOLON.sub("", candidate, count=1).strip()

    if candidate.startswith("(") and candidate.endswith(")"):
        candidate = candidate[1:-1].strip()

    if _MEMBER.match(candidate):
        candidate = "{ " + candidate + " }"

    return candidate


def clean_json_string(text: str) -> str:
    """Remove comments and trailing commas without touching string contents."""
    return _strip_trailing_commas(_strip_comments(text)).strip()


def normalize_js_literal(text: str) -> str:
    """
    Rewrite JavaScript object-literal syntax as JSON: single-quoted strings
    become double-quoted, bare keys are quoted and `undefined`/`NaN`/`Infinity`
    become null.
    """
    out = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in ("'", '"'):
            literal, i = _read_string(text, i)
            out.append(json.dumps(literal, ensure_ascii=False))
            continue

        match = _BARE_KEY.match(text, i)
        if match and (i == 0 or not (text[i - 1].isalnum() or text[i - 1] in "_$")):
            word = match.group(0)
            end = match.end()
            following = _skip_whitespace(text, end)
            if following < n and text[following] == ":":
                out.append(json.dumps(word))
            else:
                out.append(_JS_LITERALS.get(word, word))
            i = end
            continue

        out.append(ch)
        i += 1
    return "".join(out)


def parse_lenient(text: str, source: str = "<input>") -> Any:
    """
    Parse text as JSON, falling back to progressively more forgiving
    interpretations of JavaScript-like input.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    cleaned = clean_json_string(sanitize_selection(text))
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(normalize_js_literal(cleaned))
    except json.JSONDecodeError as exc:
        raise InputError(source, f"not valid JSON or JavaScript literal ({exc.msg} at line {exc.lineno})") from exc


def _strip_comments(src: str) -> str:
    out = []
    i = 0
    n = len(src)
    quote = ""
    escaped = False

    while i < n:
        ch = src[i]
        if quote:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = ""
            i += 1
            continue

        if ch in ('"', "'"):
            quote = ch
            out.append(ch)
            i += 1
            continue

        if src.startswith("//", i):
            # Drop up to, not including, the end of line
            i += 2
            while i < n and src[i] not in "\r\n":
                i += 1
            continue

        if src.startswith("/*", i):
            end = src.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def _strip_trailing_commas(src: str) -> str:
    out = []
    quote = ""
    escaped = False

    for j, ch in enumerate(src):
        if quote:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = ""
            continue

        if ch in ('"', "'"):
            quote = ch
            out.append(ch)
            continue

        if ch == ",":
            following = _skip_whitespace(src, j + 1)
            if following >= len(src) or src[following] in "}]":
                continue

        out.append(ch)

    return "".join(out)


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def _read_string(text: str, start: int):
    """Decode the quoted string starting at `start`; return (value, index after it)."""
    quote = text[start]
    chars = []
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n:
            nxt = text[i + 1]
            if nxt == quote or nxt == "'":
                chars.append(nxt)
                i += 2
                continue
            # Let json decode the other escapes (\n, \uXXXX)
            escape = text[i:i + 6] if nxt == "u" else text[i:i + 2]
            try:
                chars.append(json.loads(f'"{escape}"'))
            except json.JSONDecodeError:
                chars.append(nxt)
            i += len(escape)
            continue
        if ch == quote:
            return "".join(chars), i + 1
        chars.append(ch)
        i += 1
    return "".join(chars), n
