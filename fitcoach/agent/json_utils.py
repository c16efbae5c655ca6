"""Extract and repair the JSON object in an LLM response."""

import json
import re

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def extract_json(text: str | None) -> dict:
    """Return the JSON object contained in ``text``.

    Gemini is asked for ``application/json`` output, so the direct parse
    normally succeeds. When it doesn't, the outermost ``{...}`` span is
    tried with increasingly aggressive repairs:

    - trailing commas before ``}`` / ``]``
    - unbalanced closing braces/brackets (truncated output)
    - raw newlines/tabs inside string values

    Raises ValueError if nothing parses to a JSON object.
    """
    if not text:
        raise ValueError("Empty LLM response")

    text = _strip_fences(text.strip())

    parsed = _try_load(text)
    if isinstance(parsed, dict):
        return parsed

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace != -1:
        end = last_brace + 1 if last_brace > first_brace else len(text)
        candidate = text[first_brace:end]
        for repair in _REPAIRS:
            parsed = _try_load(repair(candidate))
            if isinstance(parsed, dict):
                return parsed

    raise ValueError(f"Could not extract a JSON object from LLM response:\n{text[:500]}")


def _strip_fences(text: str) -> str:
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text)
        text = _FENCE_CLOSE.sub("", text)
    return text.strip()


def _try_load(text: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def _drop_trailing_commas(text: str) -> str:
    text = re.sub(r",\s*}", "}", text)
    return re.sub(r",\s*]", "]", text)


def _close_open_brackets(text: str) -> str:
    """Append the closers a truncated response is missing, innermost first."""
    text = _drop_trailing_commas(text).rstrip()
    stack = []
    in_string = False
    escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == "\\" and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif not in_string and char in "{[":
            stack.append("}" if char == "{" else "]")
        elif not in_string and char in "}]" and stack:
            stack.pop()
    if in_string:
        text += '"'
    return _drop_trailing_commas(text + "".join(reversed(stack)))


def _escape_control_chars(text: str) -> str:
    result = []
    in_string = False
    escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == "\\" and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif in_string and char in "\n\r\t":
            result.append({"\n": "\\n", "\r": "\\r", "\t": "\\t"}[char])
            continue
        result.append(char)
    return "".join(result)


_REPAIRS = (
    lambda t: t,
    _drop_trailing_commas,
    _close_open_brackets,
    _escape_control_chars,
    lambda t: _escape_control_chars(_drop_trailing_commas(t)),
    lambda t: _close_open_brackets(_escape_control_chars(t)),
)
