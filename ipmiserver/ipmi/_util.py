"""Shared helpers: identifier slugs, credential masking, argument splitting."""

from __future__ import annotations

import re

MASK = "******"

_ID_STRIP_RE = re.compile(r"[^A-Za-z0-9 _]")
_ARGUMENT_RE = re.compile(r'"([^"]*)"|(\S+)')


def generate_id(label: str) -> str:
    """Turn a human-readable label into a lowercase, underscore-joined key.

    Characters outside ``[A-Za-z0-9 _]`` are dropped, not replaced, so
    ``"CPU1 Temp (C)"`` becomes ``"cpu1_temp_c"``.
    """
    return _ID_STRIP_RE.sub("", label).replace(" ", "_").lower()


def redact(secret: str, text: str) -> str:
    """Replace every literal occurrence of ``secret`` in ``text`` with a mask."""
    if not secret:
        return text
    return text.replace(secret, MASK)


def split_arguments(text: str | None) -> list[str]:
    """Split free-form extra arguments on whitespace, keeping ``"quoted parts"`` whole.

    Quotes are removed and empty tokens discarded:

    >>> split_arguments('-o "supermicro x9"  -N 5 ""')
    ['-o', 'supermicro x9', '-N', '5']
    """
    if not text:
        return []
    tokens: list[str] = []
    for quoted, bare in _ARGUMENT_RE.findall(text):
        token = quoted if quoted else bare
        if token:
            tokens.append(token)
    return tokens


def format_command(command: list[str]) -> str:
    """Render an argument vector as a single command line for messages."""
    return " ".join(f'"{part}"' if (" " in part or not part) else part for part in command)
