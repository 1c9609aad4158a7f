"""Minimal argv-style tokenizing of message bodies."""

from __future__ import annotations

import re

_TOKEN_RE = re.compile(r"""'[^']*'|"[^"]*"|\S+""")


def tokenize(text: str) -> list[str]:
    """Split *text* into an argv-like list of tokens.

    Quoted runs (single or double quotes) are kept intact with the outer
    quotes removed. Escaping and nested quotes are not supported; an
    unterminated quote simply becomes part of a whitespace-delimited token.
    """
    argv = _TOKEN_RE.findall(text.strip())
    for i, token in enumerate(argv):
        if token[0] == token[-1] and token[0] in ("'", '"'):
            argv[i] = token[1:-1]
    return argv
