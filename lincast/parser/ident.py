# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Identifier spelling: decoding NAME / QUOTED_NAME tokens and writing names
back out.

Quoted names are wrapped in backticks. Inside, a backslash escapes whatever
character follows it (not only a backtick or another backslash); the
backslash itself is dropped. An unescaped backtick never appears inside a
quoted name because the QUOTED_NAME terminal cannot match one.
"""

from __future__ import annotations

import re

from lark import Token

KEYWORDS = frozenset(
	{
		"move",
		"func",
		"let",
		"let_exists",
		"in",
		"make_exists",
		"of",
		"cast",
		"by",
		"refl_equiv",
		"forall",
		"exists",
		"equiv",
	}
)

_RAW_NAME = re.compile(r"[a-zA-Z_][a-zA-Z_0-9]*")


def unquote_name(raw: str) -> str:
	"""Decode the text of a QUOTED_NAME token (backticks included)."""
	if len(raw) < 2 or raw[0] != "`" or raw[-1] != "`":
		raise ValueError(f"not a quoted name: {raw!r}")
	out: list[str] = []
	escaped = False
	for ch in raw[1:-1]:
		if escaped:
			out.append(ch)
			escaped = False
		elif ch == "\\":
			escaped = True
		else:
			out.append(ch)
	return "".join(out)


def name_from_token(tok: Token) -> str:
	if tok.type == "NAME":
		return str(tok.value)
	if tok.type == "QUOTED_NAME":
		return unquote_name(str(tok.value))
	raise TypeError(f"Expected NAME/QUOTED_NAME token, got {tok.type}")


def is_raw_name(name: str) -> bool:
	return _RAW_NAME.fullmatch(name) is not None and name not in KEYWORDS


def quote_name(name: str) -> str:
	escaped = name.replace("\\", "\\\\").replace("`", "\\`")
	return f"`{escaped}`"


def format_name(name: str) -> str:
	"""Spell `name` so that the lexer reads it back unchanged."""
	if is_raw_name(name):
		return name
	return quote_name(name)


__all__ = ["KEYWORDS", "format_name", "is_raw_name", "name_from_token", "quote_name", "unquote_name"]
