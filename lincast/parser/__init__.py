# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lincast parser package.

Re-exports the raising entry points from `parser` and adds adapters that
collect parser errors as `Diagnostic`s instead of throwing, so callers can
report them alongside diagnostics from later passes.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from lincast.core.diagnostics import Diagnostic
from lincast.core.span import Span

from . import ast
from .parser import (
	TOKEN_KINDS,
	EmptyLetBindersError,
	LexError,
	ParseError,
	UnexpectedTokenError,
	parse_expr,
	parse_expr_tokens,
	parse_ident,
	parse_type,
	parse_type_tokens,
	parse_whitespace,
	tokenize,
)
from .printer import format_expr, format_ident, format_type


def diagnostic_from_parse_error(err: ParseError, *, file: Optional[str] = None) -> Diagnostic:
	"""Convert a parser exception into a pinned parser-phase diagnostic."""
	span = Span(file=file, line=err.loc.line, column=err.loc.column, raw=err)
	notes: List[str] = []
	if isinstance(err, UnexpectedTokenError) and err.expected:
		notes.append(f"expected one of: {', '.join(err.expected)}")
	return Diagnostic(message=err.detail, code=err.code, phase="parser", severity="error", span=span, notes=notes)


def parse_type_with_diagnostics(source: str, *, file: Optional[str] = None) -> Tuple[Optional[ast.Type], List[Diagnostic]]:
	try:
		return parse_type(source), []
	except ParseError as err:
		return None, [diagnostic_from_parse_error(err, file=file)]


def parse_expr_with_diagnostics(source: str, *, file: Optional[str] = None) -> Tuple[Optional[ast.Expr], List[Diagnostic]]:
	try:
		return parse_expr(source), []
	except ParseError as err:
		return None, [diagnostic_from_parse_error(err, file=file)]


__all__ = [
	"EmptyLetBindersError",
	"LexError",
	"ParseError",
	"TOKEN_KINDS",
	"UnexpectedTokenError",
	"ast",
	"diagnostic_from_parse_error",
	"format_expr",
	"format_ident",
	"format_type",
	"parse_expr",
	"parse_expr_tokens",
	"parse_expr_with_diagnostics",
	"parse_ident",
	"parse_type",
	"parse_type_tokens",
	"parse_type_with_diagnostics",
	"parse_whitespace",
	"tokenize",
]
