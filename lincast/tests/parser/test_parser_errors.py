# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from lincast.parser import parser as p


def test_errors_are_value_errors() -> None:
	assert issubclass(p.ParseError, ValueError)
	for cls in (p.LexError, p.UnexpectedTokenError, p.EmptyLetBindersError):
		assert issubclass(cls, p.ParseError)


def test_unexpected_token_carries_location_and_expectations() -> None:
	with pytest.raises(p.UnexpectedTokenError) as excinfo:
		p.parse_expr("f(a b)")
	err = excinfo.value
	assert err.code == "E-PARSE-UNEXPECTED"
	assert (err.loc.line, err.loc.column) == (1, 5)
	assert err.token is not None and err.token.value == "b"
	assert "RPAR" in err.expected
	assert str(err).startswith("E-PARSE-UNEXPECTED: unexpected token 'b' (NAME)")
	assert err.detail == "unexpected token 'b' (NAME)"


def test_unexpected_end_of_input() -> None:
	with pytest.raises(p.UnexpectedTokenError) as excinfo:
		p.parse_expr("let x = a in")
	assert excinfo.value.detail == "unexpected end of input"


def test_lex_error_wraps_lark_error() -> None:
	from lark.exceptions import UnexpectedCharacters

	with pytest.raises(p.LexError) as excinfo:
		p.parse_expr("x @ y")
	err = excinfo.value
	assert err.code == "E-PARSE-LEX"
	assert isinstance(err.raw, UnexpectedCharacters)
	assert isinstance(err.__cause__, UnexpectedCharacters)
	assert (err.loc.line, err.loc.column) == (1, 3)


def test_unterminated_quoted_name_is_a_lex_error() -> None:
	with pytest.raises(p.LexError):
		p.parse_expr("`abc")


def test_syntax_error_precedes_tree_construction() -> None:
	# The let is never built: the stray `)` fails the parse first.
	with pytest.raises(p.UnexpectedTokenError):
		p.parse_expr("let = e in b)")
