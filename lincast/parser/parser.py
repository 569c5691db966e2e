# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lincast parser: Lark LALR grammar plus tree builders.

Source text goes through Lark's basic lexer; token streams produced by an
external lexer are fed through Lark's interactive parser instead. Either way
the resulting parse tree is walked by the `_build_*` functions below, which
produce the dataclass AST from `ast.py`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from .ast import (
	AppExpr,
	AppType,
	CastExpr,
	EquivType,
	Expr,
	ForAllExpr,
	FuncExpr,
	FuncType,
	Ident,
	InstExpr,
	LetExistsExpr,
	LetExpr,
	Located,
	MakeExistsExpr,
	PairExpr,
	PairType,
	QuantifiedType,
	Quantifier,
	ReflEquivExpr,
	Type,
	TypeParam,
	UnitExpr,
	UnitType,
	VarExpr,
	VarType,
	VarUsage,
)
from .ident import name_from_token

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

# Terminal name -> surface form. NAME/QUOTED_NAME/UINT carry their text in
# Token.value; the rest are fixed spellings.
TOKEN_KINDS = {
	"NAME": "[a-zA-Z_][a-zA-Z_0-9]*",
	"QUOTED_NAME": "`...`",
	"UINT": "[0-9]+",
	"MOVE": "move",
	"FUNC": "func",
	"LET": "let",
	"LET_EXISTS": "let_exists",
	"IN": "in",
	"MAKE_EXISTS": "make_exists",
	"OF": "of",
	"CAST": "cast",
	"BY": "by",
	"REFL_EQUIV": "refl_equiv",
	"FORALL": "forall",
	"EXISTS": "exists",
	"EQUIV": "equiv",
	"HASH": "#",
	"COMMA": ",",
	"SEMI": ";",
	"EQUAL": "=",
	"COLON": ":",
	"STAR": "*",
	"ARROW": "->",
	"LPAR": "(",
	"RPAR": ")",
	"LBRACE": "{",
	"RBRACE": "}",
}


class ParseError(ValueError):
	"""
	Base of every error raised by the lincast parser.

	`loc` is the best-effort position of the offending input (line/column may
	be None for tokens that arrived without positions). `raw` keeps the
	underlying Lark exception when there is one.
	"""

	code = "E-PARSE"

	def __init__(self, message: str, *, loc: Located | None, raw: object | None = None) -> None:
		super().__init__(f"{self.code}: {message}")
		self.detail = message
		self.loc = loc if loc is not None else Located(line=None, column=None)
		self.raw = raw


class LexError(ParseError):
	"""The lexer could not match a token at `loc`."""

	code = "E-PARSE-LEX"


class UnexpectedTokenError(ParseError):
	"""No production accepts `token` (a `$END` token means input ended early)."""

	code = "E-PARSE-UNEXPECTED"

	def __init__(
		self,
		message: str,
		*,
		loc: Located | None,
		token: Token | None,
		expected: List[str],
		raw: object | None = None,
	) -> None:
		super().__init__(message, loc=loc, raw=raw)
		self.token = token
		self.expected = expected
		if expected:
			self.args = (f"{self.args[0]}; expected one of: {', '.join(expected)}",)


class EmptyLetBindersError(ParseError):
	"""A `let` that binds no names (`let = e in b`)."""

	code = "E-LET-EMPTY-BINDERS"


class ReservedTokenPostLex:
	"""
	Post-lexer that keeps reserved punctuation in the token stream.

	Lark drops terminals that no rule references unless the post-lexer lists
	them in `always_accept`. `;` and `*` are in the token vocabulary but no
	production consumes them, so they reach the parser and fail there as
	unexpected tokens.
	"""

	always_accept = ("SEMI", "STAR")

	def process(self, stream):
		return stream


_START_RULES = ["type_root", "expr_root", "ident_root", "whitespace_root"]

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start=_START_RULES,
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=ReservedTokenPostLex(),
)


def parse_type(source: str) -> Type:
	tree = _parse_source(source, "type_root")
	return _build_type(_first_tree(tree))


def parse_expr(source: str) -> Expr:
	tree = _parse_source(source, "expr_root")
	return _build_expr(_first_tree(tree))


def parse_type_tokens(tokens: Iterable[Token]) -> Type:
	"""Parse a type from tokens supplied by an external lexer."""
	tree = _parse_tokens(tokens, "type_root")
	return _build_type(_first_tree(tree))


def parse_expr_tokens(tokens: Iterable[Token]) -> Expr:
	"""Parse an expression from tokens supplied by an external lexer."""
	tree = _parse_tokens(tokens, "expr_root")
	return _build_expr(_first_tree(tree))


def parse_ident(source: str) -> str:
	"""
	Parse a single bare identifier (raw or quoted, no `#` suffix).

	Used to exercise identifier lexing on its own.
	"""
	tree = _parse_source(source, "ident_root")
	return _build_raw_name(_first_tree(tree))


def parse_whitespace(source: str) -> None:
	"""Accept input made only of whitespace; anything else is an error."""
	_parse_source(source, "whitespace_root")


def tokenize(source: str) -> List[Token]:
	"""Run the default lexer over `source`, skipping whitespace."""
	try:
		return list(_PARSER.lex(source))
	except UnexpectedInput as err:
		raise _convert_lark_error(err) from err


def _parse_source(source: str, start: str) -> Tree:
	try:
		return _PARSER.parse(source, start=start)
	except UnexpectedInput as err:
		raise _convert_lark_error(err) from err


def _parse_tokens(tokens: Iterable[Token], start: str) -> Tree:
	interactive = _PARSER.parse_interactive(start=start)
	last: Optional[Token] = None
	try:
		for tok in tokens:
			interactive.feed_token(tok)
			last = tok
		return interactive.feed_eof(last if last is not None else Token("$END", ""))
	except UnexpectedInput as err:
		raise _convert_lark_error(err) from err


def _convert_lark_error(err: UnexpectedInput) -> ParseError:
	loc = Located(line=_pos_or_none(getattr(err, "line", None)), column=_pos_or_none(getattr(err, "column", None)))
	if isinstance(err, UnexpectedCharacters):
		return LexError(f"unexpected character {err.char!r}", loc=loc, raw=err)
	if isinstance(err, UnexpectedToken):
		tok = err.token
		expected = sorted(err.expected or ())
		if tok.type == "$END":
			message = "unexpected end of input"
		else:
			message = f"unexpected token {str(tok.value)!r} ({tok.type})"
		return UnexpectedTokenError(message, loc=loc, token=tok, expected=expected, raw=err)
	return UnexpectedTokenError(str(err), loc=loc, token=None, expected=[], raw=err)


def _pos_or_none(value: object) -> Optional[int]:
	# Lark reports "?" (or -1) when a token carries no position.
	if isinstance(value, int) and value >= 0:
		return value
	return None


# ---- identifiers ----


def _build_raw_name(tree: Tree) -> str:
	if _name(tree) != "raw_name":
		raise ValueError(f"expected raw_name, got {_name(tree)}")
	tok = next(c for c in tree.children if isinstance(c, Token))
	return name_from_token(tok)


def _build_ident(tree: Tree) -> Ident:
	if _name(tree) != "ident":
		raise ValueError(f"expected ident, got {_name(tree)}")
	name = _build_raw_name(_first_tree(tree))
	suffix = _find_token(tree, "UINT")
	return Ident(name=name, collision_id=int(suffix.value) if suffix is not None else 0)


def _build_type_param(tree: Tree) -> TypeParam:
	# type_param_group: LBRACE ident RBRACE
	return TypeParam(ident=_build_ident(_first_tree(tree)))


# ---- types ----


def _build_type(node: Tree) -> Type:
	name = _name(node)
	children = _trees(node)
	if name == "type_unit":
		return UnitType()
	if name == "type_var":
		return VarType(ident=_build_ident(children[0]))
	if name in {"type_paren", "type_trailing_comma"}:
		return _build_type(children[0])
	if name == "type_app":
		constructor, param = children
		return AppType(constructor=_build_type(constructor), param=_build_type(param))
	if name == "type_equiv":
		orig, dest = children
		return EquivType(orig=_build_type(orig), dest=_build_type(dest))
	if name == "type_func":
		arg, ret = children
		return FuncType(arg=_build_type(arg), ret=_build_type(ret))
	if name == "type_quantified":
		return _build_quantified(children)
	if name == "type_pair":
		left, right = children
		return PairType(left=_build_type(left), right=_build_type(right))
	raise ValueError(f"Unsupported type node: {name}")


def _build_quantified(children: List[Tree]) -> Type:
	quantifier_node, *groups, body_node = children
	quantifier = Quantifier.FOR_ALL if _find_token(quantifier_node, "FORALL") is not None else Quantifier.EXISTS
	# The first declared parameter ends up outermost.
	body = _build_type(body_node)
	for group in reversed(groups):
		body = QuantifiedType(quantifier=quantifier, param=_build_type_param(group), body=body)
	return body


# ---- expressions ----


def _build_expr(node: Tree) -> Expr:
	name = _name(node)
	children = _trees(node)
	if name == "expr_unit":
		return UnitExpr()
	if name in {"expr_paren", "expr_trailing_comma"}:
		return _build_expr(children[0])
	if name == "expr_copy":
		return VarExpr(usage=VarUsage.COPY, ident=_build_ident(children[0]))
	if name == "expr_move":
		return VarExpr(usage=VarUsage.MOVE, ident=_build_ident(children[0]))
	if name == "expr_app":
		callee, arg = children
		return AppExpr(callee=_build_expr(callee), arg=_build_expr(arg))
	if name == "expr_app_unit":
		return AppExpr(callee=_build_expr(children[0]), arg=UnitExpr())
	if name == "expr_inst":
		receiver, *type_args = children
		return InstExpr(receiver=_build_expr(receiver), type_params=[_build_type_arg(arg) for arg in type_args])
	if name == "expr_refl_equiv":
		return ReflEquivExpr(ty=_build_type_arg(children[0]))
	if name == "expr_forall":
		*groups, body = children
		return ForAllExpr(type_params=[_build_type_param(g) for g in groups], body=_build_expr(body))
	if name == "expr_func":
		arg_name, arg_type, body = children
		return FuncExpr(arg_name=_build_ident(arg_name), arg_type=_build_type(arg_type), body=_build_expr(body))
	if name == "expr_let":
		return _build_let(node)
	if name == "expr_let_exists":
		*groups, val_name, val, body = children
		return LetExistsExpr(
			type_names=[_build_type_param(g).ident for g in groups],
			val_name=_build_ident(val_name),
			val=_build_expr(val),
			body=_build_expr(body),
		)
	if name == "expr_make_exists":
		*bindings, type_body, body = children
		return MakeExistsExpr(
			params=[_build_witness_binding(b) for b in bindings],
			type_body=_build_type(type_body),
			body=_build_expr(body),
		)
	if name == "expr_cast":
		param, type_body, equivalence, body = children
		return CastExpr(
			param=_build_type_param(param),
			type_body=_build_type(type_body),
			equivalence=_build_expr(equivalence),
			body=_build_expr(body),
		)
	if name == "expr_pair":
		left, right = children
		return PairExpr(left=_build_expr(left), right=_build_expr(right))
	raise ValueError(f"Unsupported expression node: {name}")


def _build_let(tree: Tree) -> LetExpr:
	names_node, val, body = _trees(tree)
	names = [_build_ident(child) for child in _trees(names_node)]
	if not names:
		let_tok = _find_token(tree, "LET")
		raise EmptyLetBindersError(
			"let must bind at least one name",
			loc=_loc_from_token(let_tok) if let_tok is not None else _loc(tree),
		)
	return LetExpr(names=names, val=_build_expr(val), body=_build_expr(body))


def _build_type_arg(tree: Tree) -> Type:
	# type_arg: LBRACE pair_type RBRACE
	return _build_type(_first_tree(tree))


def _build_witness_binding(tree: Tree) -> tuple[Ident, Type]:
	# witness_binding: LBRACE ident EQUAL pair_type RBRACE
	ident_node, ty = _trees(tree)
	return _build_ident(ident_node), _build_type(ty)


# ---- tree helpers ----


def _trees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


def _first_tree(tree: Tree) -> Tree:
	child = next((c for c in tree.children if isinstance(c, Tree)), None)
	if child is None:
		raise ValueError(f"{_name(tree)} node has no subtree")
	return child


def _find_token(tree: Tree, ttype: str) -> Optional[Token]:
	return next((c for c in tree.children if isinstance(c, Token) and c.type == ttype), None)


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=getattr(meta, "line", None), column=getattr(meta, "column", None))


def _loc_from_token(token: Token) -> Located:
	return Located(line=_pos_or_none(token.line), column=_pos_or_none(token.column))


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = [
	"EmptyLetBindersError",
	"LexError",
	"ParseError",
	"TOKEN_KINDS",
	"UnexpectedTokenError",
	"parse_expr",
	"parse_expr_tokens",
	"parse_ident",
	"parse_type",
	"parse_type_tokens",
	"parse_whitespace",
	"tokenize",
]
