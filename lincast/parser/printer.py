# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Render lincast ASTs back to surface syntax.

Each function prints a node at one level of the precedence ladder and
parenthesizes anything looser, so `parse_type(format_type(t)) == t` and
`parse_expr(format_expr(e)) == e` for every well-formed tree.
"""

from __future__ import annotations

from typing import List

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
	MakeExistsExpr,
	PairExpr,
	PairType,
	QuantifiedType,
	ReflEquivExpr,
	Type,
	TypeParam,
	UnitExpr,
	UnitType,
	VarExpr,
	VarType,
	VarUsage,
)
from .ident import format_name


def format_ident(ident: Ident) -> str:
	text = format_name(ident.name)
	if ident.collision_id:
		text += f"#{ident.collision_id}"
	return text


def format_type(ty: Type) -> str:
	return _pair_type(ty)


def format_expr(expr: Expr) -> str:
	return _pair_expr(expr)


# ---- types ----


def _atomic_type(ty: Type) -> str:
	if isinstance(ty, UnitType):
		return "()"
	if isinstance(ty, VarType):
		return format_ident(ty.ident)
	return f"({_pair_type(ty)})"


def _app_type(ty: Type) -> str:
	if isinstance(ty, AppType):
		return f"{_app_type(ty.constructor)} {_atomic_type(ty.param)}"
	if isinstance(ty, EquivType):
		return f"equiv {_atomic_type(ty.orig)} {_atomic_type(ty.dest)}"
	return _atomic_type(ty)


def _quantified_type(ty: Type) -> str:
	if isinstance(ty, QuantifiedType):
		# Runs of the same quantifier share one keyword.
		groups = [_param_group(ty.param)]
		body = ty.body
		while isinstance(body, QuantifiedType) and body.quantifier is ty.quantifier:
			groups.append(_param_group(body.param))
			body = body.body
		return f"{ty.quantifier.value} {' '.join(groups)} {_quantified_type(body)}"
	if isinstance(ty, FuncType):
		return f"{_atomic_type(ty.arg)} -> {_quantified_type(ty.ret)}"
	return _app_type(ty)


def _pair_type(ty: Type) -> str:
	if isinstance(ty, PairType):
		return f"{_quantified_type(ty.left)}, {_pair_type(ty.right)}"
	return _quantified_type(ty)


def _param_group(param: TypeParam) -> str:
	return f"{{{format_ident(param.ident)}}}"


# ---- expressions ----


def _atomic_expr(expr: Expr) -> str:
	if isinstance(expr, UnitExpr):
		return "()"
	if isinstance(expr, VarExpr):
		if expr.usage is VarUsage.MOVE:
			return f"move {format_ident(expr.ident)}"
		return format_ident(expr.ident)
	if isinstance(expr, AppExpr):
		return f"{_callable_expr(expr.callee)}({_pair_expr(expr.arg)})"
	return f"({_pair_expr(expr)})"


def _callable_expr(expr: Expr) -> str:
	if isinstance(expr, InstExpr):
		if not expr.type_params:
			raise ValueError("InstExpr needs at least one type parameter")
		args = "".join(f"{{{_pair_type(t)}}}" for t in expr.type_params)
		return f"{_atomic_expr(expr.receiver)}{args}"
	if isinstance(expr, ReflEquivExpr):
		return f"refl_equiv {{{_pair_type(expr.ty)}}}"
	return _atomic_expr(expr)


def _block_expr(expr: Expr) -> str:
	if isinstance(expr, ForAllExpr):
		groups = " ".join(_param_group(p) for p in expr.type_params)
		return f"forall {groups} {_block_expr(expr.body)}"
	if isinstance(expr, FuncExpr):
		return f"func ({format_ident(expr.arg_name)} : {_pair_type(expr.arg_type)}) {_block_expr(expr.body)}"
	if isinstance(expr, LetExpr):
		return f"let {_ident_list(expr.names)} = {_pair_expr(expr.val)} in {_block_expr(expr.body)}"
	if isinstance(expr, LetExistsExpr):
		groups = " ".join(f"{{{format_ident(n)}}}" for n in expr.type_names)
		return (
			f"let_exists {groups} {format_ident(expr.val_name)} = {_pair_expr(expr.val)}"
			f" in {_block_expr(expr.body)}"
		)
	if isinstance(expr, MakeExistsExpr):
		bindings = " ".join(f"{{{format_ident(n)} = {_pair_type(t)}}}" for n, t in expr.params)
		return f"make_exists {bindings} {_pair_type(expr.type_body)} of {_block_expr(expr.body)}"
	if isinstance(expr, CastExpr):
		return (
			f"cast {_param_group(expr.param)} {_pair_type(expr.type_body)}"
			f" by {_pair_expr(expr.equivalence)} in {_block_expr(expr.body)}"
		)
	return _callable_expr(expr)


def _pair_expr(expr: Expr) -> str:
	if isinstance(expr, PairExpr):
		return f"{_block_expr(expr.left)}, {_pair_expr(expr.right)}"
	return _block_expr(expr)


def _ident_list(names: List[Ident]) -> str:
	return ", ".join(format_ident(n) for n in names)


__all__ = ["format_expr", "format_ident", "format_type"]
