# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Surface AST produced by the lincast parser.

Nodes mirror the written syntax only: no scope resolution or type information
is attached, and nodes carry no source locations so that a tree built from
source compares equal to one built by hand. Locations travel on errors
instead (see `Located`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Located:
	line: Optional[int]
	column: Optional[int]


@dataclass(frozen=True)
class Ident:
	name: str
	collision_id: int = 0


@dataclass(frozen=True)
class TypeParam:
	ident: Ident


class Quantifier(Enum):
	EXISTS = "exists"
	FOR_ALL = "forall"


class VarUsage(Enum):
	COPY = "copy"
	MOVE = "move"


class Type:
	"""Base of every type node."""


@dataclass
class UnitType(Type):
	pass


@dataclass
class VarType(Type):
	ident: Ident


@dataclass
class AppType(Type):
	constructor: Type
	param: Type


@dataclass
class EquivType(Type):
	orig: Type
	dest: Type


@dataclass
class FuncType(Type):
	arg: Type
	ret: Type


@dataclass
class QuantifiedType(Type):
	quantifier: Quantifier
	param: TypeParam
	body: Type


@dataclass
class PairType(Type):
	left: Type
	right: Type


class Expr:
	"""Base of every expression node."""


@dataclass
class UnitExpr(Expr):
	pass


@dataclass
class VarExpr(Expr):
	usage: VarUsage
	ident: Ident


@dataclass
class AppExpr(Expr):
	callee: Expr
	arg: Expr


@dataclass
class InstExpr(Expr):
	receiver: Expr
	type_params: List[Type] = field(default_factory=list)


@dataclass
class ReflEquivExpr(Expr):
	ty: Type


@dataclass
class ForAllExpr(Expr):
	type_params: List[TypeParam]
	body: Expr


@dataclass
class FuncExpr(Expr):
	arg_name: Ident
	arg_type: Type
	body: Expr


@dataclass
class LetExpr(Expr):
	names: List[Ident]
	val: Expr
	body: Expr


@dataclass
class LetExistsExpr(Expr):
	type_names: List[Ident]
	val_name: Ident
	val: Expr
	body: Expr


@dataclass
class MakeExistsExpr(Expr):
	params: List[Tuple[Ident, Type]]
	type_body: Type
	body: Expr


@dataclass
class CastExpr(Expr):
	param: TypeParam
	type_body: Type
	equivalence: Expr
	body: Expr


@dataclass
class PairExpr(Expr):
	left: Expr
	right: Expr


__all__ = [
	"AppExpr",
	"AppType",
	"CastExpr",
	"EquivType",
	"Expr",
	"ForAllExpr",
	"FuncExpr",
	"FuncType",
	"Ident",
	"InstExpr",
	"LetExistsExpr",
	"LetExpr",
	"Located",
	"MakeExistsExpr",
	"PairExpr",
	"PairType",
	"QuantifiedType",
	"Quantifier",
	"ReflEquivExpr",
	"Type",
	"TypeParam",
	"UnitExpr",
	"UnitType",
	"VarExpr",
	"VarType",
	"VarUsage",
]
