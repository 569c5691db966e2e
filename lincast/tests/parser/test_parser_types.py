# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from lincast.parser import parser as p
from lincast.parser.ast import (
	AppType,
	EquivType,
	FuncType,
	Ident,
	PairType,
	QuantifiedType,
	Quantifier,
	TypeParam,
	UnitType,
	VarType,
)


def _t(name: str) -> VarType:
	return VarType(Ident(name))


def _param(name: str) -> TypeParam:
	return TypeParam(Ident(name))


def test_unit_and_parens() -> None:
	assert p.parse_type("()") == UnitType()
	assert p.parse_type("(())") == UnitType()
	assert p.parse_type("((A))") == _t("A")


def test_application_is_left_associative() -> None:
	assert p.parse_type("F A B") == AppType(AppType(_t("F"), _t("A")), _t("B"))
	assert p.parse_type("F (A B)") == AppType(_t("F"), AppType(_t("A"), _t("B")))


def test_equiv_takes_atomic_operands() -> None:
	assert p.parse_type("equiv Int Float") == EquivType(_t("Int"), _t("Float"))
	assert p.parse_type("equiv (A -> B) C") == EquivType(FuncType(_t("A"), _t("B")), _t("C"))
	with pytest.raises(p.UnexpectedTokenError):
		p.parse_type("equiv A -> B C")


def test_equiv_result_can_be_applied() -> None:
	assert p.parse_type("equiv A B C") == AppType(EquivType(_t("A"), _t("B")), _t("C"))


def test_arrow_is_right_associative() -> None:
	assert p.parse_type("A -> B -> C") == FuncType(_t("A"), FuncType(_t("B"), _t("C")))
	assert p.parse_type("(A -> B) -> C") == FuncType(FuncType(_t("A"), _t("B")), _t("C"))


def test_arrow_left_operand_must_be_atomic() -> None:
	with pytest.raises(p.UnexpectedTokenError):
		p.parse_type("F A -> B")
	assert p.parse_type("(F A) -> B") == FuncType(AppType(_t("F"), _t("A")), _t("B"))


def test_arrow_result_can_be_application() -> None:
	assert p.parse_type("A -> F B") == FuncType(_t("A"), AppType(_t("F"), _t("B")))


def test_quantifier_groups_nest_in_declaration_order() -> None:
	assert p.parse_type("exists {a} {b} T") == QuantifiedType(
		Quantifier.EXISTS,
		_param("a"),
		QuantifiedType(Quantifier.EXISTS, _param("b"), _t("T")),
	)
	assert p.parse_type("forall {a} a -> a") == QuantifiedType(
		Quantifier.FOR_ALL,
		_param("a"),
		FuncType(_t("a"), _t("a")),
	)


def test_mixed_quantifiers() -> None:
	assert p.parse_type("forall {a} exists {b#1} F a b") == QuantifiedType(
		Quantifier.FOR_ALL,
		_param("a"),
		QuantifiedType(
			Quantifier.EXISTS,
			TypeParam(Ident("b", 1)),
			AppType(AppType(_t("F"), _t("a")), _t("b")),
		),
	)


def test_quantifier_needs_a_group() -> None:
	with pytest.raises(p.UnexpectedTokenError):
		p.parse_type("forall T")
	with pytest.raises(p.UnexpectedTokenError):
		p.parse_type("forall {} T")
	with pytest.raises(p.UnexpectedTokenError):
		p.parse_type("forall {a b} T")


def test_arrow_body_may_be_quantified() -> None:
	assert p.parse_type("A -> forall {b} b") == FuncType(
		_t("A"),
		QuantifiedType(Quantifier.FOR_ALL, _param("b"), _t("b")),
	)


def test_pairs_are_right_nested() -> None:
	expected = PairType(_t("A"), PairType(_t("B"), _t("C")))
	assert p.parse_type("A, B, C") == expected
	assert p.parse_type("A, B, C,") == expected
	assert p.parse_type("(A, B), C") == PairType(PairType(_t("A"), _t("B")), _t("C"))


def test_trailing_comma_alone_has_no_effect() -> None:
	assert p.parse_type("A,") == _t("A")
	assert p.parse_type("(A, B,)") == PairType(_t("A"), _t("B"))


def test_pair_is_looser_than_quantifier_and_arrow() -> None:
	assert p.parse_type("forall {a} a, B") == PairType(
		QuantifiedType(Quantifier.FOR_ALL, _param("a"), _t("a")),
		_t("B"),
	)
	assert p.parse_type("A -> B, C") == PairType(FuncType(_t("A"), _t("B")), _t("C"))


def test_double_comma_is_rejected() -> None:
	with pytest.raises(p.UnexpectedTokenError):
		p.parse_type("A,,")


def test_empty_input_is_rejected() -> None:
	with pytest.raises(p.UnexpectedTokenError) as excinfo:
		p.parse_type("")
	assert excinfo.value.token is not None
	assert excinfo.value.token.type == "$END"
