import pytest

from symforms.pipeline import fold_constants, remove_zero_terms, remove_one_factors, simplify_powers
from symforms.tree import num, var, fn, add, sub, mul, div, pow_


@pytest.mark.parametrize("node,expected", [
	(add(2, 3), num(5)),
	(sub(2, 3), num(-1)),
	(mul(add(1, 2), "x"), mul(3, "x")),
	(div(1, 4), num(0.25)),
	(pow_(2, 3), num(8)),
	(fn("sin", add(1, 1)), fn("sin", num(2))),
])
def test_fold_constants(node, expected):
	assert fold_constants(node) == expected


def test_fold_constants_leaves_undefined_operations():
	assert fold_constants(div(1, 0)) == div(1, 0)
	assert fold_constants(div(1, 1e-12)) == div(1, 1e-12)
	assert fold_constants(pow_(-8, 1.0 / 3.0)) == pow_(-8, 1.0 / 3.0)
	assert fold_constants(pow_(0, -1)) == pow_(0, -1)


@pytest.mark.parametrize("node,expected", [
	(add("x", 0), var("x")),
	(add(0, "x"), var("x")),
	(sub("x", 0), var("x")),
	(mul("x", 0), num(0)),
	(mul(0, fn("sin", "x")), num(0)),
	(add(mul(0, "y"), "x"), var("x")),
	(sub(0, "x"), sub(0, "x")),
])
def test_remove_zero_terms(node, expected):
	assert remove_zero_terms(node) == expected


@pytest.mark.parametrize("node,expected", [
	(mul(1, "x"), var("x")),
	(mul("x", 1), var("x")),
	(fn("exp", mul(1, "t")), fn("exp", "t")),
	(div("x", 1), div("x", 1)),
])
def test_remove_one_factors(node, expected):
	assert remove_one_factors(node) == expected


@pytest.mark.parametrize("node,expected", [
	(pow_("x", 0), num(1)),
	(pow_("x", 1), var("x")),
	(pow_("x", 2), pow_("x", 2)),
	(pow_(pow_("y", 1), "x"), pow_("y", "x")),
	(fn("sqrt", pow_(add("x", 1), 1)), fn("sqrt", add("x", 1))),
])
def test_simplify_powers(node, expected):
	assert simplify_powers(node) == expected
