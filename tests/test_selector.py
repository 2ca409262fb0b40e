import pytest

from symforms import EmptyCandidatesError
from symforms.forms import SimplifiedForm, FormKind
from symforms.selection import (
	DifferentiationCost, differentiation_cost,
	select_best_for_differentiation, select_best_form, form_statistics,
)
from symforms.tree import num, var, fn, add, sub, mul, div, pow_


@pytest.mark.parametrize("node,cost", [
	(num(3), 0),
	(var("x"), 1),
	(fn("sin", "x"), 4),
	(add("x", 1), 2),
	(sub("x", "y"), 3),
	(mul(2, "x"), 2),
	(div("x", add("x", 1)), 9),
	(pow_("x", 2), 4),
	(pow_("x", "y"), 8),
	(mul("x", pow_(add("x", 1), -1)), 14),
])
def test_differentiation_cost(node, cost):
	assert differentiation_cost(node) == cost
	assert DifferentiationCost().cost(node) == cost


def test_quotient_beats_negative_power():
	quotient = div("x", add("x", 1))
	product = mul("x", pow_(add("x", 1), -1))
	assert select_best_for_differentiation([product, quotient]) is quotient
	assert select_best_for_differentiation([quotient, product]) is quotient


def test_ties_keep_first_candidate():
	a = add("x", 1)
	b = add(1, "x")
	assert select_best_for_differentiation([a, b]) is a
	assert select_best_for_differentiation([b, a]) is b


def test_single_candidate_returned_unchanged():
	e = fn("gamma", "x")
	assert select_best_for_differentiation([e]) is e


def test_empty_candidates_raise():
	with pytest.raises(EmptyCandidatesError):
		select_best_for_differentiation([])
	with pytest.raises(ValueError):
		select_best_form([])


def test_select_best_form():
	forms = [
		SimplifiedForm(mul("x", pow_(add("x", 1), -1)), FormKind.EXPANDED, "standard form"),
		SimplifiedForm(div("x", add("x", 1)), FormKind.FACTORED, "fraction reduced"),
	]
	assert select_best_form(forms) is forms[1]
	assert select_best_form(forms[:1]) is forms[0]


def test_form_statistics():
	stats = form_statistics(div(pow_("x", 2), fn("sin", "x")))
	assert stats == {"nodes": 6, "divisions": 1, "powers": 1, "functions": 1, "cost": 24}


def test_form_statistics_nested_functions():
	stats = form_statistics(fn("exp", fn("sin", mul(2, "x"))))
	assert stats["functions"] == 2
	assert stats["divisions"] == 0
	assert stats["cost"] == 3 + 3 + 2
