import pytest

from symforms.canonical import canonicalize
from symforms.forms import (
	FormGenerator, FormKind, SimplificationForms, SimplifiedForm,
	generate_all_forms, extract_common_factor, simplify_exp_in_fraction,
	STANDARD_FORM, NUMERATOR_FACTORED, EXP_CANCELLED, COMMON_FACTOR_EXTRACTED,
)
from symforms.tree import num, var, fn, add, sub, mul, div, pow_, to_text
from symforms.verify import EquivalenceChecks


def exp(u):
	return fn("exp", u)


def test_exp_cancellation():
	e = div(mul(exp("x"), sub(fn("cos", "x"), fn("sin", "x"))), pow_(exp("x"), 2))
	assert to_text(simplify_exp_in_fraction(e)) == "(cos(x) - sin(x))/exp(x)"


def test_exp_cancellation_surplus_in_numerator():
	e = div(mul(pow_(exp("x"), 3), "y"), exp("x"))
	assert simplify_exp_in_fraction(e) == div(mul("y", pow_(exp("x"), 2)), 1)


def test_exp_cancellation_complete():
	e = div(mul(exp(add("x", 1)), "y"), mul("z", exp(add("x", 1))))
	assert simplify_exp_in_fraction(e) == div("y", "z")
	assert simplify_exp_in_fraction(div(exp("x"), exp("x"))) == div(1, 1)


def test_exp_cancellation_ignores_other_arguments_and_non_fractions():
	e = div(exp("x"), exp("y"))
	assert simplify_exp_in_fraction(e) == e
	assert simplify_exp_in_fraction(mul(exp("x"), exp("x"))) == mul(exp("x"), exp("x"))


@pytest.mark.parametrize("sum_node,text", [
	(add(mul(2, pow_("x", 2)), mul(4, "x")), "2*x*(x + 2)"),
	(add(mul(6, "x"), 9), "3*(2*x + 3)"),
	(add(mul(pow_(fn("sin", "x"), 2), "y"), mul(fn("sin", "x"), pow_("y", 2))), "y*sin(x)*(sin(x) + y)"),
])
def test_extract_common_factor(sum_node, text):
	assert to_text(extract_common_factor(sum_node)) == text


@pytest.mark.parametrize("sum_node", [
	add(mul(2, pow_("x", 2)), mul(4, "x")),
	add(mul(6, "x"), 9),
	sub(mul(3, pow_("x", 3)), mul(6, mul("x", "y"))),
	add(add(mul(4, pow_(fn("exp", "x"), 2)), mul(8, fn("exp", "x"))), mul(12, mul("x", fn("exp", "x")))),
])
def test_factor_round_trip(sum_node):
	assert canonicalize(extract_common_factor(sum_node)) == canonicalize(sum_node)


def test_no_common_factor_leaves_input():
	e = add(mul(2, "x"), 3)
	assert extract_common_factor(e) is e
	assert extract_common_factor(mul(2, "x")) == mul(2, "x")


def test_absent_variable_excludes_it_from_gcd():
	e = add(mul(2, "x"), mul(4, "y"))
	assert to_text(extract_common_factor(e)) == "2*(x + 2*y)"


def test_repeated_function_factors_are_merged_first():
	g = FormGenerator()
	s = fn("sin", "x")
	assert g.normalize_powers_in_term(mul(mul(s, pow_(s, 2)), "a")) == mul("a", pow_(s, 3))
	assert g.normalize_powers_in_term(mul(s, "a")) == mul(s, "a")
	assert g.normalize_powers_in_term(div(s, s)) == div(s, s)


def test_coefficient_gcd():
	g = FormGenerator()
	assert g.coefficient_gcd(12, 18) == 6
	assert g.coefficient_gcd(-4, 6) == 2
	assert g.coefficient_gcd(2.5, 5) == 2.5


def test_generate_all_forms_for_sum():
	forms = generate_all_forms(add(mul(2, pow_("x", 2)), mul(4, "x")))
	assert [f.label for f in forms.forms] == [STANDARD_FORM, COMMON_FACTOR_EXTRACTED]
	assert forms.forms[0].kind is FormKind.EXPANDED
	assert forms.forms[1].kind is FormKind.FACTORED


def test_generate_all_forms_for_fraction():
	numerator = add(mul(exp("x"), fn("cos", "x")), mul(-1, mul(exp("x"), fn("sin", "x"))))
	e = div(numerator, pow_(exp("x"), 2))
	forms = generate_all_forms(e)
	labels = [f.label for f in forms.forms]
	assert labels == [STANDARD_FORM, NUMERATOR_FACTORED, EXP_CANCELLED]
	assert to_text(forms.forms[-1].expression) == "(cos(x) - sin(x))/exp(x)"
	checks = EquivalenceChecks()
	for f in forms.forms:
		assert checks.numerically_equivalent(e, f.expression)


def test_generate_all_forms_without_candidates():
	forms = generate_all_forms(var("x"))
	assert len(forms) == 1
	assert forms.forms[0].label == STANDARD_FORM


def test_display_forms_drop_structural_duplicates():
	forms = SimplificationForms([
		SimplifiedForm(add("x", 0.3), FormKind.EXPANDED, "a"),
		SimplifiedForm(add("x", 0.1 + 0.2), FormKind.FACTORED, "b"),
		SimplifiedForm(var("x"), FormKind.STRUCTURAL, "c"),
	])
	assert [f.label for f in forms.display_forms()] == ["a", "c"]
	assert forms.expressions()[2] == var("x")
	assert forms.find("b")[0].kind is FormKind.FACTORED


def test_display_forms_ignore_chain_grouping():
	forms = SimplificationForms([
		SimplifiedForm(mul(-1, mul(fn("exp", "x"), fn("sin", "x"))), FormKind.EXPANDED, "a"),
		SimplifiedForm(mul(mul(-1, fn("exp", "x")), fn("sin", "x")), FormKind.STRUCTURAL, "b"),
		SimplifiedForm(add(add("x", "y"), 1), FormKind.EXPANDED, "c"),
		SimplifiedForm(add("x", add("y", 1)), FormKind.FACTORED, "d"),
		SimplifiedForm(add(1, add("x", "y")), FormKind.FACTORED, "e"),
	])
	assert [f.label for f in forms.display_forms()] == ["a", "c", "e"]
