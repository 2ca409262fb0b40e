import pytest

from symforms.terms import FunctionKey, Term
from symforms.tree import num, var, fn, add, sub, mul, div, pow_, Number


def test_function_keys_collide_within_tolerance():
	a = FunctionKey.of(fn("exp", sub("x", 9)))
	b = FunctionKey.of(fn("exp", sub("x", 9.00000000001)))
	assert a == b
	assert hash(a) == hash(b)
	assert FunctionKey.of(fn("sin", mul(2, "x"))) != FunctionKey.of(fn("sin", add("x", "x")))
	assert a.canonical_string() == "exp(x - 9)"


def test_decompose_product():
	t = Term.from_node(mul(mul(3, pow_("x", 2)), mul("y", fn("sin", "x"))))
	assert t.coefficient == 3.0
	assert t.variables == {"x": 2.0, "y": 1.0}
	assert t.functions == {FunctionKey.of(fn("sin", "x")): 1.0}
	assert t.nested == ()


def test_decompose_keeps_sums_and_quotients_opaque():
	t = Term.from_node(mul(2, add("x", 1)))
	assert t.coefficient == 2.0
	assert t.nested == (add("x", 1),)
	q = Term.from_node(div("x", "y"))
	assert q.coefficient == 1.0
	assert q.nested == (div("x", "y"),)


def test_symbolic_exponent_is_opaque():
	t = Term.from_node(pow_("x", "y"))
	assert t.variables == {}
	assert t.nested == (pow_("x", "y"),)


def test_undefined_numeric_power_stays_opaque():
	node = pow_(-8, 1.0 / 3.0)
	t = Term.from_node(node)
	assert t.coefficient == 1.0
	assert t.nested == (node,)


def test_number_powers_fold():
	assert Term.from_node(pow_(2, 3)).coefficient == 8.0


def test_zero_exponents_are_never_stored():
	t = Term(1.0, {"x": 1e-12, "y": 2.0})
	assert t.variables == {"y": 2.0}
	assert Term.from_node(mul("x", pow_("x", -1))).variables == {}


def test_terms_are_hashable_values():
	a = Term.from_node(mul(mul(2, "x"), mul("y", fn("sin", "x"))))
	b = Term.from_node(mul(fn("sin", "x"), mul("y", mul("x", 2))))
	assert a == b
	assert hash(a) == hash(b)
	assert len({a, b, Term.from_node(mul(3, "x"))}) == 2
	assert hash(Term.opaque(add("x", 1))) == hash(Term.opaque(add("x", 1)))


def test_similarity_requires_equal_exponents():
	a = Term.from_node(mul(pow_(fn("sin", "x"), 2), "y"))
	b = Term.from_node(mul(pow_(fn("sin", "x"), 3), "y"))
	assert not a.is_similar(b)
	assert a.merge(b) is None
	c = Term.from_node(mul(5, mul("y", pow_(fn("sin", "x"), 2))))
	merged = a.merge(c)
	assert merged is not None
	assert merged.coefficient == 6.0


def test_similarity_compares_nested_in_order():
	a = Term(1.0, {}, {}, (add("x", 1), add("y", 1)))
	b = Term(2.0, {}, {}, (add("y", 1), add("x", 1)))
	assert not a.is_similar(b)


def test_base_key():
	t = Term.from_node(mul(mul(4, pow_("y", 2)), mul("x", pow_(fn("cos", "x"), 2))))
	assert t.base_key() == "x*y^2*cos(x)^2"
	assert Term(7.0).base_key() == "1"


def test_to_node_layout():
	t = Term.from_node(mul(mul("y", 3), pow_("x", 2)))
	assert t.to_node() == mul(3, mul(pow_("x", 2), "y"))
	assert Term.from_node(mul(-1, "x")).to_node() == mul(-1, "x")
	assert Term.from_node(mul(1, "x")).to_node() == var("x")
	assert Term(2.5).to_node() == num(2.5)
	assert Term(0.0, {"x": 1.0}).to_node() == Number(0.0)


def test_multiply_and_divide():
	a = Term.from_node(mul(6, pow_("x", 3)))
	b = Term.from_node(mul(2, "x"))
	assert a.multiply(b).variables == {"x": 4.0}
	assert a.multiply(b).coefficient == 12.0
	q = a.divide(b)
	assert q.coefficient == 3.0
	assert q.variables == {"x": 2.0}
	assert a.divide(Term.from_node(mul(6, pow_("x", 3)))).is_constant()


def test_str():
	assert str(Term.from_node(mul(-1, "x"))) == "-x"
	assert str(Term.from_node(mul(3, pow_("x", 2)))) == "3*x^2"
	assert str(Term(0.0)) == "0"
