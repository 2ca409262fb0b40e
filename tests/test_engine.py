import symforms
from symforms import SimplificationEngine, SimplifyConfig
from symforms.forms import STANDARD_FORM, NUMERATOR_FACTORED, EXP_CANCELLED
from symforms.tree import var, fn, add, sub, mul, div, pow_, Number, to_text


def exp_fraction():
	return div(mul(fn("exp", "x"), sub(fn("cos", "x"), fn("sin", "x"))), pow_(fn("exp", "x"), 2))


def test_prepare_for_differentiation(engine):
	best, forms = engine.prepare_for_differentiation(exp_fraction())
	assert [f.label for f in forms] == [STANDARD_FORM, NUMERATOR_FACTORED, EXP_CANCELLED]
	assert to_text(best) == "(cos(x) - sin(x))/exp(x)"
	assert engine.form_statistics(best)["cost"] == 51


def test_prepare_for_differentiation_polynomial(engine):
	best, forms = engine.prepare_for_differentiation(mul(add("x", 1), add("x", 1)))
	assert to_text(forms[0].expression) == "x^2 + 2*x + 1"
	assert best == forms[0].expression


def test_stage_delegation(engine):
	assert engine.canonicalize(add(mul("x", 2), "x")) == mul(3, "x")
	assert engine.simplify_trig(add(pow_(fn("sin", "x"), 2), pow_(fn("cos", "x"), 2))) == Number(1)
	assert engine.iterative_simplify(mul(var("x"), 1)) == var("x")
	assert engine.select_best_for_differentiation([var("x")]) == var("x")
	assert len(engine.generate_multiple_forms(var("x"))) == 1


def test_verifying_engine_keeps_equivalent_forms(verifying_engine):
	forms = verifying_engine.generate_multiple_forms(exp_fraction())
	assert len(forms) == 3
	assert forms.events == []


def test_module_level_proxies():
	e = exp_fraction()
	best, _ = symforms.prepare_for_differentiation(e)
	assert to_text(best) == "(cos(x) - sin(x))/exp(x)"
	assert symforms.simplify_trig(mul(mul(2, fn("sin", "x")), fn("cos", "x"))) == fn("sin", mul(2, "x"))
	assert symforms.canonicalize(sub("x", "x")) == Number(0)


def test_engines_do_not_share_config():
	strict = SimplificationEngine(SimplifyConfig(max_rounds=1))
	assert strict.trig.cfg.max_rounds == 1
	assert SimplificationEngine().trig.cfg.max_rounds == 10
