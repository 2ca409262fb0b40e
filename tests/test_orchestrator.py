from symforms import SimplifyConfig
from symforms.forms import (
	FormKind, EXPANDED_LABEL, TRIG_SIMPLIFIED, FACTORED_LABEL, FRACTION_REDUCED,
	INTERMEDIATE_STEP, ALTERNATIVE_FORM, ORIGINAL_FORM,
)
from symforms.pipeline import StrategyOrchestrator, generate_multiple_forms, iterative_simplify
from symforms.tree import var, fn, add, sub, mul, div, pow_, Number, structure_key, to_text
from symforms.verify import EquivalenceChecks


def sin(u):
	return fn("sin", u)


def cos(u):
	return fn("cos", u)


def exp(u):
	return fn("exp", u)


def pythagorean():
	return add(pow_(sin("x"), 2), pow_(cos("x"), 2))


def exp_fraction():
	numerator = add(mul(exp("x"), cos("x")), mul(-1, mul(exp("x"), sin("x"))))
	return div(numerator, pow_(exp("x"), 2))


def test_pythagorean_forms():
	forms = generate_multiple_forms(pythagorean())
	assert [f.label for f in forms.forms] == [EXPANDED_LABEL, TRIG_SIMPLIFIED]
	assert forms.forms[0].kind is FormKind.EXPANDED
	assert forms.forms[1].expression == Number(1)
	assert forms.events == []


def test_fraction_forms():
	e = exp_fraction()
	forms = generate_multiple_forms(e)
	assert [f.label for f in forms.forms] == [EXPANDED_LABEL, FACTORED_LABEL, FRACTION_REDUCED]
	assert to_text(forms.forms[-1].expression) == "(cos(x) - sin(x))/exp(x)"
	checks = EquivalenceChecks()
	for f in forms.forms:
		assert checks.numerically_equivalent(e, f.expression)


def test_forms_are_distinct():
	for e in (pythagorean(), exp_fraction(), mul(add("x", 1), sub("x", 1)), add(mul(2, pow_("x", 2)), mul(4, "x"))):
		keys = [structure_key(f.expression) for f in generate_multiple_forms(e).forms]
		assert len(keys) == len(set(keys))


def test_forms_never_render_alike():
	numerator = sub(mul(exp("x"), cos("x")), mul(exp("x"), sin("x")))
	for e in (div(numerator, pow_(exp("x"), 2)), exp_fraction(), mul(mul(-3, sin("x")), cos("x"))):
		texts = [to_text(f.expression) for f in generate_multiple_forms(e).forms]
		assert len(texts) == len(set(texts))


def test_real_padding_strategies_fill_missing_forms():
	# sin((1 + 1) + (x + 0)): the factor strategy keeps the unfolded argument, the
	# partial strategy folds constants but keeps the zero term
	argument = add(add(1, 1), add("x", 0))
	forms = generate_multiple_forms(fn("sin", argument))
	assert [f.label for f in forms.forms] == [EXPANDED_LABEL, FACTORED_LABEL, INTERMEDIATE_STEP]
	assert forms.expressions() == [
		fn("sin", add(2, "x")),
		fn("sin", argument),
		fn("sin", add(2, add("x", 0))),
	]


def test_real_padding_strategies_add_nothing_new(monkeypatch):
	orch = StrategyOrchestrator()
	calls = []
	for name in ("partial_strategy", "alternative_strategy"):
		real = getattr(orch, name)

		def spy(node, events, real=real, name=name):
			calls.append(name)
			return real(node, events)

		monkeypatch.setattr(orch, name, spy)
	forms = orch.generate_multiple_forms(pythagorean())
	assert calls == ["partial_strategy", "alternative_strategy"]
	assert [f.label for f in forms.forms] == [EXPANDED_LABEL, TRIG_SIMPLIFIED]
	assert orch.partial_strategy(pythagorean(), []) == Number(1)
	assert orch.alternative_strategy(pythagorean(), []) == forms.forms[0].expression


def test_padding_adds_reduced_strategies(monkeypatch):
	orch = StrategyOrchestrator()
	monkeypatch.setattr(orch, "partial_strategy", lambda node, events: var("p"))
	monkeypatch.setattr(orch, "alternative_strategy", lambda node, events: var("q"))
	forms = orch.generate_multiple_forms(var("x"))
	assert [f.label for f in forms.forms] == [EXPANDED_LABEL, INTERMEDIATE_STEP, ALTERNATIVE_FORM]
	assert forms.expressions() == [var("x"), var("p"), var("q")]


def test_padding_stops_at_min_forms(monkeypatch):
	orch = StrategyOrchestrator(SimplifyConfig(min_forms=2))
	monkeypatch.setattr(orch, "partial_strategy", lambda node, events: var("p"))
	monkeypatch.setattr(orch, "alternative_strategy", lambda node, events: var("q"))
	forms = orch.generate_multiple_forms(var("x"))
	assert forms.expressions() == [var("x"), var("p")]


def test_min_forms_zero_disables_padding():
	orch = StrategyOrchestrator(SimplifyConfig(min_forms=0))
	forms = orch.generate_multiple_forms(var("x"))
	assert [f.expression for f in forms.forms] == [var("x")]


def test_failed_step_keeps_previous_value(monkeypatch):
	orch = StrategyOrchestrator()

	def boom(node):
		raise RuntimeError("trig failure")

	monkeypatch.setattr(orch.trig, "simplify", boom)
	forms = orch.generate_multiple_forms(pythagorean())
	assert Number(1) not in forms.expressions()
	assert len(forms) >= 1
	assert forms.events
	assert all(ev.kind == "step_failed" for ev in forms.events)
	assert forms.events[0].payload["step"] == "trig_simplify"


def test_whole_pipeline_failure_returns_input(monkeypatch):
	orch = StrategyOrchestrator()

	def boom(node):
		raise RuntimeError("pipeline failure")

	monkeypatch.setattr(orch, "_generate", boom)
	e = pythagorean()
	forms = orch.generate_multiple_forms(e)
	assert len(forms) == 1
	assert forms.forms[0].expression == e
	assert forms.forms[0].kind is FormKind.STRUCTURAL
	assert forms.forms[0].label == ORIGINAL_FORM
	assert forms.events[0].kind == "pipeline_failed"


def test_verification_drops_wrong_candidates(monkeypatch):
	orch = StrategyOrchestrator(SimplifyConfig(verify_forms=True))
	monkeypatch.setattr(orch, "factor_strategy", lambda node, events: var("z"))
	forms = orch.generate_multiple_forms(pythagorean())
	assert var("z") not in forms.expressions()
	assert any(ev.kind == "form_rejected" for ev in forms.events)


def test_iterative_simplify():
	assert iterative_simplify(add(mul("x", 1), mul(0, "y"))) == var("x")
	assert iterative_simplify(mul(mul(2, sin("x")), cos("x"))) == sin(mul(2, "x"))
	assert iterative_simplify(pythagorean()) == Number(1)


def test_iterative_simplify_records_failures(monkeypatch):
	orch = StrategyOrchestrator()

	def boom(node):
		raise ValueError("no canonical form")

	monkeypatch.setattr(orch.canonicalizer, "canonicalize", boom)
	events = []
	out = orch.iterative_simplify(add(mul("x", 1), 0), events)
	assert out == var("x")
	assert events[0].payload["step"] == "canonicalize"
