"""
Symbolic expression engine: canonical forms, alternative forms, and form selection.

Public API re-export:
	tree types and builders, Term, the stage classes, SimplificationEngine,
	and module-level proxies named after each operation.
"""

from .errors import (
	SymFormsError, EmptyCandidatesError, TermDecompositionError,
	UnknownSymbolError, UnsupportedExpressionError, ConfigError,
)
from .config import SimplifyConfig, DEFAULT_CONFIG, LogEvent
from .tree import (
	Node, Number, Variable, Function, BinaryOp, Operator,
	num, var, fn, add, sub, mul, div, pow_, neg, sum_of, product_of,
	nodes_equal, snap_numbers, to_text, evaluate, to_sympy, from_sympy,
)
from .terms import FunctionKey, Term
from .canonical import Canonicalizer, canonicalize, sort_terms
from .trig import TrigRewriter
from .trig import simplify as simplify_trig
from .forms import (
	FormKind, SimplifiedForm, SimplificationForms, FormGenerator,
	generate_all_forms, extract_common_factor, simplify_exp_in_fraction,
)
from .pipeline import StrategyOrchestrator, generate_multiple_forms, iterative_simplify
from .selection import (
	DifferentiationCost, FormSelector,
	select_best_for_differentiation, select_best_form, form_statistics,
)
from .verify import EquivalenceChecks
from .engine import SimplificationEngine, prepare_for_differentiation

__version__ = "0.1.0"

__all__ = [
	"SymFormsError", "EmptyCandidatesError", "TermDecompositionError",
	"UnknownSymbolError", "UnsupportedExpressionError", "ConfigError",
	"SimplifyConfig", "DEFAULT_CONFIG", "LogEvent",
	"Node", "Number", "Variable", "Function", "BinaryOp", "Operator",
	"num", "var", "fn", "add", "sub", "mul", "div", "pow_", "neg", "sum_of", "product_of",
	"nodes_equal", "snap_numbers", "to_text", "evaluate", "to_sympy", "from_sympy",
	"FunctionKey", "Term",
	"Canonicalizer", "canonicalize", "sort_terms",
	"TrigRewriter", "simplify_trig",
	"FormKind", "SimplifiedForm", "SimplificationForms", "FormGenerator",
	"generate_all_forms", "extract_common_factor", "simplify_exp_in_fraction",
	"StrategyOrchestrator", "generate_multiple_forms", "iterative_simplify",
	"DifferentiationCost", "FormSelector",
	"select_best_for_differentiation", "select_best_form", "form_statistics",
	"EquivalenceChecks",
	"SimplificationEngine", "prepare_for_differentiation",
]
