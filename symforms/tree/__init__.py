"""
Expression tree package.

Public API re-export:
	Node, Number, Variable, Function, BinaryOp, Operator  — the closed set of tree variants
	builders, traversal helpers, to_text, evaluate, to_sympy/from_sympy
"""

from .nodes import (
	EPSILON, Node, Number, Variable, Function, BinaryOp, Operator,
	is_number, is_op, is_sum, is_integral, nodes_equal, snap_numbers, snap_value,
)
from .builders import lift, num, var, fn, add, sub, mul, div, pow_, neg, sum_of, product_of
from .walk import (
	flatten_product, flatten_sum, negate_node, free_variables,
	node_count, count_operator, count_functions, structure_key,
)
from .render import to_text, format_number
from .evaluate import evaluate
from .sympy_bridge import SympyBridge, to_sympy, from_sympy

__all__ = [
	"EPSILON", "Node", "Number", "Variable", "Function", "BinaryOp", "Operator",
	"is_number", "is_op", "is_sum", "is_integral", "nodes_equal", "snap_numbers", "snap_value",
	"lift", "num", "var", "fn", "add", "sub", "mul", "div", "pow_", "neg", "sum_of", "product_of",
	"flatten_product", "flatten_sum", "negate_node", "free_variables",
	"node_count", "count_operator", "count_functions", "structure_key",
	"to_text", "format_number", "evaluate",
	"SympyBridge", "to_sympy", "from_sympy",
]
