"""
Plain-text rendering for the presentation layer.

Rules:
  • Integral numbers print without a decimal part (2.0 → "2"); others use 10 significant digits
  • Number(-1) × e prints as "-e" and Number(1) × e as "e"
  • Parentheses follow precedence; the right operand of "-" is wrapped when it is a sum,
    the right operand of "/" when it is a product or quotient, and binary operands of "^" always
  • A right operand (or a "^" base) whose text starts with "-" is wrapped

Nothing in the rewrite passes compares these strings; they are for labels, logs and base keys.
"""

from __future__ import annotations
import math

from .nodes import EPSILON, Node, Number, Variable, Function, BinaryOp, Operator, is_integral

_SEPARATORS = {
	Operator.ADD: " + ",
	Operator.SUBTRACT: " - ",
	Operator.MULTIPLY: "*",
	Operator.DIVIDE: "/",
	Operator.POWER: "^",
}


def format_number(value: float) -> str:
	"""Render a float compactly: integral values as ints, others with 10 significant digits."""
	if math.isnan(value):
		return "nan"
	if math.isinf(value):
		if value > 0:
			return "inf"
		else:
			return "-inf"
	if is_integral(value) and abs(value) < 1e15:
		return str(int(round(value)))
	return format(value, ".10g")


def _needs_parentheses(parent: Operator, child: Node, is_left: bool) -> bool:
	if not isinstance(child, BinaryOp):
		return False
	if parent is Operator.POWER:
		return True
	child_prec = child.operator.precedence
	if child_prec < parent.precedence:
		return True
	if not is_left:
		if parent is Operator.SUBTRACT and child_prec == Operator.ADD.precedence:
			return True
		if parent is Operator.DIVIDE and child_prec == Operator.MULTIPLY.precedence:
			return True
	return False


def _format_child(parent: Operator, child: Node, is_left: bool) -> str:
	text = to_text(child)
	if _needs_parentheses(parent, child, is_left):
		return f"({text})"
	if text.startswith("-"):
		if not is_left or parent is Operator.POWER:
			return f"({text})"
	return text


def to_text(node: Node) -> str:
	"""Render node as plain text."""
	if isinstance(node, Number):
		return format_number(node.value)
	if isinstance(node, Variable):
		return node.name
	if isinstance(node, Function):
		return f"{node.name}({to_text(node.argument)})"
	if isinstance(node, BinaryOp):
		op = node.operator
		if op is Operator.MULTIPLY and isinstance(node.left, Number):
			if abs(node.left.value + 1.0) < EPSILON:
				return "-" + _format_child(op, node.right, False)
			if abs(node.left.value - 1.0) < EPSILON:
				return _format_child(op, node.right, True)
		left = _format_child(op, node.left, True)
		if op is Operator.ADD:
			text = to_text(node.right)
			if text.startswith("-"):
				return f"{left} - {text[1:]}"
		right = _format_child(op, node.right, False)
		return f"{left}{_SEPARATORS[op]}{right}"
	raise TypeError(f"not an expression node: {type(node).__name__}")
