"""
Algebraic clean-up passes run between canonicalization rounds.

Each pass is a pure bottom-up rewrite:
  • fold_constants      Number op Number → Number (division by ≈0 and undefined powers stay)
  • remove_zero_terms   x+0, 0+x, x-0 → x;  x·0, 0·x → 0
  • remove_one_factors  x·1, 1·x → x
  • simplify_powers     x^0 → 1, x^1 → x
"""

from __future__ import annotations
import math
from typing import Callable

from ..tree import EPSILON, Node, Number, Function, BinaryOp, Operator, is_number


def _rebuild(node: Node, rewrite: Callable[[Node], Node]) -> Node:
	"""Apply rewrite to the children of node and return the rebuilt node."""
	if isinstance(node, Function):
		return Function(node.name, rewrite(node.argument))
	if isinstance(node, BinaryOp):
		return BinaryOp(node.operator, rewrite(node.left), rewrite(node.right))
	return node


def _fold(op: Operator, a: float, b: float, eps: float):
	if op is Operator.ADD:
		return a + b
	if op is Operator.SUBTRACT:
		return a - b
	if op is Operator.MULTIPLY:
		return a * b
	if op is Operator.DIVIDE:
		if abs(b) <= eps:
			return None
		return a / b
	try:
		value = math.pow(a, b)
	except (ValueError, OverflowError):
		return None
	return value


def fold_constants(node: Node, eps: float = EPSILON) -> Node:
	node = _rebuild(node, lambda n: fold_constants(n, eps))
	if isinstance(node, BinaryOp) and isinstance(node.left, Number) and isinstance(node.right, Number):
		value = _fold(node.operator, node.left.value, node.right.value, eps)
		if value is not None:
			return Number(value)
	return node


def remove_zero_terms(node: Node, eps: float = EPSILON) -> Node:
	node = _rebuild(node, lambda n: remove_zero_terms(n, eps))
	if not isinstance(node, BinaryOp):
		return node
	op, left, right = node.operator, node.left, node.right
	if op is Operator.ADD:
		if is_number(left, 0.0, eps):
			return right
		if is_number(right, 0.0, eps):
			return left
	elif op is Operator.SUBTRACT:
		if is_number(right, 0.0, eps):
			return left
	elif op is Operator.MULTIPLY:
		if is_number(left, 0.0, eps) or is_number(right, 0.0, eps):
			return Number(0.0)
	return node


def remove_one_factors(node: Node, eps: float = EPSILON) -> Node:
	node = _rebuild(node, lambda n: remove_one_factors(n, eps))
	if isinstance(node, BinaryOp) and node.operator is Operator.MULTIPLY:
		if is_number(node.left, 1.0, eps):
			return node.right
		if is_number(node.right, 1.0, eps):
			return node.left
	return node


def simplify_powers(node: Node, eps: float = EPSILON) -> Node:
	node = _rebuild(node, lambda n: simplify_powers(n, eps))
	if isinstance(node, BinaryOp) and node.operator is Operator.POWER and isinstance(node.right, Number):
		if is_number(node.right, 0.0, eps):
			return Number(1.0)
		if is_number(node.right, 1.0, eps):
			return node.left
	return node
