"""Small constructors for building trees by hand (tests, rewrites, rebuilds)."""

from __future__ import annotations
from typing import Iterable, Union

from .nodes import Node, Number, Variable, Function, BinaryOp, Operator

NodeLike = Union[Node, int, float, str]


def lift(x: NodeLike) -> Node:
	"""Coerce ints/floats to Number and strings to Variable."""
	if isinstance(x, Node):
		return x
	if isinstance(x, bool):
		raise TypeError("booleans are not expressions")
	if isinstance(x, (int, float)):
		return Number(float(x))
	if isinstance(x, str):
		return Variable(x)
	raise TypeError(f"cannot build an expression from {type(x).__name__}")


def num(value: float) -> Number:
	return Number(float(value))


def var(name: str) -> Variable:
	return Variable(name)


def fn(name: str, argument: NodeLike) -> Function:
	return Function(name, lift(argument))


def add(left: NodeLike, right: NodeLike) -> BinaryOp:
	return BinaryOp(Operator.ADD, lift(left), lift(right))


def sub(left: NodeLike, right: NodeLike) -> BinaryOp:
	return BinaryOp(Operator.SUBTRACT, lift(left), lift(right))


def mul(left: NodeLike, right: NodeLike) -> BinaryOp:
	return BinaryOp(Operator.MULTIPLY, lift(left), lift(right))


def div(left: NodeLike, right: NodeLike) -> BinaryOp:
	return BinaryOp(Operator.DIVIDE, lift(left), lift(right))


def pow_(base: NodeLike, exponent: NodeLike) -> BinaryOp:
	return BinaryOp(Operator.POWER, lift(base), lift(exponent))


def neg(node: NodeLike) -> BinaryOp:
	"""Negation by convention: a leading ×(-1)."""
	return BinaryOp(Operator.MULTIPLY, Number(-1.0), lift(node))


def sum_of(terms: Iterable[NodeLike]) -> Node:
	"""Left-associative ADD chain; Number(0) when empty."""
	items = [lift(t) for t in terms]
	if not items:
		return Number(0.0)
	result = items[0]
	for t in items[1:]:
		result = BinaryOp(Operator.ADD, result, t)
	return result


def product_of(factors: Iterable[NodeLike]) -> Node:
	"""Left-associative MULTIPLY chain; Number(1) when empty."""
	items = [lift(f) for f in factors]
	if not items:
		return Number(1.0)
	result = items[0]
	for f in items[1:]:
		result = BinaryOp(Operator.MULTIPLY, result, f)
	return result
