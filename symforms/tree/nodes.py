"""
Immutable expression tree.

Node variants (closed set, dispatched with isinstance everywhere):
  • Number(value)                    — a float literal
  • Variable(name)                   — a free symbol
  • Function(name, argument)         — opaque unary application (sin, exp, ln, ...)
  • BinaryOp(operator, left, right)  — ADD, SUBTRACT, MULTIPLY, DIVIDE, POWER

Nodes are frozen dataclasses, so `==` and `hash` are exact structural value
comparison. Tolerance-aware comparison lives in nodes_equal; snap_numbers gives
a hashable representative that is stable under float noise below EPSILON.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


EPSILON = 1e-10
SNAP_DIGITS = 10


class Operator(Enum):
	"""Binary operators with their text symbol and binding precedence."""

	ADD = ("+", 1)
	SUBTRACT = ("-", 1)
	MULTIPLY = ("*", 2)
	DIVIDE = ("/", 2)
	POWER = ("^", 3)

	def __init__(self, symbol: str, precedence: int) -> None:
		self.symbol = symbol
		self.precedence = precedence


class Node:
	"""Common base of every tree variant."""

	__slots__ = ()

	def __str__(self) -> str:
		from .render import to_text
		return to_text(self)


@dataclass(frozen=True)
class Number(Node):
	value: float


@dataclass(frozen=True)
class Variable(Node):
	name: str


@dataclass(frozen=True)
class Function(Node):
	name: str
	argument: Node


@dataclass(frozen=True)
class BinaryOp(Node):
	operator: Operator
	left: Node
	right: Node


def is_number(node: Node, value: Optional[float] = None, eps: float = EPSILON) -> bool:
	"""Return True iff node is a Number (optionally equal to value within eps)."""
	if not isinstance(node, Number):
		return False
	if value is None:
		return True
	return abs(node.value - value) < eps


def is_op(node: Node, *operators: Operator) -> bool:
	"""Return True iff node is a BinaryOp whose operator is one of `operators`."""
	return isinstance(node, BinaryOp) and node.operator in operators


def is_sum(node: Node) -> bool:
	"""Return True for ADD/SUBTRACT roots."""
	return is_op(node, Operator.ADD, Operator.SUBTRACT)


def is_integral(x: float, eps: float = EPSILON) -> bool:
	"""Return True iff x is within eps of an integer."""
	return abs(x - round(x)) < eps


def nodes_equal(a: Node, b: Node, eps: float = EPSILON) -> bool:
	"""
	Structural equality with numeric tolerance: same variant, same names and
	operators, Number values within eps, children compared recursively.
	"""
	if isinstance(a, Number) and isinstance(b, Number):
		return abs(a.value - b.value) < eps
	if isinstance(a, Variable) and isinstance(b, Variable):
		return a.name == b.name
	if isinstance(a, Function) and isinstance(b, Function):
		if a.name != b.name:
			return False
		return nodes_equal(a.argument, b.argument, eps)
	if isinstance(a, BinaryOp) and isinstance(b, BinaryOp):
		if a.operator is not b.operator:
			return False
		if not nodes_equal(a.left, b.left, eps):
			return False
		return nodes_equal(a.right, b.right, eps)
	return False


def snap_value(x: float) -> float:
	"""Round to SNAP_DIGITS decimals and fold -0.0 into 0.0."""
	v = round(float(x), SNAP_DIGITS)
	if v == 0.0:
		return 0.0
	return v


def snap_numbers(node: Node) -> Node:
	"""Return node with every Number snapped; used for hashing and dedup keys."""
	if isinstance(node, Number):
		return Number(snap_value(node.value))
	if isinstance(node, Variable):
		return node
	if isinstance(node, Function):
		return Function(node.name, snap_numbers(node.argument))
	if isinstance(node, BinaryOp):
		return BinaryOp(node.operator, snap_numbers(node.left), snap_numbers(node.right))
	return node
