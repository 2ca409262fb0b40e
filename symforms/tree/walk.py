"""
Traversal helpers shared by every rewrite pass.

The flatteners only cross the operator they are named after: a product is never
flattened across a sum and vice versa.
"""

from __future__ import annotations
from typing import List, Set

from .nodes import Node, Number, Variable, Function, BinaryOp, Operator, snap_value


def flatten_product(node: Node) -> List[Node]:
	"""Return the factors of a MULTIPLY chain in left-to-right order."""
	if isinstance(node, BinaryOp) and node.operator is Operator.MULTIPLY:
		return flatten_product(node.left) + flatten_product(node.right)
	return [node]


def negate_node(node: Node) -> Node:
	"""
	Negate an addend:
	  • Number(v)          → Number(-v)
	  • Number(c) × rest   → Number(-c) × rest
	  • anything else      → Number(-1) × node
	"""
	if isinstance(node, Number):
		return Number(-node.value)
	if isinstance(node, BinaryOp) and node.operator is Operator.MULTIPLY:
		if isinstance(node.left, Number):
			return BinaryOp(Operator.MULTIPLY, Number(-node.left.value), node.right)
	return BinaryOp(Operator.MULTIPLY, Number(-1.0), node)


def flatten_sum(node: Node) -> List[Node]:
	"""
	Return the addends of an ADD/SUBTRACT chain; addends reached through the
	right side of a SUBTRACT are negated.
	"""
	if isinstance(node, BinaryOp):
		if node.operator is Operator.ADD:
			return flatten_sum(node.left) + flatten_sum(node.right)
		if node.operator is Operator.SUBTRACT:
			negated = []
			for t in flatten_sum(node.right):
				negated.append(negate_node(t))
			return flatten_sum(node.left) + negated
	return [node]


def free_variables(node: Node) -> Set[str]:
	"""Return the names of all Variables in node."""
	if isinstance(node, Variable):
		return {node.name}
	if isinstance(node, Function):
		return free_variables(node.argument)
	if isinstance(node, BinaryOp):
		return free_variables(node.left) | free_variables(node.right)
	return set()


def node_count(node: Node) -> int:
	"""Total number of nodes."""
	if isinstance(node, Function):
		return 1 + node_count(node.argument)
	if isinstance(node, BinaryOp):
		return 1 + node_count(node.left) + node_count(node.right)
	return 1


def count_operator(node: Node, operator: Operator) -> int:
	"""Number of BinaryOp nodes carrying `operator`."""
	if isinstance(node, Function):
		return count_operator(node.argument, operator)
	if isinstance(node, BinaryOp):
		own = 1 if node.operator is operator else 0
		return own + count_operator(node.left, operator) + count_operator(node.right, operator)
	return 0


def count_functions(node: Node) -> int:
	"""Number of Function applications, nested ones included."""
	if isinstance(node, Function):
		return 1 + count_functions(node.argument)
	if isinstance(node, BinaryOp):
		return count_functions(node.left) + count_functions(node.right)
	return 0


def structure_key(node: Node) -> tuple:
	"""
	Hashable dedup key that ignores how associative chains are grouped:
	  • ADD/SUBTRACT chains become their signed addend list (flatten_sum)
	  • MULTIPLY chains become their factor list (flatten_product)
	  • Numbers are snapped
	Order is kept, so a + b and b + a stay distinct.
	"""
	if isinstance(node, Number):
		return ("n", snap_value(node.value))
	if isinstance(node, Variable):
		return ("v", node.name)
	if isinstance(node, Function):
		return ("f", node.name, structure_key(node.argument))
	if isinstance(node, BinaryOp):
		op = node.operator
		if op in (Operator.ADD, Operator.SUBTRACT):
			return ("+", tuple(structure_key(t) for t in flatten_sum(node)))
		if op is Operator.MULTIPLY:
			return ("*", tuple(structure_key(f) for f in flatten_product(node)))
		return (op.symbol, structure_key(node.left), structure_key(node.right))
	raise TypeError(f"not an expression node: {type(node).__name__}")
