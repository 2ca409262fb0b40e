"""
Differentiation cost model: a structural estimate of how much work a derivative takes.

Costs:
  • Number: 0
  • Variable: 1
  • Function f(u): 3 + C(u)                       (chain rule)
  • ADD/SUBTRACT: C(l) + C(r) + 1
  • MULTIPLY: 2·(C(l) + C(r))                     (product rule)
  • DIVIDE: 3·(C(l) + C(r))                       (quotient rule)
  • POWER with numeric exponent: 2·C(base) + 2    (power rule)
  • POWER with symbolic exponent: 4·(C(base) + C(exp))
"""

from __future__ import annotations

from ..tree import Node, Number, Variable, Function, BinaryOp, Operator


class DifferentiationCost:
	"""Encapsulate the differentiation cost recursion."""

	def cost(self, node: Node) -> int:
		"""Return the differentiation cost of node."""
		if isinstance(node, Number):
			return 0
		if isinstance(node, Variable):
			return 1
		if isinstance(node, Function):
			return 3 + self.cost(node.argument)
		if isinstance(node, BinaryOp):
			op = node.operator
			if op is Operator.POWER:
				if isinstance(node.right, Number):
					return 2 * self.cost(node.left) + 2
				else:
					return (self.cost(node.left) + self.cost(node.right)) * 4
			children = self.cost(node.left) + self.cost(node.right)
			if op in (Operator.ADD, Operator.SUBTRACT):
				return children + 1
			if op is Operator.MULTIPLY:
				return children * 2
			return children * 3
		raise TypeError(f"not an expression node: {type(node).__name__}")


def differentiation_cost(node: Node) -> int:
	"""Proxy to DifferentiationCost.cost."""
	return DifferentiationCost().cost(node)
