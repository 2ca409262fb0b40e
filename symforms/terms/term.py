"""
Canonical multiplicative decomposition of one additive summand.

A Term is coefficient × Π variable^e × Π function^e × Π nested, where nested holds
opaque sub-trees (sums, quotients, powers with non-numeric exponents, ...) kept in
order. Exponent entries within EPSILON of zero are never stored.

Term.from_node never raises: a factor that cannot be classified stays opaque.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
from typing import Dict, List, Mapping, Optional, Tuple

from ..errors import TermDecompositionError
from ..tree import (
	EPSILON, Node, Number, Variable, Function, BinaryOp, Operator,
	nodes_equal, is_integral, flatten_product, product_of, format_number, snap_numbers,
)
from .function_key import FunctionKey

logger = logging.getLogger(__name__)


def _drop_zero_exponents(m: Mapping, eps: float) -> Dict:
	out = {}
	for k, e in m.items():
		if abs(e) >= eps:
			out[k] = float(e)
	return out


def _exponent_node(e: float) -> Number:
	if is_integral(e):
		return Number(float(round(e)))
	return Number(e)


def _format_exponent(e: float) -> str:
	if is_integral(e):
		return str(int(round(e)))
	return format_number(e)


def _maps_close(a: Mapping, b: Mapping, eps: float) -> bool:
	if a.keys() != b.keys():
		return False
	for k, e in a.items():
		if abs(e - b[k]) >= eps:
			return False
	return True


@dataclass(frozen=True)
class Term:
	"""Immutable value; equal Terms hash equally. The maps are private copies without zero exponents."""
	coefficient: float
	variables: Mapping[str, float] = field(default_factory=dict)
	functions: Mapping[FunctionKey, float] = field(default_factory=dict)
	nested: Tuple[Node, ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "coefficient", float(self.coefficient))
		object.__setattr__(self, "variables", _drop_zero_exponents(self.variables, EPSILON))
		object.__setattr__(self, "functions", _drop_zero_exponents(self.functions, EPSILON))
		object.__setattr__(self, "nested", tuple(self.nested))

	def __hash__(self) -> int:
		return hash((self.coefficient, frozenset(self.variables.items()), frozenset(self.functions.items()), self.nested))

	@staticmethod
	def opaque(node: Node) -> "Term":
		"""A unit-coefficient Term whose only factor is the untouched node."""
		return Term(1.0, {}, {}, (node,))

	def is_zero(self, eps: float = EPSILON) -> bool:
		"""True when the Term denotes the additive identity."""
		return abs(self.coefficient) < eps

	def is_constant(self) -> bool:
		"""True when the Term carries no variable, function, or nested factor."""
		if self.variables or self.functions or self.nested:
			return False
		return True

	def total_degree(self) -> float:
		"""Sum of variable exponents."""
		return float(sum(self.variables.values()))

	def is_similar(self, other: "Term", eps: float = EPSILON) -> bool:
		"""
		Like terms: equal variable maps, equal function maps (keys and exponents),
		and element-wise structurally equal nested factors in the same order.
		"""
		if not _maps_close(self.variables, other.variables, eps):
			return False
		if not _maps_close(self.functions, other.functions, eps):
			return False
		if len(self.nested) != len(other.nested):
			return False
		for a, b in zip(self.nested, other.nested):
			if not nodes_equal(a, b, eps):
				return False
		return True

	def merge(self, other: "Term", eps: float = EPSILON) -> Optional["Term"]:
		"""Sum two like terms keeping the shared base; None when they are not similar."""
		if not self.is_similar(other, eps):
			return None
		return Term(self.coefficient + other.coefficient, self.variables, self.functions, self.nested)

	def multiply(self, other: "Term") -> "Term":
		"""Product of two Terms: coefficients multiply, exponents add, nested factors concatenate."""
		variables = dict(self.variables)
		for name, e in other.variables.items():
			variables[name] = variables.get(name, 0.0) + e
		functions = dict(self.functions)
		for key, e in other.functions.items():
			functions[key] = functions.get(key, 0.0) + e
		return Term(self.coefficient * other.coefficient, variables, functions, self.nested + other.nested)

	def divide(self, divisor: "Term", eps: float = EPSILON) -> "Term":
		"""
		Quotient by a nested-free divisor: coefficient divides, exponents subtract.
		Remainders within eps of zero disappear.
		"""
		variables = {}
		for name, e in self.variables.items():
			rest = e - divisor.variables.get(name, 0.0)
			if abs(rest) > eps:
				variables[name] = rest
		functions = {}
		for key, e in self.functions.items():
			rest = e - divisor.functions.get(key, 0.0)
			if abs(rest) > eps:
				functions[key] = rest
		return Term(self.coefficient / divisor.coefficient, variables, functions, self.nested)

	def negate(self) -> "Term":
		return Term(-self.coefficient, self.variables, self.functions, self.nested)

	def sorted_functions(self) -> List[Tuple[FunctionKey, float]]:
		"""Function entries ordered by canonical key text, then by argument structure."""
		return sorted(self.functions.items(), key=lambda kv: (kv[0].canonical_string(), repr(kv[0].argument)))

	def base_key(self) -> str:
		"""
		Grouping key built from the non-coefficient content:
		variables by name, functions by canonical key, nested factors in order,
		each annotated with "^e" when the exponent is not 1. "1" for constants.
		"""
		parts: List[str] = []
		for name in sorted(self.variables):
			e = self.variables[name]
			if abs(e - 1.0) < EPSILON:
				parts.append(name)
			else:
				parts.append(f"{name}^{_format_exponent(e)}")
		for key, e in self.sorted_functions():
			if abs(e - 1.0) < EPSILON:
				parts.append(key.canonical_string())
			else:
				parts.append(f"{key.canonical_string()}^{_format_exponent(e)}")
		for n in self.nested:
			parts.append(f"[{n}]")
		if not parts:
			return "1"
		return "*".join(parts)

	def structure_key(self) -> str:
		"""
		Exact structural text of the function and nested factors. Unlike base_key it keeps
		the grouping of sub-trees, so ((a+b)+c)^z and (a+(b+c))^z differ.
		"""
		functions = tuple((repr(k.argument), k.name, e) for k, e in self.sorted_functions())
		nested = tuple(repr(snap_numbers(n)) for n in self.nested)
		return repr((functions, nested))

	def to_node(self) -> Node:
		"""
		Render back to a tree: sorted variable powers, sorted function powers, nested
		factors verbatim, folded into a left-associative product. A coefficient of
		±1 adds no literal factor; -1 becomes a leading ×(-1).
		"""
		if self.is_zero():
			return Number(0.0)

		parts: List[Node] = []
		for name in sorted(self.variables):
			e = self.variables[name]
			if abs(e - 1.0) < EPSILON:
				parts.append(Variable(name))
			else:
				parts.append(BinaryOp(Operator.POWER, Variable(name), _exponent_node(e)))
		for key, e in self.sorted_functions():
			if abs(e - 1.0) < EPSILON:
				parts.append(key.to_node())
			else:
				parts.append(BinaryOp(Operator.POWER, key.to_node(), _exponent_node(e)))
		parts.extend(self.nested)

		if not parts:
			return Number(self.coefficient)

		body = product_of(parts)
		if abs(self.coefficient - 1.0) < EPSILON:
			return body
		if abs(self.coefficient + 1.0) < EPSILON:
			return BinaryOp(Operator.MULTIPLY, Number(-1.0), body)
		return BinaryOp(Operator.MULTIPLY, Number(self.coefficient), body)

	def __str__(self) -> str:
		if self.is_zero():
			return "0"
		base = self.base_key()
		if base == "1":
			return format_number(self.coefficient)
		if abs(self.coefficient - 1.0) < EPSILON:
			return base
		if abs(self.coefficient + 1.0) < EPSILON:
			return "-" + base
		return f"{format_number(self.coefficient)}*{base}"

	@staticmethod
	def from_node(node: Node) -> "Term":
		"""
		Decompose a tree into a Term:
		  • Number / Variable / Function map to their own entry
		  • a MULTIPLY chain multiplies the Terms of its factors
		  • a POWER with a numeric exponent over a Variable, Number or Function becomes an exponent entry
		  • anything else is kept as a single opaque nested factor
		"""
		return TermDecomposer.decompose(node)


class TermDecomposer:
	"""Classification of sub-trees into Term entries."""

	@staticmethod
	def decompose(node: Node) -> Term:
		"""Decompose node; a failure leaves node opaque rather than propagating."""
		try:
			return TermDecomposer._decompose(node)
		except TermDecompositionError as exc:
			logger.debug("decompose: %s; keeping %s opaque", exc, node)
			return Term.opaque(node)

	@staticmethod
	def _decompose(node: Node) -> Term:
		if isinstance(node, Number):
			return Term(node.value)
		if isinstance(node, Variable):
			return Term(1.0, {node.name: 1.0})
		if isinstance(node, Function):
			return Term(1.0, {}, {FunctionKey.of(node): 1.0})
		if isinstance(node, BinaryOp):
			if node.operator is Operator.MULTIPLY:
				return TermDecomposer._from_product(node)
			if node.operator is Operator.POWER:
				return TermDecomposer._from_power(node)
		return Term.opaque(node)

	@staticmethod
	def _from_product(node: BinaryOp) -> Term:
		result = Term(1.0)
		for factor in flatten_product(node):
			result = result.multiply(TermDecomposer.decompose(factor))
		return result

	@staticmethod
	def _from_power(node: BinaryOp) -> Term:
		base, exponent = node.left, node.right
		if not isinstance(exponent, Number):
			return Term.opaque(node)
		e = exponent.value
		if not math.isfinite(e):
			raise TermDecompositionError(f"non-finite exponent in {node}")
		if isinstance(base, Variable):
			return Term(1.0, {base.name: e})
		if isinstance(base, Function):
			return Term(1.0, {}, {FunctionKey.of(base): e})
		if isinstance(base, Number):
			try:
				value = math.pow(base.value, e)
			except (ValueError, OverflowError) as exc:
				raise TermDecompositionError(f"cannot fold {node}: {exc}") from exc
			return Term(value)
		return Term.opaque(node)
