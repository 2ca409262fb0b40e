"""SymPy interop: convert expression trees to SymPy and back.

Provides:
  • SympyBridge.to_sympy(node): tree → SymPy expression (real symbols, exact small rationals)
  • SympyBridge.from_sympy(expr): SymPy expression → tree (n-ary Add/Mul folded left-associatively)

Module-level functions proxy to SympyBridge methods.
"""

from __future__ import annotations
from typing import Callable, Dict

import sympy as sp

from ..errors import UnsupportedExpressionError
from .nodes import Node, Number, Variable, Function, BinaryOp, Operator, is_integral
from .builders import sum_of, product_of


def _log10(x: sp.Expr) -> sp.Expr:
	return sp.log(x, 10)


_TO_SYMPY: Dict[str, Callable[[sp.Expr], sp.Expr]] = {
	"sin": sp.sin, "cos": sp.cos, "tan": sp.tan,
	"cot": sp.cot, "sec": sp.sec, "csc": sp.csc,
	"asin": sp.asin, "acos": sp.acos, "atan": sp.atan,
	"sinh": sp.sinh, "cosh": sp.cosh, "tanh": sp.tanh,
	"exp": sp.exp, "ln": sp.log, "log": sp.log, "log10": _log10,
	"sqrt": sp.sqrt, "abs": sp.Abs,
}

_FROM_SYMPY: Dict[object, str] = {
	sp.sin: "sin", sp.cos: "cos", sp.tan: "tan",
	sp.cot: "cot", sp.sec: "sec", sp.csc: "csc",
	sp.asin: "asin", sp.acos: "acos", sp.atan: "atan",
	sp.sinh: "sinh", sp.cosh: "cosh", sp.tanh: "tanh",
	sp.exp: "exp", sp.log: "ln", sp.Abs: "abs",
}


class SympyBridge:
	"""Utility namespace for tree ↔ SymPy conversion."""

	@staticmethod
	def _number_to_sympy(value: float) -> sp.Expr:
		"""
		Normalize numeric literals: integral floats become Integer, small dyadic
		fractions (den ∈ {2,4,8,16}) become exact Rational, everything else Float.
		"""
		if is_integral(value):
			return sp.Integer(int(round(value)))
		num, den = float(value).as_integer_ratio()
		if den in (2, 4, 8, 16):
			return sp.Rational(num, den)
		return sp.Float(value)

	@staticmethod
	def to_sympy(node: Node) -> sp.Expr:
		"""Convert a tree to a SymPy expression; unknown function names become undefined functions."""
		if isinstance(node, Number):
			return SympyBridge._number_to_sympy(node.value)
		if isinstance(node, Variable):
			if node.name == "pi":
				return sp.pi
			if node.name == "e":
				return sp.E
			return sp.Symbol(node.name, real=True)
		if isinstance(node, Function):
			arg = SympyBridge.to_sympy(node.argument)
			f = _TO_SYMPY.get(node.name)
			if f is None:
				return sp.Function(node.name)(arg)
			return f(arg)
		if isinstance(node, BinaryOp):
			a = SympyBridge.to_sympy(node.left)
			b = SympyBridge.to_sympy(node.right)
			op = node.operator
			if op is Operator.ADD:
				return a + b
			if op is Operator.SUBTRACT:
				return a - b
			if op is Operator.MULTIPLY:
				return a * b
			if op is Operator.DIVIDE:
				return a / b
			return sp.Pow(a, b)
		raise TypeError(f"not an expression node: {type(node).__name__}")

	@staticmethod
	def from_sympy(expr: sp.Expr) -> Node:
		"""Convert a SymPy expression to a tree, raising UnsupportedExpressionError when impossible."""
		if expr.is_Number:
			if not expr.is_real:
				raise UnsupportedExpressionError(f"non-real number: {expr}")
			return Number(float(expr))
		if isinstance(expr, sp.NumberSymbol):
			return Number(float(expr))
		if expr.is_Symbol:
			return Variable(expr.name)
		if expr.is_Add:
			parts = []
			for t in expr.as_ordered_terms():
				parts.append(SympyBridge.from_sympy(t))
			return sum_of(parts)
		if expr.is_Mul:
			parts = []
			for f in expr.as_ordered_factors():
				parts.append(SympyBridge.from_sympy(f))
			return product_of(parts)
		if expr.is_Pow:
			base = SympyBridge.from_sympy(expr.base)
			exponent = SympyBridge.from_sympy(expr.exp)
			return BinaryOp(Operator.POWER, base, exponent)
		if isinstance(expr, sp.Function) and len(expr.args) == 1:
			name = _FROM_SYMPY.get(expr.func)
			if name is None:
				if isinstance(expr, sp.core.function.AppliedUndef):
					name = expr.func.__name__
				else:
					raise UnsupportedExpressionError(f"function not supported: {expr.func}")
			return Function(name, SympyBridge.from_sympy(expr.args[0]))
		raise UnsupportedExpressionError(f"expression not supported: {sp.srepr(expr)}")


def to_sympy(node: Node) -> sp.Expr:
	"""Proxy to SympyBridge.to_sympy."""
	return SympyBridge.to_sympy(node)


def from_sympy(expr: sp.Expr) -> Node:
	"""Proxy to SympyBridge.from_sympy."""
	return SympyBridge.from_sympy(expr)
