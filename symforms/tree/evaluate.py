"""
Vectorised NumPy evaluation of expression trees.

Evaluation is unguarded float64 arithmetic under np.errstate(all="ignore"):
domain errors surface as nan/inf values rather than exceptions, so callers can
mask non-finite points. Unknown function names and unbound variables raise
UnknownSymbolError.
"""

from __future__ import annotations
from typing import Callable, Dict, Mapping, Union

import numpy as np

from ..errors import UnknownSymbolError
from .nodes import Node, Number, Variable, Function, BinaryOp, Operator

ArrayLike = Union[float, np.ndarray]


def _cot(x: np.ndarray) -> np.ndarray:
	return 1.0 / np.tan(x)


def _sec(x: np.ndarray) -> np.ndarray:
	return 1.0 / np.cos(x)


def _csc(x: np.ndarray) -> np.ndarray:
	return 1.0 / np.sin(x)


FUNCTIONS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
	"sin": np.sin,
	"cos": np.cos,
	"tan": np.tan,
	"cot": _cot,
	"sec": _sec,
	"csc": _csc,
	"asin": np.arcsin,
	"acos": np.arccos,
	"atan": np.arctan,
	"sinh": np.sinh,
	"cosh": np.cosh,
	"tanh": np.tanh,
	"exp": np.exp,
	"ln": np.log,
	"log": np.log,
	"log10": np.log10,
	"sqrt": np.sqrt,
	"abs": np.abs,
}

CONSTANTS: Dict[str, float] = {
	"pi": float(np.pi),
	"e": float(np.e),
}


def _binary(op: Operator, a: np.ndarray, b: np.ndarray) -> np.ndarray:
	if op is Operator.ADD:
		return a + b
	if op is Operator.SUBTRACT:
		return a - b
	if op is Operator.MULTIPLY:
		return a * b
	if op is Operator.DIVIDE:
		return a / b
	return np.power(a, b)


def _eval(node: Node, env: Mapping[str, np.ndarray]) -> np.ndarray:
	if isinstance(node, Number):
		return np.asarray(node.value, dtype=np.float64)
	if isinstance(node, Variable):
		if node.name in env:
			return env[node.name]
		if node.name in CONSTANTS:
			return np.asarray(CONSTANTS[node.name], dtype=np.float64)
		raise UnknownSymbolError(f"unbound variable: {node.name}")
	if isinstance(node, Function):
		f = FUNCTIONS.get(node.name)
		if f is None:
			raise UnknownSymbolError(f"unknown function: {node.name}")
		return f(_eval(node.argument, env))
	if isinstance(node, BinaryOp):
		left = _eval(node.left, env)
		right = _eval(node.right, env)
		return _binary(node.operator, left, right)
	raise TypeError(f"not an expression node: {type(node).__name__}")


def evaluate(node: Node, env: Mapping[str, ArrayLike]) -> np.ndarray:
	"""
	Evaluate node with variables bound from env (scalars or equally-shaped arrays).
	Returns a float64 array broadcast to the shape of the inputs.
	"""
	bound: Dict[str, np.ndarray] = {}
	for name, value in env.items():
		bound[name] = np.asarray(value, dtype=np.float64)
	with np.errstate(all="ignore"):
		out = _eval(node, bound)
	shapes = [v.shape for v in bound.values()]
	if shapes:
		return np.broadcast_to(out, np.broadcast_shapes(*shapes)).astype(np.float64)
	return np.asarray(out, dtype=np.float64)
