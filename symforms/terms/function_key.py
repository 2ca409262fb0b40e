"""
Structural identity of a Function factor.

Two applications share a key iff they have the same name and their arguments are
structurally equal once numbers are snapped (so exp(x-9) and exp(x-9.00000000001)
collide, while sin(2*x) and sin(x+x) stay distinct).
"""

from __future__ import annotations
from dataclasses import dataclass

from ..tree import Node, Function, snap_numbers, to_text


@dataclass(frozen=True)
class FunctionKey:
	"""Hashable (name, snapped argument) pair used as a Term map key."""
	name: str
	argument: Node

	@staticmethod
	def of(func: Function) -> "FunctionKey":
		"""Build the key of a Function node."""
		return FunctionKey(func.name, snap_numbers(func.argument))

	def to_node(self) -> Function:
		"""Rebuild the Function node this key identifies."""
		return Function(self.name, self.argument)

	def canonical_string(self) -> str:
		"""Deterministic text form, used for ordering and base keys."""
		return f"{self.name}({to_text(self.argument)})"

	def __str__(self) -> str:
		return self.canonical_string()
