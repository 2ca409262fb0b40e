"""
Typed containers for generated alternative forms.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Set

from ..config import LogEvent
from ..tree import Node, structure_key


STANDARD_FORM = "standard form"
NUMERATOR_FACTORED = "numerator factored"
EXP_CANCELLED = "exp cancelled"
COMMON_FACTOR_EXTRACTED = "common factor extracted"
EXPANDED_LABEL = "expanded"
TRIG_SIMPLIFIED = "trig simplified"
FACTORED_LABEL = "factored"
FRACTION_REDUCED = "fraction reduced"
FULLY_SIMPLIFIED = "fully simplified"
INTERMEDIATE_STEP = "intermediate step"
ALTERNATIVE_FORM = "alternative form"
ORIGINAL_FORM = "original form"


class FormKind(Enum):
	EXPANDED = "expanded"
	FACTORED = "factored"
	GROUPED = "grouped"
	STRUCTURAL = "structural"


@dataclass(frozen=True)
class SimplifiedForm:
	"""
	One candidate rendering of an expression, tagged with its kind and a human-readable label.
	"""
	expression: Node
	kind: FormKind
	label: str

	def __str__(self) -> str:
		return f"{self.label}: {self.expression}"


@dataclass
class SimplificationForms:
	"""
	Ordered candidate forms plus the structured events recorded while producing them.
	"""
	forms: List[SimplifiedForm] = field(default_factory=list)
	events: List[LogEvent] = field(default_factory=list)

	def __len__(self) -> int:
		return len(self.forms)

	def display_forms(self) -> List[SimplifiedForm]:
		"""Forms with structural duplicates (up to chain grouping) removed, first occurrence kept."""
		seen: Set[tuple] = set()
		out: List[SimplifiedForm] = []
		for f in self.forms:
			key = structure_key(f.expression)
			if key in seen:
				continue
			seen.add(key)
			out.append(f)
		return out

	def expressions(self) -> List[Node]:
		return [f.expression for f in self.forms]

	def find(self, label: str) -> List[SimplifiedForm]:
		"""Forms carrying exactly this label, in order."""
		return [f for f in self.forms if f.label == label]
