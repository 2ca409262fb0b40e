"""
Form selection.

Public API re-export:
	DifferentiationCost — structural cost of differentiating a tree
	FormSelector        — lowest-cost candidate, first in order on ties
"""

from .cost import DifferentiationCost, differentiation_cost
from .selector import FormSelector, select_best_for_differentiation, select_best_form, form_statistics

__all__ = [
	"DifferentiationCost", "differentiation_cost",
	"FormSelector", "select_best_for_differentiation", "select_best_form", "form_statistics",
]
