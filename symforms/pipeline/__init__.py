"""
Clean-up passes and strategy orchestration.

Public API re-export:
	fold_constants, remove_zero_terms, remove_one_factors, simplify_powers — bottom-up passes
	StrategyOrchestrator — runs every strategy and deduplicates the results
"""

from .passes import fold_constants, remove_zero_terms, remove_one_factors, simplify_powers
from .orchestrator import StrategyOrchestrator, generate_multiple_forms, iterative_simplify

__all__ = [
	"fold_constants", "remove_zero_terms", "remove_one_factors", "simplify_powers",
	"StrategyOrchestrator", "generate_multiple_forms", "iterative_simplify",
]
