"""
Term algebra.

Public API re-export:
	FunctionKey     — structural identity of a Function factor
	Term            — coefficient × variable powers × function powers × opaque factors
	TermDecomposer  — tree → Term classification
"""

from .function_key import FunctionKey
from .term import Term, TermDecomposer

__all__ = ["FunctionKey", "Term", "TermDecomposer"]
