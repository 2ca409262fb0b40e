"""
Trigonometric identity rewriting.

Public API re-export:
	TrigRewriter — double-angle, Pythagorean and quotient identities to a fixed point
	TrigMatch    — coefficient/angle pair produced by the pattern matchers
	simplify     — module-level proxy with the default config
"""

from .rewriter import TrigRewriter, TrigMatch, simplify

__all__ = ["TrigRewriter", "TrigMatch", "simplify"]
