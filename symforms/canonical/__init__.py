"""
Canonical polynomial form.

Public API re-export:
	Canonicalizer  — expand, merge and sort into one normal form
	canonicalize   — module-level proxy with the default config
	sort_terms     — deterministic Term ordering
"""

from .canonicalizer import Canonicalizer, canonicalize, sort_terms

__all__ = ["Canonicalizer", "canonicalize", "sort_terms"]
