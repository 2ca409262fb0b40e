"""
Exception hierarchy for symforms.

Only precondition violations escape the public API; transformation failures are
caught where they happen and degrade to "less simplification happened".
"""


class SymFormsError(Exception):
	"""Base class for all symforms errors."""
	pass


class EmptyCandidatesError(SymFormsError, ValueError):
	"""Raised when a selector is handed an empty candidate list."""


class TermDecompositionError(SymFormsError):
	"""Raised when a sub-tree cannot be decomposed into a Term."""


class UnknownSymbolError(SymFormsError):
	"""Raised when evaluation meets an unknown function or an unbound variable."""


class UnsupportedExpressionError(SymFormsError):
	"""Raised when a SymPy expression has no AST counterpart."""


class ConfigError(SymFormsError, ValueError):
	"""Raised when a configuration value is out of range or malformed."""
