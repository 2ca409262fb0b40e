"""
Engine configuration and typed containers shared by the rewrite passes.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
import os
from typing import Dict, Mapping, Optional

from .errors import ConfigError


@dataclass(frozen=True)
class SimplifyConfig:
	"""
	Tolerances and iteration budgets.

	epsilon              — tolerance for coefficient, exponent and value comparisons
	max_rounds           — cap on every fixed-point loop (trig rewriting, strategies)
	max_expand_exponent  — largest integer power of a sum that is multiplied out
	exp_cancel_rounds    — cap on repeated exp cancellation inside one fraction
	min_forms            — pad the candidate set until it holds this many forms
	verify_forms         — drop candidates that are not numerically equal to the input
	fingerprint_points   — grid size for numeric fingerprints and verification
	"""
	epsilon: float = 1e-10
	max_rounds: int = 10
	max_expand_exponent: int = 10
	exp_cancel_rounds: int = 5
	min_forms: int = 3
	verify_forms: bool = False
	fingerprint_points: int = 8

	def __post_init__(self) -> None:
		if not (0.0 < self.epsilon < 1e-3):
			raise ConfigError(f"epsilon out of range: {self.epsilon}")
		if self.max_rounds < 1:
			raise ConfigError(f"max_rounds must be >= 1, got {self.max_rounds}")
		if self.max_expand_exponent < 1:
			raise ConfigError(f"max_expand_exponent must be >= 1, got {self.max_expand_exponent}")
		if self.exp_cancel_rounds < 1:
			raise ConfigError(f"exp_cancel_rounds must be >= 1, got {self.exp_cancel_rounds}")
		if self.min_forms < 0:
			raise ConfigError(f"min_forms must be >= 0, got {self.min_forms}")
		if self.fingerprint_points < 1:
			raise ConfigError(f"fingerprint_points must be >= 1, got {self.fingerprint_points}")

	@staticmethod
	def _parse(name: str, raw: str, kind: type) -> object:
		if kind is bool:
			v = raw.strip().lower()
			if v in ("1", "true", "yes", "on"):
				return True
			if v in ("0", "false", "no", "off"):
				return False
			raise ConfigError(f"{name}: not a boolean: {raw!r}")
		try:
			return kind(raw.strip())
		except ValueError as exc:
			raise ConfigError(f"{name}: cannot parse {raw!r}") from exc

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional["SimplifyConfig"] = None) -> "SimplifyConfig":
		"""
		Return a config with fields overridden by SYMFORMS_<FIELD> environment
		variables (e.g. SYMFORMS_MAX_ROUNDS=5, SYMFORMS_VERIFY_FORMS=1).
		"""
		env = os.environ if environ is None else environ
		cfg = cls() if base is None else base
		kinds = {"epsilon": float, "verify_forms": bool}
		overrides: Dict[str, object] = {}
		for f in fields(cls):
			name = "SYMFORMS_" + f.name.upper()
			raw = env.get(name)
			if raw is None or raw.strip() == "":
				continue
			overrides[f.name] = cls._parse(name, raw, kinds.get(f.name, int))
		if not overrides:
			return cfg
		return replace(cfg, **overrides)


DEFAULT_CONFIG = SimplifyConfig()


@dataclass(frozen=True)
class LogEvent:
	"""
	Structured event recorded while producing a result (e.g. a degraded step).
	"""
	kind: str
	payload: Dict[str, object]
