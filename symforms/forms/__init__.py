"""
Alternative forms.

Public API re-export:
	FormKind, SimplifiedForm, SimplificationForms — result containers
	FormGenerator                               — common-factor and exp-cancellation forms
	label constants used to tag and look up forms
"""

from .types import (
	FormKind, SimplifiedForm, SimplificationForms,
	STANDARD_FORM, NUMERATOR_FACTORED, EXP_CANCELLED, COMMON_FACTOR_EXTRACTED,
	EXPANDED_LABEL, TRIG_SIMPLIFIED, FACTORED_LABEL, FRACTION_REDUCED, FULLY_SIMPLIFIED,
	INTERMEDIATE_STEP, ALTERNATIVE_FORM, ORIGINAL_FORM,
)
from .generator import FormGenerator, generate_all_forms, extract_common_factor, simplify_exp_in_fraction

__all__ = [
	"FormKind", "SimplifiedForm", "SimplificationForms",
	"STANDARD_FORM", "NUMERATOR_FACTORED", "EXP_CANCELLED", "COMMON_FACTOR_EXTRACTED",
	"EXPANDED_LABEL", "TRIG_SIMPLIFIED", "FACTORED_LABEL", "FRACTION_REDUCED", "FULLY_SIMPLIFIED",
	"INTERMEDIATE_STEP", "ALTERNATIVE_FORM", "ORIGINAL_FORM",
	"FormGenerator", "generate_all_forms", "extract_common_factor", "simplify_exp_in_fraction",
]
