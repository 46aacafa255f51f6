'''DCF projection engine with pure math functions.'''

from autodcf.engine.dcf import (
    compute_pv_explicit,
    compute_terminal_value,
    project,
    validate_inputs,
)

__all__ = [
    'compute_pv_explicit',
    'compute_terminal_value',
    'project',
    'validate_inputs',
]
