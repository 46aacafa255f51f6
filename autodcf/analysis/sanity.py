'''
Sanity-check ratios for a DCF projection.

Each ratio is reported only when its denominator is finite and non-zero;
otherwise it is None ("not applicable") so NaN or infinity never reaches
the caller.
'''

from math import isfinite
from typing import Optional

from autodcf.domain.types import (ProjectionInputs, ProjectionResult,
                                  SanityChecks)


def safe_ratio(numerator: Optional[float],
               denominator: Optional[float]) -> Optional[float]:
  '''numerator / denominator, or None when undefined or non-finite.'''
  if numerator is None or denominator is None:
    return None
  if not isfinite(numerator) or not isfinite(denominator) or denominator == 0:
    return None
  ratio = numerator / denominator
  return ratio if isfinite(ratio) else None


def check_sanity(result: ProjectionResult,
                 inputs: Optional[ProjectionInputs] = None) -> SanityChecks:
  '''
  Compute cross-check ratios for a projection.

  Current FCF is current revenue times the projection's FCF margin.

  Args:
    result: Projection to check
    inputs: Inputs of the projection (default: result.inputs)

  Returns:
    SanityChecks with implied FCF multiple, EV/Revenue, FCF yield (%) and
    upside/downside vs. market price (%)
  '''
  if inputs is None:
    inputs = result.inputs
  if inputs is None:
    raise ValueError('Projection inputs are required for sanity checks')

  current_fcf = inputs.current_free_cash_flow
  fcf_per_share = safe_ratio(current_fcf, inputs.shares_outstanding)
  price = inputs.current_price

  market_cap = None
  upside = None
  if price is not None and isfinite(price) and price > 0:
    market_cap = price * inputs.shares_outstanding
    upside_ratio = safe_ratio(result.fair_value_per_share - price, price)
    upside = upside_ratio * 100 if upside_ratio is not None else None

  fcf_yield = safe_ratio(current_fcf, market_cap)
  return SanityChecks(
      implied_fcf_multiple=safe_ratio(result.fair_value_per_share,
                                      fcf_per_share),
      ev_to_revenue=safe_ratio(result.enterprise_value,
                               inputs.current_revenue),
      fcf_yield_pct=fcf_yield * 100 if fcf_yield is not None else None,
      upside_downside_pct=upside,
  )
