"""
Pure DCF math engine.

This module contains pure functions for DCF calculations. No pandas, no I/O,
just numeric computations. All inputs must be prepared before calling these.

Key functions:
  project: Main entry point, validates inputs and builds a ProjectionResult
  compute_pv_explicit: Revenue, FCF and PV of the explicit forecast period
  compute_terminal_value: Gordon growth terminal value with exit-multiple guard
"""

from collections.abc import Sequence
from math import isfinite
from typing import Any, List, Optional

from autodcf.domain.types import ProjectionInputs, ProjectionResult
from autodcf.errors import InvariantError, ValidationError
from autodcf.policies.margin import ConstantMargin, MarginPolicy
from autodcf.policies.schedule import GrowthSchedulePolicy, TwoStageGrowth

N_YEARS = 10
MIN_CAPITALIZATION_SPREAD = 0.001
EXIT_MULTIPLE = 15.0


def _is_number(value: Any) -> bool:
  return (isinstance(value, (int, float)) and not isinstance(value, bool) and
          isfinite(value))


def validate_inputs(inputs: ProjectionInputs) -> None:
  """
  Check projector preconditions before any projection work.

  Raises:
    ValidationError: Listing every missing, zero or non-finite field
      (negative near-term growth is allowed, zero is not)
    InvariantError: If discount_rate <= terminal_growth
  """
  missing: List[str] = []

  for name in ('current_revenue', 'discount_rate', 'shares_outstanding'):
    value = getattr(inputs, name)
    if not _is_number(value) or value <= 0:
      missing.append(name)

  near_term = inputs.revenue_growth_near_term
  if not _is_number(near_term) or near_term == 0:
    missing.append('revenue_growth_near_term')

  for name in ('revenue_growth_long_term', 'terminal_growth', 'fcf_margin',
               'total_debt', 'cash_equivalents'):
    if not _is_number(getattr(inputs, name)):
      missing.append(name)

  if missing:
    raise ValidationError(missing)

  if inputs.discount_rate <= inputs.terminal_growth:
    raise InvariantError(inputs.discount_rate, inputs.terminal_growth)


def compute_pv_explicit(
    revenue0: float,
    growth_path: Sequence[float],
    margin_path: Sequence[float],
    discount_rate: float,
) -> tuple[list[float], list[float], list[float]]:
  """
  Project revenue and FCF and discount each year.

  Args:
    revenue0: Current revenue (year 0)
    growth_path: Sequence of yearly growth rates [g1, g2, ..., gN]
    margin_path: Sequence of yearly FCF margins [m1, m2, ..., mN]
    discount_rate: Required return (r)

  Returns:
    Tuple of (revenues, fcfs, present_values), one entry per year
  """
  revenues: list[float] = []
  fcfs: list[float] = []
  pvs: list[float] = []
  revenue = revenue0

  for t, (g, margin) in enumerate(zip(growth_path, margin_path), start=1):
    revenue *= (1.0 + g)
    fcf = revenue * margin
    revenues.append(revenue)
    fcfs.append(fcf)
    pvs.append(fcf / ((1.0 + discount_rate)**t))

  return revenues, fcfs, pvs

def compute_terminal_value(
    final_fcf: float,
    g_terminal: float,
    discount_rate: float,
    final_year: int,
) -> tuple[float, float, float, bool]:
  """
  Compute terminal value using the Gordon Growth Model.

  When the capitalization spread (r - g) is at most 0.001 the Gordon
  formula is replaced by a 15x exit multiple on terminal FCF.

  Args:
    final_fcf: FCF in the final explicit year
    g_terminal: Terminal (perpetual) growth rate
    discount_rate: Required return (r)
    final_year: Number of years to discount back

  Returns:
    Tuple of (terminal_fcf, terminal_value, pv_terminal, fallback_used)
  """
  terminal_fcf = final_fcf * (1.0 + g_terminal)
  spread = discount_rate - g_terminal

  # 0.026 - 0.025 is 0.0010000000000000009 in floats.
  fallback_used = round(spread, 12) <= MIN_CAPITALIZATION_SPREAD
  if fallback_used:
    terminal_value = terminal_fcf * EXIT_MULTIPLE
  else:
    terminal_value = terminal_fcf / spread

  pv_terminal = terminal_value / ((1.0 + discount_rate)**final_year)
  return terminal_fcf, terminal_value, pv_terminal, fallback_used

def project(
    inputs: ProjectionInputs,
    schedule: Optional[GrowthSchedulePolicy] = None,
    margin: Optional[MarginPolicy] = None,
    n_years: int = N_YEARS,
) -> ProjectionResult:
  """
  Run the explicit forecast and terminal value for one set of inputs.

  Stage 1: Revenue compounds at the scheduled growth; FCF = revenue x margin
  Stage 2: Terminal value using Gordon Growth Model (or exit-multiple guard)

  Args:
    inputs: Prepared projection inputs
    schedule: Growth schedule policy (default: TwoStageGrowth(5))
    margin: Margin policy (default: ConstantMargin)
    n_years: Number of explicit forecast years

  Returns:
    ProjectionResult with per-year arrays and valuation bridge

  Raises:
    ValidationError: If required inputs are missing, zero or non-finite
    InvariantError: If discount_rate <= terminal_growth
  """
  validate_inputs(inputs)
  if n_years < 1:
    raise ValueError(f'n_years must be at least 1, got {n_years}')

  if schedule is None:
    schedule = TwoStageGrowth()
  if margin is None:
    margin = ConstantMargin()

  growth_result = schedule.compute(
      near_term=inputs.revenue_growth_near_term,
      long_term=inputs.revenue_growth_long_term,
      n_years=n_years,
  )
  margin_result = margin.compute(inputs.fcf_margin, n_years)

  revenues, fcfs, pvs = compute_pv_explicit(inputs.current_revenue,
                                            growth_result.value,
                                            margin_result.value,
                                            inputs.discount_rate)

  terminal_fcf, terminal_value, pv_terminal, fallback_used = (
      compute_terminal_value(fcfs[-1], inputs.terminal_growth,
                             inputs.discount_rate, n_years))

  total_pv_explicit = sum(pvs)
  enterprise_value = total_pv_explicit + pv_terminal
  net_debt = inputs.total_debt - inputs.cash_equivalents
  equity_value = enterprise_value - net_debt

  diag = {**growth_result.diag, **margin_result.diag, 'n_years': n_years}
  if fallback_used:
    diag['terminal_note'] = (
        f'Discount rate within {MIN_CAPITALIZATION_SPREAD:.1%} of terminal '
        f'growth; terminal value uses a {EXIT_MULTIPLE:.0f}x FCF exit multiple')

  return ProjectionResult(
      revenues=tuple(revenues),
      free_cash_flows=tuple(fcfs),
      present_values=tuple(pvs),
      growth_path=tuple(growth_result.value),
      margin_path=tuple(margin_result.value),
      terminal_fcf=terminal_fcf,
      terminal_value=terminal_value,
      pv_terminal=pv_terminal,
      total_pv_explicit=total_pv_explicit,
      enterprise_value=enterprise_value,
      net_debt=net_debt,
      equity_value=equity_value,
      fair_value_per_share=equity_value / inputs.shares_outstanding,
      terminal_fallback_used=fallback_used,
      inputs=inputs,
      diag=diag,
  )
