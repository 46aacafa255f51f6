'''
Historical revenue and cash-flow analysis.

Turns a series of annual statements into growth statistics used by the
assumption engine, and an average FCF margin used by the projector.
'''

from typing import List

import pandas as pd

from autodcf.domain.types import (
    TREND_ACCELERATING,
    TREND_DECELERATING,
    TREND_INSUFFICIENT,
    TREND_STABLE,
    GrowthStatistics,
    HistoricalStatementSeries,
)

MAX_PERIODS = 5
DEFAULT_GROWTH = 0.05


def compute_cagr(begin: float, end: float, periods: int) -> float:
  '''
  Compound annual growth rate between two values.

  Args:
    begin: Starting value
    end: Ending value
    periods: Number of compounding periods

  Returns:
    (end / begin)^(1 / periods) - 1, or 0.0 when begin <= 0 or periods <= 0
  '''
  if begin <= 0 or periods <= 0:
    return 0.0
  ratio = end / begin
  if ratio < 0:
    return 0.0
  return ratio**(1.0 / periods) - 1.0


def classify_trend(rates: List[float]) -> str:
  '''
  Classify a most-recent-first growth sequence.

  Accelerating when every rate is strictly above the next-older one,
  decelerating when every rate is strictly below it. Needs 3 rates.
  '''
  if len(rates) < 3:
    return TREND_STABLE
  pairs = list(zip(rates, rates[1:]))
  if all(newer > older for newer, older in pairs):
    return TREND_ACCELERATING
  if all(newer < older for newer, older in pairs):
    return TREND_DECELERATING
  return TREND_STABLE


def lower_median(values: List[float]) -> float:
  '''Middle element of the sorted values; lower-middle for even lengths.'''
  ordered = sorted(values)
  return ordered[(len(ordered) - 1) // 2]


def cash_flow_revenue(series: HistoricalStatementSeries) -> float:
  '''Total revenue of the periods that have cash-flow data.'''
  return sum(r.revenue or 0.0 for r in series if r.has_cash_flow)


def average_fcf_margin(series: HistoricalStatementSeries) -> float:
  '''
  Aggregate FCF margin across the periods that have cash-flow data.

  Sum of per-period FCF over sum of per-period revenue, with missing
  fields treated as 0. Periods with income data only are left out of
  both sums. Returns 0.0 when total revenue is 0.
  '''
  total_fcf = sum(r.free_cash_flow for r in series if r.has_cash_flow)
  total_revenue = cash_flow_revenue(series)
  if total_revenue == 0:
    return 0.0
  return total_fcf / total_revenue


def insufficient_statistics(fcf_margin: float = 0.0) -> GrowthStatistics:
  '''Low-confidence sentinel returned when history is too short.'''
  return GrowthStatistics(
      average=DEFAULT_GROWTH,
      median=DEFAULT_GROWTH,
      recent=DEFAULT_GROWTH,
      revenue_cagr=DEFAULT_GROWTH,
      trend=TREND_INSUFFICIENT,
      volatility=0.0,
      average_fcf_margin=fcf_margin,
  )


def analyze(series: HistoricalStatementSeries) -> GrowthStatistics:
  '''
  Compute revenue growth statistics for a statement series.

  Records with missing or non-positive revenue are dropped, then the five
  most recent periods are kept. Fewer than two usable periods yield the
  insufficient-data sentinel rather than an error.

  Args:
    series: Annual statements in any order

  Returns:
    GrowthStatistics with fractional rates
  '''
  margin = average_fcf_margin(series)

  usable = [r for r in series.most_recent_first() if (r.revenue or 0) > 0]
  usable = usable[:MAX_PERIODS]
  if len(usable) < 2:
    return insufficient_statistics(margin)

  revenues = [r.revenue for r in usable]
  rates = [(current - previous) / previous
           for current, previous in zip(revenues, revenues[1:])]
  rate_series = pd.Series(rates, dtype=float)

  return GrowthStatistics(
      average=float(rate_series.mean()),
      median=lower_median(rates),
      recent=rates[0],
      revenue_cagr=compute_cagr(revenues[-1], revenues[0], len(revenues) - 1),
      trend=classify_trend(rates),
      volatility=float(rate_series.std(ddof=0)),
      average_fcf_margin=margin,
      rates=tuple(rates),
  )
