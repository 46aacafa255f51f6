'''
Domain types for the valuation core.

These dataclasses provide typed interfaces between components, so that
policies and the DCF engine never depend on raw provider field names.
All monetary fields are absolute currency units.
'''

from dataclasses import asdict, dataclass, field
from typing import (Any, Dict, Generic, Iterable, Iterator, List, Optional,
                    Tuple, TypeVar)

import pandas as pd

from autodcf.errors import IncompleteDataError

T = TypeVar('T')

FCF_REPORTED = 'reported'
FCF_ESTIMATED = 'estimated'
FCF_UNAVAILABLE = 'unavailable'

TREND_ACCELERATING = 'accelerating'
TREND_DECELERATING = 'decelerating'
TREND_STABLE = 'stable'
TREND_INSUFFICIENT = 'insufficient_data'


@dataclass
class PolicyOutput(Generic[T]):
  '''
  Standard output from any policy.

  Every policy returns both a computed value and diagnostic information
  explaining how the value was computed.

  Attributes:
    value: The computed value (type depends on policy)
    diag: Dictionary of diagnostic information
  '''
  value: T
  diag: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CompanyFinancials:
  '''
  Canonical company snapshot produced by the statement normalizer.

  Attributes:
    company_name: Display name of the company
    current_price: Latest market price per share (0 if unknown)
    sector: Sector name as reported by the provider
    industry: Industry name as reported by the provider
    beta: Equity beta (None if not reported)
    market_cap: Market capitalization
    shares_outstanding: Shares outstanding
    current_revenue: Latest annual revenue
    current_free_cash_flow: Latest free cash flow
    total_debt: Total debt from the balance sheet
    cash_equivalents: Cash and cash equivalents
    fcf_method: How FCF was obtained ('reported', 'estimated', 'unavailable')
  '''
  company_name: str
  current_price: float
  sector: Optional[str]
  industry: Optional[str]
  beta: Optional[float]
  market_cap: float
  shares_outstanding: float
  current_revenue: float
  current_free_cash_flow: float
  total_debt: float
  cash_equivalents: float
  fcf_method: str = FCF_REPORTED

  @property
  def fcf_is_estimated(self) -> bool:
    '''True when FCF was approximated from net income + D&A.'''
    return self.fcf_method == FCF_ESTIMATED

  @property
  def fcf_margin(self) -> Optional[float]:
    '''Current FCF as a fraction of revenue, or None without revenue.'''
    if self.current_revenue <= 0:
      return None
    return self.current_free_cash_flow / self.current_revenue

  @property
  def net_debt(self) -> float:
    return self.total_debt - self.cash_equivalents

  def to_dict(self) -> Dict[str, Any]:
    result = asdict(self)
    result['fcf_is_estimated'] = self.fcf_is_estimated
    result['fcf_margin'] = self.fcf_margin
    return result


@dataclass(frozen=True)
class HistoricalStatement:
  '''
  One annual record of the historical statement series.

  Attributes:
    period: Fiscal period end (date or year)
    revenue: Annual revenue
    operating_cash_flow: Cash flow from operations
    capital_expenditure: Capital expenditure (sign is ignored)
    net_income: Net income
    depreciation_and_amortization: Depreciation and amortization
  '''
  period: Any
  revenue: Optional[float] = None
  operating_cash_flow: Optional[float] = None
  capital_expenditure: Optional[float] = None
  net_income: Optional[float] = None
  depreciation_and_amortization: Optional[float] = None

  @property
  def free_cash_flow(self) -> float:
    '''Operating cash flow less capex, missing fields treated as 0.'''
    ocf = self.operating_cash_flow or 0.0
    capex = abs(self.capital_expenditure or 0.0)
    return ocf - capex

  @property
  def has_cash_flow(self) -> bool:
    '''True when the record carries cash-flow statement data.'''
    return (self.operating_cash_flow is not None or
            self.capital_expenditure is not None)

  @property
  def period_key(self) -> pd.Timestamp:
    '''
    Sortable timestamp for the period (bare years map to Jan 1).

    Raises:
      IncompleteDataError: If the period is not a year or a date
    '''
    if isinstance(self.period, int) or (isinstance(self.period, str) and
                                        self.period.isdigit()):
      return pd.Timestamp(year=int(self.period), month=1, day=1)
    try:
      return pd.Timestamp(self.period)
    except (TypeError, ValueError) as e:
      raise IncompleteDataError(f'period {self.period!r}',
                                'not a date') from e


@dataclass(frozen=True)
class HistoricalStatementSeries:
  '''
  Sequence of annual statement records in arbitrary order.

  Use chronological() to get the oldest-to-newest view.
  '''
  records: Tuple[HistoricalStatement, ...] = ()

  def __len__(self) -> int:
    return len(self.records)

  def __iter__(self) -> Iterator[HistoricalStatement]:
    return iter(self.records)

  def chronological(self) -> List[HistoricalStatement]:
    '''Records sorted oldest to newest.'''
    return sorted(self.records, key=lambda r: r.period_key)

  def most_recent_first(self) -> List[HistoricalStatement]:
    '''Records sorted newest to oldest.'''
    return sorted(self.records, key=lambda r: r.period_key, reverse=True)

  def to_frame(self) -> pd.DataFrame:
    '''Chronological DataFrame with one row per period.'''
    rows = []
    for record in self.chronological():
      row = asdict(record)
      row['free_cash_flow'] = record.free_cash_flow
      rows.append(row)
    return pd.DataFrame(rows, columns=[
        'period', 'revenue', 'operating_cash_flow', 'capital_expenditure',
        'net_income', 'depreciation_and_amortization', 'free_cash_flow'
    ])

  @classmethod
  def from_records(
      cls,
      records: Iterable[HistoricalStatement],
  ) -> 'HistoricalStatementSeries':
    return cls(records=tuple(records))


@dataclass(frozen=True)
class GrowthStatistics:
  '''
  Revenue growth statistics from the historical analyzer.

  All rates are fractional (0.08 means 8%).

  Attributes:
    average: Mean YoY revenue growth
    median: Lower-middle element of the sorted YoY sequence
    recent: Most recent YoY growth
    revenue_cagr: CAGR between oldest and newest analyzed revenue
    trend: 'accelerating', 'decelerating', 'stable' or 'insufficient_data'
    volatility: Population standard deviation of the YoY sequence
    average_fcf_margin: Sum of FCF over sum of revenue
    rates: YoY growth sequence, most recent first
  '''
  average: float
  median: float
  recent: float
  revenue_cagr: float
  trend: str
  volatility: float
  average_fcf_margin: float
  rates: Tuple[float, ...] = ()

  @property
  def is_sufficient(self) -> bool:
    return self.trend != TREND_INSUFFICIENT

  def to_dict(self) -> Dict[str, Any]:
    result = asdict(self)
    result['rates'] = list(self.rates)
    return result


@dataclass(frozen=True)
class DCFAssumptions:
  '''
  Growth and discount assumptions consumed by the projector.

  Attributes:
    revenue_growth_near_term: Revenue growth for years 1-5
    revenue_growth_long_term: Revenue growth for years 6-10
    terminal_growth: Perpetual growth beyond year 10
    discount_rate: Discount rate (WACC proxy)
  '''
  revenue_growth_near_term: float
  revenue_growth_long_term: float
  terminal_growth: float
  discount_rate: float

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


@dataclass(frozen=True)
class AssumptionResult:
  '''
  Assumption engine output.

  Attributes:
    assumptions: Recommended DCF assumptions
    confidence: 'low', 'medium' or 'high'
    rationale: Human-readable audit trail of the derivation
    diag: Merged diagnostics from all policies
  '''
  assumptions: DCFAssumptions
  confidence: str
  rationale: str
  diag: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProjectionInputs:
  '''
  Fully prepared inputs for the DCF projector.

  Attributes:
    current_revenue: Revenue baseline for year 0
    fcf_margin: FCF as a fraction of revenue
    revenue_growth_near_term: Growth for years 1-5
    revenue_growth_long_term: Growth for years 6-10
    terminal_growth: Perpetual growth rate
    discount_rate: Required return
    shares_outstanding: Share count for per-share value
    total_debt: Total debt
    cash_equivalents: Cash and equivalents
    current_price: Market price per share, if known
  '''
  current_revenue: float
  fcf_margin: float
  revenue_growth_near_term: Optional[float]
  revenue_growth_long_term: float
  terminal_growth: float
  discount_rate: float
  shares_outstanding: float
  total_debt: float = 0.0
  cash_equivalents: float = 0.0
  current_price: Optional[float] = None

  @property
  def current_free_cash_flow(self) -> float:
    return self.current_revenue * self.fcf_margin

  @classmethod
  def from_financials(
      cls,
      financials: CompanyFinancials,
      assumptions: DCFAssumptions,
      fcf_margin: Optional[float] = None,
  ) -> 'ProjectionInputs':
    '''
    Combine a company snapshot with assumptions.

    Args:
      financials: Normalized company snapshot
      assumptions: Growth and discount assumptions
      fcf_margin: Margin override (e.g. historical average); defaults to
        the snapshot's current FCF margin

    Returns:
      ProjectionInputs ready for project()
    '''
    if fcf_margin is None:
      fcf_margin = financials.fcf_margin
    return cls(
        current_revenue=financials.current_revenue,
        fcf_margin=fcf_margin if fcf_margin is not None else float('nan'),
        revenue_growth_near_term=assumptions.revenue_growth_near_term,
        revenue_growth_long_term=assumptions.revenue_growth_long_term,
        terminal_growth=assumptions.terminal_growth,
        discount_rate=assumptions.discount_rate,
        shares_outstanding=financials.shares_outstanding,
        total_debt=financials.total_debt,
        cash_equivalents=financials.cash_equivalents,
        current_price=financials.current_price,
    )

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


@dataclass(frozen=True)
class ProjectionResult:
  '''
  Complete DCF projection with diagnostics.

  Attributes:
    revenues: Projected revenue, years 1..N
    free_cash_flows: Projected FCF, years 1..N
    present_values: Discounted FCF, years 1..N
    growth_path: Growth rate applied each year
    margin_path: FCF margin applied each year
    terminal_fcf: Year-N FCF grown one more year at terminal growth
    terminal_value: Undiscounted terminal value
    pv_terminal: Terminal value discounted from year N
    total_pv_explicit: Sum of present_values
    enterprise_value: total_pv_explicit + pv_terminal
    net_debt: Total debt less cash
    equity_value: enterprise_value - net_debt
    fair_value_per_share: equity_value / shares outstanding
    terminal_fallback_used: True when the exit-multiple guard fired
    inputs: The ProjectionInputs used for calculation
    diag: Policy diagnostics
  '''
  revenues: Tuple[float, ...]
  free_cash_flows: Tuple[float, ...]
  present_values: Tuple[float, ...]
  growth_path: Tuple[float, ...]
  margin_path: Tuple[float, ...]
  terminal_fcf: float
  terminal_value: float
  pv_terminal: float
  total_pv_explicit: float
  enterprise_value: float
  net_debt: float
  equity_value: float
  fair_value_per_share: float
  terminal_fallback_used: bool = False
  inputs: Optional[ProjectionInputs] = None
  diag: Dict[str, Any] = field(default_factory=dict)

  def to_frame(self) -> pd.DataFrame:
    '''Yearly cash-flow table (year, growth, margin, revenue, FCF, PV).'''
    n_years = len(self.revenues)
    return pd.DataFrame({
        'year': list(range(1, n_years + 1)),
        'growth': list(self.growth_path),
        'fcf_margin': list(self.margin_path),
        'revenue': list(self.revenues),
        'free_cash_flow': list(self.free_cash_flows),
        'present_value': list(self.present_values),
    })

  def to_dict(self) -> Dict[str, Any]:
    '''Summary figures for reporting.'''
    return {
        'terminal_fcf': self.terminal_fcf,
        'terminal_value': self.terminal_value,
        'pv_terminal': self.pv_terminal,
        'total_pv_explicit': self.total_pv_explicit,
        'enterprise_value': self.enterprise_value,
        'net_debt': self.net_debt,
        'equity_value': self.equity_value,
        'fair_value_per_share': self.fair_value_per_share,
        'terminal_fallback_used': self.terminal_fallback_used,
    }


@dataclass(frozen=True)
class ScenarioSet:
  '''
  Bear/base/bull projections, in construction order.

  Bear is not guaranteed to be below base; values are never re-sorted.
  '''
  bear: ProjectionResult
  base: ProjectionResult
  bull: ProjectionResult

  def items(self) -> List[Tuple[str, ProjectionResult]]:
    return [('bear', self.bear), ('base', self.base), ('bull', self.bull)]

  def fair_values(self) -> Dict[str, float]:
    return {name: r.fair_value_per_share for name, r in self.items()}


@dataclass(frozen=True)
class SanityChecks:
  '''
  Cross-check ratios for a projection.

  Each ratio is None when it is not applicable (zero, missing or
  non-finite denominator).
  '''
  implied_fcf_multiple: Optional[float] = None
  ev_to_revenue: Optional[float] = None
  fcf_yield_pct: Optional[float] = None
  upside_downside_pct: Optional[float] = None

  def to_dict(self) -> Dict[str, Optional[float]]:
    return asdict(self)
