"""
Statement normalizer.

Reconciles the provider's profile, quote, balance sheet, income statement
and cash-flow statement into one CompanyFinancials snapshot. Provider
records disagree on which fields they populate, so each canonical field
is resolved through an ordered fallback chain: the first value that is
numeric, finite and non-zero wins.

Usage:
  financials = normalize(profile, quote, balance_sheet, income, cash_flow)
  history = build_history(income_statements, cash_flow_statements)
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from autodcf.domain.types import (
    FCF_ESTIMATED,
    FCF_REPORTED,
    FCF_UNAVAILABLE,
    CompanyFinancials,
    HistoricalStatement,
    HistoricalStatementSeries,
)
from autodcf.errors import IncompleteDataError

logger = logging.getLogger(__name__)

Source = Tuple[Mapping[str, Any], str]


def to_float(value: Any) -> Optional[float]:
  """
  Coerce a provider field to float.

  Returns None for missing, empty, boolean, non-numeric or non-finite values.
  """
  if value is None or isinstance(value, bool):
    return None
  if isinstance(value, str):
    value = value.strip().replace(',', '')
    if not value:
      return None
  try:
    number = float(value)
  except (TypeError, ValueError):
    return None
  if not math.isfinite(number):
    return None
  return number


def period_of(record: Mapping[str, Any], default: Any = None) -> Any:
  """Period identifier of a statement: date, then calendar/fiscal year."""
  for key in ('date', 'calendarYear', 'fiscalYear'):
    value = record.get(key)
    if value not in (None, ''):
      return value
  return default


def unwrap_record(data: Any, source: str) -> Mapping[str, Any]:
  """
  Accept either a single record or a list whose first item is the record.

  Args:
    data: Provider payload for one statement
    source: Record name used in error messages

  Raises:
    IncompleteDataError: If the payload is absent or not a mapping
  """
  if data is None:
    raise IncompleteDataError(source)
  if isinstance(data, (list, tuple)):
    if not data:
      raise IncompleteDataError(source, 'empty')
    data = data[0]
  if not isinstance(data, Mapping):
    raise IncompleteDataError(source, 'malformed')
  return data


def first_value(sources: Iterable[Source], default: float = 0.0) -> float:
  """
  Resolve a field through an ordered fallback chain.

  Args:
    sources: (record, field name) pairs in precedence order
    default: Value returned when no source has a usable number

  Returns:
    First numeric, finite, non-zero value
  """
  for record, key in sources:
    value = to_float(record.get(key))
    if value is not None and value != 0:
      return value
  return default


def resolve_free_cash_flow(
    cash_flow: Mapping[str, Any],
    income: Mapping[str, Any],
) -> Tuple[float, str]:
  """
  Resolve free cash flow and the method used to obtain it.

  Operating cash flow less capital expenditure is preferred. Providers
  report capex with either sign, so its magnitude is subtracted. When
  either field is missing, FCF is estimated as net income plus D&A.

  Returns:
    Tuple of (free_cash_flow, method) where method is 'reported',
    'estimated' or 'unavailable'
  """
  ocf = to_float(cash_flow.get('operatingCashFlow'))
  capex = to_float(cash_flow.get('capitalExpenditure'))
  if ocf is not None and capex is not None:
    return ocf - abs(capex), FCF_REPORTED

  net_income = to_float(cash_flow.get('netIncome'))
  if net_income is None:
    net_income = to_float(income.get('netIncome'))
  d_and_a = first_value([(cash_flow, 'depreciationAndAmortization'),
                         (income, 'depreciationAndAmortization')],
                        default=0.0)
  if net_income is None:
    return 0.0, FCF_UNAVAILABLE
  return net_income + d_and_a, FCF_ESTIMATED


def normalize(
    profile: Any,
    quote: Any,
    balance_sheet: Any,
    income_statement: Any,
    cash_flow_statement: Any,
) -> CompanyFinancials:
  """
  Build the canonical company snapshot from provider records.

  Args:
    profile: Company profile (name, sector, industry, beta, price)
    quote: Latest quote; optional, may be None
    balance_sheet: Latest balance sheet
    income_statement: Latest income statement
    cash_flow_statement: Latest cash-flow statement

  Returns:
    CompanyFinancials with fallback-resolved fields

  Raises:
    IncompleteDataError: If a required record is absent or malformed
  """
  profile = unwrap_record(profile, 'profile')
  quote = unwrap_record(quote, 'quote') if quote not in (None, [], ()) else {}
  balance = unwrap_record(balance_sheet, 'balance_sheet')
  income = unwrap_record(income_statement, 'income_statement')
  cash_flow = unwrap_record(cash_flow_statement, 'cash_flow_statement')

  price = first_value([(quote, 'price'), (profile, 'price')])
  shares = first_value([
      (quote, 'sharesOutstanding'),
      (profile, 'sharesOutstanding'),
      (profile, 'weightedAverageShsOut'),
      (profile, 'weightedAverageShsOutDil'),
  ])
  revenue = first_value([(income, 'revenue'), (cash_flow, 'revenue')])
  market_cap = first_value(
      [(quote, 'marketCap'), (profile, 'mktCap'), (profile, 'marketCap')],
      default=price * shares)

  total_debt = to_float(balance.get('totalDebt'))
  if not total_debt:
    total_debt = ((to_float(balance.get('shortTermDebt')) or 0.0) +
                  (to_float(balance.get('longTermDebt')) or 0.0))
  cash = first_value([(balance, 'cashAndCashEquivalents'),
                      (balance, 'cashAndShortTermInvestments')])

  fcf, fcf_method = resolve_free_cash_flow(cash_flow, income)
  if fcf_method != FCF_REPORTED:
    logger.debug('FCF %s for %s (operating cash flow or capex missing)',
                 fcf_method, profile.get('symbol', profile.get('companyName')))

  beta = to_float(profile.get('beta'))
  return CompanyFinancials(
      company_name=str(profile.get('companyName') or 'N/A'),
      current_price=price,
      sector=profile.get('sector') or None,
      industry=profile.get('industry') or None,
      beta=beta,
      market_cap=market_cap,
      shares_outstanding=shares,
      current_revenue=revenue,
      current_free_cash_flow=fcf,
      total_debt=total_debt,
      cash_equivalents=cash,
      fcf_method=fcf_method,
  )


def build_history(
    income_statements: Optional[Sequence[Mapping[str, Any]]],
    cash_flow_statements: Optional[Sequence[Mapping[str, Any]]],
) -> HistoricalStatementSeries:
  """
  Build a historical series from provider statement lists.

  The two lists are aligned by index, as the provider returns them in the
  same period order. Missing cash-flow entries leave the cash fields empty.

  Args:
    income_statements: Annual income statements (any order)
    cash_flow_statements: Annual cash-flow statements, index-aligned

  Returns:
    HistoricalStatementSeries with one record per income statement
  """
  records: List[HistoricalStatement] = []
  cash_flows = list(cash_flow_statements or [])

  for i, income in enumerate(income_statements or []):
    if not isinstance(income, Mapping):
      raise IncompleteDataError(f'income_statements[{i}]', 'malformed')
    cash_flow = cash_flows[i] if i < len(cash_flows) else {}
    if not isinstance(cash_flow, Mapping):
      raise IncompleteDataError(f'cash_flow_statements[{i}]', 'malformed')

    net_income = to_float(income.get('netIncome'))
    if net_income is None:
      net_income = to_float(cash_flow.get('netIncome'))
    d_and_a = to_float(cash_flow.get('depreciationAndAmortization'))
    if d_and_a is None:
      d_and_a = to_float(income.get('depreciationAndAmortization'))

    period = period_of(income, default=period_of(cash_flow))
    if period is None:
      raise IncompleteDataError(f'income_statements[{i}]', 'missing a period')

    records.append(
        HistoricalStatement(
            period=period,
            revenue=to_float(income.get('revenue')),
            operating_cash_flow=to_float(cash_flow.get('operatingCashFlow')),
            capital_expenditure=to_float(cash_flow.get('capitalExpenditure')),
            net_income=net_income,
            depreciation_and_amortization=d_and_a,
        ))

  return HistoricalStatementSeries.from_records(records)
