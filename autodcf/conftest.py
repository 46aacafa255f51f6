import pytest

from autodcf.domain.types import HistoricalStatement
from autodcf.domain.types import HistoricalStatementSeries
from autodcf.domain.types import ProjectionInputs


def _make_statements(
    start_year: int,
    revenues: list[float],
    ocf_values: list[float],
    capex_values: list[float],
) -> list[HistoricalStatement]:
  """Helper to create annual statements, oldest first."""
  return [
      HistoricalStatement(
          period=f'{start_year + i}-12-31',
          revenue=revenue,
          operating_cash_flow=ocf,
          capital_expenditure=capex,
          net_income=ocf * 0.8,
          depreciation_and_amortization=ocf * 0.1,
      ) for i, (revenue, ocf,
                capex) in enumerate(zip(revenues, ocf_values, capex_values))
  ]


@pytest.fixture
def base_inputs() -> ProjectionInputs:
  """Projection inputs for a steady, net-cash company."""
  return ProjectionInputs(
      current_revenue=100_000.0,
      fcf_margin=0.25,
      revenue_growth_near_term=0.08,
      revenue_growth_long_term=0.05,
      terminal_growth=0.025,
      discount_rate=0.09,
      shares_outstanding=1_000.0,
      total_debt=20_000.0,
      cash_equivalents=30_000.0,
      current_price=300.0,
  )


@pytest.fixture
def growing_series() -> HistoricalStatementSeries:
  """Five years of steadily growing revenue.

  Revenue: 100, 110, 121, 133.1, 146.41 (10% per year)
  FCF: 20, 22, 24.2, 26.62, 29.282 (20% margin)
  """
  statements = _make_statements(
      start_year=2019,
      revenues=[100.0, 110.0, 121.0, 133.1, 146.41],
      ocf_values=[25.0, 27.5, 30.25, 33.275, 36.6025],
      capex_values=[-5.0, -5.5, -6.05, -6.655, -7.3205],
  )
  return HistoricalStatementSeries.from_records(reversed(statements))


@pytest.fixture
def volatile_series() -> HistoricalStatementSeries:
  """Four years of erratic revenue.

  Revenue: 100, 150, 90, 135
  YoY (most recent first): 0.50, -0.40, 0.50
  """
  statements = _make_statements(
      start_year=2020,
      revenues=[100.0, 150.0, 90.0, 135.0],
      ocf_values=[10.0, 15.0, 9.0, 13.5],
      capex_values=[2.0, 3.0, 1.8, 2.7],
  )
  return HistoricalStatementSeries.from_records(statements)


@pytest.fixture
def provider_payload() -> dict:
  """Provider payload for a large-cap software company with history."""
  return {
      'profile': [{
          'symbol': 'ACME',
          'companyName': 'Acme Software Inc.',
          'price': 250.0,
          'beta': 1.2,
          'mktCap': 250_000_000_000,
          'sector': 'Technology',
          'industry': 'Software',
      }],
      'quote': [{
          'symbol': 'ACME',
          'price': 250.0,
          'sharesOutstanding': 1_000_000_000,
          'marketCap': 250_000_000_000,
      }],
      'balanceSheet': [{
          'date': '2023-12-31',
          'totalDebt': 20_000_000_000,
          'cashAndCashEquivalents': 30_000_000_000,
      }],
      'incomeStatement': [{
          'date': '2023-12-31',
          'revenue': 100_000_000_000,
          'netIncome': 20_000_000_000,
      }],
      'cashflowStatement': [{
          'date': '2023-12-31',
          'operatingCashFlow': 30_000_000_000,
          'capitalExpenditure': -5_000_000_000,
          'netIncome': 20_000_000_000,
          'depreciationAndAmortization': 3_000_000_000,
      }],
      'historicalData': {
          'incomeStatements': [
              {'date': '2023-12-31', 'revenue': 100_000_000_000},
              {'date': '2022-12-31', 'revenue': 90_000_000_000},
              {'date': '2021-12-31', 'revenue': 80_000_000_000},
          ],
          'cashflowStatements': [
              {'date': '2023-12-31', 'operatingCashFlow': 30_000_000_000,
               'capitalExpenditure': -5_000_000_000},
              {'date': '2022-12-31', 'operatingCashFlow': 26_000_000_000,
               'capitalExpenditure': -4_000_000_000},
              {'date': '2021-12-31', 'operatingCashFlow': 22_000_000_000,
               'capitalExpenditure': -3_000_000_000},
          ],
      },
      'peers': [
          {'ticker': 'AAA', 'peRatio': 25.0, 'fcfMargin': 0.20,
           'growthPct': 10.0},
          {'ticker': 'BBB', 'peRatio': 35.0, 'fcfMargin': 0.30,
           'growthPct': 14.0},
          {'ticker': 'CCC', 'peRatio': 30.0, 'fcfMargin': 0.25,
           'growthPct': 12.0},
      ],
  }
