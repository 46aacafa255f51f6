import pytest

from autodcf.assumptions import CompanyProfile
from autodcf.assumptions import derive_assumptions
from autodcf.domain.types import CompanyFinancials
from autodcf.domain.types import HistoricalStatementSeries
from autodcf.history import analyze
from autodcf.scenarios.config import ValuationConfig


@pytest.fixture
def software_company() -> CompanyFinancials:
  """$250B software company with beta 1.2."""
  return CompanyFinancials(
      company_name='Acme Software Inc.',
      current_price=250.0,
      sector='Technology',
      industry='Software',
      beta=1.2,
      market_cap=250e9,
      shares_outstanding=1e9,
      current_revenue=100e9,
      current_free_cash_flow=25e9,
      total_debt=20e9,
      cash_equivalents=30e9,
  )


class TestCompanyProfile:
  """Tests for CompanyProfile.from_source."""

  def test_from_financials(self, software_company):
    profile = CompanyProfile.from_source(software_company)

    assert profile.sector == 'Technology'
    assert profile.beta == 1.2
    assert profile.market_cap == 250e9

  def test_from_raw_profile(self):
    profile = CompanyProfile.from_source([{
        'sector': 'Utilities',
        'industry': '',
        'beta': '0.5',
        'mktCap': 50e9,
    }])

    assert profile.sector == 'Utilities'
    assert profile.industry is None
    assert profile.beta == 0.5
    assert profile.market_cap == 50e9


class TestDeriveAssumptions:
  """Tests for derive_assumptions."""

  def test_large_cap_software(self, software_company, growing_series):
    """High-confidence blend for a $250B software company.

    Manual calculation:
    Size ($100B-$500B): growth 0.9, risk 0.95
    Industry: 12% x 1.3 x 0.9 = 14.04%, 6% x 1.3 x 0.9 = 7.02%
    Near: (0.10 x 0.7 + 0.1404 x 0.3) x 0.9 = 0.100908
    Long: (0.10 x 0.6 x 0.7 + 0.0702 x 0.3) x 0.9 = 0.056754
    Discount: (4.5% + 1.2 x 5.5%) x 0.95 = 10.545%
    """
    result = derive_assumptions(software_company, growing_series)
    a = result.assumptions

    assert a.revenue_growth_near_term == pytest.approx(0.100908)
    assert a.revenue_growth_long_term == pytest.approx(0.056754)
    assert a.discount_rate == pytest.approx(0.10545)
    assert a.terminal_growth == 0.025
    assert result.confidence == 'high'

  def test_rationale(self, software_company, growing_series):
    result = derive_assumptions(software_company, growing_series)

    assert result.rationale.startswith(
        'Blended historical (70%) and industry estimates; ')
    assert 'Applied 10% conservatism discount' in result.rationale
    assert result.rationale.endswith('from beta 1.20 with 0.95x size risk')

  def test_insufficient_history(self, software_company):
    """Industry figures only: 14.04% x 0.9, 7.02% x 0.9."""
    result = derive_assumptions(software_company, HistoricalStatementSeries())

    assert result.assumptions.revenue_growth_near_term == pytest.approx(
        0.12636)
    assert result.assumptions.revenue_growth_long_term == pytest.approx(
        0.06318)
    assert result.confidence == 'low'
    assert result.rationale.startswith(
        'Using industry defaults due to limited historical data')

  def test_medium_confidence(self, software_company, volatile_series):
    result = derive_assumptions(software_company, volatile_series)
    assert result.confidence == 'medium'

  def test_accepts_statistics(self, software_company, growing_series):
    from_series = derive_assumptions(software_company, growing_series)
    from_stats = derive_assumptions(software_company, analyze(growing_series))

    assert from_stats.assumptions == from_series.assumptions

  def test_raw_profile(self):
    """Mid-cap utility: beta 0.5 gives 4.5% + 2.75% = 7.25%."""
    profile = {
        'sector': 'Utilities',
        'industry': 'Utilities - Regulated',
        'beta': 0.5,
        'mktCap': 50e9,
    }
    result = derive_assumptions(profile, HistoricalStatementSeries())

    assert result.assumptions.discount_rate == pytest.approx(0.0725)
    assert result.assumptions.revenue_growth_near_term == pytest.approx(0.027)

  def test_small_cap_risk(self):
    """Beta 2.0: 15.5% capped at 15%, then x 1.2 small-cap risk = 18%."""
    profile = {'sector': 'Technology', 'beta': 2.0, 'mktCap': 1e9}
    result = derive_assumptions(profile, HistoricalStatementSeries())

    assert result.assumptions.discount_rate == pytest.approx(0.18)
    assert result.diag['size_risk'] == 1.2

  def test_missing_beta(self):
    """Market beta of 1.0 at mid-cap size: 10%."""
    profile = {'sector': 'Industrials', 'mktCap': 50e9}
    result = derive_assumptions(profile, HistoricalStatementSeries())

    assert result.assumptions.discount_rate == pytest.approx(0.10)
    assert result.diag['discount_beta_defaulted'] is True

  def test_fixed_discount_config(self, software_company, growing_series):
    config = ValuationConfig(discount='fixed_0p10', terminal='fixed_3p0')
    result = derive_assumptions(software_company, growing_series, config)

    assert result.assumptions.discount_rate == 0.10
    assert result.assumptions.terminal_growth == 0.03
    assert result.rationale.endswith('Fixed discount rate 10.0%')

  def test_diagnostics(self, software_company, growing_series):
    diag = derive_assumptions(software_company, growing_series).diag

    assert diag['config'] == 'default'
    assert diag['industry_industry_multiplier'] == 1.3
    assert diag['growth_confidence'] == 'high'
    assert diag['discount_discount_method'] == 'capm_beta'
    assert diag['terminal_g_terminal'] == 0.025
    assert diag['terminal_capitalization_spread'] == pytest.approx(0.08045)
