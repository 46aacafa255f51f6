from dataclasses import replace

import pytest

from autodcf.engine.dcf import compute_pv_explicit
from autodcf.engine.dcf import compute_terminal_value
from autodcf.engine.dcf import project
from autodcf.errors import InvariantError
from autodcf.errors import ValidationError
from autodcf.policies.margin import DriftingMargin
from autodcf.policies.schedule import TwoStageGrowth


class TestComputePVExplicit:
  """Tests for compute_pv_explicit function."""

  def test_single_year(self):
    """Manual calculation:
    Revenue: 100,000 x 1.08 = 108,000
    FCF: 108,000 x 0.25 = 27,000
    PV: 27,000 / 1.09 = 24,770.64
    """
    revenues, fcfs, pvs = compute_pv_explicit(
        revenue0=100_000.0,
        growth_path=[0.08],
        margin_path=[0.25],
        discount_rate=0.09,
    )

    assert revenues == pytest.approx([108_000.0])
    assert fcfs == pytest.approx([27_000.0])
    assert pvs == pytest.approx([24_770.64], abs=0.01)

  def test_two_years(self):
    """Manual calculation:
    Year 2 revenue: 108,000 x 1.08 = 116,640
    Year 2 FCF: 29,160
    Year 2 PV: 29,160 / 1.1881 = 24,543.39
    """
    revenues, fcfs, pvs = compute_pv_explicit(100_000.0, [0.08, 0.08],
                                              [0.25, 0.25], 0.09)

    assert revenues[1] == pytest.approx(116_640.0)
    assert fcfs[1] == pytest.approx(29_160.0)
    assert pvs[1] == pytest.approx(24_543.39, abs=0.01)

  def test_zero_growth(self):
    """Flat revenue: PV = 25 / 1.1 + 25 / 1.21 = 43.39."""
    _, _, pvs = compute_pv_explicit(100.0, [0.0, 0.0], [0.25, 0.25], 0.10)
    assert sum(pvs) == pytest.approx(43.39, abs=0.01)

  def test_per_year_margin(self):
    _, fcfs, _ = compute_pv_explicit(100.0, [0.0, 0.0], [0.10, 0.20], 0.10)
    assert fcfs == pytest.approx([10.0, 20.0])


class TestComputeTerminalValue:
  """Tests for compute_terminal_value function."""

  def test_gordon_growth(self):
    """Manual calculation:
    Terminal FCF: 100 x 1.025 = 102.5
    TV: 102.5 / (0.09 - 0.025) = 1,576.92
    PV: 1,576.92 / 1.09^10 = 666.11
    """
    terminal_fcf, tv, pv_tv, fallback = compute_terminal_value(
        final_fcf=100.0,
        g_terminal=0.025,
        discount_rate=0.09,
        final_year=10,
    )

    assert terminal_fcf == pytest.approx(102.5)
    assert tv == pytest.approx(1_576.92, abs=0.01)
    assert pv_tv == pytest.approx(666.11, abs=0.01)
    assert fallback is False

  def test_exit_multiple_guard(self):
    """Spread 0.0005 <= 0.001: TV = 15 x 103 = 1,545."""
    terminal_fcf, tv, _, fallback = compute_terminal_value(
        100.0, 0.03, 0.0305, 10)

    assert terminal_fcf == pytest.approx(103.0)
    assert tv == pytest.approx(1_545.0)
    assert fallback is True

  def test_zero_terminal_growth(self):
    """No-growth perpetuity: TV = 100 / 0.10 = 1,000."""
    _, tv, _, _ = compute_terminal_value(100.0, 0.0, 0.10, 5)
    assert tv == pytest.approx(1_000.0)

  def test_exit_multiple_guard_at_boundary(self):
    """Spread of exactly 0.1% (2.6% - 2.5%) uses the exit multiple."""
    terminal_fcf, tv, _, fallback = compute_terminal_value(
        100.0, 0.025, 0.026, 10)

    assert fallback is True
    assert tv == pytest.approx(terminal_fcf * 15)

  def test_just_above_boundary(self):
    """Spread 0.0011: TV = 102.5 / 0.0011 = 93,181.82."""
    _, tv, _, fallback = compute_terminal_value(100.0, 0.025, 0.0261, 10)

    assert fallback is False
    assert tv == pytest.approx(93_181.82, abs=0.01)


class TestProject:
  """Tests for project function."""

  def test_first_year(self, base_inputs):
    result = project(base_inputs)

    assert len(result.revenues) == 10
    assert result.revenues[0] == pytest.approx(108_000.0)
    assert result.free_cash_flows[0] == pytest.approx(27_000.0)
    assert result.present_values[0] == pytest.approx(24_770.64, abs=0.01)

  def test_growth_path(self, base_inputs):
    result = project(base_inputs)

    assert result.growth_path == (0.08,) * 5 + (0.05,) * 5
    assert result.margin_path == (0.25,) * 10
    assert result.revenues[5] == pytest.approx(result.revenues[4] * 1.05)

  def test_revenues_strictly_increase(self, base_inputs):
    revenues = project(base_inputs).revenues
    assert all(b > a for a, b in zip(revenues, revenues[1:]))

  def test_valuation_bridge(self, base_inputs):
    """Net cash of 10,000 is added to enterprise value."""
    result = project(base_inputs)

    assert result.total_pv_explicit == pytest.approx(sum(
        result.present_values))
    assert result.enterprise_value == pytest.approx(result.total_pv_explicit +
                                                    result.pv_terminal)
    assert result.net_debt == -10_000.0
    assert result.equity_value == pytest.approx(result.enterprise_value +
                                                10_000.0)
    assert result.fair_value_per_share == pytest.approx(result.equity_value /
                                                        1_000.0)
    assert result.terminal_fcf == pytest.approx(result.free_cash_flows[-1] *
                                                1.025)
    assert result.terminal_fallback_used is False
    assert result.inputs == base_inputs

  def test_full_valuation(self, base_inputs):
    """Manual calculation:
    Year 5 revenue: 100,000 x 1.08^5 = 146,932.81
    Year 10 revenue: 146,932.81 x 1.05^5 = 187,527.63
    Year 10 FCF: 46,881.91
    PV of years 1-10: 228,455.63
    Terminal FCF: 46,881.91 x 1.025 = 48,053.96
    TV: 48,053.96 / 0.065 = 739,291.63
    PV of TV: 739,291.63 / 1.09^10 = 312,284.77
    EV: 228,455.63 + 312,284.77 = 540,740.40
    Equity: 540,740.40 + 10,000 = 550,740.40
    Fair value: 550,740.40 / 1,000 = 550.74
    """
    result = project(base_inputs)

    assert result.revenues[-1] == pytest.approx(187_527.63, rel=1e-4)
    assert result.total_pv_explicit == pytest.approx(228_455.63, rel=1e-4)
    assert result.terminal_value == pytest.approx(739_291.63, rel=1e-4)
    assert result.pv_terminal == pytest.approx(312_284.77, rel=1e-4)
    assert result.enterprise_value == pytest.approx(540_740.40, rel=1e-4)
    assert result.equity_value == pytest.approx(550_740.40, rel=1e-4)
    assert result.fair_value_per_share == pytest.approx(550.74, rel=1e-4)

  def test_diagnostics(self, base_inputs):
    result = project(base_inputs)

    assert result.diag['schedule_method'] == 'two_stage'
    assert result.diag['margin_method'] == 'constant'
    assert result.diag['n_years'] == 10
    assert 'terminal_note' not in result.diag

  def test_exit_multiple_guard(self, base_inputs):
    inputs = replace(base_inputs, discount_rate=0.0305, terminal_growth=0.03)
    result = project(inputs)

    assert result.terminal_fallback_used is True
    assert result.terminal_value == pytest.approx(result.terminal_fcf * 15)
    assert 'terminal_note' in result.diag

  def test_zero_near_term_growth(self, base_inputs):
    with pytest.raises(ValidationError) as exc_info:
      project(replace(base_inputs, revenue_growth_near_term=0.0))
    assert exc_info.value.missing_fields == ['revenue_growth_near_term']

  def test_negative_near_term_growth_allowed(self, base_inputs):
    result = project(replace(base_inputs, revenue_growth_near_term=-0.05))
    assert result.revenues[0] == pytest.approx(95_000.0)

  def test_negative_margin(self, base_inputs):
    """Cash-burning company with net debt gets a negative fair value."""
    inputs = replace(base_inputs,
                     fcf_margin=-0.05,
                     total_debt=50_000.0,
                     cash_equivalents=0.0)
    assert project(inputs).fair_value_per_share < 0

  def test_custom_policies(self, base_inputs):
    result = project(base_inputs,
                     schedule=TwoStageGrowth(high_growth_years=3),
                     margin=DriftingMargin(),
                     n_years=5)

    assert result.growth_path == (0.08, 0.08, 0.08, 0.05, 0.05)
    assert result.margin_path[0] == pytest.approx(0.2505)
    assert len(result.present_values) == 5

  def test_invalid_horizon(self, base_inputs):
    with pytest.raises(ValueError):
      project(base_inputs, n_years=0)

  def test_zero_revenue(self, base_inputs):
    with pytest.raises(ValidationError) as exc_info:
      project(replace(base_inputs, current_revenue=0.0))
    assert exc_info.value.missing_fields == ['current_revenue']

  def test_lists_every_invalid_field(self, base_inputs):
    inputs = replace(base_inputs,
                     shares_outstanding=0.0,
                     revenue_growth_near_term=None)

    with pytest.raises(ValidationError) as exc_info:
      project(inputs)
    assert exc_info.value.missing_fields == [
        'shares_outstanding', 'revenue_growth_near_term'
    ]

  def test_nan_margin(self, base_inputs):
    with pytest.raises(ValidationError) as exc_info:
      project(replace(base_inputs, fcf_margin=float('nan')))
    assert exc_info.value.missing_fields == ['fcf_margin']

  def test_discount_equal_to_terminal(self, base_inputs):
    inputs = replace(base_inputs, discount_rate=0.025)
    with pytest.raises(InvariantError):
      project(inputs)

  def test_discount_below_terminal(self, base_inputs):
    inputs = replace(base_inputs, discount_rate=0.02)
    with pytest.raises(InvariantError) as exc_info:
      project(inputs)
    assert exc_info.value.discount_rate == 0.02
