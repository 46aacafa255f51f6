from dataclasses import replace
import math

import pytest

from autodcf.analysis.sensitivity import SensitivityTableBuilder
from autodcf.engine.dcf import project
from autodcf.scenarios.config import ValuationConfig


class TestSensitivityTableBuilder:
  """Tests for SensitivityTableBuilder."""

  def test_shape_and_labels(self, base_inputs):
    table = SensitivityTableBuilder(base_inputs).build(
        discount_rates=[0.08, 0.10],
        near_term_growth_rates=[0.06, 0.08, 0.10],
    )

    assert table.shape == (2, 3)
    assert list(table.index) == ['8.0%', '10.0%']
    assert list(table.columns) == ['6.0%', '8.0%', '10.0%']
    assert table.index.name == 'Discount Rate'
    assert table.columns.name == 'Near-Term Growth'

  def test_cell_matches_projection(self, base_inputs):
    table = SensitivityTableBuilder(base_inputs).build([0.09], [0.08])
    expected = project(base_inputs).fair_value_per_share

    assert table.loc['9.0%', '8.0%'] == pytest.approx(expected)

  def test_monotonic(self, base_inputs):
    """Higher discount lowers value; higher growth raises it."""
    table = SensitivityTableBuilder(base_inputs).build([0.08, 0.10],
                                                       [0.06, 0.10])

    assert table.iloc[0, 0] > table.iloc[1, 0]
    assert table.iloc[0, 1] > table.iloc[0, 0]

  def test_invalid_cell_is_nan(self, base_inputs):
    """2% discount does not exceed 2.5% terminal growth."""
    table = SensitivityTableBuilder(base_inputs).build([0.02, 0.09], [0.08])

    assert math.isnan(table.iloc[0, 0])
    assert not math.isnan(table.iloc[1, 0])

  def test_uses_config_policies(self, base_inputs):
    table = SensitivityTableBuilder(
        base_inputs, ValuationConfig.drifting_margin()).build([0.09], [0.08])
    constant = project(base_inputs).fair_value_per_share

    assert table.iloc[0, 0] > constant

  def test_empty_rates(self, base_inputs):
    builder = SensitivityTableBuilder(base_inputs)
    with pytest.raises(ValueError):
      builder.build([], [0.08])
    with pytest.raises(ValueError):
      builder.build([0.09], [])

  def test_other_inputs_held(self, base_inputs):
    inputs = replace(base_inputs, total_debt=120_000.0)
    lower = SensitivityTableBuilder(inputs).build([0.09], [0.08])
    higher = SensitivityTableBuilder(base_inputs).build([0.09], [0.08])

    assert lower.iloc[0, 0] == pytest.approx(higher.iloc[0, 0] - 100.0)
