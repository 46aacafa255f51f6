"""
Sensitivity analysis for DCF valuation.

This module provides tools to generate 2D sensitivity tables that show
how fair value per share varies across different discount rates and
near-term growth rates.

Usage:
  builder = SensitivityTableBuilder(inputs, ValuationConfig.default())
  table = builder.build([0.08, 0.09, 0.10], [0.06, 0.08, 0.10])
"""

from dataclasses import replace
import logging
from typing import Optional

import pandas as pd

from autodcf.domain.types import ProjectionInputs
from autodcf.engine.dcf import project
from autodcf.errors import InvariantError
from autodcf.scenarios.config import ValuationConfig
from autodcf.scenarios.registry import create_policies

logger = logging.getLogger(__name__)


class SensitivityTableBuilder:
  """
  Build 2D sensitivity tables for fair value analysis.

  Varies discount rate and near-term growth while keeping other inputs
  (revenue, margin, long-term and terminal growth, balance sheet) fixed.
  """

  def __init__(
      self,
      inputs: ProjectionInputs,
      base_config: Optional[ValuationConfig] = None,
  ):
    """
    Initialize sensitivity table builder.

    Args:
        inputs: Base projection inputs
        base_config: Configuration for schedule and margin policies
    """
    self.inputs = inputs
    self.base_config = base_config or ValuationConfig.default()
    self.policies = create_policies(self.base_config)

    logger.debug('Initialized SensitivityTableBuilder')
    logger.debug('  Revenue: %.2fB', inputs.current_revenue / 1e9)
    logger.debug('  FCF margin: %.2f%%', inputs.fcf_margin * 100)
    logger.debug('  Terminal growth: %.2f%%', inputs.terminal_growth * 100)

  def build(
      self,
      discount_rates: list[float],
      near_term_growth_rates: list[float],
  ) -> pd.DataFrame:
    """
    Build 2D sensitivity table.

    Args:
        discount_rates: List of discount rates (e.g., [0.08, 0.10, 0.12])
        near_term_growth_rates: List of years 1-5 growth rates
                                (e.g., [0.06, 0.08, 0.10])

    Returns:
        DataFrame with discount rates as index, growth rates as columns,
        and fair values per share as cell values (NaN where the discount
        rate does not exceed terminal growth)
    """
    if not discount_rates:
      raise ValueError('discount_rates cannot be empty')
    if not near_term_growth_rates:
      raise ValueError('near_term_growth_rates cannot be empty')

    logger.info('Building sensitivity table: %d x %d', len(discount_rates),
                len(near_term_growth_rates))

    data_rows = []

    for r in discount_rates:
      row_data = []
      for g in near_term_growth_rates:
        scenario = replace(self.inputs,
                           discount_rate=r,
                           revenue_growth_near_term=g)
        try:
          result = project(scenario,
                           schedule=self.policies['schedule'],
                           margin=self.policies['margin'],
                           n_years=self.base_config.n_years)
        except InvariantError:
          row_data.append(float('nan'))
          continue
        row_data.append(result.fair_value_per_share)
      data_rows.append(row_data)

    r_labels = [f'{r:.1%}' for r in discount_rates]
    g_labels = [f'{g:.1%}' for g in near_term_growth_rates]

    df = pd.DataFrame(data_rows, index=r_labels, columns=g_labels)
    df.index.name = 'Discount Rate'
    df.columns.name = 'Near-Term Growth'

    return df
