'''
Growth schedule policies.

These policies turn near-term and long-term growth assumptions into the
per-year growth sequence [g1, g2, ..., gN] of the explicit forecast.
'''

from abc import ABC, abstractmethod
from typing import List

from autodcf.domain.types import PolicyOutput


class GrowthSchedulePolicy(ABC):
  '''
  Base class for growth schedule policies.

  Subclasses implement compute() to return the full sequence of growth rates
  for the explicit forecast period.
  '''

  @abstractmethod
  def compute(
      self,
      near_term: float,
      long_term: float,
      n_years: int,
  ) -> PolicyOutput[List[float]]:
    '''
    Compute growth rate sequence for explicit forecast period.

    Args:
      near_term: Growth for the high-growth stage
      long_term: Growth for the remaining years
      n_years: Number of explicit forecast years

    Returns:
      PolicyOutput with list of growth rates [g_year1, g_year2, ..., g_yearN]
    '''


class TwoStageGrowth(GrowthSchedulePolicy):
  '''
  Step schedule: near-term growth, then long-term growth.

  Growth stays at near_term for high_growth_years, then switches to
  long_term for the remaining years with no interpolation.
  '''

  def __init__(self, high_growth_years: int = 5):
    '''
    Initialize two-stage schedule.

    Args:
      high_growth_years: Years at near-term growth (default: 5)
    '''
    self.high_growth_years = high_growth_years

  def compute(
      self,
      near_term: float,
      long_term: float,
      n_years: int,
  ) -> PolicyOutput[List[float]]:
    '''Compute two-stage growth rates.'''
    if n_years < 1:
      return PolicyOutput(value=[], diag={'schedule_method': 'two_stage'})

    hg_years = min(self.high_growth_years, n_years)
    growth_rates = [near_term] * hg_years + [long_term] * (n_years - hg_years)

    return PolicyOutput(value=growth_rates,
                        diag={
                            'schedule_method': 'two_stage',
                            'high_growth_years': hg_years,
                            'low_growth_years': n_years - hg_years,
                        })
