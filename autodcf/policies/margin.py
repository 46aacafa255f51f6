'''
FCF margin policies.

These policies determine the FCF margin applied to projected revenue in
each year of the explicit forecast.
'''

from abc import ABC, abstractmethod
from typing import List

from autodcf.domain.types import PolicyOutput


class MarginPolicy(ABC):
  '''Base class for FCF margin policies.'''

  @abstractmethod
  def compute(self, base_margin: float,
              n_years: int) -> PolicyOutput[List[float]]:
    '''
    Compute the per-year FCF margin sequence.

    Args:
      base_margin: Starting FCF margin
      n_years: Number of explicit forecast years

    Returns:
      PolicyOutput with margins [m_year1, ..., m_yearN]
    '''


class ConstantMargin(MarginPolicy):
  '''The base margin is held for every projected year.'''

  def compute(self, base_margin: float,
              n_years: int) -> PolicyOutput[List[float]]:
    return PolicyOutput(value=[base_margin] * max(n_years, 0),
                        diag={'margin_method': 'constant'})


class DriftingMargin(MarginPolicy):
  '''
  Margin that expands linearly: base_margin + year * step.

  Kept as a toggle for parity with the drifting-margin model variant.
  '''

  def __init__(self, step: float = 0.0005):
    '''
    Initialize drifting margin policy.

    Args:
      step: Margin added per projected year (default: 5bp)
    '''
    self.step = step

  def compute(self, base_margin: float,
              n_years: int) -> PolicyOutput[List[float]]:
    margins = [base_margin + year * self.step for year in range(1, n_years + 1)]
    return PolicyOutput(value=margins,
                        diag={
                            'margin_method': 'drift',
                            'margin_step': self.step,
                        })
