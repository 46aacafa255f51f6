'''
Terminal growth policies.

The terminal rate is the perpetual growth applied to FCF beyond the last
explicit forecast year. It must stay below the discount rate; the engine
falls back to an exit multiple when the two are within 0.1%.
'''

from abc import ABC, abstractmethod
from typing import Optional

from autodcf.domain.types import PolicyOutput


class TerminalPolicy(ABC):
  '''Base class for terminal growth policies.'''

  @abstractmethod
  def compute(self,
              discount_rate: Optional[float] = None) -> PolicyOutput[float]:
    '''
    Compute the terminal growth rate.

    Args:
      discount_rate: Discount rate the terminal value will be capitalized
        at, if already known; only used for diagnostics

    Returns:
      PolicyOutput with terminal growth and diagnostics
    '''


class FixedTerminal(TerminalPolicy):
  '''Constant terminal growth, near long-run inflation.'''

  def __init__(self, g_terminal: float = 0.025):
    '''
    Args:
      g_terminal: Terminal growth rate (default: 2.5%)
    '''
    self.g_terminal = g_terminal

  def compute(self,
              discount_rate: Optional[float] = None) -> PolicyOutput[float]:
    diag = {'terminal_method': 'fixed', 'g_terminal': self.g_terminal}
    if discount_rate is not None:
      diag['capitalization_spread'] = discount_rate - self.g_terminal
    return PolicyOutput(value=self.g_terminal, diag=diag)
