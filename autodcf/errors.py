"""
Error taxonomy for the valuation core.

Estimation fallbacks (FCF from net income + D&A, exit-multiple terminal
value) are not errors; they are flagged on the returned results instead.
"""

from typing import Iterable, List


class ValuationError(ValueError):
  """Base class for all valuation errors."""


class IncompleteDataError(ValuationError):
  """
  A required upstream record is missing or malformed.

  Attributes:
    source: Name of the offending record (e.g. 'profile', 'balance_sheet')
  """

  def __init__(self, source: str, reason: str = 'missing'):
    self.source = source
    self.reason = reason
    super().__init__(f'Incomplete data: {source} is {reason}')


class ValidationError(ValuationError):
  """
  Required numeric inputs are missing, zero, or non-finite.

  Attributes:
    missing_fields: Names of the offending input fields
  """

  def __init__(self, missing_fields: Iterable[str]):
    self.missing_fields: List[str] = list(missing_fields)
    super().__init__('Missing or invalid required fields: ' +
                     ', '.join(self.missing_fields))


class InvariantError(ValuationError):
  """Discount rate does not exceed terminal growth."""

  def __init__(self, discount_rate: float, terminal_growth: float):
    self.discount_rate = discount_rate
    self.terminal_growth = terminal_growth
    super().__init__(
        f'Discount rate ({discount_rate:.2%}) must be greater than '
        f'terminal growth ({terminal_growth:.2%})')
