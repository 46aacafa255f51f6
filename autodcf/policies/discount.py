"""
Discount rate policies.

These policies determine the required rate of return (discount rate)
used in DCF valuation.
"""

from abc import ABC
from abc import abstractmethod
from typing import Optional

from autodcf.domain.types import PolicyOutput


class DiscountPolicy(ABC):
  """
  Base class for discount rate policies.

  Subclasses implement compute() to return a discount rate.
  """

  @abstractmethod
  def compute(
      self,
      beta: Optional[float] = None,
      size_risk: float = 1.0,
  ) -> PolicyOutput[float]:
    """
    Compute discount rate.

    Args:
      beta: Equity beta, if known
      size_risk: Market-cap risk multiplier applied to the rate

    Returns:
      PolicyOutput with discount rate and diagnostics
    """

class CAPMDiscount(DiscountPolicy):
  """
  Beta-based cost of equity as a WACC proxy.

  cost_of_equity = risk_free + beta * equity_risk_premium, clamped to
  [floor, cap], then scaled by the size risk multiplier.
  """

  def __init__(
      self,
      risk_free_rate: float = 0.045,
      equity_risk_premium: float = 0.055,
      floor: float = 0.07,
      cap: float = 0.15,
  ):
    """
    Initialize CAPM discount policy.

    Args:
      risk_free_rate: Risk-free rate (default: 4.5%)
      equity_risk_premium: Equity risk premium (default: 5.5%)
      floor: Minimum cost of equity (default: 7%)
      cap: Maximum cost of equity (default: 15%)
    """
    self.risk_free_rate = risk_free_rate
    self.equity_risk_premium = equity_risk_premium
    self.floor = floor
    self.cap = cap

  def compute(
      self,
      beta: Optional[float] = None,
      size_risk: float = 1.0,
  ) -> PolicyOutput[float]:
    """Compute clamped cost of equity scaled by size risk."""
    beta_defaulted = beta is None or not beta > 0
    effective_beta = 1.0 if beta_defaulted else float(beta)

    cost_of_equity = (self.risk_free_rate +
                      effective_beta * self.equity_risk_premium)
    clamped = min(max(cost_of_equity, self.floor), self.cap)
    rate = clamped * size_risk

    return PolicyOutput(
      value=rate,
      diag={
        'discount_method': 'capm_beta',
        'beta': effective_beta,
        'beta_defaulted': beta_defaulted,
        'cost_of_equity': cost_of_equity,
        'clamped_cost_of_equity': clamped,
        'clamp_range': (self.floor, self.cap),
        'size_risk': size_risk,
        'discount_rate': rate,
      }
    )


class FixedRate(DiscountPolicy):
  """
  Fixed discount rate.

  Simple policy that returns a constant required return, ignoring beta
  and size.
  """

  def __init__(self, rate: float = 0.09):
    """
    Initialize fixed rate policy.

    Args:
      rate: Fixed discount rate (default: 9%)
    """
    self.rate = rate

  def compute(
      self,
      beta: Optional[float] = None,
      size_risk: float = 1.0,
  ) -> PolicyOutput[float]:
    """Return fixed discount rate."""
    return PolicyOutput(
      value=self.rate,
      diag={
        'discount_method': 'fixed',
        'discount_rate': self.rate,
      }
    )
