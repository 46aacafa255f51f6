"""
Valuation policies for estimating DCF inputs.

Each policy estimates one component of the valuation model (growth,
discount rate, FCF margin path, etc.) and returns both a value and
diagnostic information.

To add a new policy:
1. Create a new class inheriting from the appropriate base (e.g., MarginPolicy)
2. Implement the compute() method returning PolicyOutput
3. Register in scenarios/registry.py

Example:
  class MyCustomTerminal(TerminalPolicy):
    def compute(self) -> PolicyOutput[float]:
      g = ...  # your calculation
      return PolicyOutput(value=g, diag={'terminal_method': 'my_custom'})
"""

from autodcf.policies.discount import CAPMDiscount
from autodcf.policies.discount import DiscountPolicy
from autodcf.policies.discount import FixedRate
from autodcf.policies.growth import BlendedGrowth
from autodcf.policies.growth import GrowthPolicy
from autodcf.policies.margin import ConstantMargin
from autodcf.policies.margin import DriftingMargin
from autodcf.policies.margin import MarginPolicy
from autodcf.policies.schedule import GrowthSchedulePolicy
from autodcf.policies.schedule import TwoStageGrowth
from autodcf.policies.terminal import FixedTerminal
from autodcf.policies.terminal import TerminalPolicy

__all__ = [
  'GrowthPolicy', 'BlendedGrowth',
  'GrowthSchedulePolicy', 'TwoStageGrowth',
  'MarginPolicy', 'ConstantMargin', 'DriftingMargin',
  'TerminalPolicy', 'FixedTerminal',
  'DiscountPolicy', 'CAPMDiscount', 'FixedRate',
]
