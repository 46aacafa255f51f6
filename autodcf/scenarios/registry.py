"""
Policy registry for mapping string names to policy factories.

This enables valuations to be configured with string names (JSON
friendly) while still instantiating the correct policy classes.

To add a new policy:
1. Implement the policy class in the appropriate module
   (e.g., policies/margin.py)
2. Add a factory function here that creates the policy instance
3. Register it in the appropriate registry dictionary

Example:
  # In policies/margin.py
  class StepMargin(MarginPolicy):
    def compute(self, base_margin, n_years) -> PolicyOutput[List[float]]:
      ...

  # In scenarios/registry.py
  MARGIN_POLICIES['step'] = lambda: StepMargin(step_year=5)
"""

from collections.abc import Callable
from typing import Any, cast

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
from autodcf.scenarios.composer import DISCOUNT_SCENARIOS
from autodcf.scenarios.composer import MARGIN_SCENARIOS
from autodcf.scenarios.composer import ScenarioSpec
from autodcf.scenarios.config import ValuationConfig

SCHEDULE_POLICIES: dict[str, Callable[[], GrowthSchedulePolicy]] = {
    'two_stage': lambda: TwoStageGrowth(high_growth_years=5),
}

MARGIN_POLICIES: dict[str, Callable[[], MarginPolicy]] = {
    'constant': ConstantMargin,
    'drift': lambda: DriftingMargin(step=0.0005),
}

GROWTH_POLICIES: dict[str, Callable[[], GrowthPolicy]] = {
    'blended':
        BlendedGrowth,
    'blended_no_haircut':
        lambda: BlendedGrowth(haircut=0.0),
}

DISCOUNT_POLICIES: dict[str, Callable[[], DiscountPolicy]] = {
    'capm_beta': lambda: CAPMDiscount(floor=0.07, cap=0.15),
    'capm_beta_floor8': lambda: CAPMDiscount(floor=0.08, cap=0.15),
    'fixed_0p08': lambda: FixedRate(rate=0.08),
    'fixed_0p09': lambda: FixedRate(rate=0.09),
    'fixed_0p10': lambda: FixedRate(rate=0.10),
}

TERMINAL_POLICIES: dict[str, Callable[[], TerminalPolicy]] = {
    'fixed_2p5': lambda: FixedTerminal(g_terminal=0.025),
    'fixed_2p0': lambda: FixedTerminal(g_terminal=0.02),
    'fixed_3p0': lambda: FixedTerminal(g_terminal=0.03),
}

SCENARIO_SPECS: dict[str, Callable[[], ScenarioSpec]] = {
    'margin': lambda: MARGIN_SCENARIOS,
    'discount': lambda: DISCOUNT_SCENARIOS,
}

POLICY_REGISTRY = {
    'schedule': SCHEDULE_POLICIES,
    'margin': MARGIN_POLICIES,
    'growth': GROWTH_POLICIES,
    'discount': DISCOUNT_POLICIES,
    'terminal': TERMINAL_POLICIES,
    'scenarios': SCENARIO_SPECS,
}

def create_policies(config: ValuationConfig) -> dict[str, Any]:
  """
  Create policy instances from a valuation configuration.

  Args:
    config: ValuationConfig with policy names

  Returns:
    Dictionary with instantiated policy objects:
    - schedule: GrowthSchedulePolicy
    - margin: MarginPolicy
    - growth: GrowthPolicy
    - discount: DiscountPolicy
    - terminal: TerminalPolicy
    - scenarios: ScenarioSpec

  Raises:
    KeyError: If a policy name is not found in the registry
  """
  policies: dict[str, Any] = {}
  for category, registry in POLICY_REGISTRY.items():
    name = getattr(config, category)
    factories = cast(dict[str, Callable[[], Any]], registry)
    try:
      factory = factories[name]
    except KeyError as e:
      raise KeyError(f"Unknown {category} policy: '{name}'. "
                     f'Available: {list(factories.keys())}') from e
    policies[category] = factory()
  return policies

def list_policies() -> dict[str, list[str]]:
  """
  List all available policies by category.

  Returns:
    Dictionary mapping category names to list of policy names
  """
  result: dict[str, list[str]] = {}
  for category, policies_dict in POLICY_REGISTRY.items():
    policy_dict = cast(dict[str, object], policies_dict)
    result[category] = list(policy_dict.keys())
  return result
