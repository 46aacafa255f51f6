'''
Bear/base/bull scenario composition.

Each scenario perturbs the base projection inputs by a fixed set of
multiplicative factors and runs the projector independently.
'''

from dataclasses import dataclass, replace
from typing import Optional

from autodcf.domain.types import ProjectionInputs, ScenarioSet
from autodcf.engine.dcf import N_YEARS, project
from autodcf.policies.margin import MarginPolicy
from autodcf.policies.schedule import GrowthSchedulePolicy


@dataclass(frozen=True)
class ScenarioMultipliers:
  '''
  Multiplicative perturbation of projection inputs.

  Attributes:
    growth: Applied to near-term and long-term revenue growth
    margin: Applied to the FCF margin
    discount: Applied to the discount rate
  '''
  growth: float = 1.0
  margin: float = 1.0
  discount: float = 1.0

  def apply(self, inputs: ProjectionInputs) -> ProjectionInputs:
    '''Return a perturbed copy of the inputs.'''
    return replace(
        inputs,
        revenue_growth_near_term=inputs.revenue_growth_near_term * self.growth,
        revenue_growth_long_term=inputs.revenue_growth_long_term * self.growth,
        fcf_margin=inputs.fcf_margin * self.margin,
        discount_rate=inputs.discount_rate * self.discount,
    )


@dataclass(frozen=True)
class ScenarioSpec:
  '''Bear and bull multipliers; base is always unperturbed.'''
  name: str
  bear: ScenarioMultipliers
  bull: ScenarioMultipliers


MARGIN_SCENARIOS = ScenarioSpec(
    name='margin',
    bear=ScenarioMultipliers(growth=0.8, margin=0.9),
    bull=ScenarioMultipliers(growth=1.2, margin=1.1),
)

DISCOUNT_SCENARIOS = ScenarioSpec(
    name='discount',
    bear=ScenarioMultipliers(growth=0.75, discount=1.05),
    bull=ScenarioMultipliers(growth=1.25, discount=0.95),
)


def compose_scenarios(
    inputs: ProjectionInputs,
    spec: Optional[ScenarioSpec] = None,
    schedule: Optional[GrowthSchedulePolicy] = None,
    margin: Optional[MarginPolicy] = None,
    n_years: int = N_YEARS,
) -> ScenarioSet:
  '''
  Project bear, base and bull scenarios.

  Args:
    inputs: Base projection inputs
    spec: Scenario multipliers (default: growth and margin perturbation)
    schedule: Growth schedule policy passed to every projection
    margin: Margin policy passed to every projection
    n_years: Number of explicit forecast years

  Returns:
    ScenarioSet in bear/base/bull construction order

  Raises:
    ValidationError, InvariantError: As raised by project() for any scenario
  '''
  if spec is None:
    spec = MARGIN_SCENARIOS

  base = project(inputs, schedule=schedule, margin=margin, n_years=n_years)
  bear = project(spec.bear.apply(inputs),
                 schedule=schedule,
                 margin=margin,
                 n_years=n_years)
  bull = project(spec.bull.apply(inputs),
                 schedule=schedule,
                 margin=margin,
                 n_years=n_years)
  return ScenarioSet(bear=bear, base=base, bull=bull)
