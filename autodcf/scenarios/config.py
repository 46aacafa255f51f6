"""
Valuation configuration.

ValuationConfig is a serializable (JSON-friendly) configuration class
that specifies which policies to use for each component of the valuation.
"""

from dataclasses import asdict
from dataclasses import dataclass
import json
from typing import Any


@dataclass
class ValuationConfig:
  """
  Configuration for a valuation run.

  All policy fields are strings (policy names) that map to factories in the
  registry. This makes the config serializable to JSON for reproducibility.

  Attributes:
    name: Human-readable configuration name
    schedule: Growth schedule policy name (e.g., 'two_stage')
    margin: FCF margin policy name ('constant' or 'drift')
    growth: Growth blending policy name (e.g., 'blended')
    discount: Discount policy name (e.g., 'capm_beta', 'fixed_0p09')
    terminal: Terminal policy name (e.g., 'fixed_2p5')
    scenarios: Scenario multiplier set name ('margin' or 'discount')
    n_years: Number of explicit forecast years
  """
  name: str = 'default'
  schedule: str = 'two_stage'
  margin: str = 'constant'
  growth: str = 'blended'
  discount: str = 'capm_beta'
  terminal: str = 'fixed_2p5'
  scenarios: str = 'margin'
  n_years: int = 10

  @classmethod
  def default(cls) -> 'ValuationConfig':
    """
    Create default configuration.

    Uses:
      - Two-stage growth (years 1-5 near-term, 6-10 long-term)
      - Constant FCF margin
      - Historical/industry blended growth with 10% haircut
      - Beta CAPM discount rate clamped to 7-15%
      - Fixed terminal growth at 2.5%
      - Growth and margin scenario multipliers
      - 10-year forecast
    """
    return cls()

  @classmethod
  def drifting_margin(cls) -> 'ValuationConfig':
    """Configuration with a margin that expands 5bp per year."""
    return cls(name='drifting_margin', margin='drift')

  @classmethod
  def discount_scenarios(cls) -> 'ValuationConfig':
    """Configuration whose scenarios perturb the discount rate."""
    return cls(name='discount_scenarios', scenarios='discount')

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ValuationConfig':
    """Create from dictionary."""
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'ValuationConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))
