"""Valuation configuration, policy registry and scenario composition."""

from autodcf.scenarios.composer import compose_scenarios
from autodcf.scenarios.composer import ScenarioMultipliers
from autodcf.scenarios.composer import ScenarioSpec
from autodcf.scenarios.config import ValuationConfig
from autodcf.scenarios.registry import create_policies
from autodcf.scenarios.registry import list_policies
from autodcf.scenarios.registry import POLICY_REGISTRY

__all__ = [
  'ValuationConfig',
  'POLICY_REGISTRY',
  'ScenarioMultipliers',
  'ScenarioSpec',
  'compose_scenarios',
  'create_policies',
  'list_policies',
]
