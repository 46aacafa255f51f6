"""Domain types for the valuation core."""

from autodcf.domain.types import AssumptionResult
from autodcf.domain.types import CompanyFinancials
from autodcf.domain.types import DCFAssumptions
from autodcf.domain.types import GrowthStatistics
from autodcf.domain.types import HistoricalStatement
from autodcf.domain.types import HistoricalStatementSeries
from autodcf.domain.types import PolicyOutput
from autodcf.domain.types import ProjectionInputs
from autodcf.domain.types import ProjectionResult
from autodcf.domain.types import SanityChecks
from autodcf.domain.types import ScenarioSet

__all__ = [
    'AssumptionResult',
    'CompanyFinancials',
    'DCFAssumptions',
    'GrowthStatistics',
    'HistoricalStatement',
    'HistoricalStatementSeries',
    'PolicyOutput',
    'ProjectionInputs',
    'ProjectionResult',
    'SanityChecks',
    'ScenarioSet',
]
