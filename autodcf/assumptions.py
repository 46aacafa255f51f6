'''
Automated DCF assumption engine.

Combines historical growth statistics, sector/industry growth tables, a
market-cap size adjustment and a beta-derived cost of capital into a
recommended set of DCF assumptions, with a confidence label and a
human-readable rationale.

Usage:
  from autodcf.assumptions import derive_assumptions

  result = derive_assumptions(financials, history)
  print(result.assumptions.discount_rate, result.confidence)
  print(result.rationale)
'''

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from autodcf.domain.types import (AssumptionResult, CompanyFinancials,
                                  DCFAssumptions, GrowthStatistics,
                                  HistoricalStatementSeries)
from autodcf.history import analyze
from autodcf.policies.sector import industry_growth, size_adjustment
from autodcf.scenarios.config import ValuationConfig
from autodcf.scenarios.registry import create_policies
from autodcf.statements import first_value, to_float, unwrap_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompanyProfile:
  '''Fields of a company the assumption engine depends on.'''
  sector: Optional[str]
  industry: Optional[str]
  beta: Optional[float]
  market_cap: Optional[float]

  @classmethod
  def from_source(
      cls, source: Union[CompanyFinancials, Mapping[str, Any], list]
  ) -> 'CompanyProfile':
    '''Build from a CompanyFinancials snapshot or a raw provider profile.'''
    if isinstance(source, CompanyFinancials):
      return cls(sector=source.sector,
                 industry=source.industry,
                 beta=source.beta,
                 market_cap=source.market_cap)

    record = unwrap_record(source, 'profile')
    return cls(
        sector=record.get('sector') or None,
        industry=record.get('industry') or None,
        beta=to_float(record.get('beta')),
        market_cap=first_value([(record, 'mktCap'), (record, 'marketCap')]),
    )


def derive_assumptions(
    profile: Union[CompanyFinancials, Mapping[str, Any], list],
    history: Union[HistoricalStatementSeries, GrowthStatistics],
    config: Optional[ValuationConfig] = None,
) -> AssumptionResult:
  '''
  Derive recommended DCF assumptions.

  Args:
    profile: Normalized financials or a raw provider profile record
    history: Historical statement series, or statistics already computed
      from one
    config: ValuationConfig selecting growth/discount/terminal policies
      (default: ValuationConfig.default())

  Returns:
    AssumptionResult with assumptions, confidence and rationale
  '''
  if config is None:
    config = ValuationConfig.default()

  company = CompanyProfile.from_source(profile)
  stats = history if isinstance(history, GrowthStatistics) else analyze(history)
  policies = create_policies(config)
  all_diag: Dict[str, Any] = {'config': config.name}

  size = size_adjustment(company.market_cap)
  all_diag.update({'size_growth': size.growth, 'size_risk': size.risk})

  industry_result = industry_growth(company.sector, company.industry, size)
  all_diag.update({f'industry_{k}': v for k, v in industry_result.diag.items()})

  growth_result = policies['growth'].compute(stats, industry_result.value)
  all_diag.update({f'growth_{k}': v for k, v in growth_result.diag.items()})

  discount_result = policies['discount'].compute(beta=company.beta,
                                                 size_risk=size.risk)
  all_diag.update({f'discount_{k}': v for k, v in discount_result.diag.items()})

  terminal_result = policies['terminal'].compute(discount_result.value)
  all_diag.update({f'terminal_{k}': v for k, v in terminal_result.diag.items()})

  near_term, long_term = growth_result.value
  confidence = growth_result.diag['confidence']
  if not stats.is_sufficient:
    logger.debug('Insufficient history, using industry growth for %s/%s',
                 company.sector, company.industry)

  rationale = list(growth_result.diag['rationale'])
  if 'beta' in discount_result.diag:
    rationale.append(
        f'Discount rate {discount_result.value:.1%} from beta '
        f"{discount_result.diag['beta']:.2f} with {size.risk:g}x size risk")
  else:
    rationale.append(f'Fixed discount rate {discount_result.value:.1%}')

  assumptions = DCFAssumptions(
      revenue_growth_near_term=near_term,
      revenue_growth_long_term=long_term,
      terminal_growth=terminal_result.value,
      discount_rate=discount_result.value,
  )
  logger.debug('Derived assumptions (%s confidence): %s', confidence,
               assumptions)

  return AssumptionResult(
      assumptions=assumptions,
      confidence=confidence,
      rationale='; '.join(rationale),
      diag=all_diag,
  )
