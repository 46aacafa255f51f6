'''
Single-company valuation entrypoint.

This module provides the main entry point for running valuations. It:
1. Normalizes the provider payload into CompanyFinancials
2. Analyzes the historical statements
3. Derives assumptions (unless supplied by the caller)
4. Runs the DCF projector for bear/base/bull scenarios
5. Returns a ValuationReport with sanity checks and diagnostics

Everything a step needs is passed to it explicitly; nothing is cached
between calls.

Usage:
  from autodcf.run import run_valuation

  report = run_valuation(payload)
  print(f"Fair value: ${report.scenarios.base.fair_value_per_share:.2f}")

CLI:
  python -m autodcf.run payload.json --scenarios discount --near-term 0.08
'''

import argparse
from dataclasses import dataclass, field, replace
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from autodcf.analysis.peers import PeerSummary, summarize_peers
from autodcf.analysis.sanity import check_sanity
from autodcf.analysis.sensitivity import SensitivityTableBuilder
from autodcf.assumptions import derive_assumptions
from autodcf.domain.types import (
    AssumptionResult,
    CompanyFinancials,
    DCFAssumptions,
    GrowthStatistics,
    HistoricalStatementSeries,
    ProjectionInputs,
    SanityChecks,
    ScenarioSet,
)
from autodcf.history import analyze, cash_flow_revenue
from autodcf.scenarios.composer import compose_scenarios
from autodcf.scenarios.config import ValuationConfig
from autodcf.scenarios.registry import create_policies
from autodcf.statements import build_history, normalize

logger = logging.getLogger(__name__)

CASH_FLOW_KEYS = ('cashflowStatement', 'cashFlowStatement', 'cashflow')


@dataclass(frozen=True)
class ValuationReport:
  '''
  Everything produced for one valuation request.

  Attributes:
    financials: Normalized company snapshot
    statistics: Historical growth statistics
    assumptions: Assumptions used for the base projection
    assumption_result: Engine output, when assumptions were derived
    inputs: Base projection inputs
    scenarios: Bear/base/bull projections
    sanity: Sanity checks for the base projection
    peers: Peer summary (empty when no peers were supplied)
    fcf_margin_source: 'historical_average' or 'current'
    diag: Run diagnostics
  '''
  financials: CompanyFinancials
  statistics: GrowthStatistics
  assumptions: DCFAssumptions
  assumption_result: Optional[AssumptionResult]
  inputs: ProjectionInputs
  scenarios: ScenarioSet
  sanity: SanityChecks
  peers: PeerSummary
  fcf_margin_source: str
  diag: Dict[str, Any] = field(default_factory=dict)

  def to_dict(self) -> Dict[str, Any]:
    '''Plain structured data for the presentation layer.'''
    return {
        'financials': self.financials.to_dict(),
        'statistics': self.statistics.to_dict(),
        'assumptions': self.assumptions.to_dict(),
        'confidence': (self.assumption_result.confidence
                       if self.assumption_result else None),
        'rationale': (self.assumption_result.rationale
                      if self.assumption_result else None),
        'inputs': self.inputs.to_dict(),
        'scenarios': {
            name: result.to_dict() for name, result in self.scenarios.items()
        },
        'sanity': self.sanity.to_dict(),
        'peers': self.peers.to_dict(),
        'fcf_margin_source': self.fcf_margin_source,
    }


def financials_from_payload(payload: Mapping[str, Any]) -> CompanyFinancials:
  '''Normalized snapshot from the payload's current-period records.'''
  cash_flow = next((payload[k] for k in CASH_FLOW_KEYS if k in payload), None)
  return normalize(
      payload.get('profile'),
      payload.get('quote'),
      payload.get('balanceSheet'),
      payload.get('incomeStatement'),
      cash_flow,
  )


def history_from_payload(
    payload: Mapping[str, Any]) -> HistoricalStatementSeries:
  '''Historical series from payload['historicalData'], empty if absent.'''
  historical = payload.get('historicalData') or {}
  return build_history(
      historical.get('incomeStatements'),
      historical.get('cashflowStatements',
                     historical.get('cashFlowStatements')),
  )


def run_valuation(
    payload: Mapping[str, Any],
    assumptions: Optional[DCFAssumptions] = None,
    config: Optional[ValuationConfig] = None,
) -> ValuationReport:
  '''
  Run a full valuation for one provider payload.

  Args:
    payload: Provider data with profile, quote, balanceSheet,
      incomeStatement, cashflowStatement and optional historicalData and
      peers
    assumptions: Manual assumptions; derived automatically when None
    config: ValuationConfig (default: ValuationConfig.default())

  Returns:
    ValuationReport with scenarios, sanity checks and diagnostics

  Raises:
    IncompleteDataError: If a required provider record is missing
    ValidationError: If required projection inputs are missing or zero
    InvariantError: If the discount rate does not exceed terminal growth
  '''
  if config is None:
    config = ValuationConfig.default()

  financials = financials_from_payload(payload)
  if financials.fcf_is_estimated:
    logger.warning('%s: FCF estimated from net income + D&A',
                   financials.company_name)

  history = history_from_payload(payload)
  statistics = analyze(history)
  all_diag: Dict[str, Any] = {
      'config': config.name,
      'company': financials.company_name,
      'history_periods': len(history),
      'fcf_method': financials.fcf_method,
  }

  assumption_result = None
  if assumptions is None:
    assumption_result = derive_assumptions(financials, statistics, config)
    assumptions = assumption_result.assumptions
    all_diag['confidence'] = assumption_result.confidence

  if cash_flow_revenue(history) > 0:
    fcf_margin = statistics.average_fcf_margin
    fcf_margin_source = 'historical_average'
  else:
    fcf_margin = financials.fcf_margin
    fcf_margin_source = 'current'
  all_diag['fcf_margin'] = fcf_margin

  inputs = ProjectionInputs.from_financials(financials,
                                            assumptions,
                                            fcf_margin=fcf_margin)

  policies = create_policies(config)
  scenarios = compose_scenarios(inputs,
                                spec=policies['scenarios'],
                                schedule=policies['schedule'],
                                margin=policies['margin'],
                                n_years=config.n_years)
  if scenarios.base.terminal_fallback_used:
    logger.warning('%s: %s', financials.company_name,
                   scenarios.base.diag.get('terminal_note'))

  return ValuationReport(
      financials=financials,
      statistics=statistics,
      assumptions=assumptions,
      assumption_result=assumption_result,
      inputs=inputs,
      scenarios=scenarios,
      sanity=check_sanity(scenarios.base, inputs),
      peers=summarize_peers(payload.get('peers')),
      fcf_margin_source=fcf_margin_source,
      diag=all_diag,
  )


def _parse_float_list(s: str) -> list[float]:
  """Parse comma-separated float list."""
  return [float(x.strip()) for x in s.split(',')]


def _fmt(value: Optional[float], pattern: str) -> str:
  return pattern % value if value is not None else 'N/A'


def log_report(report: ValuationReport) -> None:
  '''Log a human-readable valuation summary.'''
  separator = '=' * 70
  base = report.scenarios.base
  logger.info('\n%s', separator)
  logger.info('DCF Valuation - %s', report.financials.company_name)
  logger.info(separator)

  a = report.assumptions
  logger.info('\nAssumptions:')
  logger.info('  Growth years 1-5: %.2f%%', a.revenue_growth_near_term * 100)
  logger.info('  Growth years 6-10: %.2f%%', a.revenue_growth_long_term * 100)
  logger.info('  Terminal Growth: %.2f%%', a.terminal_growth * 100)
  logger.info('  Discount Rate: %.2f%%', a.discount_rate * 100)
  logger.info('  FCF Margin (%s): %.2f%%', report.fcf_margin_source,
              report.inputs.fcf_margin * 100)
  if report.assumption_result:
    logger.info('  Confidence: %s', report.assumption_result.confidence)
    logger.info('  Rationale: %s', report.assumption_result.rationale)

  logger.info('\nValuation Result:')
  logger.info('  Enterprise Value: $%s', f'{base.enterprise_value:,.0f}')
  logger.info('  Net Debt: $%s', f'{base.net_debt:,.0f}')
  logger.info('  Equity Value: $%s', f'{base.equity_value:,.0f}')
  logger.info('  Fair Value: $%.2f', base.fair_value_per_share)
  for name, value in report.scenarios.fair_values().items():
    logger.info('  %s: $%.2f', name.capitalize(), value)

  s = report.sanity
  logger.info('\nSanity Checks:')
  logger.info('  Implied P/FCF: %s', _fmt(s.implied_fcf_multiple, '%.1fx'))
  logger.info('  EV/Revenue: %s', _fmt(s.ev_to_revenue, '%.1fx'))
  logger.info('  FCF Yield: %s', _fmt(s.fcf_yield_pct, '%.1f%%'))
  logger.info('  Upside/Downside: %s', _fmt(s.upside_downside_pct, '%.1f%%'))

  if report.peers.count:
    logger.info('\nPeers (%d): %s', report.peers.count,
                ', '.join(report.peers.tickers))
    logger.info('  Median P/E: %s', _fmt(report.peers.median_pe_ratio, '%.1f'))
    logger.info('  Median FCF margin: %s',
                _fmt(report.peers.median_fcf_margin, '%.3f'))

  logger.info('%s\n', separator)


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Run DCF valuation')
  parser.add_argument('payload',
                      type=Path,
                      help='Provider payload snapshot (JSON)')
  parser.add_argument('--config',
                      type=Path,
                      help='ValuationConfig JSON file')
  parser.add_argument('--margin',
                      choices=['constant', 'drift'],
                      help='FCF margin policy')
  parser.add_argument('--scenarios',
                      choices=['margin', 'discount'],
                      help='Scenario multiplier set')
  parser.add_argument('--near-term', type=float, help='Growth years 1-5')
  parser.add_argument('--long-term', type=float, help='Growth years 6-10')
  parser.add_argument('--terminal', type=float, help='Terminal growth')
  parser.add_argument('--discount', type=float, help='Discount rate')
  parser.add_argument('--discount-rates',
                      type=str,
                      help='Sensitivity discount rates (e.g., 0.08,0.10)')
  parser.add_argument('--growth-rates',
                      type=str,
                      help=('Sensitivity near-term growth rates '
                            '(e.g., 0.06,0.08)'))
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  config = (ValuationConfig.from_json(args.config.read_text())
            if args.config else ValuationConfig.default())
  if args.margin:
    config.margin = args.margin
  if args.scenarios:
    config.scenarios = args.scenarios

  payload = json.loads(args.payload.read_text())

  assumptions = None
  overrides = {
      'revenue_growth_near_term': args.near_term,
      'revenue_growth_long_term': args.long_term,
      'terminal_growth': args.terminal,
      'discount_rate': args.discount,
  }
  overrides = {k: v for k, v in overrides.items() if v is not None}
  if overrides:
    derived = derive_assumptions(financials_from_payload(payload),
                                 analyze(history_from_payload(payload)),
                                 config)
    assumptions = replace(derived.assumptions, **overrides)

  report = run_valuation(payload, assumptions=assumptions, config=config)
  log_report(report)

  if args.discount_rates and args.growth_rates:
    table = SensitivityTableBuilder(report.inputs, config).build(
        discount_rates=_parse_float_list(args.discount_rates),
        near_term_growth_rates=_parse_float_list(args.growth_rates),
    )
    logger.info('Fair Value per Share ($)')
    logger.info(table.to_string(float_format=lambda x: f'${x:.2f}'))


if __name__ == '__main__':
  main()
