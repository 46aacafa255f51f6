'''
DCF valuation with automatically derived assumptions.

This package normalizes raw financial-data-provider records, analyzes the
historical statements, derives growth/discount/terminal assumptions from
sector, industry, size and history, and runs a 10-year two-stage DCF for
bear/base/bull scenarios. Each estimated component is an independent
policy that can be swapped through ValuationConfig.

Usage:
  from autodcf.scenarios.config import ValuationConfig
  from autodcf.run import run_valuation

  config = ValuationConfig.default()
  report = run_valuation(payload, config=config)
  print(report.scenarios.fair_values())
'''
