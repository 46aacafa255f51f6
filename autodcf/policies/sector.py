'''
Sector, industry and size lookups for growth and risk adjustments.

Growth figures are fractional rates. Unknown sectors and industries fall
back to the defaults.
'''

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from autodcf.domain.types import PolicyOutput

# sector -> (near_term, long_term)
SECTOR_GROWTH: Dict[str, Tuple[float, float]] = {
    'Technology': (0.12, 0.06),
    'Healthcare': (0.08, 0.05),
    'Financial Services': (0.06, 0.04),
    'Consumer Cyclical': (0.07, 0.04),
    'Consumer Defensive': (0.04, 0.03),
    'Industrials': (0.06, 0.04),
    'Energy': (0.05, 0.03),
    'Utilities': (0.03, 0.02),
    'Real Estate': (0.04, 0.03),
    'Materials': (0.05, 0.03),
    'Communication Services': (0.08, 0.05),
}
DEFAULT_SECTOR_GROWTH = (0.06, 0.04)

INDUSTRY_MULTIPLIERS: Dict[str, float] = {
    'Software': 1.3,
    'Semiconductors': 1.2,
    'Biotechnology': 1.4,
    'Airlines': 0.8,
    'Banks': 0.9,
}

# (market cap threshold in billions, growth multiplier, risk multiplier),
# checked top-down with a strict greater-than.
SIZE_BANDS = [
    (500.0, 0.8, 0.9),
    (100.0, 0.9, 0.95),
    (10.0, 1.0, 1.0),
    (2.0, 1.1, 1.1),
]
SMALL_CAP_ADJUSTMENT = (1.2, 1.2)


@dataclass(frozen=True)
class SizeAdjustment:
  '''Multipliers applied to sector growth and to the discount rate.'''
  growth: float
  risk: float


def size_adjustment(market_cap: Optional[float]) -> SizeAdjustment:
  '''
  Size adjustment for a market cap in absolute currency units.

  Larger companies get lower growth and lower risk; anything at or below
  $2B (or unknown) is treated as a small cap.
  '''
  cap_in_billions = (market_cap or 0.0) / 1e9
  for threshold, growth, risk in SIZE_BANDS:
    if cap_in_billions > threshold:
      return SizeAdjustment(growth=growth, risk=risk)
  return SizeAdjustment(*SMALL_CAP_ADJUSTMENT)


def industry_growth(
    sector: Optional[str],
    industry: Optional[str],
    size: Optional[SizeAdjustment] = None,
) -> PolicyOutput[Tuple[float, float]]:
  '''
  Industry-derived (near_term, long_term) growth.

  Sector baseline times the industry multiplier times the size growth
  multiplier.

  Args:
    sector: Sector name
    industry: Industry name
    size: Size adjustment (default: no adjustment)

  Returns:
    PolicyOutput with (near_term, long_term) and diagnostics
  '''
  sector_known = sector in SECTOR_GROWTH
  near, long = SECTOR_GROWTH.get(sector or '', DEFAULT_SECTOR_GROWTH)
  multiplier = INDUSTRY_MULTIPLIERS.get(industry or '', 1.0)
  size_growth = size.growth if size is not None else 1.0

  near_term = near * multiplier * size_growth
  long_term = long * multiplier * size_growth
  return PolicyOutput(value=(near_term, long_term),
                      diag={
                          'sector': sector,
                          'sector_known': sector_known,
                          'industry': industry,
                          'industry_multiplier': multiplier,
                          'size_growth': size_growth,
                          'industry_near_term': near_term,
                          'industry_long_term': long_term,
                      })
