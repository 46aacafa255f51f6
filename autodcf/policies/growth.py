'''
Growth rate estimation policies.

These policies turn historical growth statistics and industry-derived
growth into near-term (years 1-5) and long-term (years 6-10) revenue
growth assumptions.
'''

from abc import ABC, abstractmethod
from typing import List, Tuple

from autodcf.domain.types import GrowthStatistics, PolicyOutput

CONFIDENCE_LOW = 'low'
CONFIDENCE_MEDIUM = 'medium'
CONFIDENCE_HIGH = 'high'


class GrowthPolicy(ABC):
  '''
  Base class for growth rate estimation policies.

  Subclasses implement compute() to return (near_term, long_term) growth.
  '''

  @abstractmethod
  def compute(
      self,
      stats: GrowthStatistics,
      industry: Tuple[float, float],
  ) -> PolicyOutput[Tuple[float, float]]:
    '''
    Compute near-term and long-term growth.

    Args:
      stats: Historical growth statistics
      industry: Industry-derived (near_term, long_term) growth

    Returns:
      PolicyOutput with (near_term, long_term) growth and diagnostics,
      including 'confidence' and 'rationale' (list of strings)
    '''


class BlendedGrowth(GrowthPolicy):
  '''
  Blend of historical median growth and industry growth.

  Historical data gets a higher weight when growth has been steady. The
  long-term figure scales the historical median down before blending.
  A conservatism haircut is applied to both figures before clipping.
  '''

  def __init__(
      self,
      high_confidence_weight: float = 0.7,
      low_confidence_weight: float = 0.5,
      volatility_threshold: float = 0.20,
      long_term_scale: float = 0.6,
      haircut: float = 0.10,
      near_term_clip: Tuple[float, float] = (0.0, 0.50),
      long_term_clip: Tuple[float, float] = (0.0, 0.15),
  ):
    '''
    Initialize blended growth policy.

    Args:
      high_confidence_weight: Historical weight when volatility is low
      low_confidence_weight: Historical weight when volatility is high
      volatility_threshold: Volatility above which confidence is medium
      long_term_scale: Factor applied to the historical median for years 6-10
      haircut: Fractional downward adjustment (default: 10%)
      near_term_clip: (min, max) for near-term growth
      long_term_clip: (min, max) for long-term growth
    '''
    self.high_confidence_weight = high_confidence_weight
    self.low_confidence_weight = low_confidence_weight
    self.volatility_threshold = volatility_threshold
    self.long_term_scale = long_term_scale
    self.haircut = haircut
    self.near_term_clip = near_term_clip
    self.long_term_clip = long_term_clip

  def confidence(self, stats: GrowthStatistics) -> str:
    if not stats.is_sufficient:
      return CONFIDENCE_LOW
    if stats.volatility > self.volatility_threshold:
      return CONFIDENCE_MEDIUM
    return CONFIDENCE_HIGH

  def compute(
      self,
      stats: GrowthStatistics,
      industry: Tuple[float, float],
  ) -> PolicyOutput[Tuple[float, float]]:
    '''Blend, haircut and clip growth.'''
    industry_near, industry_long = industry
    confidence = self.confidence(stats)
    rationale: List[str] = []

    if not stats.is_sufficient:
      near_term = industry_near
      long_term = industry_long
      weight = 0.0
      rationale.append('Using industry defaults due to limited historical data')
    else:
      weight = (self.high_confidence_weight if confidence == CONFIDENCE_HIGH
                else self.low_confidence_weight)
      near_term = stats.median * weight + industry_near * (1 - weight)
      long_term = (stats.median * self.long_term_scale * weight +
                   industry_long * (1 - weight))
      rationale.append(f'Blended historical ({weight:.0%}) and industry '
                       'estimates')
      rationale.append(f'Historical median growth: {stats.median:.1%}')
      rationale.append(f'Trend: {stats.trend}, '
                       f'Volatility: {stats.volatility:.1%}')

    blended_near = near_term
    blended_long = long_term
    near_term *= 1 - self.haircut
    long_term *= 1 - self.haircut
    rationale.append(f'Applied {self.haircut:.0%} conservatism discount')

    raw_near = near_term
    raw_long = long_term
    near_term = max(self.near_term_clip[0],
                    min(self.near_term_clip[1], near_term))
    long_term = max(self.long_term_clip[0],
                    min(self.long_term_clip[1], long_term))

    return PolicyOutput(value=(near_term, long_term),
                        diag={
                            'growth_method': 'blended',
                            'confidence': confidence,
                            'historical_weight': weight,
                            'historical_median': stats.median,
                            'trend': stats.trend,
                            'volatility': stats.volatility,
                            'blended_near_term': blended_near,
                            'blended_long_term': blended_long,
                            'haircut': self.haircut,
                            'raw_near_term': raw_near,
                            'raw_long_term': raw_long,
                            'near_term_clipped': raw_near != near_term,
                            'long_term_clipped': raw_long != long_term,
                            'rationale': rationale,
                        })
