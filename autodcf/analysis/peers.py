'''
Peer set summary.

The provider may supply a small peer set of {ticker, peRatio, fcfMargin,
growthPct} records. This module reduces it to medians for comparison
against the subject company's assumptions.
'''

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from autodcf.statements import to_float


@dataclass(frozen=True)
class PeerSummary:
  '''
  Median multiples across a peer set.

  Attributes:
    tickers: Peer tickers in input order
    median_pe_ratio: Median P/E ratio
    median_fcf_margin: Median FCF margin (fractional)
    median_growth_pct: Median growth, in percent as supplied
    count: Number of peers
  '''
  tickers: List[str] = field(default_factory=list)
  median_pe_ratio: Optional[float] = None
  median_fcf_margin: Optional[float] = None
  median_growth_pct: Optional[float] = None
  count: int = 0

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


def _median(values: pd.Series) -> Optional[float]:
  values = values.dropna()
  if values.empty:
    return None
  return float(values.median())


def summarize_peers(
    peers: Optional[Sequence[Mapping[str, Any]]]) -> PeerSummary:
  '''
  Summarize a peer set.

  Missing or non-numeric values are ignored per column.

  Args:
    peers: Peer records with ticker, peRatio, fcfMargin, growthPct

  Returns:
    PeerSummary (all medians None for an empty set)
  '''
  records = [p for p in (peers or []) if isinstance(p, Mapping)]
  if not records:
    return PeerSummary()

  frame = pd.DataFrame({
      'ticker': [str(p.get('ticker', '')) for p in records],
      'pe_ratio': [to_float(p.get('peRatio')) for p in records],
      'fcf_margin': [to_float(p.get('fcfMargin')) for p in records],
      'growth_pct': [to_float(p.get('growthPct')) for p in records],
  })
  for column in ('pe_ratio', 'fcf_margin', 'growth_pct'):
    frame[column] = pd.to_numeric(frame[column], errors='coerce')

  return PeerSummary(
      tickers=frame['ticker'].tolist(),
      median_pe_ratio=_median(frame['pe_ratio']),
      median_fcf_margin=_median(frame['fcf_margin']),
      median_growth_pct=_median(frame['growth_pct']),
      count=len(frame),
  )
