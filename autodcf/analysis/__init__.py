'''
Valuation analysis utilities.

  from autodcf.analysis.sanity import check_sanity
  from autodcf.analysis.sensitivity import SensitivityTableBuilder
  from autodcf.analysis.peers import summarize_peers
'''

__all__ = [
    'check_sanity',
    'summarize_peers',
    'SensitivityTableBuilder',
]

from autodcf.analysis.peers import summarize_peers
from autodcf.analysis.sanity import check_sanity
from autodcf.analysis.sensitivity import SensitivityTableBuilder
