"""报告模块"""

from .chart import ProfitChart
from .reporter import PROFIT_TITLE, SUMMARY_TITLE, Reporter, format_amount

__all__ = [
    "ProfitChart",
    "Reporter",
    "format_amount",
    "SUMMARY_TITLE",
    "PROFIT_TITLE",
]
