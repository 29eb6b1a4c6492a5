"""定价模块：保本价、盈亏与最小报价单位"""

from .engine import SHARES_PER_LOT, compute_break_even, compute_profit
from .models import ProfitResult, ProfitSample, TradeCost
from .tick import (
    IDX_TICK_TABLE,
    TickBand,
    TickTable,
    ceil_to_tick,
    create_tick_table_from_config,
    next_tick_price,
    previous_tick_price,
    round_to_tick,
    tick_size_for,
)

__all__ = [
    'SHARES_PER_LOT',
    'compute_break_even',
    'compute_profit',
    'TradeCost',
    'ProfitResult',
    'ProfitSample',
    'TickBand',
    'TickTable',
    'IDX_TICK_TABLE',
    'create_tick_table_from_config',
    'tick_size_for',
    'round_to_tick',
    'ceil_to_tick',
    'next_tick_price',
    'previous_tick_price',
]
