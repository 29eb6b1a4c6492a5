"""盈亏曲线采样模块

从起始卖出价开始逐档（或按固定步长）上调价格，
对每个价格调用盈亏计算，生成固定数量的采样点用于绘图。
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import pandas as pd
from loguru import logger

from ..pricing.engine import SHARES_PER_LOT, compute_profit
from ..pricing.models import ProfitSample
from ..pricing.tick import IDX_TICK_TABLE, TickTable

DEFAULT_SAMPLE_COUNT = 10


class SteppingMode(Enum):
    """价格步进方式"""
    TICK_TABLE = "tick_table"  # 按最小报价单位表逐档
    FIXED = "fixed"  # 按固定步长


@dataclass(frozen=True)
class StepPolicy:
    """步进策略"""
    stepping: SteppingMode = SteppingMode.TICK_TABLE
    step: Optional[float] = None  # 固定步长，仅 FIXED 使用
    
    def __post_init__(self):
        if not isinstance(self.stepping, SteppingMode):
            try:
                object.__setattr__(self, 'stepping', SteppingMode(self.stepping))
            except ValueError:
                raise ValueError(
                    f"步进方式必须为 'tick_table' 或 'fixed'，当前值: {self.stepping}"
                ) from None
        
        if self.stepping is SteppingMode.FIXED:
            if self.step is None or not math.isfinite(self.step) or self.step <= 0:
                raise ValueError(f"固定步长必须为正数，当前值: {self.step}")
    
    def next_price(self, price: float, tick_table: TickTable = IDX_TICK_TABLE) -> float:
        """返回下一个采样价格"""
        if self.stepping is SteppingMode.FIXED:
            return price + self.step
        return tick_table.next_tick_price(price)
    
    def previous_price(self, price: float, tick_table: TickTable = IDX_TICK_TABLE) -> float:
        """返回上一个价格（用于价格输入框的下调按钮）"""
        if self.stepping is SteppingMode.FIXED:
            return price - self.step
        return tick_table.previous_tick_price(price)


def sample_profit_curve(
    total_buying_price: float,
    bought_lots: float,
    sold_lots: float,
    start_price: float,
    step_policy: StepPolicy,
    buy_fee_rate_pct: float,
    sell_fee_rate_pct: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    tick_table: TickTable = IDX_TICK_TABLE,
    shares_per_lot: int = SHARES_PER_LOT,
    include_metrics: bool = True
) -> List[ProfitSample]:
    """生成盈亏曲线采样点
    
    Args:
        total_buying_price: 买入总价（不含费用）
        bought_lots: 买入手数
        sold_lots: 卖出手数
        start_price: 起始每股卖出价
        step_policy: 步进策略
        buy_fee_rate_pct: 买入费率（%）
        sell_fee_rate_pct: 卖出费率（%）
        sample_count: 采样点数量
        tick_table: 最小报价单位表（TICK_TABLE 步进时使用）
        shares_per_lot: 每手股数
        include_metrics: 是否计算收益率与每股盈亏

    Returns:
        按价格严格递增的 sample_count 个采样点
    """
    if sample_count < 1:
        raise ValueError(f"采样点数量必须为正整数，当前值: {sample_count}")
    if start_price is None or not math.isfinite(start_price):
        raise ValueError(f"起始价格无效: {start_price}")
    
    samples: List[ProfitSample] = []
    price = start_price
    while len(samples) < sample_count:
        result = compute_profit(
            total_buying_price,
            price * sold_lots * shares_per_lot,
            bought_lots,
            sold_lots,
            buy_fee_rate_pct,
            sell_fee_rate_pct,
            shares_per_lot=shares_per_lot,
            include_metrics=include_metrics
        )
        samples.append(ProfitSample(price=price, result=result))
        price = step_policy.next_price(price, tick_table)
    
    logger.debug(
        f"生成盈亏曲线: 起始价={start_price}, 结束价={samples[-1].price}, "
        f"步进={step_policy.stepping.value}, 点数={len(samples)}"
    )
    return samples


def curve_to_frame(samples: List[ProfitSample]) -> pd.DataFrame:
    """将采样点转换为 DataFrame
    
    Args:
        samples: 采样点列表
        
    Returns:
        列为 price / buy_fee / sell_fee / pure_profit_before_fee /
        pure_profit_after_fee / profit_percentage / average_profit_per_share
    """
    columns = [
        'price', 'buy_fee', 'sell_fee', 'pure_profit_before_fee',
        'pure_profit_after_fee', 'profit_percentage', 'average_profit_per_share'
    ]
    rows = []
    for sample in samples:
        r = sample.result
        rows.append({
            'price': sample.price,
            'buy_fee': r.buy_fee,
            'sell_fee': r.sell_fee,
            'pure_profit_before_fee': r.pure_profit_before_fee,
            'pure_profit_after_fee': r.pure_profit_after_fee,
            'profit_percentage': r.profit_percentage,
            'average_profit_per_share': r.average_profit_per_share,
        })
    return pd.DataFrame(rows, columns=columns)
