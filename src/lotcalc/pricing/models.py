"""定价计算数据模型"""

import math
from dataclasses import dataclass, fields
from typing import Optional


def _all_finite(obj) -> bool:
    """检查 dataclass 中所有非 None 的数值字段是否为有限值"""
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is not None and not math.isfinite(value):
            return False
    return True


@dataclass(frozen=True)
class TradeCost:
    """保本卖出价计算结果
    
    所有金额均为整笔交易金额（非每股）。
    net_sell_price 按构造等于 total_buying_price_with_fee。
    """
    total_buying_price: float  # 买入总价（不含费用）
    buy_fee: float  # 买入费用
    total_buying_price_with_fee: float  # 含买入费用的总成本
    minimum_sell_price: float  # 保本所需的最低卖出总价
    sell_fee: float  # 按最低卖出价计算的卖出费用
    net_sell_price: float  # 扣除卖出费用后的净额
    
    @property
    def is_finite(self) -> bool:
        """是否可用（任一字段为 NaN/inf 则视为无法计算）"""
        return _all_finite(self)


@dataclass(frozen=True)
class ProfitResult:
    """按实际卖出价计算的盈亏结果，可正可负"""
    buy_fee: float  # 按卖出手数折算的买入费用
    sell_fee: float  # 卖出费用
    pure_profit_before_fee: float  # 费前盈亏
    pure_profit_after_fee: float  # 费后盈亏
    profit_percentage: Optional[float] = None  # 费后收益率（%）
    average_profit_per_share: Optional[float] = None  # 每股费后盈亏
    
    @property
    def total_fee(self) -> float:
        """买卖双向费用合计"""
        return self.buy_fee + self.sell_fee
    
    @property
    def is_finite(self) -> bool:
        return _all_finite(self)


@dataclass(frozen=True)
class ProfitSample:
    """盈亏曲线上的一个采样点"""
    price: float  # 每股卖出价
    result: ProfitResult
