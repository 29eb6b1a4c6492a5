"""保本价与盈亏计算

纯函数实现，不抛出数值异常：除零按 IEEE 规则得到 inf/NaN，
由调用方将非有限结果视为"无法计算"。
"""

import math

from ..common.fees import FeeRates
from .models import ProfitResult, TradeCost

# 每手股数
SHARES_PER_LOT = 100


def _divide(numerator: float, denominator: float) -> float:
    """除法，分母为 0 时返回 ±inf 或 NaN 而不是抛出异常"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def compute_break_even(
    total_buying_price: float,
    buy_fee_rate_pct: float,
    sell_fee_rate_pct: float
) -> TradeCost:
    """计算保本所需的最低卖出总价
    
    先计入买入费用得到成本，再反推扣除卖出费用后恰好等于成本的卖出价：
    minimum_sell_price = 成本 / (1 - 卖出费率)
    
    Args:
        total_buying_price: 买入总价（不含费用）
        buy_fee_rate_pct: 买入费率（%），例如 0.1513
        sell_fee_rate_pct: 卖出费率（%），例如 0.2513
        
    Returns:
        TradeCost，卖出费率 >= 100% 时 minimum_sell_price 等字段为 NaN
    """
    rates = FeeRates(buy_pct=buy_fee_rate_pct, sell_pct=sell_fee_rate_pct)
    sell_rate = rates.sell_rate
    
    buy_fee = rates.calculate_buy_fee(total_buying_price)
    total_with_fee = total_buying_price + buy_fee
    
    if sell_rate >= 1:
        # 分母为 0 或负数，不存在保本价
        minimum_sell_price = math.nan
    else:
        minimum_sell_price = total_with_fee / (1 - sell_rate)
    
    sell_fee = rates.calculate_sell_fee(minimum_sell_price)
    net_sell_price = minimum_sell_price - sell_fee
    
    return TradeCost(
        total_buying_price=total_buying_price,
        buy_fee=buy_fee,
        total_buying_price_with_fee=total_with_fee,
        minimum_sell_price=minimum_sell_price,
        sell_fee=sell_fee,
        net_sell_price=net_sell_price
    )


def compute_profit(
    total_buying_price: float,
    total_sell_price: float,
    bought_lots: float,
    sold_lots: float,
    buy_fee_rate_pct: float,
    sell_fee_rate_pct: float,
    shares_per_lot: int = SHARES_PER_LOT,
    include_metrics: bool = True
) -> ProfitResult:
    """按实际卖出价计算盈亏
    
    支持部分卖出：买入成本按 sold_lots / bought_lots 折算，
    买入费用按折算后的成本计算。
    
    Args:
        total_buying_price: 全部买入手数的买入总价（不含费用）
        total_sell_price: 卖出总价（不含费用）
        bought_lots: 买入手数
        sold_lots: 卖出手数
        buy_fee_rate_pct: 买入费率（%）
        sell_fee_rate_pct: 卖出费率（%）
        shares_per_lot: 每手股数
        include_metrics: 是否计算收益率与每股盈亏
        
    Returns:
        ProfitResult，bought_lots 为 0 时结果为非有限值
    """
    rates = FeeRates(buy_pct=buy_fee_rate_pct, sell_pct=sell_fee_rate_pct)
    
    proportionate_buy_cost = total_buying_price * _divide(sold_lots, bought_lots)
    buy_fee = rates.calculate_buy_fee(proportionate_buy_cost)
    cost_basis = proportionate_buy_cost + buy_fee
    
    sell_fee = rates.calculate_sell_fee(total_sell_price)
    net_sell_price = total_sell_price - sell_fee
    
    pure_profit_before_fee = total_sell_price - proportionate_buy_cost
    pure_profit_after_fee = net_sell_price - cost_basis
    
    profit_percentage = None
    average_profit_per_share = None
    if include_metrics:
        profit_percentage = _divide(pure_profit_after_fee, cost_basis) * 100
        average_profit_per_share = _divide(
            pure_profit_after_fee, sold_lots * shares_per_lot
        )
    
    return ProfitResult(
        buy_fee=buy_fee,
        sell_fee=sell_fee,
        pure_profit_before_fee=pure_profit_before_fee,
        pure_profit_after_fee=pure_profit_after_fee,
        profit_percentage=profit_percentage,
        average_profit_per_share=average_profit_per_share
    )
