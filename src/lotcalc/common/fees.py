"""交易费率模型"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

# 默认费率（百分比），对应券商常见的买入/卖出费率
DEFAULT_BUY_FEE_PCT = 0.1513
DEFAULT_SELL_FEE_PCT = 0.2513


@dataclass(frozen=True)
class FeeRates:
    """买卖双向费率
    
    费率以百分比表示，例如 0.25 表示 0.25%。
    有效区间为 [0, 100)，卖出费率达到 100% 时无法求得保本价。
    """
    buy_pct: float = DEFAULT_BUY_FEE_PCT
    sell_pct: float = DEFAULT_SELL_FEE_PCT
    
    @property
    def buy_rate(self) -> float:
        """买入费率（小数）"""
        return self.buy_pct / 100
    
    @property
    def sell_rate(self) -> float:
        """卖出费率（小数）"""
        return self.sell_pct / 100
    
    @property
    def is_valid(self) -> bool:
        """两个费率是否都在 [0, 100) 区间内"""
        return all(
            math.isfinite(pct) and 0 <= pct < 100
            for pct in (self.buy_pct, self.sell_pct)
        )
    
    def calculate_buy_fee(self, amount: float) -> float:
        """计算买入费用
        
        Args:
            amount: 买入金额
            
        Returns:
            买入费用
        """
        return amount * self.buy_rate
    
    def calculate_sell_fee(self, amount: float) -> float:
        """计算卖出费用
        
        Args:
            amount: 卖出金额
            
        Returns:
            卖出费用
        """
        return amount * self.sell_rate


def get_default_fee_rates() -> FeeRates:
    """获取默认费率"""
    return FeeRates(
        buy_pct=DEFAULT_BUY_FEE_PCT,
        sell_pct=DEFAULT_SELL_FEE_PCT
    )


def create_fee_rates_from_dict(config_dict: Optional[Dict[str, Any]]) -> FeeRates:
    """从配置字典创建费率对象
    
    Args:
        config_dict: 配置字典，通常来自 YAML 配置文件的 fees 段
        
    Returns:
        FeeRates 对象
    """
    config_dict = config_dict or {}
    return FeeRates(
        buy_pct=float(config_dict.get('buy_pct', DEFAULT_BUY_FEE_PCT)),
        sell_pct=float(config_dict.get('sell_pct', DEFAULT_SELL_FEE_PCT))
    )
