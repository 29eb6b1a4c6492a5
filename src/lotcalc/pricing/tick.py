"""最小报价单位（tick）模块

按价格分档确定最小报价单位，用于价格取整与逐档步进。
分档表是配置数据，默认值为 IDX 的价格档位：

    价格 < 200        -> 1
    200 <= 价格 < 500  -> 2
    500 <= 价格 < 2000 -> 5
    2000 <= 价格 < 5000 -> 10
    价格 >= 5000       -> 25
"""

import math
from bisect import bisect_right
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

_EPS = 1e-9


def _is_multiple(value: float, step: float) -> bool:
    q = value / step
    return abs(q - round(q)) < _EPS


def _snap_quotient(price: float, tick: float) -> float:
    """price / tick，消除浮点误差（如 200.00000000003 视为 200）"""
    q = price / tick
    nearest = round(q)
    if abs(q - nearest) < _EPS:
        return float(nearest)
    return q


@dataclass(frozen=True)
class TickBand:
    """价格档位：lower_bound 及以上（直到下一档）使用 tick_size"""
    lower_bound: float
    tick_size: float


@dataclass(frozen=True)
class TickTable:
    """最小报价单位表
    
    档位按 lower_bound 严格递增，第一档从 0 开始。
    每个档位下界必须同时是本档与上一档 tick 的整数倍，
    这样取整结果跨档时仍然落在合法价格上，round_to_tick 幂等。
    """
    bands: Tuple[TickBand, ...]
    
    def __post_init__(self):
        """验证分档表"""
        bands = tuple(self.bands)
        object.__setattr__(self, 'bands', bands)
        
        if not bands:
            raise ValueError("报价单位表至少需要一个档位")
        
        if bands[0].lower_bound != 0:
            raise ValueError(f"第一档下界必须为 0，当前值: {bands[0].lower_bound}")
        
        for band in bands:
            if not band.tick_size > 0:
                raise ValueError(f"报价单位必须为正数: {band}")
        
        for prev, band in zip(bands, bands[1:]):
            if band.lower_bound <= prev.lower_bound:
                raise ValueError(
                    f"档位下界必须递增: {prev.lower_bound} -> {band.lower_bound}"
                )
            if band.tick_size < prev.tick_size:
                raise ValueError(
                    f"报价单位不能随价格递减: {prev.tick_size} -> {band.tick_size}"
                )
            if not (_is_multiple(band.lower_bound, band.tick_size)
                    and _is_multiple(band.lower_bound, prev.tick_size)):
                raise ValueError(
                    f"档位下界 {band.lower_bound} 必须是 {prev.tick_size} 和 "
                    f"{band.tick_size} 的整数倍"
                )
    
    @property
    def lower_bounds(self) -> List[float]:
        return [band.lower_bound for band in self.bands]
    
    def tick_size_for(self, price: float) -> float:
        """返回价格所在档位的最小报价单位
        
        Args:
            price: 每股价格，低于 0 时按第一档处理
            
        Returns:
            最小报价单位
        """
        idx = bisect_right(self.lower_bounds, price) - 1
        return self.bands[max(idx, 0)].tick_size
    
    def round_to_tick(self, price: float) -> float:
        """四舍五入到所在档位的最近合法价格（0.5 向上）
        
        Args:
            price: 任意价格
            
        Returns:
            合法价格，非有限输入返回 NaN
        """
        if price is None or not math.isfinite(price):
            return math.nan
        tick = self.tick_size_for(price)
        return math.floor(_snap_quotient(price, tick) + 0.5) * tick
    
    def ceil_to_tick(self, price: float) -> float:
        """向上取到不低于 price 的最小合法价格"""
        if price is None or not math.isfinite(price):
            return math.nan
        tick = self.tick_size_for(price)
        return math.ceil(_snap_quotient(price, tick)) * tick
    
    def next_tick_price(self, price: float) -> float:
        """上调一档后的合法价格"""
        if price is None or not math.isfinite(price):
            return math.nan
        return self.round_to_tick(price + self.tick_size_for(price))
    
    def previous_tick_price(self, price: float) -> float:
        """下调一档后的合法价格（可能为负，由调用方判断）"""
        if price is None or not math.isfinite(price):
            return math.nan
        return self.round_to_tick(price - self.tick_size_for(price))
    
    def to_dict_list(self) -> List[Dict[str, float]]:
        """导出为配置格式"""
        return [
            {'lower_bound': band.lower_bound, 'tick_size': band.tick_size}
            for band in self.bands
        ]
    
    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[float, float]]) -> "TickTable":
        """从 (lower_bound, tick_size) 序列创建"""
        return cls(tuple(TickBand(lower, tick) for lower, tick in pairs))


IDX_TICK_TABLE = TickTable.from_pairs([
    (0, 1),
    (200, 2),
    (500, 5),
    (2000, 10),
    (5000, 25),
])


def create_tick_table_from_config(items: Optional[List[Dict[str, Any]]]) -> TickTable:
    """从配置列表创建报价单位表
    
    Args:
        items: [{'lower_bound': 0, 'tick_size': 1}, ...]，为空时返回 IDX 默认表
        
    Returns:
        TickTable 对象
    """
    if not items:
        return IDX_TICK_TABLE
    
    pairs = sorted(
        (item['lower_bound'], item['tick_size']) for item in items
    )
    return TickTable.from_pairs(pairs)


def tick_size_for(price: float, table: TickTable = IDX_TICK_TABLE) -> float:
    """返回价格对应的最小报价单位"""
    return table.tick_size_for(price)


def round_to_tick(price: float, table: TickTable = IDX_TICK_TABLE) -> float:
    """将价格取整到合法报价"""
    return table.round_to_tick(price)


def ceil_to_tick(price: float, table: TickTable = IDX_TICK_TABLE) -> float:
    """将价格向上取到合法报价"""
    return table.ceil_to_tick(price)


def next_tick_price(price: float, table: TickTable = IDX_TICK_TABLE) -> float:
    return table.next_tick_price(price)


def previous_tick_price(price: float, table: TickTable = IDX_TICK_TABLE) -> float:
    return table.previous_tick_price(price)
