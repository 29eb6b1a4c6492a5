"""计算器状态数据模型"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..common.fees import FeeRates, create_fee_rates_from_dict
from ..pricing.engine import SHARES_PER_LOT
from ..pricing.models import ProfitResult, ProfitSample, TradeCost
from ..pricing.tick import IDX_TICK_TABLE, TickTable, create_tick_table_from_config
from ..projection.sampler import DEFAULT_SAMPLE_COUNT, SteppingMode

DEFAULT_PRICE_STEP = 1.0


class InputField(Enum):
    """输入字段，值为本地存储中使用的键名"""
    LOT = "lot"
    PRICE_PER_SHARE = "pricePerShare"
    SELL_LOT = "sellLot"
    SELL_PRICE_PER_SHARE = "sellPricePerShare"
    PRICE_STEP = "priceStep"
    BUY_FEE_PERCENTAGE = "buyFeePercentage"
    SELL_FEE_PERCENTAGE = "sellFeePercentage"

    @property
    def attr(self) -> str:
        """对应 CalculatorInputs 的属性名"""
        return _FIELD_ATTRS[self]

    @property
    def digits_only(self) -> bool:
        """是否只允许输入数字（手数、价格、步长）"""
        return self not in (InputField.BUY_FEE_PERCENTAGE, InputField.SELL_FEE_PERCENTAGE)

    @property
    def is_price(self) -> bool:
        return self in (InputField.PRICE_PER_SHARE, InputField.SELL_PRICE_PER_SHARE)


_FIELD_ATTRS = {
    InputField.LOT: "lot",
    InputField.PRICE_PER_SHARE: "price_per_share",
    InputField.SELL_LOT: "sell_lot",
    InputField.SELL_PRICE_PER_SHARE: "sell_price_per_share",
    InputField.PRICE_STEP: "price_step",
    InputField.BUY_FEE_PERCENTAGE: "buy_fee_percentage",
    InputField.SELL_FEE_PERCENTAGE: "sell_fee_percentage",
}


@dataclass(frozen=True)
class CalculatorInputs:
    """用户输入（保持输入框中的原始字符串）"""
    lot: str = ""  # 买入手数
    price_per_share: str = ""  # 买入每股价格
    sell_lot: str = ""  # 卖出手数（可选）
    sell_price_per_share: str = ""  # 卖出每股价格（可选）
    price_step: str = ""  # 固定步进时的步长（可选）
    buy_fee_percentage: str = ""  # 买入费率（%）
    sell_fee_percentage: str = ""  # 卖出费率（%）

    def get(self, input_field: InputField) -> str:
        return getattr(self, input_field.attr)

    def to_storage_dict(self) -> Dict[str, str]:
        """转换为存储键值对"""
        return {f.value: self.get(f) for f in InputField}


@dataclass(frozen=True)
class CalculatorSettings:
    """计算器设置（来自配置文件，运行期间不变）"""
    fee_rates: FeeRates = field(default_factory=FeeRates)
    stepping: SteppingMode = SteppingMode.TICK_TABLE
    price_step: float = DEFAULT_PRICE_STEP  # 步长输入为空时使用
    sample_count: int = DEFAULT_SAMPLE_COUNT
    shares_per_lot: int = SHARES_PER_LOT
    include_metrics: bool = True
    tick_table: TickTable = IDX_TICK_TABLE

    def __post_init__(self):
        """验证设置"""
        if not isinstance(self.stepping, SteppingMode):
            try:
                object.__setattr__(self, 'stepping', SteppingMode(self.stepping))
            except ValueError:
                raise ValueError(
                    f"步进方式必须为 'tick_table' 或 'fixed'，当前值: {self.stepping}"
                ) from None

        if self.sample_count < 1:
            raise ValueError(f"采样点数量必须为正整数，当前值: {self.sample_count}")
        if self.shares_per_lot < 1:
            raise ValueError(f"每手股数必须为正整数，当前值: {self.shares_per_lot}")
        if not (math.isfinite(self.price_step) and self.price_step > 0):
            raise ValueError(f"默认步长必须为正数，当前值: {self.price_step}")
        if not self.fee_rates.is_valid:
            raise ValueError(f"默认费率必须在 [0, 100) 区间内: {self.fee_rates}")

    def default_inputs(self) -> CalculatorInputs:
        """初始输入：费率输入框预填默认费率，其余为空"""
        return CalculatorInputs(
            buy_fee_percentage=str(self.fee_rates.buy_pct),
            sell_fee_percentage=str(self.fee_rates.sell_pct)
        )


def create_settings_from_config(config, stepping: Optional[str] = None) -> CalculatorSettings:
    """从 Config 创建计算器设置

    Args:
        config: Config 实例
        stepping: 覆盖配置中的步进方式（命令行参数）

    Returns:
        CalculatorSettings 对象
    """
    calc: Dict[str, Any] = config.get('calculator', {}) or {}
    return CalculatorSettings(
        fee_rates=create_fee_rates_from_dict(config.get('fees')),
        stepping=stepping or calc.get('stepping', SteppingMode.TICK_TABLE.value),
        price_step=float(calc.get('price_step', DEFAULT_PRICE_STEP)),
        sample_count=int(calc.get('sample_count', DEFAULT_SAMPLE_COUNT)),
        shares_per_lot=int(calc.get('shares_per_lot', SHARES_PER_LOT)),
        include_metrics=bool(calc.get('include_metrics', True)),
        tick_table=create_tick_table_from_config(config.get('tick_table'))
    )


class ActionType(Enum):
    """用户操作类型"""
    SET_FIELD = "set_field"  # 修改输入框
    STEP_LOT = "step_lot"  # 买入手数 ±1/±5/±10
    STEP_SELL_LOT = "step_sell_lot"  # 卖出手数 ±1/±5/±10
    STEP_PRICE = "step_price"  # 价格上调/下调一档
    SELL_LOT_EQUAL = "sell_lot_equal"  # 卖出手数 = 买入手数
    RESET = "reset"  # 恢复默认输入


@dataclass(frozen=True)
class Action:
    """用户操作"""
    type: ActionType
    field: Optional[InputField] = None
    value: str = ""
    delta: int = 0  # 手数增量，或价格方向（+1 上调 / -1 下调）

    @classmethod
    def set_field(cls, input_field: InputField, value: str) -> "Action":
        return cls(ActionType.SET_FIELD, field=input_field, value=value)

    @classmethod
    def step_lot(cls, delta: int) -> "Action":
        return cls(ActionType.STEP_LOT, delta=delta)

    @classmethod
    def step_sell_lot(cls, delta: int) -> "Action":
        return cls(ActionType.STEP_SELL_LOT, delta=delta)

    @classmethod
    def step_price(cls, input_field: InputField, up: bool) -> "Action":
        return cls(ActionType.STEP_PRICE, field=input_field, delta=1 if up else -1)

    @classmethod
    def sell_lot_equal(cls) -> "Action":
        return cls(ActionType.SELL_LOT_EQUAL)

    @classmethod
    def reset(cls) -> "Action":
        return cls(ActionType.RESET)


@dataclass(frozen=True)
class DerivedResults:
    """由输入推导出的全部结果

    任一结果无法计算（输入缺失、费率非法、除零）时为 None，
    界面直接隐藏对应区块而不显示错误信息。
    """
    fee_rates: Optional[FeeRates] = None  # 实际使用的费率
    cost: Optional[TradeCost] = None  # 保本价计算
    min_sell_price_per_share: Optional[float] = None  # 保本每股价（向上取整）
    break_even_tick_price: Optional[float] = None  # 保本的最低合法报价
    profit: Optional[ProfitResult] = None  # 盈亏计算
    curve: Optional[Tuple[ProfitSample, ...]] = None  # 盈亏曲线采样点

    @property
    def is_empty(self) -> bool:
        return self.cost is None and self.profit is None and self.curve is None
