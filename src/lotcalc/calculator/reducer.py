"""计算器状态归约

apply_action: (输入, 操作) -> 新输入
derive: 输入 -> 推导结果

两者都是纯函数，不读写存储，可脱离界面直接测试。
"""

import math
from dataclasses import replace
from typing import Optional

from ..common.fees import FeeRates
from ..common.formatting import format_number, parse_float, parse_int, round_up, sanitize_digits
from ..pricing.engine import compute_break_even, compute_profit
from ..projection.sampler import StepPolicy, SteppingMode, sample_profit_curve
from .models import (
    Action,
    ActionType,
    CalculatorInputs,
    CalculatorSettings,
    DerivedResults,
    InputField,
)


def _with_field(inputs: CalculatorInputs, input_field: InputField, value: str) -> CalculatorInputs:
    return replace(inputs, **{input_field.attr: value})


def _lot_or_zero(text: str) -> int:
    value = parse_int(text)
    return 0 if math.isnan(value) else int(value)


def _price_step(inputs: CalculatorInputs, settings: CalculatorSettings) -> float:
    """固定步长：优先使用输入框中的值，为空时使用配置默认值"""
    step = parse_float(inputs.price_step)
    if math.isnan(step):
        return settings.price_step
    return step


def _step_policy(inputs: CalculatorInputs, settings: CalculatorSettings) -> Optional[StepPolicy]:
    """构造步进策略，固定步长无效时返回 None"""
    if settings.stepping is SteppingMode.TICK_TABLE:
        return StepPolicy(SteppingMode.TICK_TABLE)

    step = _price_step(inputs, settings)
    if not math.isfinite(step) or step <= 0:
        return None
    return StepPolicy(SteppingMode.FIXED, step)


def _step_price(
    inputs: CalculatorInputs,
    input_field: InputField,
    direction: int,
    settings: CalculatorSettings
) -> CalculatorInputs:
    price = parse_float(inputs.get(input_field))
    if math.isnan(price):
        return inputs

    policy = _step_policy(inputs, settings)
    if policy is None:
        return inputs

    if direction > 0:
        new_price = policy.next_price(price, settings.tick_table)
    else:
        new_price = policy.previous_price(price, settings.tick_table)
        if new_price < 0:
            return inputs

    return _with_field(inputs, input_field, format_number(new_price))


def apply_action(
    inputs: CalculatorInputs,
    action: Action,
    settings: CalculatorSettings
) -> CalculatorInputs:
    """应用一次用户操作，返回新的输入状态

    Args:
        inputs: 当前输入
        action: 用户操作
        settings: 计算器设置

    Returns:
        新的输入（未变化时返回原对象）
    """
    if action.type is ActionType.SET_FIELD:
        if action.field is None:
            raise ValueError("SET_FIELD 操作必须指定字段")
        value = action.value or ""
        if action.field.digits_only:
            value = sanitize_digits(value)
        return _with_field(inputs, action.field, value)

    if action.type is ActionType.STEP_LOT:
        new_lot = max(_lot_or_zero(inputs.lot) + action.delta, 0)
        return replace(inputs, lot=format_number(new_lot))

    if action.type is ActionType.STEP_SELL_LOT:
        new_lot = max(_lot_or_zero(inputs.sell_lot) + action.delta, 0)
        return replace(inputs, sell_lot=format_number(new_lot))

    if action.type is ActionType.STEP_PRICE:
        if action.field is None or not action.field.is_price:
            raise ValueError(f"STEP_PRICE 操作只适用于价格字段，当前字段: {action.field}")
        return _step_price(inputs, action.field, action.delta, settings)

    if action.type is ActionType.SELL_LOT_EQUAL:
        return replace(inputs, sell_lot=inputs.lot)

    if action.type is ActionType.RESET:
        return settings.default_inputs()

    raise ValueError(f"未知操作类型: {action.type}")


def _parse_price(text: str, settings: CalculatorSettings) -> float:
    """解析价格，按报价单位表步进时取整到合法报价"""
    price = parse_float(text)
    if settings.stepping is SteppingMode.TICK_TABLE:
        return settings.tick_table.round_to_tick(price)
    return price


def _parse_fee(text: str, default: float) -> float:
    """解析费率，为空或无法解析时使用默认费率
    
    费率按原样解析，不去除逗号，"0,25" 视为无法解析。
    """
    try:
        value = float(text.strip())
    except ValueError:
        return default
    return default if math.isnan(value) else value


def derive(inputs: CalculatorInputs, settings: CalculatorSettings) -> DerivedResults:
    """由输入推导保本价、盈亏与盈亏曲线

    买入手数或买入价缺失、费率超出 [0, 100) 时所有结果均为 None；
    其余各区块在结果非有限时单独隐藏。

    Args:
        inputs: 当前输入
        settings: 计算器设置

    Returns:
        DerivedResults
    """
    spl = settings.shares_per_lot

    lot = parse_int(inputs.lot)
    price = _parse_price(inputs.price_per_share, settings)
    sell_lot = parse_int(inputs.sell_lot)
    sell_price = _parse_price(inputs.sell_price_per_share, settings)

    fee_rates = FeeRates(
        buy_pct=_parse_fee(inputs.buy_fee_percentage, settings.fee_rates.buy_pct),
        sell_pct=_parse_fee(inputs.sell_fee_percentage, settings.fee_rates.sell_pct)
    )

    total_buying_price = lot * price * spl
    if not math.isfinite(total_buying_price):
        return DerivedResults()
    if not fee_rates.is_valid:
        return DerivedResults(fee_rates=fee_rates)

    # 保本价
    cost = compute_break_even(total_buying_price, fee_rates.buy_pct, fee_rates.sell_pct)
    min_sell_price_per_share = None
    break_even_tick_price = None
    if cost.is_finite:
        shares = lot * spl
        if shares > 0:
            per_share = cost.minimum_sell_price / shares
            min_sell_price_per_share = round_up(per_share)
            break_even_tick_price = settings.tick_table.ceil_to_tick(per_share)
    else:
        cost = None

    # 盈亏
    profit = None
    total_sell_price = sell_lot * sell_price * spl
    if math.isfinite(total_sell_price):
        profit = compute_profit(
            total_buying_price,
            total_sell_price,
            lot,
            sell_lot,
            fee_rates.buy_pct,
            fee_rates.sell_pct,
            shares_per_lot=spl,
            include_metrics=settings.include_metrics
        )
        if not profit.is_finite:
            profit = None

    # 盈亏曲线：未填写卖出价时从保本报价开始，未填写卖出手数时按全部卖出
    curve = None
    start_price = sell_price if math.isfinite(sell_price) else break_even_tick_price
    sold_lots = sell_lot if math.isfinite(sell_lot) else lot
    policy = _step_policy(inputs, settings)
    if start_price is not None and math.isfinite(start_price) and policy is not None:
        samples = sample_profit_curve(
            total_buying_price,
            lot,
            sold_lots,
            start_price,
            policy,
            fee_rates.buy_pct,
            fee_rates.sell_pct,
            sample_count=settings.sample_count,
            tick_table=settings.tick_table,
            shares_per_lot=spl,
            include_metrics=settings.include_metrics
        )
        if all(sample.result.is_finite for sample in samples):
            curve = tuple(samples)

    return DerivedResults(
        fee_rates=fee_rates,
        cost=cost,
        min_sell_price_per_share=min_sell_price_per_share,
        break_even_tick_price=break_even_tick_price,
        profit=profit,
        curve=curve
    )
