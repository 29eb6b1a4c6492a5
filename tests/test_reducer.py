"""测试计算器状态归约与结果推导"""

import math

import pytest

from src.lotcalc.calculator import (
    Action,
    ActionType,
    CalculatorInputs,
    CalculatorSettings,
    InputField,
    apply_action,
    derive,
)


def _inputs(**kwargs):
    values = {'buy_fee_percentage': '0.1513', 'sell_fee_percentage': '0.2513'}
    values.update(kwargs)
    return CalculatorInputs(**values)


# ===== apply_action =====

def test_set_field_keeps_digits_only(settings):
    """手数与价格只保留数字"""
    inputs = apply_action(_inputs(), Action.set_field(InputField.LOT, "1,0a0"), settings)
    assert inputs.lot == "100"
    
    inputs = apply_action(inputs, Action.set_field(InputField.SELL_PRICE_PER_SHARE, "Rp 1.050"), settings)
    assert inputs.sell_price_per_share == "1050"


def test_set_fee_field_verbatim(settings):
    """费率输入原样保存"""
    inputs = apply_action(_inputs(), Action.set_field(InputField.BUY_FEE_PERCENTAGE, "0.15"), settings)
    assert inputs.buy_fee_percentage == "0.15"


@pytest.mark.parametrize("lot, delta, expected", [
    ("", 5, "5"),
    ("3", -5, "0"),
    ("10", -1, "9"),
    ("1,000", 10, "1,010"),
    ("995", 10, "1,005"),
])
def test_step_lot(settings, lot, delta, expected):
    """买入手数增减，不低于 0"""
    inputs = apply_action(_inputs(lot=lot), Action.step_lot(delta), settings)
    assert inputs.lot == expected


def test_step_sell_lot(settings):
    """卖出手数增减，不低于 0"""
    inputs = apply_action(_inputs(sell_lot="2"), Action.step_sell_lot(5), settings)
    assert inputs.sell_lot == "7"
    
    inputs = apply_action(inputs, Action.step_sell_lot(-10), settings)
    assert inputs.sell_lot == "0"


def test_sell_lot_equal(settings):
    """卖出手数 = 买入手数"""
    inputs = apply_action(_inputs(lot="1,500", sell_lot="3"), Action.sell_lot_equal(), settings)
    assert inputs.sell_lot == "1,500"
    assert inputs.lot == "1,500"


@pytest.mark.parametrize("price, up, expected", [
    ("1000", True, "1,005"),
    ("1,000", False, "995"),
    ("4990", True, "5,000"),
    ("199", True, "200"),
    ("1003", True, "1,010"),
])
def test_step_price_tick_table(settings, price, up, expected):
    """价格上调/下调一档"""
    action = Action.step_price(InputField.PRICE_PER_SHARE, up)
    inputs = apply_action(_inputs(price_per_share=price), action, settings)
    assert inputs.price_per_share == expected


def test_step_price_noop(settings):
    """价格为空或下调后为负时不变"""
    inputs = _inputs(sell_price_per_share="")
    assert apply_action(inputs, Action.step_price(InputField.SELL_PRICE_PER_SHARE, True), settings) is inputs
    
    inputs = _inputs(sell_price_per_share="0")
    assert apply_action(inputs, Action.step_price(InputField.SELL_PRICE_PER_SHARE, False), settings) is inputs


def test_step_price_fixed(fixed_settings):
    """固定步长：优先使用输入的步长"""
    inputs = _inputs(price_per_share="1000", price_step="10")
    
    up = apply_action(inputs, Action.step_price(InputField.PRICE_PER_SHARE, True), fixed_settings)
    assert up.price_per_share == "1,010"
    
    down = apply_action(inputs, Action.step_price(InputField.PRICE_PER_SHARE, False), fixed_settings)
    assert down.price_per_share == "990"
    
    # 步长为空时使用默认步长
    inputs = _inputs(price_per_share="1000")
    up = apply_action(inputs, Action.step_price(InputField.PRICE_PER_SHARE, True), fixed_settings)
    assert up.price_per_share == "1,001"
    
    # 步长为 0 时不变
    inputs = _inputs(price_per_share="1000", price_step="0")
    assert apply_action(inputs, Action.step_price(InputField.PRICE_PER_SHARE, True), fixed_settings) is inputs
    
    # 下调后为负时不变
    inputs = _inputs(price_per_share="5", price_step="10")
    assert apply_action(inputs, Action.step_price(InputField.PRICE_PER_SHARE, False), fixed_settings) is inputs


def test_invalid_actions(settings):
    """非法操作报错"""
    with pytest.raises(ValueError):
        apply_action(_inputs(), Action.step_price(InputField.LOT, True), settings)
    with pytest.raises(ValueError):
        apply_action(_inputs(), Action(ActionType.SET_FIELD), settings)


def test_reset(settings):
    """恢复默认输入"""
    inputs = apply_action(_inputs(lot="10", price_per_share="1000"), Action.reset(), settings)
    
    assert inputs == settings.default_inputs()
    assert inputs.lot == ""
    assert inputs.buy_fee_percentage == "0.1513"
    assert inputs.sell_fee_percentage == "0.2513"


# ===== derive =====

def test_derive_empty(settings):
    """买入信息不完整时没有任何结果"""
    results = derive(_inputs(), settings)
    assert results.is_empty
    
    results = derive(_inputs(lot="10"), settings)
    assert results.is_empty


def test_derive_break_even_only(settings):
    """只填写买入信息：保本价 + 从保本报价开始的曲线"""
    results = derive(_inputs(lot="10", price_per_share="1,000"), settings)
    
    assert results.cost.total_buying_price == 1_000_000
    assert math.ceil(results.cost.minimum_sell_price) == 1_004_037
    assert results.min_sell_price_per_share == 1005
    assert results.break_even_tick_price == 1005
    assert results.profit is None
    
    assert len(results.curve) == 10
    assert results.curve[0].price == 1005
    assert results.curve[0].result.pure_profit_after_fee > 0


def test_derive_profit(settings):
    """填写卖出信息后计算盈亏，曲线从卖出价开始"""
    results = derive(
        _inputs(lot="10", price_per_share="1000", sell_lot="10", sell_price_per_share="1050"),
        settings
    )
    
    assert results.profit.pure_profit_after_fee == pytest.approx(45_848.35)
    assert results.profit.profit_percentage == pytest.approx(4.5779, abs=1e-4)
    assert [s.price for s in results.curve][:3] == [1050, 1055, 1060]


def test_derive_partial_exit(settings):
    """部分卖出"""
    full = derive(_inputs(lot="10", price_per_share="1000", sell_lot="10", sell_price_per_share="1050"), settings)
    partial = derive(_inputs(lot="10", price_per_share="1000", sell_lot="4", sell_price_per_share="1050"), settings)
    
    assert partial.profit.pure_profit_after_fee == pytest.approx(full.profit.pure_profit_after_fee * 0.4)
    assert partial.curve[0].result.pure_profit_after_fee == pytest.approx(partial.profit.pure_profit_after_fee)


def test_derive_rounds_prices_to_tick(settings, fixed_settings):
    """按报价单位表步进时价格取整到合法报价，固定步长时不取整"""
    inputs = _inputs(lot="10", price_per_share="1003")
    
    assert derive(inputs, settings).cost.total_buying_price == 1_005_000
    assert derive(inputs, fixed_settings).cost.total_buying_price == 1_003_000


def test_derive_fixed_curve(fixed_settings):
    """固定步长曲线"""
    results = derive(
        _inputs(lot="10", price_per_share="1000", sell_price_per_share="1003", price_step="7"),
        fixed_settings
    )
    
    assert [s.price for s in results.curve][:3] == [1003, 1010, 1017]
    # 未填写卖出手数时按全部卖出
    assert results.profit is None
    
    results = derive(
        _inputs(lot="10", price_per_share="1000", sell_price_per_share="1003", price_step="0"),
        fixed_settings
    )
    assert results.curve is None
    assert results.cost is not None


def test_derive_zero_bought_lots(settings):
    """买入手数为 0：盈亏与曲线隐藏，不报错"""
    results = derive(
        _inputs(lot="0", price_per_share="1000", sell_lot="1", sell_price_per_share="1050"),
        settings
    )
    
    assert results.cost is not None
    assert results.min_sell_price_per_share is None
    assert results.break_even_tick_price is None
    assert results.profit is None
    assert results.curve is None


def test_derive_zero_sell_lots(settings):
    """卖出手数为 0：盈亏无法计算"""
    results = derive(
        _inputs(lot="10", price_per_share="1000", sell_lot="0", sell_price_per_share="1050"),
        settings
    )
    assert results.cost is not None
    assert results.profit is None


@pytest.mark.parametrize("sell_fee", ["100", "150", "-1"])
def test_derive_invalid_fee(settings, sell_fee):
    """费率超出 [0, 100) 时全部隐藏"""
    results = derive(
        _inputs(lot="10", price_per_share="1000", sell_fee_percentage=sell_fee),
        settings
    )
    assert results.is_empty
    assert results.fee_rates.sell_pct == float(sell_fee)


@pytest.mark.parametrize("text", ["", "abc"])
def test_derive_fee_fallback(settings, text):
    """费率为空或无法解析时使用默认费率"""
    results = derive(_inputs(lot="10", price_per_share="1000", buy_fee_percentage=text), settings)
    
    assert results.fee_rates.buy_pct == 0.1513
    assert results.cost.buy_fee == pytest.approx(1513.0)


@pytest.mark.parametrize("text", ["0,25", "1,5"])
def test_derive_fee_with_comma_falls_back(settings, text):
    """逗号小数的费率视为无法解析，使用默认费率"""
    inputs = apply_action(
        _inputs(lot="10", price_per_share="1000"),
        Action.set_field(InputField.BUY_FEE_PERCENTAGE, text),
        settings
    )
    assert inputs.buy_fee_percentage == text
    
    results = derive(inputs, settings)
    assert results.fee_rates.buy_pct == 0.1513
    assert results.cost.buy_fee == pytest.approx(1513.0)


def test_derive_custom_fee(settings):
    """自定义费率（包括 0）"""
    results = derive(
        _inputs(lot="10", price_per_share="1000", buy_fee_percentage="0", sell_fee_percentage="0"),
        settings
    )
    assert results.cost.buy_fee == 0
    assert results.cost.minimum_sell_price == pytest.approx(1_000_000)


def test_derive_without_metrics():
    """不输出收益率与每股盈亏"""
    settings = CalculatorSettings(include_metrics=False)
    results = derive(
        _inputs(lot="10", price_per_share="1000", sell_lot="10", sell_price_per_share="1050"),
        settings
    )
    
    assert results.profit.profit_percentage is None
    assert results.profit.average_profit_per_share is None
    assert results.curve is not None


def test_settings_validation():
    """设置验证"""
    assert CalculatorSettings(stepping="fixed").stepping.value == "fixed"
    
    with pytest.raises(ValueError):
        CalculatorSettings(stepping="daily")
    with pytest.raises(ValueError):
        CalculatorSettings(sample_count=0)
    with pytest.raises(ValueError):
        CalculatorSettings(price_step=0)
    with pytest.raises(ValueError):
        CalculatorSettings(shares_per_lot=0)
