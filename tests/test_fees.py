"""测试交易费率模型"""

import math

import pytest

from src.lotcalc.common.fees import (
    DEFAULT_BUY_FEE_PCT,
    DEFAULT_SELL_FEE_PCT,
    FeeRates,
    create_fee_rates_from_dict,
    get_default_fee_rates,
)


def test_default_fee_rates():
    """测试默认费率"""
    rates = get_default_fee_rates()
    
    assert rates.buy_pct == 0.1513
    assert rates.sell_pct == 0.2513
    assert rates == FeeRates()


def test_rates_as_fraction():
    """测试百分比转小数"""
    rates = FeeRates(buy_pct=0.25, sell_pct=0.5)
    
    assert rates.buy_rate == pytest.approx(0.0025)
    assert rates.sell_rate == pytest.approx(0.005)


def test_calculate_fees():
    """测试费用计算"""
    rates = FeeRates(buy_pct=0.1, sell_pct=0.2)
    
    assert rates.calculate_buy_fee(100000) == pytest.approx(100.0)
    assert rates.calculate_sell_fee(100000) == pytest.approx(200.0)


@pytest.mark.parametrize("buy_pct, sell_pct, expected", [
    (0.0, 0.0, True),
    (0.1513, 0.2513, True),
    (99.99, 99.99, True),
    (0.1, 100.0, False),
    (-0.1, 0.2, False),
    (math.nan, 0.2, False),
])
def test_is_valid(buy_pct, sell_pct, expected):
    """测试费率有效区间 [0, 100)"""
    assert FeeRates(buy_pct, sell_pct).is_valid is expected


def test_create_from_dict():
    """测试从配置字典创建"""
    rates = create_fee_rates_from_dict({'buy_pct': 0.15, 'sell_pct': '0.25'})
    assert rates.buy_pct == 0.15
    assert rates.sell_pct == 0.25
    
    # 缺失字段使用默认值
    rates = create_fee_rates_from_dict(None)
    assert rates.buy_pct == DEFAULT_BUY_FEE_PCT
    assert rates.sell_pct == DEFAULT_SELL_FEE_PCT
