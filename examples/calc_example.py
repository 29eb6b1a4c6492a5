"""计算器使用示例

展示如何直接调用定价函数与会话：
1. 保本价与部分卖出的盈亏
2. 按报价单位表 / 固定步长生成盈亏曲线
"""

import sys
from pathlib import Path

# 添加项目根目录到路径
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lotcalc.calculator import Action, CalculatorSession, CalculatorSettings, InputField
from lotcalc.common.logger import setup_logger
from lotcalc.pricing import ceil_to_tick, compute_break_even, compute_profit
from lotcalc.projection import StepPolicy, SteppingMode, sample_profit_curve
from lotcalc.report import Reporter


def pricing_demo():
    """买入 10 手、每股 1000，卖出 6 手、每股 1050"""
    total_buying_price = 10 * 1000 * 100
    cost = compute_break_even(total_buying_price, 0.1513, 0.2513)
    print(f"保本最低卖出总价: {cost.minimum_sell_price:,.2f}")
    print(f"保本每股价格: {cost.minimum_sell_price / 1000:,.2f} -> 保本最低报价 {ceil_to_tick(cost.minimum_sell_price / 1000)}")

    profit = compute_profit(total_buying_price, 6 * 1050 * 100, 10, 6, 0.1513, 0.2513)
    print(f"部分卖出费后盈亏: {profit.pure_profit_after_fee:,.2f} ({profit.profit_percentage:.2f}%)")


def curve_demo():
    total_buying_price = 10 * 1990 * 100
    for policy in (StepPolicy(SteppingMode.TICK_TABLE), StepPolicy(SteppingMode.FIXED, 20)):
        samples = sample_profit_curve(total_buying_price, 10, 10, 1990, policy, 0.1513, 0.2513)
        print(policy.stepping.value, [s.price for s in samples])


def session_demo():
    """不做持久化的会话"""
    session = CalculatorSession(CalculatorSettings())
    session.dispatch(Action.set_field(InputField.LOT, "10"))
    session.dispatch(Action.set_field(InputField.PRICE_PER_SHARE, "1000"))
    session.dispatch(Action.sell_lot_equal())
    session.dispatch(Action.set_field(InputField.SELL_PRICE_PER_SHARE, "1050"))
    session.dispatch(Action.step_price(InputField.SELL_PRICE_PER_SHARE, up=True))

    Reporter("./data/reports").generate_report(session.results, output_name="example")


if __name__ == "__main__":
    setup_logger(log_level="INFO")
    pricing_demo()
    curve_demo()
    session_demo()
