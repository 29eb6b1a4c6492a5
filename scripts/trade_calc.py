#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
保本价/盈亏计算器命令行工具

功能：
- show 子命令：显示当前输入的计算结果
- set 子命令：修改输入（手数、价格、费率、步长）
- lot / sell-lot 子命令：手数 ±1/±5/±10，sell-lot = 复制买入手数
- price / sell-price 子命令：价格上调/下调一档
- copy 子命令：输出去掉千分位的字段值（便于粘贴）
- export 子命令：导出盈亏曲线 CSV 与图表
- reset 子命令：恢复默认输入

输入保存在本地 JSON 文件中，下次运行自动恢复。

示例：
  python scripts/trade_calc.py set --lot 10 --price 1000 --sell-price 1050
  python scripts/trade_calc.py lot +5
  python scripts/trade_calc.py sell-lot =
  python scripts/trade_calc.py sell-price up
  python scripts/trade_calc.py --stepping fixed set --price-step 10
  python scripts/trade_calc.py export --output-name bbca
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from src.lotcalc.calculator import (
    Action,
    CalculatorSession,
    InputField,
    InputStorage,
    create_settings_from_config,
)
from src.lotcalc.common.config import init_config
from src.lotcalc.common.logger import setup_logger_from_config
from src.lotcalc.report import Reporter

LOT_DELTAS = ['-10', '-5', '-1', '+1', '+5', '+10']

# 命令行字段名 -> 输入字段
FIELD_OPTIONS = {
    'lot': InputField.LOT,
    'price': InputField.PRICE_PER_SHARE,
    'sell-lot': InputField.SELL_LOT,
    'sell-price': InputField.SELL_PRICE_PER_SHARE,
    'price-step': InputField.PRICE_STEP,
    'buy-fee': InputField.BUY_FEE_PERCENTAGE,
    'sell-fee': InputField.SELL_FEE_PERCENTAGE,
}


def build_session(args, config) -> CalculatorSession:
    """根据配置与命令行参数创建会话"""
    settings = create_settings_from_config(config, stepping=args.stepping)
    state_file = args.state_file or config.get('calculator.state_file')
    return CalculatorSession(settings, InputStorage(state_file))


def build_reporter(args, config) -> Reporter:
    output_dir = getattr(args, 'output_dir', None) or config.get('report.output_dir')
    return Reporter(output_dir)


def actions_from_args(args) -> List[Action]:
    """将子命令参数转换为操作序列"""
    if args.command == 'set':
        actions = []
        for option, input_field in FIELD_OPTIONS.items():
            value = getattr(args, option.replace('-', '_'))
            if value is not None:
                actions.append(Action.set_field(input_field, value))
        return actions

    if args.command == 'lot':
        return [Action.step_lot(int(args.delta))]

    if args.command == 'sell-lot':
        if args.delta == '=':
            return [Action.sell_lot_equal()]
        return [Action.step_sell_lot(int(args.delta))]

    if args.command == 'price':
        return [Action.step_price(InputField.PRICE_PER_SHARE, args.direction == 'up')]

    if args.command == 'sell-price':
        return [Action.step_price(InputField.SELL_PRICE_PER_SHARE, args.direction == 'up')]

    if args.command == 'reset':
        return [Action.reset()]

    return []


def print_inputs(session: CalculatorSession) -> None:
    """打印当前输入"""
    logger.info("当前输入：")
    for option, input_field in FIELD_OPTIONS.items():
        logger.info(f"  {option:12s}: {session.inputs.get(input_field)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="保本价与盈亏计算器",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--config', help='配置文件路径（默认：configs/base.yaml）')
    parser.add_argument('--state-file', help='输入保存文件路径（覆盖配置）')
    parser.add_argument(
        '--stepping',
        choices=['tick_table', 'fixed'],
        help='价格步进方式（覆盖配置）'
    )
    parser.add_argument('--log-level', help='日志级别（覆盖配置）')

    subparsers = parser.add_subparsers(dest='command', help='子命令')

    show_parser = subparsers.add_parser('show', help='显示计算结果')
    show_parser.add_argument('--inputs', action='store_true', help='同时显示当前输入')

    set_parser = subparsers.add_parser('set', help='修改输入')
    for option in FIELD_OPTIONS:
        set_parser.add_argument(f'--{option}', help=f'{option} 输入值（空字符串表示清空）')

    lot_parser = subparsers.add_parser('lot', help='调整买入手数')
    lot_parser.add_argument('delta', choices=LOT_DELTAS, help='手数增量')

    sell_lot_parser = subparsers.add_parser('sell-lot', help='调整卖出手数')
    sell_lot_parser.add_argument(
        'delta',
        choices=LOT_DELTAS + ['='],
        help='手数增量，= 表示等于买入手数'
    )

    price_parser = subparsers.add_parser('price', help='买入价上调/下调一档')
    price_parser.add_argument('direction', choices=['up', 'down'])

    sell_price_parser = subparsers.add_parser('sell-price', help='卖出价上调/下调一档')
    sell_price_parser.add_argument('direction', choices=['up', 'down'])

    copy_parser = subparsers.add_parser('copy', help='输出去掉千分位的字段值')
    copy_parser.add_argument('field', choices=list(FIELD_OPTIONS))

    export_parser = subparsers.add_parser('export', help='导出盈亏曲线 CSV 与图表')
    export_parser.add_argument('--output-dir', help='输出目录（覆盖配置）')
    export_parser.add_argument('--output-name', default='profit_curve', help='输出文件名（默认：profit_curve）')
    export_parser.add_argument('--no-csv', action='store_true', help='不导出 CSV')
    export_parser.add_argument('--no-chart', action='store_true', help='不导出图表')

    subparsers.add_parser('reset', help='恢复默认输入')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = init_config(args.config)
    setup_logger_from_config(config, log_level=args.log_level)

    try:
        session = build_session(args, config)

        if args.command == 'copy':
            print(session.copy_field(FIELD_OPTIONS[args.field]))
            return 0

        for action in actions_from_args(args):
            session.dispatch(action)

        if args.command in ('set', 'lot', 'sell-lot', 'price', 'sell-price', 'reset') \
                or getattr(args, 'inputs', False):
            print_inputs(session)

        reporter = build_reporter(args, config)
        if args.command == 'export':
            reporter.generate_report(
                session.results,
                output_name=args.output_name,
                save_csv=not args.no_csv,
                save_chart=not args.no_chart
            )
        else:
            reporter.print_summary(session.results)
    except Exception as e:
        logger.exception(f"计算器运行失败: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
