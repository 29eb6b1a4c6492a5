"""计算结果报告"""

from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .. import DATA_REPORTS
from ..calculator.models import DerivedResults
from ..common.formatting import format_number, round_up
from ..common.print_table import column_widths, format_row
from ..pricing.models import ProfitSample
from ..projection.sampler import curve_to_frame
from .chart import ProfitChart

SUMMARY_TITLE = "计算汇总"
PROFIT_TITLE = "盈亏计算"

Rows = List[Tuple[str, str]]


def format_amount(value: Optional[float]) -> str:
    """金额显示：向上取整后加千分位，例如 Rp 1,004,037"""
    return f"Rp {format_number(round_up(value))}"


class Reporter:
    """计算结果报告生成器"""

    def __init__(self, output_dir: Optional[str] = None, chart: Optional[ProfitChart] = None):
        """初始化报告生成器

        Args:
            output_dir: 报告输出目录，默认 data/reports
            chart: 图表绘制器
        """
        self.output_dir = Path(output_dir) if output_dir else DATA_REPORTS
        self.chart = chart or ProfitChart()

    def build_summary(self, results: DerivedResults) -> "OrderedDict[str, Rows]":
        """生成汇总区块

        无法计算的区块直接省略。

        Args:
            results: 推导结果

        Returns:
            {区块标题: [(名称, 显示值), ...]}
        """
        blocks: "OrderedDict[str, Rows]" = OrderedDict()

        cost = results.cost
        if cost is not None:
            rows = [
                ("买入总价（费前）", format_amount(cost.total_buying_price)),
                ("买入费用", format_amount(cost.buy_fee)),
                ("含买入费用总成本", format_amount(cost.total_buying_price_with_fee)),
                ("保本最低卖出总价", format_amount(cost.minimum_sell_price)),
            ]
            if results.min_sell_price_per_share is not None:
                rows.append(("保本每股价格", format_amount(results.min_sell_price_per_share)))
            if results.break_even_tick_price is not None:
                rows.append(("保本最低报价", format_amount(results.break_even_tick_price)))
            rows.extend([
                ("按保本价计算的卖出费用", format_amount(cost.sell_fee)),
                ("扣除卖出费用后净额", format_amount(cost.net_sell_price)),
            ])
            blocks[SUMMARY_TITLE] = rows

        profit = results.profit
        if profit is not None:
            total_fee = round_up(profit.buy_fee) + round_up(profit.sell_fee)
            rows = [
                ("卖出费用", format_amount(profit.sell_fee)),
                ("费用合计", f"Rp {format_number(total_fee)}"),
                ("费前盈亏", format_amount(profit.pure_profit_before_fee)),
                ("费后盈亏", format_amount(profit.pure_profit_after_fee)),
            ]
            if profit.profit_percentage is not None:
                rows.append(("收益率", f"{profit.profit_percentage:.2f}%"))
            if profit.average_profit_per_share is not None:
                rows.append(("每股盈亏", format_amount(profit.average_profit_per_share)))
            blocks[PROFIT_TITLE] = rows

        return blocks

    def print_summary(self, results: DerivedResults) -> "OrderedDict[str, Rows]":
        """打印汇总到控制台"""
        blocks = self.build_summary(results)

        if not blocks:
            logger.info("输入不完整，暂无计算结果")
            return blocks

        all_rows = [row for rows in blocks.values() for row in rows]
        widths = column_widths(all_rows)
        aligns = ['left', 'right']

        for title, rows in blocks.items():
            logger.info("=" * 60)
            logger.info(title)
            logger.info("-" * 60)
            for row in rows:
                logger.info(format_row(row, widths, aligns))
        logger.info("=" * 60)

        if results.curve:
            self._print_curve(results.curve)

        return blocks

    def _print_curve(self, curve: Sequence[ProfitSample]) -> None:
        header = ("卖出价", "费后盈亏", "收益率")
        rows = []
        for sample in curve:
            pct = sample.result.profit_percentage
            rows.append((
                format_number(sample.price),
                format_amount(sample.result.pure_profit_after_fee),
                "" if pct is None else f"{pct:.2f}%",
            ))
        widths = column_widths([header] + rows)
        aligns = ['right', 'right', 'right']

        logger.info("盈亏曲线")
        logger.info(format_row(header, widths, aligns))
        for row in rows:
            logger.info(format_row(row, widths, aligns))

    def save_curve_csv(self, curve: Sequence[ProfitSample], output_name: str = "profit_curve") -> Path:
        """保存盈亏曲线 CSV

        Args:
            curve: 采样点
            output_name: 文件名（不含扩展名）

        Returns:
            CSV 文件路径
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / f"{output_name}.csv"
        curve_to_frame(list(curve)).to_csv(file_path, index=False, encoding="utf-8-sig")
        logger.info(f"盈亏曲线已保存: {file_path}")
        return file_path

    def save_chart(self, curve: Sequence[ProfitSample], output_name: str = "profit_curve") -> Path:
        """保存盈亏曲线图 PNG"""
        return self.chart.render(curve, str(self.output_dir / f"{output_name}.png"))

    def generate_report(
        self,
        results: DerivedResults,
        output_name: str = "profit_curve",
        save_csv: bool = True,
        save_chart: bool = True
    ) -> Dict[str, Path]:
        """打印汇总并导出曲线

        Args:
            results: 推导结果
            output_name: 输出文件名（不含扩展名）
            save_csv: 是否导出 CSV
            save_chart: 是否导出图表

        Returns:
            {'csv': 路径, 'chart': 路径}，曲线不可用时为空
        """
        self.print_summary(results)

        outputs: Dict[str, Path] = {}
        if not results.curve:
            logger.info("盈亏曲线不可用，跳过导出")
            return outputs

        if save_csv:
            outputs['csv'] = self.save_curve_csv(results.curve, output_name)
        if save_chart:
            outputs['chart'] = self.save_chart(results.curve, output_name)
        return outputs
