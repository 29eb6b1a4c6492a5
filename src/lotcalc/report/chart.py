"""盈亏曲线图"""

from pathlib import Path
from typing import Dict, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from loguru import logger

from ..pricing.models import ProfitSample
from ..projection.sampler import curve_to_frame


class ProfitChart:
    """卖出价-费后盈亏折线图，收益率画在右侧副坐标轴"""

    def __init__(self, style_config: Optional[Dict] = None):
        self.style_config = {
            "figsize": (10, 5),
            "dpi": 120,
            "profit_color": (75 / 255, 192 / 255, 192 / 255),
            "percentage_color": (153 / 255, 102 / 255, 1.0),
            "title": "Profit After Fees vs. Sell Price",
        }
        if style_config:
            self.style_config.update(style_config)

    def render(self, samples: Sequence[ProfitSample], file_path: str) -> Path:
        """绘制并保存 PNG

        Args:
            samples: 盈亏曲线采样点
            file_path: 输出文件路径

        Returns:
            输出文件路径
        """
        if not samples:
            raise ValueError("没有可绘制的采样点")

        frame = curve_to_frame(list(samples))
        output = Path(file_path)
        output.parent.mkdir(parents=True, exist_ok=True)

        fig, ax_profit = plt.subplots(figsize=self.style_config["figsize"])
        try:
            line_profit, = ax_profit.plot(
                frame["price"],
                frame["pure_profit_after_fee"],
                marker="o",
                color=self.style_config["profit_color"],
                label="Profit After Fees",
            )
            ax_profit.axhline(0, color="grey", linewidth=0.8, linestyle="--")
            ax_profit.set_xlabel("Sell Price Per Share")
            ax_profit.set_ylabel("Profit After Fees")
            lines = [line_profit]

            # 未启用收益率指标时只画费后盈亏
            if frame["profit_percentage"].notna().all():
                ax_pct = ax_profit.twinx()
                line_pct, = ax_pct.plot(
                    frame["price"],
                    frame["profit_percentage"],
                    marker="s",
                    color=self.style_config["percentage_color"],
                    label="Profit Percentage",
                )
                ax_pct.set_ylabel("Profit Percentage (%)")
                lines.append(line_pct)

            ax_profit.legend(lines, [line.get_label() for line in lines], loc="upper left")
            ax_profit.set_title(self.style_config["title"])
            fig.tight_layout()
            fig.savefig(output, dpi=self.style_config["dpi"], bbox_inches="tight")
        finally:
            plt.close(fig)

        logger.info(f"盈亏曲线图已保存: {output}")
        return output
