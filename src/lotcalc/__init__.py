"""
LotCalc - 按手交易的保本价与盈亏计算器
面向 IDX 风格的分档最小报价单位
"""

__version__ = "0.1.0"
__author__ = "deltree-y"

from pathlib import Path

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent.parent

# 数据目录
DATA_ROOT = PROJECT_ROOT / "data"
DATA_CALCULATOR = DATA_ROOT / "calculator"
DATA_REPORTS = DATA_ROOT / "reports"

# 配置目录
CONFIG_ROOT = PROJECT_ROOT / "configs"
