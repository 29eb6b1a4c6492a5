"""数字格式化工具

输入框中的数字带千分位逗号显示，计算前需去掉逗号再解析。
无法解析的输入一律返回 NaN，由上层决定是否隐藏结果。
"""

import math
import re

_NON_DIGIT = re.compile(r"\D")


def format_number(num: float) -> str:
    """格式化为带千分位的字符串，NaN/inf 返回空字符串
    
    Args:
        num: 数值
        
    Returns:
        例如 1004037 -> '1,004,037'
    """
    if num is None or not math.isfinite(num):
        return ""
    if float(num).is_integer():
        return f"{int(num):,}"
    return f"{num:,}"


def unformat_number(text: str) -> str:
    """去掉千分位逗号（复制到剪贴板时使用）"""
    return (text or "").replace(",", "")


def sanitize_digits(text: str) -> str:
    """只保留数字字符"""
    return _NON_DIGIT.sub("", text or "")


def round_up(num: float) -> float:
    """向上取整，非有限值返回 NaN"""
    if num is None or not math.isfinite(num):
        return math.nan
    return math.ceil(num)


def parse_int(text: str) -> float:
    """解析整数输入（允许千分位），失败返回 NaN
    
    返回 float 以便 NaN 在后续计算中传播。
    """
    raw = unformat_number(text).strip()
    if not raw:
        return math.nan
    try:
        return float(int(raw))
    except ValueError:
        return math.nan


def parse_float(text: str) -> float:
    """解析小数输入（允许千分位），失败返回 NaN"""
    raw = unformat_number(text).strip()
    if not raw:
        return math.nan
    try:
        return float(raw)
    except ValueError:
        return math.nan
