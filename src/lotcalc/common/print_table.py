# 名称: print_table.py
# 说明: 按显示宽度对齐输出汇总表（使用 wcwidth）

from typing import Iterable, List, Sequence

from wcwidth import wcswidth


def display_width(s: str) -> int:
    """返回字符串在终端的显示宽度（使用 wcwidth）。不可打印字符按长度计。"""
    width = wcswidth(s)
    return len(s) if width < 0 else width


def pad(s: str, width: int, align: str = 'left') -> str:
    """按显示宽度填充字符串。
    align: 'left'|'right'|'center'
    """
    s = '' if s is None else str(s)
    w = display_width(s)
    if w >= width:
        return s
    pad_len = width - w
    if align == 'left':
        return s + ' ' * pad_len
    if align == 'right':
        return ' ' * pad_len + s
    left = pad_len // 2
    right = pad_len - left
    return ' ' * left + s + ' ' * right


def format_row(values, widths, aligns):
    """按列宽与对齐方式格式化一行并返回字符串。"""
    parts = [pad(v, w, a) for v, w, a in zip(values, widths, aligns)]
    return ' '.join(parts)


def column_widths(rows: Iterable[Sequence[str]], min_width: int = 0) -> List[int]:
    """计算每列所需的最大显示宽度"""
    widths: List[int] = []
    for row in rows:
        for i, value in enumerate(row):
            w = max(display_width(str(value)), min_width)
            if i >= len(widths):
                widths.append(w)
            else:
                widths[i] = max(widths[i], w)
    return widths
