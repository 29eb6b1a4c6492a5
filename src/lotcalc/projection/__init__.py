"""盈亏曲线采样模块"""

from .sampler import (
    DEFAULT_SAMPLE_COUNT,
    StepPolicy,
    SteppingMode,
    curve_to_frame,
    sample_profit_curve,
)

__all__ = [
    'DEFAULT_SAMPLE_COUNT',
    'StepPolicy',
    'SteppingMode',
    'curve_to_frame',
    'sample_profit_curve',
]
