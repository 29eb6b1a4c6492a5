"""Common模块初始化"""

from .config import Config, get_config, init_config
from .fees import FeeRates, create_fee_rates_from_dict, get_default_fee_rates
from .formatting import (
    format_number,
    parse_float,
    parse_int,
    round_up,
    sanitize_digits,
    unformat_number,
)
from .logger import get_logger, setup_logger, setup_logger_from_config
from .print_table import column_widths, format_row

__all__ = [
    "Config",
    "get_config",
    "init_config",
    "FeeRates",
    "create_fee_rates_from_dict",
    "get_default_fee_rates",
    "format_number",
    "unformat_number",
    "sanitize_digits",
    "round_up",
    "parse_int",
    "parse_float",
    "setup_logger",
    "setup_logger_from_config",
    "get_logger",
    "format_row",
    "column_widths",
]
