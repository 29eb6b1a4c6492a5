"""计算器状态模块"""

from .models import (
    Action,
    ActionType,
    CalculatorInputs,
    CalculatorSettings,
    DerivedResults,
    InputField,
    create_settings_from_config,
)
from .reducer import apply_action, derive
from .session import CalculatorSession
from .storage import STORAGE_KEYS, InputStorage

__all__ = [
    'Action',
    'ActionType',
    'CalculatorInputs',
    'CalculatorSettings',
    'DerivedResults',
    'InputField',
    'create_settings_from_config',
    'apply_action',
    'derive',
    'CalculatorSession',
    'InputStorage',
    'STORAGE_KEYS',
]
