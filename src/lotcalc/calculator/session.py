"""计算器会话

持有当前输入状态与存储，负责"启动时恢复、每次修改后保存"。
计算本身委托给 reducer 中的纯函数。
"""

from typing import Optional

from loguru import logger

from ..common.formatting import unformat_number
from .models import Action, CalculatorInputs, CalculatorSettings, DerivedResults, InputField
from .reducer import apply_action, derive
from .storage import InputStorage


class CalculatorSession:
    """计算器会话"""

    def __init__(
        self,
        settings: Optional[CalculatorSettings] = None,
        storage: Optional[InputStorage] = None
    ):
        """初始化会话并恢复上次输入

        Args:
            settings: 计算器设置，默认使用内置默认值
            storage: 输入存储，None 时不做持久化
        """
        self.settings = settings or CalculatorSettings()
        self.storage = storage

        defaults = self.settings.default_inputs()
        self._inputs = storage.load(defaults) if storage else defaults
        self._results = derive(self._inputs, self.settings)

        logger.debug(
            f"计算器会话初始化: stepping={self.settings.stepping.value}, "
            f"sample_count={self.settings.sample_count}"
        )

    @property
    def inputs(self) -> CalculatorInputs:
        return self._inputs

    @property
    def results(self) -> DerivedResults:
        return self._results

    def dispatch(self, action: Action) -> DerivedResults:
        """执行一次用户操作

        Args:
            action: 用户操作

        Returns:
            重新计算后的结果
        """
        new_inputs = apply_action(self._inputs, action, self.settings)
        if new_inputs != self._inputs:
            self._inputs = new_inputs
            if self.storage:
                self.storage.save(new_inputs)
            logger.debug(f"操作 {action.type.value} 已应用")

        self._results = derive(self._inputs, self.settings)
        return self._results

    def copy_field(self, input_field: InputField) -> str:
        """复制字段内容（去掉千分位逗号）"""
        return unformat_number(self._inputs.get(input_field))
