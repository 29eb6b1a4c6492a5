"""输入持久化模块（基于 JSON）

以固定键名保存用户上一次的输入，下次启动时恢复。
值均为输入框中的原始字符串，不做版本管理。

文件内容示例：
{
    "lot": "10",
    "pricePerShare": "1,000",
    "sellLot": "10",
    "sellPricePerShare": "1,050",
    "priceStep": "",
    "buyFeePercentage": "0.1513",
    "sellFeePercentage": "0.2513"
}
"""

import json
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from .. import DATA_CALCULATOR
from .models import CalculatorInputs, InputField

STORAGE_KEYS = [f.value for f in InputField]


class InputStorage:
    """计算器输入的键值存储"""

    def __init__(self, file_path: Optional[str] = None):
        """初始化存储

        Args:
            file_path: JSON 文件路径，默认 data/calculator/inputs.json
        """
        self.file_path = Path(file_path) if file_path else DATA_CALCULATOR / "inputs.json"
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"输入存储初始化完成，文件: {self.file_path}")

    def _read_all(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"读取输入文件失败: {e}，使用默认输入")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"输入文件格式错误: {self.file_path}，使用默认输入")
            return {}

        return {k: v for k, v in data.items() if k in STORAGE_KEYS and isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        try:
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            logger.debug(f"输入已保存到 {self.file_path}")
        except OSError as e:
            logger.error(f"保存输入失败: {e}")
            raise

    def get_item(self, key: str) -> Optional[str]:
        """读取单个键，不存在返回 None"""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """写入单个键"""
        if key not in STORAGE_KEYS:
            raise ValueError(f"未知的存储键: {key}")
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def load(self, defaults: Optional[CalculatorInputs] = None) -> CalculatorInputs:
        """读取保存的输入

        保存值为空字符串时保留默认值（费率输入框不会被清空）。

        Args:
            defaults: 默认输入

        Returns:
            合并后的输入
        """
        defaults = defaults or CalculatorInputs()
        saved = self._read_all()

        values = {}
        for input_field in InputField:
            value = saved.get(input_field.value)
            values[input_field.attr] = value if value else defaults.get(input_field)

        if saved:
            logger.info(f"从 {self.file_path} 恢复上次输入")
        return CalculatorInputs(**values)

    def save(self, inputs: CalculatorInputs) -> None:
        """保存全部输入"""
        self._write_all(inputs.to_storage_dict())

    def clear(self) -> None:
        """删除保存的输入"""
        if self.file_path.exists():
            self.file_path.unlink()
            logger.info(f"已清除保存的输入: {self.file_path}")
