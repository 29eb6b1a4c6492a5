"""Pytest配置文件"""

import sys
import tempfile
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest


@pytest.fixture
def settings():
    """默认计算器设置（按报价单位表步进）"""
    from src.lotcalc.calculator import CalculatorSettings
    
    return CalculatorSettings()


@pytest.fixture
def fixed_settings():
    """固定步长设置"""
    from src.lotcalc.calculator import CalculatorSettings
    
    return CalculatorSettings(stepping="fixed", price_step=1.0)


@pytest.fixture
def temp_dir():
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_storage(temp_dir):
    """临时输入存储"""
    from src.lotcalc.calculator import InputStorage
    
    return InputStorage(str(temp_dir / "inputs.json"))
