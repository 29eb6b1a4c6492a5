"""测试计算器命令行工具"""

import json

import pytest

from scripts.trade_calc import main


@pytest.fixture
def state_file(temp_dir):
    return temp_dir / "inputs.json"


def _run(state_file, *args):
    return main(['--state-file', str(state_file), *args])


def _saved(state_file):
    with open(state_file, 'r', encoding='utf-8') as f:
        return json.load(f)


def test_no_command():
    """未指定子命令时返回错误码"""
    assert main([]) == 1


def test_set_and_step(state_file):
    """设置输入并调整手数"""
    assert _run(state_file, 'set', '--lot', '10', '--price', '1000') == 0
    assert _saved(state_file)['lot'] == '10'
    assert _saved(state_file)['pricePerShare'] == '1000'
    
    assert _run(state_file, 'lot', '+5') == 0
    assert _saved(state_file)['lot'] == '15'
    
    assert _run(state_file, 'lot', '-10') == 0
    assert _saved(state_file)['lot'] == '5'
    
    assert _run(state_file, 'sell-lot', '=') == 0
    assert _saved(state_file)['sellLot'] == '5'


def test_price_step_and_copy(state_file, capsys):
    """价格上调一档后复制"""
    _run(state_file, 'set', '--price', '4990')
    assert _run(state_file, 'price', 'up') == 0
    assert _saved(state_file)['pricePerShare'] == '5,000'
    
    capsys.readouterr()
    assert _run(state_file, 'copy', 'price') == 0
    assert capsys.readouterr().out.strip() == '5000'


def test_fixed_stepping(state_file):
    """固定步长"""
    _run(state_file, 'set', '--sell-price', '1000', '--price-step', '7')
    assert _run(state_file, '--stepping', 'fixed', 'sell-price', 'down') == 0
    assert _saved(state_file)['sellPricePerShare'] == '993'


def test_show_and_reset(state_file):
    """显示与重置"""
    _run(state_file, 'set', '--lot', '10', '--price', '1000', '--buy-fee', '0.2')
    assert _run(state_file, 'show', '--inputs') == 0
    
    assert _run(state_file, 'reset') == 0
    saved = _saved(state_file)
    assert saved['lot'] == ''
    assert saved['buyFeePercentage'] == '0.1513'


def test_export(state_file, temp_dir):
    """导出曲线"""
    _run(state_file, 'set', '--lot', '10', '--price', '1000', '--sell-price', '1050')
    output_dir = temp_dir / "out"
    
    assert _run(state_file, 'export', '--output-dir', str(output_dir), '--output-name', 'demo') == 0
    assert (output_dir / "demo.csv").exists()
    assert (output_dir / "demo.png").exists()
