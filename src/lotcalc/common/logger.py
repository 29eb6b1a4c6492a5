"""日志工具模块"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <7}</level> | "
    "<level>{message}</level>"
)


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    format_string: Optional[str] = None
) -> None:
    """配置日志
    
    Args:
        log_level: 日志级别
        log_file: 日志文件路径，None则只输出到控制台
        rotation: 日志轮转大小
        retention: 日志保留时间
        format_string: 日志格式字符串
    """
    logger.remove()
    
    if format_string is None:
        format_string = DEFAULT_FORMAT
    
    logger.add(
        sys.stderr,
        format=format_string,
        level=log_level,
        colorize=True
    )
    
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string,
            level=log_level,
            rotation=rotation,
            retention=retention,
            encoding="utf-8"
        )
    
    logger.debug(f"日志系统初始化完成，级别: {log_level}")


def setup_logger_from_config(config, log_level: Optional[str] = None) -> None:
    """按配置中的 logging 段初始化日志
    
    Args:
        config: Config 实例
        log_level: 日志级别，优先于配置中的 logging.level
    """
    setup_logger(
        log_level=log_level or config.get("logging.level", "INFO"),
        log_file=config.get("logging.file")
    )


def get_logger(name: str):
    """获取绑定名称的logger实例"""
    return logger.bind(name=name)
