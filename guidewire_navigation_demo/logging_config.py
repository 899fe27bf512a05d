"""
Logging Configuration
日志配置：为 guidewire_navigation_demo 命名空间设置控制台（和可选文件）输出
"""
import logging
import sys

LOGGER_NAME = "guidewire_navigation_demo"


def setup_logging(level=logging.INFO, log_file=None):
    """
    配置包级 logger

    Args:
        level: 日志级别 (logging.DEBUG, logging.INFO ...)
        log_file: 可选，同时写入的日志文件路径
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # 重复调用时先清掉旧的 handler，避免日志重复
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
