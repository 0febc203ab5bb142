"""
로깅 설정 및 유틸리티
"""

import sys
from loguru import logger
from config import config


LOG_APP_NAME = "pedsim-data-saver"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(module_name: str = LOG_APP_NAME):
    """
    로거 설정

    모든 모듈이 같은 로그 파일을 공유하므로 module_name은 로그 레코드의
    출처 표시에만 쓰입니다 (loguru가 {name}으로 기록).

    Args:
        module_name: 호출 모듈 이름
    """
    # 기본 핸들러 제거
    logger.remove()

    # 콘솔 출력 (INFO 이상)
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level="INFO" if not config.DEBUG else "DEBUG",
        colorize=True
    )

    # 파일 출력 (DEBUG 이상)
    logger.add(
        config.LOGS_DIR / f"{LOG_APP_NAME}.log",
        format=FILE_FORMAT,
        level="DEBUG",
        rotation="10 MB",
        retention="30 days",
        compression="zip"
    )

    # 에러 로그 (ERROR 이상)
    logger.add(
        config.LOGS_DIR / f"{LOG_APP_NAME}_error.log",
        format=FILE_FORMAT,
        level="ERROR",
        rotation="10 MB",
        retention="90 days",
        compression="zip"
    )

    return logger.bind(module=module_name)


# 기본 로거 초기화
setup_logger()
