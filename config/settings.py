"""
Pedsim Data Saver 설정 관리

환경 변수 및 애플리케이션 설정을 관리합니다.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()


class Config:
    """애플리케이션 설정"""

    # 프로젝트 경로
    BASE_DIR = Path(__file__).parent.parent
    DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
    RECORDINGS_DIR = DATA_DIR / "recordings"
    DATASETS_DIR = DATA_DIR / "datasets"
    LOGS_DIR = Path(os.getenv("LOGS_DIR", str(BASE_DIR / "logs")))
    CONFIG_DIR = BASE_DIR / "config"

    # Data saver 기본값 (문자열 그대로 보관, 변환/검증은 DataSaverConfig.from_env)
    DATA_SAVER_ROBOT_FRAME: str = os.getenv("DATA_SAVER_ROBOT_FRAME", "base_link")
    DATA_SAVER_LOCAL_WIDTH: str = os.getenv("DATA_SAVER_LOCAL_WIDTH", "12.0")
    DATA_SAVER_LOCAL_HEIGHT: str = os.getenv("DATA_SAVER_LOCAL_HEIGHT", "12.0")
    DATA_SAVER_GLOBAL_WIDTH: str = os.getenv("DATA_SAVER_GLOBAL_WIDTH", "50.0")
    DATA_SAVER_GLOBAL_HEIGHT: str = os.getenv("DATA_SAVER_GLOBAL_HEIGHT", "50.0")
    DATA_SAVER_RATE: str = os.getenv("DATA_SAVER_RATE", "2.5")  # Hz
    DATA_SAVER_FLIP: str = os.getenv("DATA_SAVER_FLIP", "1")
    DATA_SAVER_PATH: str = os.getenv("DATA_SAVER_PATH", "pedsim_pos")
    DATA_SAVER_SIZE: str = os.getenv("DATA_SAVER_SIZE", "100.0")

    @classmethod
    def ensure_directories(cls):
        """필수 디렉토리 생성"""
        for directory in [cls.DATA_DIR, cls.RECORDINGS_DIR, cls.DATASETS_DIR, cls.LOGS_DIR]:
            directory.mkdir(parents=True, exist_ok=True)


class DevelopmentConfig(Config):
    """개발 환경 설정"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """프로덕션 환경 설정"""
    DEBUG = False
    TESTING = False


class TestConfig(Config):
    """테스트 환경 설정"""
    DEBUG = True
    TESTING = True


# 환경별 설정 선택
_env = os.getenv("ENVIRONMENT", "development").lower()
if _env == "production":
    config = ProductionConfig()
elif _env == "test":
    config = TestConfig()
else:
    config = DevelopmentConfig()

# 디렉토리 생성
config.ensure_directories()
