"""
core/config.py - 중앙 설정 관리

정적 설정값과 환경변수 오버라이드를 읽는 헬퍼를 제공합니다.
환경변수 기반 설정은 접근 시점에 읽으므로 잘못된 값이 있어도
import 단계에서 실패하지 않습니다.

Usage:
    from core.config import settings, get_default_project

    project = get_default_project()
    workers = settings.DEFAULT_MAX_WORKERS
"""

import os
from dataclasses import dataclass
from pathlib import Path

from core.exceptions import ConfigError

VERSION = "0.4.0"

ENV_PREFIX = "GCPINV_"


def get_env_int(name: str, default: int) -> int:
    """환경변수를 정수로 읽기

    Raises:
        ConfigError: 값이 설정되어 있지만 정수가 아닌 경우
    """
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(name, f"expected an integer, got '{raw}'", cause=e) from e


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 읽기 (1/true/yes/on)"""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (불변)"""

    # 로깅 - google 클라이언트 라이브러리 노이즈 제한 대상
    QUIET_LOGGERS: tuple = (
        "google.auth",
        "google.api_core",
        "googleapiclient.discovery",
        "googleapiclient.discovery_cache",
        "urllib3",
    )

    # =========================================================================
    # 환경변수 기반 설정
    # =========================================================================

    @property
    def DEFAULT_MAX_WORKERS(self) -> int:
        """병렬 discover 워커 수 (GCPINV_MAX_WORKERS, 기본 8)"""
        return get_env_int(f"{ENV_PREFIX}MAX_WORKERS", 8)

    @property
    def DISCOVERY_TIMEOUT(self) -> int:
        """discover 전체 제한 시간 (초, GCPINV_TIMEOUT, 0 = 없음)"""
        return get_env_int(f"{ENV_PREFIX}TIMEOUT", 0)

    @property
    def LOG_LEVEL(self) -> str:
        return os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper()

    def validate(self) -> None:
        """환경변수 기반 설정을 모두 읽어 검증

        Raises:
            ConfigError: 잘못된 값이 있는 경우
        """
        _ = (self.DEFAULT_MAX_WORKERS, self.DISCOVERY_TIMEOUT, self.LOG_LEVEL)


settings = Settings()


def get_project_root() -> Path:
    """프로젝트 루트 디렉토리"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    return VERSION


def get_default_project() -> str | None:
    """명령줄에서 지정하지 않았을 때 사용할 프로젝트

    GCPINV_PROJECT, 그 다음 google 클라이언트 라이브러리가 읽는 변수 순서로 확인합니다.
    """
    for name in (f"{ENV_PREFIX}PROJECT", "GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT"):
        value = os.environ.get(name)
        if value:
            return value
    return None


def get_default_region() -> str | None:
    """리전 단위 리소스(forwarding rule)를 조회할 리전

    GCPINV_REGION, 그 다음 gcloud 설정 변수(CLOUDSDK_COMPUTE_REGION) 순서로 확인합니다.
    """
    return os.environ.get(f"{ENV_PREFIX}REGION") or os.environ.get("CLOUDSDK_COMPUTE_REGION") or None


def get_credentials_file() -> str | None:
    """서비스 계정 키 파일 (설정된 경우)"""
    return os.environ.get(f"{ENV_PREFIX}CREDENTIALS") or os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
