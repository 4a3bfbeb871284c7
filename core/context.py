"""
core/context.py - discover 실행 컨텍스트

전략(strategy)이 호출마다 전달받는 컨텍스트입니다: 조회 대상 프로젝트,
listing 클라이언트, 호출자가 소유하는 취소 상태.
discovery 코어는 읽기만 하며 cancel()은 호출자의 몫입니다.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any

from core.exceptions import DiscoveryCancelledError


@dataclass(eq=False)
class DiscoveryContext:
    """한 번의 inventory 실행에서 공유되는 읽기 전용 컨텍스트

    Attributes:
        project: GCP 프로젝트 ID
        client: listing 클라이언트 (core.gcp.reader.GCPReader 또는 호환 객체)
        timeout: 생성 시점부터의 전체 제한 시간(초, None = 제한 없음)
    """

    project: str
    client: Any
    timeout: float | None = None
    _cancelled: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _deadline: float | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.timeout is not None:
            self._deadline = time.monotonic() + self.timeout

    def cancel(self) -> None:
        """이 컨텍스트를 공유하는 모든 전략에 중단 요청"""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def stopped(self) -> bool:
        """취소되었거나 제한 시간이 지났으면 True"""
        return self._stop_reason() is not None

    def remaining(self) -> float | None:
        """제한 시간까지 남은 초 (제한 없으면 None)"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancellation_error(self, resource_type: Any = None) -> DiscoveryCancelledError:
        """현재 중단 사유에 맞는 DiscoveryCancelledError 생성"""
        return DiscoveryCancelledError(self._stop_reason() or "cancelled", resource_type=resource_type)

    def raise_if_cancelled(self) -> None:
        """취소되었거나 제한 시간이 지났으면 DiscoveryCancelledError 발생"""
        if self.stopped:
            raise self.cancellation_error()

    def _stop_reason(self) -> str | None:
        if self._cancelled.is_set():
            return "cancelled"
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return "deadline exceeded"
        return None
