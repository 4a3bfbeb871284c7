"""
tests/conftest.py - pytest 공통 픽스처

호출을 기록하는 가짜 listing 클라이언트와 이에 연결된 discovery 컨텍스트를 제공합니다.

Usage:
    def test_something(fake_client, ctx, registry):
        fake_client.responses["list_disks"] = {"us-east1-b": items("disk-1")}
        registry.discover(ctx, ResourceType.COMPUTE_DISK)
"""

import sys
import threading
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.context import DiscoveryContext  # noqa: E402
from core.data.inventory import ListedItem, build_registry  # noqa: E402

ZONED_METHODS = {
    "list_instances",
    "list_instance_groups",
    "list_disks",
    "list_resource_record_sets",
}


def items(*names: str) -> list[ListedItem]:
    """이름으로 ListedItem 목록 생성"""
    return [ListedItem(name=name) for name in names]


def records(*pairs: tuple[str, str]) -> list[ListedItem]:
    """(name, type) 쌍으로 DNS 레코드 ListedItem 목록 생성"""
    return [ListedItem(name=name, type=record_type) for name, record_type in pairs]


class FakeClient:
    """listing 클라이언트 대역

    모든 ``list_*`` 속성은 ``responses[name]`` (기본: 빈 리스트/딕셔너리)을
    반환하거나 ``errors[name]``을 발생시키는 메서드입니다.
    호출은 (method, args) 튜플로 기록됩니다.
    """

    def __init__(self, responses=None, errors=None):
        self.responses = dict(responses or {})
        self.errors = dict(errors or {})
        self.calls = []
        self._lock = threading.Lock()

    def __getattr__(self, name):
        if not name.startswith("list_"):
            raise AttributeError(name)

        def method(ctx, *args):
            with self._lock:
                self.calls.append((name, args))
            if name in self.errors:
                raise self.errors[name]
            default = {} if name in ZONED_METHODS else []
            return self.responses.get(name, default)

        return method

    def called(self, name):
        return [args for method, args in self.calls if method == name]


# =============================================================================
# 픽스처
# =============================================================================


@pytest.fixture
def fake_client():
    """호출을 기록하는 가짜 listing 클라이언트"""
    return FakeClient()


@pytest.fixture
def ctx(fake_client):
    """가짜 클라이언트에 연결된 "proj" 프로젝트 컨텍스트"""
    return DiscoveryContext(project="proj", client=fake_client)


@pytest.fixture
def registry():
    """기본 전략 전체가 등록된 레지스트리"""
    return build_registry()
