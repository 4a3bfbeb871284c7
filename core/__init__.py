# core/__init__.py
"""
core - GCP inventory 인프라

discovery 코어와 Google Cloud 클라이언트 계층을 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── data/inventory/ # 레지스트리, fetch 전략, 식별자, 병렬 수집기
    ├── gcp/            # Google Cloud listing 클라이언트
    ├── context.py      # discover 실행 컨텍스트 (취소, 제한 시간)
    ├── filter.py       # 라벨 필터 컴파일
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import settings, get_default_project
    project = get_default_project()

    # discovery
    from core.context import DiscoveryContext
    from core.data.inventory import ResourceType, build_registry
    from core.gcp import GCPReader

    ctx = DiscoveryContext(project=project, client=GCPReader(project, region="us-central1"))
    disks = build_registry().discover(ctx, ResourceType.COMPUTE_DISK)

    # 예외 처리
    from core.exceptions import DiscoveryError, is_access_denied
    try:
        disks = build_registry().discover(ctx, ResourceType.COMPUTE_DISK)
    except DiscoveryError as e:
        if is_access_denied(e):
            print("권한이 없습니다")
"""

__all__: list[str] = []
