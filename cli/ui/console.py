"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력과 CLI 로깅 설정을 위한 함수들
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from core.config import settings


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        color_system="auto",
        highlight=True,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def configure_logging(level: str | int | None = None) -> None:
    """RichHandler로 로그 출력 설정

    Args:
        level: 로그 레벨 이름 또는 숫자 (None이면 settings.LOG_LEVEL)
    """
    level = level if level is not None else settings.LOG_LEVEL
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # google 클라이언트 라이브러리 노이즈 로그 제한
    for name in settings.QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"


def print_success(message: str) -> None:
    console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def print_info(message: str) -> None:
    console.print(f"[blue]{SYMBOL_INFO} {message}[/blue]")


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
) -> None:
    """테이블 출력

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 목록
        rows: 행 데이터 목록
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def print_error_tree(errors: list[tuple[str, list[str]]], title: str = "Errors") -> None:
    """카테고리별 에러 트리 출력

    Args:
        errors: (카테고리, [상세 항목]) 튜플 목록
        title: 트리 루트 제목

    Example:
        print_error_tree([
            ("google_compute_disk", ["unable to list disks: 403 Forbidden"]),
        ])
    """
    tree = Tree(f"[bold yellow]{title}[/bold yellow]")
    for category, items in errors:
        branch = tree.add(f"[red]{category}[/red] ({len(items)})")
        for item in items[:3]:
            branch.add(f"[dim]{item}[/dim]")
        if len(items) > 3:
            branch.add(f"[dim]... {len(items) - 3} more[/dim]")
    console.print(tree)
