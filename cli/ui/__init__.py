# cli/ui - 콘솔 컴포넌트 (rich)
"""
CLI 콘솔 출력 헬퍼
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    configure_logging,
    console,
    get_console,
    print_error,
    print_error_tree,
    print_info,
    print_success,
    print_table,
    print_warning,
)

__all__: list[str] = [
    "console",
    "get_console",
    "configure_logging",
    "print_success",
    "print_error",
    "print_warning",
    "print_info",
    "print_table",
    "print_error_tree",
    "SYMBOL_SUCCESS",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "SYMBOL_INFO",
]
