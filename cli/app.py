"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 inventory CLI 진입점입니다.

명령어 구조:
    gcpinv --version
    gcpinv types                                  # 지원하는 리소스 타입 목록
    gcpinv discover -p PROJECT -r REGION          # 전체 타입
    gcpinv discover -p PROJECT -t compute_disk -t dns_record_set --tag env=prod
    gcpinv discover -p PROJECT --format json --fail-fast

Usage:
    $ gcpinv discover -p my-project -r us-central1
    $ python -m cli.app discover -p my-project
"""

import json
import logging

import click

from cli.ui import configure_logging, print_error, print_error_tree, print_success, print_table
from core.config import get_credentials_file, get_default_project, get_default_region, get_version, settings
from core.context import DiscoveryContext
from core.data.inventory import InventoryCollector, ResourceType, build_registry
from core.exceptions import ConfigError, InventoryError, ValidationError, format_error_for_user
from core.filter import FilterSpec
from core.gcp import GCPReader, load_credentials

logger = logging.getLogger(__name__)

# 리전을 지정해야 조회할 수 있는 타입
REGIONAL_TYPES = (ResourceType.COMPUTE_FORWARDING_RULE,)


def _parse_types(names: tuple[str, ...]) -> list[ResourceType]:
    types = []
    for name in names:
        try:
            types.append(ResourceType.from_string(name))
        except ValueError:
            raise click.BadParameter(f"unknown resource type '{name}'", param_hint="--type") from None
    return types


@click.group()
@click.version_option(version=get_version(), prog_name="gcpinv")
@click.option("-v", "--verbose", count=True, help="로그 상세 수준 (-v info, -vv debug)")
def cli(verbose: int) -> None:
    """GCP 프로젝트 리소스 discovery"""
    try:
        settings.validate()
    except ConfigError as e:
        raise click.UsageError(format_error_for_user(e)) from None

    if verbose >= 2:
        configure_logging(logging.DEBUG)
    elif verbose == 1:
        configure_logging(logging.INFO)
    else:
        configure_logging()


@cli.command("types")
def types_cmd() -> None:
    """지원하는 리소스 타입 목록"""
    registry = build_registry()
    rows = []
    for resource_type in registry.types():
        strategy = registry.strategy(resource_type)
        rows.append(
            [
                resource_type.value,
                strategy.id_scheme.value,
                "yes" if strategy.filtered else "",
                str(strategy.depends_on or ""),
            ]
        )
    print_table("Resource types", ["type", "identifier", "tag filter", "depends on"], rows)


@cli.command("discover")
@click.option("-p", "--project", default=get_default_project, help="GCP 프로젝트 ID")
@click.option("-r", "--region", default=get_default_region, help="리전 (forwarding rule 조회용)")
@click.option("-t", "--type", "type_names", multiple=True, help="리소스 타입 (다중 가능, 기본: 전체)")
@click.option("--tag", "tags", multiple=True, help="라벨 필터 name=value (다중 가능, AND 조건)")
@click.option("-f", "--format", "output_format", type=click.Choice(["table", "json"]), default="table")
@click.option("-w", "--workers", type=int, default=None, help="병렬 discover 수")
@click.option("--fail-fast", is_flag=True, help="첫 번째 실패에서 중단")
@click.option(
    "--timeout",
    type=float,
    default=lambda: settings.DISCOVERY_TIMEOUT or None,
    help="전체 제한 시간 (초)",
)
@click.option("--credentials", default=get_credentials_file, help="서비스 계정 키 파일")
def discover_cmd(
    project: str | None,
    region: str | None,
    type_names: tuple[str, ...],
    tags: tuple[str, ...],
    output_format: str,
    workers: int | None,
    fail_fast: bool,
    timeout: float | None,
    credentials: str | None,
) -> None:
    """리소스를 조회하고 식별자 출력"""
    if not project:
        raise click.UsageError("no project given (use --project or set GCPINV_PROJECT)")

    try:
        filters = FilterSpec.from_strings(tags)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--tag") from None

    registry = build_registry()
    resource_types = _parse_types(type_names)
    if not resource_types:
        resource_types = registry.types()
        if not region:
            # 전체 조회 시 리전이 없으면 리전 단위 타입은 제외
            logger.warning("no region given, skipping " + ", ".join(str(t) for t in REGIONAL_TYPES))
            resource_types = [t for t in resource_types if t not in REGIONAL_TYPES]

    reader = GCPReader(project, credentials=load_credentials(credentials), region=region)
    ctx = DiscoveryContext(project=project, client=reader, timeout=timeout)
    try:
        collector = InventoryCollector(ctx, registry, max_workers=workers)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--workers") from None
    logger.info(f"discovering {len(resource_types)} resource type(s) in {project}")

    try:
        result = collector.collect(resource_types, filters=filters, fail_fast=fail_fast)
    except InventoryError as e:
        print_error(format_error_for_user(e))
        raise SystemExit(1) from None

    handles = result.get_flat_data()
    if output_format == "json":
        click.echo(json.dumps([h.to_dict() for h in handles], indent=2))
    else:
        print_table(
            f"{project}: {len(handles)} resource(s)",
            ["type", "id"],
            [[h.resource_type.value, h.id] for h in handles],
        )

    if result.error_count:
        errors = [(str(r.resource_type), [format_error_for_user(r.error)]) for r in result.results if r.error]
        print_error_tree(errors, title=f"{result.error_count} resource type(s) failed")
        raise SystemExit(1)

    if output_format == "table":
        print_success(f"{result.success_count} resource type(s) discovered")


def main() -> None:
    """gcpinv 명령 엔트리포인트"""
    cli()


if __name__ == "__main__":
    main()
