"""
tests/core/data/inventory/test_strategies.py - 기본 전략 테스트

가짜 클라이언트를 상대로 각 리소스 타입을 레지스트리 전체 경로로 실행해
어떤 listing이 어떤 인자로 호출되는지와 생성된 식별자를 검증합니다.
"""

import pytest

from core.data.inventory.types import ResourceType
from core.exceptions import DependencyError, DiscoveryCancelledError, ListingError
from core.filter import FilterSpec
from tests.conftest import items, records

PROD = FilterSpec.from_pairs([("env", "prod")])


class TestListingCalls:
    """타입별 listing 호출 인자"""

    @pytest.mark.parametrize(
        "resource_type,method,args",
        [
            (ResourceType.COMPUTE_INSTANCE, "list_instances", ("(labels.env=prod)",)),
            (ResourceType.COMPUTE_INSTANCE_GROUP, "list_instance_groups", ("",)),
            (ResourceType.COMPUTE_INSTANCE_IAM_POLICY, "list_instances", ("(labels.env=prod)",)),
            (ResourceType.COMPUTE_DISK, "list_disks", ("(labels.env=prod)",)),
            (ResourceType.COMPUTE_FIREWALL, "list_firewalls", ("",)),
            (ResourceType.COMPUTE_NETWORK, "list_networks", ("",)),
            (ResourceType.COMPUTE_HEALTH_CHECK, "list_health_checks", ("",)),
            (ResourceType.COMPUTE_BACKEND_SERVICE, "list_backend_services", ("",)),
            (ResourceType.COMPUTE_BACKEND_BUCKET, "list_backend_buckets", ("",)),
            (ResourceType.COMPUTE_SSL_CERTIFICATE, "list_ssl_certificates", ("",)),
            (ResourceType.COMPUTE_TARGET_HTTP_PROXY, "list_target_http_proxies", ("",)),
            (ResourceType.COMPUTE_TARGET_HTTPS_PROXY, "list_target_https_proxies", ("",)),
            (ResourceType.COMPUTE_URL_MAP, "list_url_maps", ("",)),
            (ResourceType.COMPUTE_GLOBAL_FORWARDING_RULE, "list_global_forwarding_rules", ("(labels.env=prod)",)),
            (ResourceType.COMPUTE_FORWARDING_RULE, "list_forwarding_rules", ("(labels.env=prod)",)),
            (ResourceType.DNS_MANAGED_ZONE, "list_managed_zones", ()),
            (ResourceType.PROJECT_IAM_CUSTOM_ROLE, "list_project_iam_custom_roles", ("projects/proj",)),
            (ResourceType.STORAGE_BUCKET, "list_buckets", ()),
            (ResourceType.STORAGE_BUCKET_IAM_POLICY, "list_buckets", ()),
            (ResourceType.SQL_DATABASE_INSTANCE, "list_storage_instances", ("",)),
        ],
    )
    def test_listing_call(self, registry, ctx, fake_client, resource_type, method, args):
        """기대한 메서드와 인자로 한 번 호출"""
        registry.discover(ctx, resource_type, PROD)

        assert fake_client.calls == [(method, args)]


class TestFlatTypes:
    """단일 listing 타입"""

    def test_names_are_identifiers(self, registry, ctx, fake_client):
        """이름이 곧 식별자"""
        fake_client.responses["list_ssl_certificates"] = items("cert-a", "cert-b")

        handles = registry.discover(ctx, ResourceType.COMPUTE_SSL_CERTIFICATE)

        assert [h.id for h in handles] == ["cert-a", "cert-b"]
        assert {h.resource_type for h in handles} == {ResourceType.COMPUTE_SSL_CERTIFICATE}

    def test_bucket_and_bucket_policy_share_listing(self, registry, ctx, fake_client):
        """버킷과 버킷 IAM 정책은 같은 listing 사용"""
        fake_client.responses["list_buckets"] = items("assets", "logs")

        buckets = registry.discover(ctx, ResourceType.STORAGE_BUCKET)
        policies = registry.discover(ctx, ResourceType.STORAGE_BUCKET_IAM_POLICY)

        assert [h.id for h in buckets] == [h.id for h in policies] == ["assets", "logs"]
        assert policies[0].resource_type is ResourceType.STORAGE_BUCKET_IAM_POLICY
        assert buckets[0] != policies[0]

    def test_custom_roles(self, registry, ctx, fake_client):
        """커스텀 역할 전체 이름"""
        fake_client.responses["list_project_iam_custom_roles"] = items("projects/proj/roles/deployer")

        handles = registry.discover(ctx, ResourceType.PROJECT_IAM_CUSTOM_ROLE)

        assert [h.id for h in handles] == ["projects/proj/roles/deployer"]

    def test_bucket_failure_message(self, registry, ctx, fake_client):
        """버킷 IAM 정책 실패 메시지"""
        fake_client.errors["list_buckets"] = RuntimeError("boom")

        with pytest.raises(ListingError, match="unable to list bucket IAM policies"):
            registry.discover(ctx, ResourceType.STORAGE_BUCKET_IAM_POLICY)


class TestZonedTypes:
    """zone별 listing 타입"""

    def test_instance_identifier(self, registry, ctx, fake_client):
        """project/zone/name 식별자"""
        fake_client.responses["list_instances"] = {"us-central1-a": items("web-1")}

        handles = registry.discover(ctx, ResourceType.COMPUTE_INSTANCE)

        assert [h.id for h in handles] == ["proj/us-central1-a/web-1"]

    def test_instance_iam_policy_identifier(self, registry, ctx, fake_client):
        """인스턴스 IAM 정책은 전체 경로"""
        fake_client.responses["list_instances"] = {"us-central1-a": items("web-1")}

        handles = registry.discover(ctx, ResourceType.COMPUTE_INSTANCE_IAM_POLICY)

        assert [h.id for h in handles] == ["projects/proj/zones/us-central1-a/instances/web-1"]
        assert handles[0].resource_type is ResourceType.COMPUTE_INSTANCE_IAM_POLICY

    def test_instance_group_identifier(self, registry, ctx, fake_client):
        """인스턴스 그룹 식별자"""
        fake_client.responses["list_instance_groups"] = {"europe-west1-b": items("ig-web")}

        handles = registry.discover(ctx, ResourceType.COMPUTE_INSTANCE_GROUP)

        assert [h.id for h in handles] == ["proj/europe-west1-b/ig-web"]

    def test_disks_have_no_project_segment(self, registry, ctx, fake_client):
        """디스크는 프로젝트 세그먼트 없음"""
        fake_client.responses["list_disks"] = {"us-east1-b": items("disk-1", "disk-2")}

        handles = registry.discover(ctx, ResourceType.COMPUTE_DISK)

        assert [h.id for h in handles] == ["us-east1-b/disk-1", "us-east1-b/disk-2"]
        assert all(h.resource_type is ResourceType.COMPUTE_DISK for h in handles)

    def test_count_is_sum_over_scopes(self, registry, ctx, fake_client):
        """zone별 결과 합계"""
        fake_client.responses["list_instances"] = {
            "us-central1-a": items("a1", "a2", "a3"),
            "us-central1-b": [],
            "europe-west1-d": items("d1"),
        }

        handles = registry.discover(ctx, ResourceType.COMPUTE_INSTANCE)

        assert len(handles) == 4
        assert not any("us-central1-b" in h.id for h in handles)

    def test_all_scopes_empty(self, registry, ctx, fake_client):
        """모든 zone이 비어 있음"""
        fake_client.responses["list_disks"] = {"us-east1-b": [], "us-east1-c": []}

        assert registry.discover(ctx, ResourceType.COMPUTE_DISK) == []

    def test_identifiers_unique_across_zones(self, registry, ctx, fake_client):
        """zone이 다르면 같은 이름도 식별자 구분"""
        fake_client.responses["list_disks"] = {"us-east1-b": items("data"), "us-east1-c": items("data")}

        ids = [h.id for h in registry.discover(ctx, ResourceType.COMPUTE_DISK)]

        assert len(set(ids)) == 2

    def test_failure_message(self, registry, ctx, fake_client):
        """인스턴스 그룹 실패 메시지"""
        fake_client.errors["list_instance_groups"] = RuntimeError("boom")

        with pytest.raises(ListingError, match="unable to list instance groups"):
            registry.discover(ctx, ResourceType.COMPUTE_INSTANCE_GROUP)


class TestRecordSets:
    """2단계 DNS 레코드 세트 조회"""

    def test_single_record(self, registry, ctx, fake_client):
        """레코드 하나"""
        fake_client.responses["list_managed_zones"] = items("z1")
        fake_client.responses["list_resource_record_sets"] = {"z1": records(("www", "A"))}

        handles = registry.discover(ctx, ResourceType.DNS_RECORD_SET)

        assert [h.id for h in handles] == ["z1/www/A"]
        assert handles[0].resource_type is ResourceType.DNS_RECORD_SET
        assert fake_client.called("list_resource_record_sets") == [(["z1"],)]

    def test_zones_resolved_before_records(self, registry, ctx, fake_client):
        """zone 조회 후 레코드 조회"""
        fake_client.responses["list_managed_zones"] = items("z1", "z2")
        fake_client.responses["list_resource_record_sets"] = {
            "z1": records(("example.com.", "SOA"), ("example.com.", "NS")),
            "z2": records(("api.internal.", "CNAME")),
        }

        handles = registry.discover(ctx, ResourceType.DNS_RECORD_SET)

        assert [method for method, _ in fake_client.calls] == ["list_managed_zones", "list_resource_record_sets"]
        assert [h.id for h in handles] == [
            "z1/example.com./SOA",
            "z1/example.com./NS",
            "z2/api.internal./CNAME",
        ]

    def test_no_zones_still_lists_records(self, registry, ctx, fake_client):
        """zone이 없어도 레코드 listing 호출"""
        handles = registry.discover(ctx, ResourceType.DNS_RECORD_SET)

        assert handles == []
        assert fake_client.called("list_resource_record_sets") == [([],)]

    def test_zone_failure_short_circuits(self, registry, ctx, fake_client):
        """zone 조회 실패 시 레코드 조회 생략"""
        fake_client.errors["list_managed_zones"] = RuntimeError("403 Forbidden")

        with pytest.raises(DependencyError) as exc_info:
            registry.discover(ctx, ResourceType.DNS_RECORD_SET)

        error = exc_info.value
        assert str(error).startswith("unable to resolve managed zones")
        assert error.resource_type is ResourceType.DNS_RECORD_SET
        assert error.dependency is ResourceType.DNS_MANAGED_ZONE
        assert isinstance(error.cause, ListingError)
        assert fake_client.called("list_resource_record_sets") == []

    def test_record_failure_is_not_a_dependency_failure(self, registry, ctx, fake_client):
        """레코드 조회 실패는 의존 실패가 아님"""
        fake_client.responses["list_managed_zones"] = items("z1")
        fake_client.errors["list_resource_record_sets"] = RuntimeError("boom")

        with pytest.raises(ListingError) as exc_info:
            registry.discover(ctx, ResourceType.DNS_RECORD_SET)

        assert not isinstance(exc_info.value, DependencyError)
        assert exc_info.value.message == "unable to list resource record sets"

    def test_cancellation_during_zone_stage_passes_through(self, registry, ctx, fake_client):
        """zone 단계 취소는 그대로 전파"""
        fake_client.errors["list_managed_zones"] = DiscoveryCancelledError("cancelled")

        with pytest.raises(DiscoveryCancelledError):
            registry.discover(ctx, ResourceType.DNS_RECORD_SET)

        assert fake_client.called("list_resource_record_sets") == []
