"""
Unit tests for the Kubernetes use cases, run against the in-memory API and registry.
"""
import pytest
import yaml

from edge_metrics.application.services.manifest_renderer import ManifestRenderer
from edge_metrics.application.use_cases.kubernetes import (
    CheckKubernetesHealthUseCase,
    CleanupNamespaceUseCase,
    DeleteDeviceResourcesUseCase,
    GetDeviceResourcesUseCase,
    GetNamespaceSyncStatusUseCase,
    RenderManifestsUseCase,
    SyncAllDevicesUseCase,
    SyncDeviceUseCase,
)
from edge_metrics.core.exceptions import DeviceNotFoundError, OrchestrationUnavailableError
from edge_metrics.domain.models.device_state import DeviceStatus
from tests.fakes import NAMESPACE, make_device, managed_labels


@pytest.fixture
def registered(repository):
    repository.devices["rpi-01"] = make_device("rpi-01", ip_address="10.0.0.1")
    repository.devices["jetson-01"] = make_device(
        "jetson-01", ip_address="10.0.0.2", device_type="jetson_orin", port=9200, reload_port=9201
    )
    return repository


class TestGetDeviceResources:
    @pytest.mark.asyncio
    async def test_absent_resources_are_unsynced_not_an_error(self, registered, mirror):
        response = await GetDeviceResourcesUseCase(registered, mirror).execute("rpi-01", NAMESPACE)
        assert response.synced is False
        assert response.service.exists is False
        assert response.endpoints.exists is False
        assert response.prometheus_target is None

    @pytest.mark.asyncio
    async def test_synced_device_reports_scrape_target(self, registered, mirror):
        await mirror.apply(registered.devices["rpi-01"], NAMESPACE)
        response = await GetDeviceResourcesUseCase(registered, mirror).execute("rpi-01", NAMESPACE)
        assert response.synced is True
        assert response.service.cluster_ip is not None
        assert response.endpoints.ready_addresses == ["10.0.0.1"]
        assert response.prometheus_target == "10.0.0.1:9100/metrics"

    @pytest.mark.asyncio
    async def test_unavailable_platform_raises(self, registered, mirror, k8s):
        k8s.unavailable = True
        with pytest.raises(OrchestrationUnavailableError):
            await GetDeviceResourcesUseCase(registered, mirror).execute("rpi-01", NAMESPACE)

    @pytest.mark.asyncio
    async def test_unregistered_device_not_found(self, registered, mirror):
        with pytest.raises(DeviceNotFoundError):
            await GetDeviceResourcesUseCase(registered, mirror).execute("ghost", NAMESPACE)


class TestNamespaceSyncStatus:
    @pytest.mark.asyncio
    async def test_rows_follow_registry_order(self, registered, mirror):
        await mirror.apply(registered.devices["jetson-01"], NAMESPACE)

        response = await GetNamespaceSyncStatusUseCase(registered, mirror, concurrency_limit=4).execute(NAMESPACE)
        assert response.kubernetes_enabled is True
        assert [row.device_id for row in response.resources] == ["rpi-01", "jetson-01"]
        assert response.synced == 1
        assert response.unsynced == 1
        assert response.total_registered_devices == 2
        assert response.total_k8s_resources == 1

    @pytest.mark.asyncio
    async def test_only_complete_pairs_count_as_observed(self, registered, mirror, k8s):
        orphan = {"metadata": {"name": "edge-device-old", "labels": managed_labels("old")}, "spec": {}}
        half = {"metadata": {"name": "edge-device-half", "labels": managed_labels("half")}, "spec": {}}
        k8s.put_raw("services", NAMESPACE, orphan)
        k8s.put_raw("endpoints", NAMESPACE, {"metadata": orphan["metadata"], "subsets": []})
        k8s.put_raw("services", NAMESPACE, half)

        response = await GetNamespaceSyncStatusUseCase(registered, mirror, concurrency_limit=4).execute(NAMESPACE)
        assert response.total_k8s_resources == 1
        assert response.synced == 0

    @pytest.mark.asyncio
    async def test_one_failed_lookup_is_listed_not_raised(self, registered, mirror, k8s, builder):
        for device in registered.devices.values():
            await mirror.apply(device, NAMESPACE)
        k8s.unavailable_names.add(builder.name_for("rpi-01"))

        response = await GetNamespaceSyncStatusUseCase(registered, mirror, concurrency_limit=4).execute(NAMESPACE)
        failed, healthy = response.resources
        assert failed.device_id == "rpi-01"
        assert failed.synced is False
        assert "HTTP 503" in failed.error
        assert healthy.device_id == "jetson-01"
        assert healthy.synced is True
        assert healthy.error is None
        assert response.synced == 1
        assert response.unsynced == 1

    @pytest.mark.asyncio
    async def test_unexpected_lookup_error_is_listed_not_raised(self, registered, mirror, monkeypatch):
        original = mirror.lookup

        async def lookup(device_id, namespace):
            if device_id == "jetson-01":
                raise RuntimeError("decoder exploded")
            return await original(device_id, namespace)

        monkeypatch.setattr(mirror, "lookup", lookup)
        response = await GetNamespaceSyncStatusUseCase(registered, mirror, concurrency_limit=4).execute(NAMESPACE)
        assert [row.device_id for row in response.resources] == ["rpi-01", "jetson-01"]
        assert response.resources[1].synced is False
        assert response.resources[1].error == "decoder exploded"

    @pytest.mark.asyncio
    async def test_not_configured_reports_disabled(self, registered, mirror, k8s):
        k8s.is_configured = False
        response = await GetNamespaceSyncStatusUseCase(registered, mirror, concurrency_limit=4).execute(NAMESPACE)
        assert response.kubernetes_enabled is False
        assert response.unsynced == 2
        assert all(row.error == "Kubernetes API is not configured" for row in response.resources)
        assert k8s.calls == []

    @pytest.mark.asyncio
    async def test_unlistable_namespace_raises(self, registered, mirror, k8s):
        k8s.unavailable = True
        with pytest.raises(OrchestrationUnavailableError):
            await GetNamespaceSyncStatusUseCase(registered, mirror, concurrency_limit=4).execute(NAMESPACE)


class TestSyncUseCases:
    @pytest.mark.asyncio
    async def test_sync_all_response_buckets(self, registered, synchronizer, device_client):
        device_client.statuses["jetson-01"] = DeviceStatus.UNHEALTHY
        response = await SyncAllDevicesUseCase(synchronizer).execute(NAMESPACE)
        assert [item.device_id for item in response.created] == ["rpi-01"]
        assert [item.device_id for item in response.skipped] == ["jetson-01"]
        assert response.created[0].status == "created"
        assert response.total == 2
        assert response.total_healthy == 1
        assert response.status == "completed"

    @pytest.mark.asyncio
    async def test_sync_one_device(self, registered, device_client, synchronizer):
        use_case = SyncDeviceUseCase(registered, device_client, synchronizer)
        first = await use_case.execute("rpi-01", NAMESPACE)
        second = await use_case.execute("rpi-01", NAMESPACE)
        assert first.status == "created"
        assert first.service == "edge-device-rpi-01"
        assert second.status == "unchanged"

    @pytest.mark.asyncio
    async def test_sync_unknown_device(self, registered, device_client, synchronizer):
        with pytest.raises(DeviceNotFoundError):
            await SyncDeviceUseCase(registered, device_client, synchronizer).execute("ghost", NAMESPACE)


class TestDeleteAndCleanup:
    @pytest.mark.asyncio
    async def test_delete_resources_twice(self, registered, mirror):
        await mirror.apply(registered.devices["rpi-01"], NAMESPACE)
        use_case = DeleteDeviceResourcesUseCase(mirror)

        first = await use_case.execute("rpi-01", NAMESPACE)
        second = await use_case.execute("rpi-01", NAMESPACE)
        assert first.status == "deleted"
        assert first.service_status == "deleted"
        assert second.status == "deleted"
        assert second.service_status == "absent"

    @pytest.mark.asyncio
    async def test_cleanup_then_status(self, registered, mirror, k8s, synchronizer):
        await synchronizer.sync_all(NAMESPACE)
        k8s.put_raw("services", NAMESPACE, {"metadata": {"name": "grafana", "labels": {}}, "spec": {}})

        cleanup = await CleanupNamespaceUseCase(mirror, k8s, concurrency_limit=4).execute(NAMESPACE)
        assert cleanup.status == "completed"
        assert cleanup.deleted_services == ["edge-device-jetson-01", "edge-device-rpi-01"]
        assert cleanup.deleted_endpoints == ["edge-device-jetson-01", "edge-device-rpi-01"]
        assert "grafana" in k8s.services[NAMESPACE]

        status = await GetNamespaceSyncStatusUseCase(registered, mirror, concurrency_limit=4).execute(NAMESPACE)
        assert status.synced == 0
        assert status.total_registered_devices == 2

    @pytest.mark.asyncio
    async def test_cleanup_reports_denied_deletes(self, registered, mirror, k8s, synchronizer):
        await synchronizer.sync_all(NAMESPACE)
        k8s.denied_writes.add("endpoints")

        cleanup = await CleanupNamespaceUseCase(mirror, k8s, concurrency_limit=4).execute(NAMESPACE)
        assert cleanup.status == "partial"
        assert len(cleanup.deleted_services) == 2
        assert sorted(failure.name for failure in cleanup.failed) == [
            "edge-device-jetson-01",
            "edge-device-rpi-01",
        ]
        assert all(failure.kind == "Endpoints" for failure in cleanup.failed)


class TestHealth:
    @pytest.mark.asyncio
    async def test_all_checks_pass(self, k8s):
        response = await CheckKubernetesHealthUseCase(k8s).execute(NAMESPACE)
        assert response.kubernetes_available is True
        assert response.client_initialized is True
        assert response.namespace_accessible is True
        assert response.rbac_permissions == {"namespace": "ok", "services": "ok", "endpoints": "ok"}

    @pytest.mark.asyncio
    async def test_denied_endpoints_listed_per_verb(self, k8s):
        k8s.denied_writes.add("endpoints")
        response = await CheckKubernetesHealthUseCase(k8s).execute(NAMESPACE)
        assert response.kubernetes_available is True
        assert response.rbac_permissions["services"] == "ok"
        assert response.rbac_permissions["endpoints"] == "denied: create, update, delete"

    @pytest.mark.asyncio
    async def test_unreachable_server(self, k8s):
        k8s.unavailable = True
        response = await CheckKubernetesHealthUseCase(k8s).execute(NAMESPACE)
        assert response.kubernetes_available is False
        assert response.client_initialized is False
        assert response.namespace_accessible is False
        assert response.rbac_permissions["services"].startswith("error:")


class TestManifests:
    @pytest.mark.asyncio
    async def test_yaml_has_two_documents_per_device(self, registered, builder):
        text = await RenderManifestsUseCase(registered, ManifestRenderer(builder)).execute(NAMESPACE)
        documents = list(yaml.safe_load_all(text))
        assert [document["kind"] for document in documents] == ["Service", "Endpoints", "Service", "Endpoints"]
        assert documents[2]["metadata"]["name"] == "edge-device-jetson-01"
        assert documents[3]["subsets"][0]["addresses"] == [{"ip": "10.0.0.2"}]
        assert all(document["metadata"]["namespace"] == NAMESPACE for document in documents)

    @pytest.mark.asyncio
    async def test_empty_registry_renders_empty_text(self, repository, builder):
        assert await RenderManifestsUseCase(repository, ManifestRenderer(builder)).execute(NAMESPACE) == ""
