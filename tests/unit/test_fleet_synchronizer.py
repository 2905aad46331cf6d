"""
Unit tests for FleetSynchronizer: healthy-only writes, removal of mirrors of
unhealthy devices, garbage collection and repeat-sync stability.
"""
import pytest

from edge_metrics.application.use_cases.kubernetes.get_namespace_sync_status import (
    GetNamespaceSyncStatusUseCase,
)
from edge_metrics.core.exceptions import OrchestrationUnavailableError
from edge_metrics.domain.models.bulk import SyncAction
from edge_metrics.domain.models.device_state import DeviceStatus
from tests.fakes import NAMESPACE, make_device


def _ids(outcomes):
    return sorted(outcome.device_id for outcome in outcomes)


@pytest.fixture
def fleet(repository):
    for index in range(1, 4):
        repository.devices[f"rpi-0{index}"] = make_device(f"rpi-0{index}", ip_address=f"10.0.0.{index}")
    return repository


class TestSyncAll:
    @pytest.mark.asyncio
    async def test_first_sync_creates_every_healthy_device(self, synchronizer, fleet):
        result = await synchronizer.sync_all(NAMESPACE)
        assert _ids(result.created) == ["rpi-01", "rpi-02", "rpi-03"]
        assert result.total == 3
        assert result.total_healthy == 3
        assert result.status == "completed"

    @pytest.mark.asyncio
    async def test_second_sync_changes_nothing(self, synchronizer, fleet, k8s):
        await synchronizer.sync_all(NAMESPACE)
        writes_before = len([call for call in k8s.calls if call.startswith(("POST", "PUT", "DELETE"))])

        result = await synchronizer.sync_all(NAMESPACE)
        assert result.created == []
        assert result.updated == []
        assert result.deleted == []
        assert _ids(result.unchanged) == ["rpi-01", "rpi-02", "rpi-03"]
        writes_after = len([call for call in k8s.calls if call.startswith(("POST", "PUT", "DELETE"))])
        assert writes_after == writes_before

    @pytest.mark.asyncio
    async def test_unregistered_mirror_is_collected(self, synchronizer, fleet, k8s):
        await synchronizer.sync_all(NAMESPACE)
        del fleet.devices["rpi-02"]

        result = await synchronizer.sync_all(NAMESPACE)
        assert _ids(result.deleted) == ["rpi-02"]
        assert "edge-device-rpi-02" not in k8s.services[NAMESPACE]
        assert "edge-device-rpi-02" not in k8s.endpoints[NAMESPACE]

    @pytest.mark.asyncio
    async def test_unhealthy_device_is_skipped_then_reported_unsynced(
        self, synchronizer, repository, device_client, mirror
    ):
        repository.devices["a"] = make_device("a", ip_address="10.0.0.1")
        repository.devices["b"] = make_device("b", ip_address="10.0.0.2")
        device_client.statuses["b"] = DeviceStatus.UNREACHABLE

        result = await synchronizer.sync_all(NAMESPACE)
        assert _ids(result.created) == ["a"]
        assert _ids(result.skipped) == ["b"]
        assert result.total_healthy == 1

        status = await GetNamespaceSyncStatusUseCase(repository, mirror, concurrency_limit=4).execute(NAMESPACE)
        assert status.synced == 1
        assert status.unsynced == 1
        assert [row.device_id for row in status.resources] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_device_turning_unhealthy_loses_its_mirror(self, synchronizer, fleet, device_client, k8s):
        await synchronizer.sync_all(NAMESPACE)
        device_client.statuses["rpi-03"] = DeviceStatus.UNHEALTHY

        result = await synchronizer.sync_all(NAMESPACE)
        assert _ids(result.deleted) == ["rpi-03"]
        assert "edge-device-rpi-03" not in k8s.services[NAMESPACE]

    @pytest.mark.asyncio
    async def test_denied_endpoints_writes_fail_the_device(
        self, synchronizer, repository, k8s, mirror
    ):
        repository.devices["a"] = make_device("a")
        k8s.denied_writes.add("endpoints")

        result = await synchronizer.sync_all(NAMESPACE)
        assert _ids(result.failed) == ["a"]
        assert result.status == "partial"
        assert "a" not in _ids(result.created)
        assert "edge-device-a" in k8s.services[NAMESPACE]

        status = await GetNamespaceSyncStatusUseCase(repository, mirror, concurrency_limit=4).execute(NAMESPACE)
        row = status.resources[0]
        assert row.service_exists is True
        assert row.endpoints_exists is False
        assert row.synced is False

    @pytest.mark.asyncio
    async def test_ids_that_normalize_alike_keep_separate_mirrors(self, synchronizer, repository, k8s):
        repository.devices["Pi_01"] = make_device("Pi_01", ip_address="10.0.0.1")
        repository.devices["pi-01"] = make_device("pi-01", ip_address="10.0.0.2")

        first = await synchronizer.sync_all(NAMESPACE)
        assert _ids(first.created) == ["Pi_01", "pi-01"]
        assert len(k8s.services[NAMESPACE]) == 2

        second = await synchronizer.sync_all(NAMESPACE)
        assert second.created == []
        assert second.updated == []
        assert second.deleted == []
        assert _ids(second.unchanged) == ["Pi_01", "pi-01"]

    @pytest.mark.asyncio
    async def test_unavailable_platform_raises(self, synchronizer, fleet, k8s):
        k8s.unavailable = True
        with pytest.raises(OrchestrationUnavailableError):
            await synchronizer.sync_all(NAMESPACE)

    @pytest.mark.asyncio
    async def test_buckets_add_up(self, synchronizer, fleet, device_client, k8s):
        await synchronizer.sync_all(NAMESPACE)
        device_client.statuses["rpi-01"] = DeviceStatus.UNREACHABLE
        fleet.devices["rpi-04"] = make_device("rpi-04", ip_address="10.0.0.4")
        del fleet.devices["rpi-02"]

        result = await synchronizer.sync_all(NAMESPACE)
        assert _ids(result.created) == ["rpi-04"]
        assert _ids(result.unchanged) == ["rpi-03"]
        assert _ids(result.deleted) == ["rpi-01", "rpi-02"]
        assert result.total == 4


class TestSyncDevice:
    @pytest.mark.asyncio
    async def test_unhealthy_without_mirror_is_skipped(self, synchronizer, device_client):
        device = make_device("a")
        device_client.statuses["a"] = DeviceStatus.UNREACHABLE
        state = await device_client.probe(device)

        outcome = await synchronizer.sync_device(device, state, NAMESPACE)
        assert outcome.action == SyncAction.SKIPPED
        assert outcome.error == "device is unreachable"

    @pytest.mark.asyncio
    async def test_healthy_device_is_applied(self, synchronizer, device_client):
        device = make_device("a")
        outcome = await synchronizer.sync_device(device, await device_client.probe(device), NAMESPACE)
        assert outcome.action == SyncAction.CREATED
