"""
Unit tests for MongoDeviceRepository with a mocked motor collection.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from edge_metrics.core.exceptions import (
    DeviceAlreadyExistsError,
    DeviceNotFoundError,
    RegistryUnavailableError,
)
from edge_metrics.infrastructure.db.mongo_device_repository import MongoDeviceRepository
from tests.fakes import make_device


class _Cursor:
    def __init__(self, documents):
        self.documents = documents

    def sort(self, *args, **kwargs):
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for document in self.documents:
            yield document


def _document(device_id, **overrides):
    document = {
        "_id": f"oid-{device_id}",
        "device_id": device_id,
        "device_type": "raspberry_pi",
        "ip_address": "10.0.0.1",
        "port": 9100,
        "reload_port": 9101,
    }
    document.update(overrides)
    return document


@pytest.fixture
def collection():
    collection = MagicMock()
    collection.find_one = AsyncMock()
    collection.count_documents = AsyncMock(return_value=0)
    collection.insert_one = AsyncMock()
    collection.replace_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.create_index = AsyncMock()
    return collection


@pytest.fixture
def repository(collection):
    return MongoDeviceRepository(device_collection=collection)


class TestMongoDeviceRepository:
    @pytest.mark.asyncio
    async def test_find_by_id_strips_mongo_id(self, repository, collection):
        collection.find_one.return_value = _document("rpi-01")
        device = await repository.find_by_id("rpi-01")
        assert device.device_id == "rpi-01"
        assert "_id" not in device.to_config()

    @pytest.mark.asyncio
    async def test_find_missing(self, repository, collection):
        collection.find_one.return_value = None
        assert await repository.find_by_id("ghost") is None

    @pytest.mark.asyncio
    async def test_list_skips_invalid_records(self, repository, collection):
        collection.find.return_value = _Cursor(
            [_document("a"), _document("broken", ip_address="999.1.1.1"), _document("b")]
        )
        devices = await repository.list_all()
        assert [device.device_id for device in devices] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_create_duplicate(self, repository, collection):
        collection.count_documents.return_value = 1
        with pytest.raises(DeviceAlreadyExistsError):
            await repository.create(make_device("rpi-01"))
        collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_race_on_unique_index(self, repository, collection):
        collection.insert_one.side_effect = DuplicateKeyError("E11000")
        with pytest.raises(DeviceAlreadyExistsError):
            await repository.create(make_device("rpi-01"))

    @pytest.mark.asyncio
    async def test_replace_unknown(self, repository, collection):
        collection.replace_one.return_value = MagicMock(matched_count=0)
        with pytest.raises(DeviceNotFoundError):
            await repository.replace(make_device("ghost"))

    @pytest.mark.asyncio
    async def test_delete_reports_whether_it_existed(self, repository, collection):
        collection.delete_one.return_value = MagicMock(deleted_count=1)
        assert await repository.delete("rpi-01") is True
        collection.delete_one.return_value = MagicMock(deleted_count=0)
        assert await repository.delete("rpi-01") is False

    @pytest.mark.asyncio
    async def test_driver_errors_become_registry_unavailable(self, repository, collection):
        collection.count_documents.side_effect = ServerSelectionTimeoutError("no servers")
        with pytest.raises(RegistryUnavailableError):
            await repository.exists("rpi-01")

    @pytest.mark.asyncio
    async def test_ensure_indexes_creates_unique_index(self, repository, collection):
        await repository.ensure_indexes()
        assert collection.create_index.call_args.kwargs["unique"] is True
