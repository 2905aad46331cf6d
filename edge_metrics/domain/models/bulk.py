# Standard library imports
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class SyncAction(str, Enum):
    """Which bucket a device lands in after a sync attempt."""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DELETED = "deleted"
    SKIPPED = "skipped"
    FAILED = "failed"


class ResourceAction(str, Enum):
    """What happened to a single Service or Endpoints resource."""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DELETED = "deleted"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass
class SyncOutcome:
    device_id: str
    service: str
    action: SyncAction
    service_action: Optional[ResourceAction] = None
    endpoints_action: Optional[ResourceAction] = None
    error: Optional[str] = None


@dataclass
class BulkSyncResult:
    """
    Buckets for a namespace-wide sync. Each outcome goes into exactly one
    bucket, so the bucket sizes always add up to the number of outcomes.
    """
    namespace: str
    created: List[SyncOutcome] = field(default_factory=list)
    updated: List[SyncOutcome] = field(default_factory=list)
    unchanged: List[SyncOutcome] = field(default_factory=list)
    deleted: List[SyncOutcome] = field(default_factory=list)
    skipped: List[SyncOutcome] = field(default_factory=list)
    failed: List[SyncOutcome] = field(default_factory=list)
    total_healthy: int = 0

    def add(self, outcome: SyncOutcome) -> None:
        self._bucket(outcome.action).append(outcome)

    def _bucket(self, action: SyncAction) -> List[SyncOutcome]:
        buckets: Dict[SyncAction, List[SyncOutcome]] = {
            SyncAction.CREATED: self.created,
            SyncAction.UPDATED: self.updated,
            SyncAction.UNCHANGED: self.unchanged,
            SyncAction.DELETED: self.deleted,
            SyncAction.SKIPPED: self.skipped,
            SyncAction.FAILED: self.failed,
        }
        return buckets[action]

    @property
    def total(self) -> int:
        return (
            len(self.created) + len(self.updated) + len(self.unchanged)
            + len(self.deleted) + len(self.skipped) + len(self.failed)
        )

    @property
    def status(self) -> str:
        return "partial" if self.failed else "completed"


class ReloadStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ReloadResult:
    device_id: str
    status: ReloadStatus
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == ReloadStatus.SUCCESS


@dataclass
class BulkReloadResult:
    """Flat list of reload outcomes; success + failed always equals total."""
    results: List[ReloadResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success(self) -> int:
        return sum(1 for result in self.results if result.succeeded)

    @property
    def failed(self) -> int:
        return self.total - self.success


@dataclass
class CleanupResult:
    namespace: str
    deleted_services: List[str] = field(default_factory=list)
    deleted_endpoints: List[str] = field(default_factory=list)
    failed: List[Dict[str, str]] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "partial" if self.failed else "completed"
