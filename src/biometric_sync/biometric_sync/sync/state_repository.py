from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SyncState


class SyncStateRepository(Protocol):
    def get(self, scope: str) -> Optional[SyncState]:
        raise NotImplementedError

    def upsert(self, state: SyncState) -> SyncState:
        raise NotImplementedError

    def list_all(self) -> Sequence[SyncState]:
        raise NotImplementedError
