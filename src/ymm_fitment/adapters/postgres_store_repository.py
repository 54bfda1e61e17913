"""PostgreSQL implementation of StoreRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ymm_fitment.domain.store import Store
from ymm_fitment.infra.db.models.store import StoreRow
from ymm_fitment.ports.store_repository import StoreRepository


class PostgresStoreRepository(StoreRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_hash(self, store_hash: str) -> Store | None:
        row = self._get_row(store_hash)
        return self._to_domain(row) if row else None

    def save(self, store: Store) -> Store:
        row = self._get_row(store.store_hash)
        if row is None:
            row = StoreRow(store_hash=store.store_hash)
            self._session.add(row)

        row.store_name = store.store_name
        row.access_token = store.access_token
        row.active = store.is_active

        self._session.flush()
        return self._to_domain(row)

    def _get_row(self, store_hash: str) -> StoreRow | None:
        query = select(StoreRow).where(StoreRow.store_hash == store_hash)
        return self._session.execute(query).scalar_one_or_none()

    def _to_domain(self, row: StoreRow) -> Store:
        return Store(
            store_hash=row.store_hash,
            access_token=row.access_token,
            store_name=row.store_name,
            is_active=row.active,
        )
