"""Record store gateways."""

from __future__ import annotations

from employee_editor.config import Settings
from employee_editor.database import get_engine
from employee_editor.store.base import RecordStoreGateway
from employee_editor.store.firestore import FirestoreGateway
from employee_editor.store.memory import InMemoryGateway
from employee_editor.store.sql import SqlGateway


def build_gateway(settings: Settings) -> RecordStoreGateway:
    """Create the gateway selected by STORE_BACKEND."""
    if settings.store_backend == "firestore":
        return FirestoreGateway(
            project_id=settings.firestore_project_id,
            collection=settings.employee_collection,
            database=settings.firestore_database,
            api_key=settings.firestore_api_key,
            base_url=settings.firestore_base_url,
            timeout=settings.request_timeout_seconds,
        )
    if settings.store_backend == "sql":
        return SqlGateway.from_engine(get_engine(settings.database_url))
    return InMemoryGateway()


__all__ = [
    "RecordStoreGateway",
    "FirestoreGateway",
    "InMemoryGateway",
    "SqlGateway",
    "build_gateway",
]
