"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base: Model registry
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentModel, DocumentStatus: Uploaded PDF record and lifecycle states
  - document_crud: CRUD operation singleton

Dependencies: sqlalchemy, pdfchat.configs
System role: Status store for uploaded documents
"""

from pdfchat.boundary.db.base import Base
from pdfchat.boundary.db.connection import (
    check_connection,
    create_tables,
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from pdfchat.boundary.db.models.document_model import DocumentModel, DocumentStatus
from pdfchat.boundary.db.CRUD import BaseCRUD, DocumentCRUD, document_crud

__all__ = [
    "Base",
    "check_connection",
    "create_tables",
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentModel",
    "DocumentStatus",
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
]
