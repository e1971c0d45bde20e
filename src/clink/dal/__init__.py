"""
Data Access Layer (DAL) for the Clink handlers.

This module defines the document store interface the logic layer depends on and
a factory for the DynamoDB implementation.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from clink.handlers.utils.errors import DataIntegrityError
from clink.handlers.utils.observability import logger

# Logical collection names
USERS = 'users'
HIRE_REQUESTS = 'hireRequests'
RECEIPTS = 'receipts'

ModelT = TypeVar('ModelT', bound=BaseModel)


@runtime_checkable
class DocumentStore(Protocol):
    """Point reads and writes of JSON-like documents, keyed by id, per collection."""

    def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Return the document (including its ``id``) or None when it does not exist."""
        ...

    def set_document(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        """Create or fully replace a document."""
        ...

    def update_document(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        """Set the given fields on an existing document."""
        ...


def parse_document(model: Type[ModelT], collection: str, document_id: str, data: Mapping[str, Any]) -> ModelT:
    """
    Load a stored document into its model.

    Raises:
        DataIntegrityError: If the stored fields do not validate
    """
    try:
        return model.model_validate({**data, 'id': document_id})
    except PydanticValidationError as e:
        field_errors = [
            {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
            for err in e.errors()
        ]
        logger.error('Stored document failed validation', extra={
            'collection': collection,
            'document_id': document_id,
            'field_errors': field_errors,
        })
        raise DataIntegrityError(collection=collection, document_id=document_id, field_errors=field_errors) from e


def get_document_store(table_names: Mapping[str, str], endpoint_url: Optional[str] = None) -> DocumentStore:
    """
    Factory function to get the document store.

    Args:
        table_names: Mapping of collection name to DynamoDB table name
        endpoint_url: DynamoDB endpoint override (for local testing)

    Returns:
        Document store instance
    """
    # Import here to avoid circular imports
    from clink.dal.dynamodb_handler import DynamoDBDocumentStore

    return DynamoDBDocumentStore(table_names=table_names, endpoint_url=endpoint_url)


__all__ = [
    'USERS',
    'HIRE_REQUESTS',
    'RECEIPTS',
    'DocumentStore',
    'parse_document',
    'get_document_store',
]
