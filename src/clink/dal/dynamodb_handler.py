"""
DynamoDB implementation of the document store.

Each logical collection lives in its own table with a string partition key ``id``.
The handler wraps the low-level client, which is safe to share between the
threads that read parties concurrently.
"""

from typing import Any, Dict, Mapping, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from clink.handlers.utils.errors import ExternalServiceError, ResourceNotFoundError
from clink.handlers.utils.observability import logger, tracer

KEY_ATTRIBUTE = 'id'


class DynamoDBDocumentStore:
    """Document store backed by one DynamoDB table per collection."""

    def __init__(
        self,
        table_names: Mapping[str, str],
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize the DynamoDB document store.

        Args:
            table_names: Mapping of collection name to table name
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
            client: Preconfigured DynamoDB client
        """
        self.table_names = dict(table_names)
        self.client = client or boto3.client('dynamodb', region_name=region_name, endpoint_url=endpoint_url)
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()
        logger.debug('DynamoDB document store initialized', extra={'tables': self.table_names})

    def _table(self, collection: str) -> str:
        try:
            return self.table_names[collection]
        except KeyError:
            raise ValueError(f"No table configured for collection '{collection}'") from None

    def _serialize(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: self._serializer.serialize(v) for k, v in data.items()}

    def _deserialize(self, item: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: self._deserializer.deserialize(v) for k, v in item.items()}

    @tracer.capture_method
    def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        table_name = self._table(collection)
        try:
            response = self.client.get_item(
                TableName=table_name,
                Key={KEY_ATTRIBUTE: {'S': document_id}},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error('DynamoDB error reading document', extra={
                'collection': collection,
                'document_id': document_id,
                'error': str(e),
            })
            raise ExternalServiceError(message=f'Failed to read {collection}/{document_id}: {e}',
                                       service_name='dynamodb') from e

        item = response.get('Item')
        if not item:
            logger.info('Document not found', extra={'collection': collection, 'document_id': document_id})
            return None
        return self._deserialize(item)

    @tracer.capture_method
    def set_document(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        table_name = self._table(collection)
        item = {k: v for k, v in data.items() if v is not None}
        item[KEY_ATTRIBUTE] = document_id
        try:
            self.client.put_item(TableName=table_name, Item=self._serialize(item))
        except (ClientError, BotoCoreError) as e:
            logger.error('DynamoDB error writing document', extra={
                'collection': collection,
                'document_id': document_id,
                'error': str(e),
            })
            raise ExternalServiceError(message=f'Failed to write {collection}/{document_id}: {e}',
                                       service_name='dynamodb') from e

        logger.info('Document written', extra={'collection': collection, 'document_id': document_id})

    @tracer.capture_method
    def update_document(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        if not fields:
            return
        table_name = self._table(collection)
        names = {f'#f{i}': name for i, name in enumerate(fields)}
        values = {f':v{i}': self._serializer.serialize(value) for i, value in enumerate(fields.values())}
        update_expression = 'SET ' + ', '.join(f'#f{i} = :v{i}' for i in range(len(fields)))
        try:
            self.client.update_item(
                TableName=table_name,
                Key={KEY_ATTRIBUTE: {'S': document_id}},
                UpdateExpression=update_expression,
                ExpressionAttributeNames={**names, '#pk': KEY_ATTRIBUTE},
                ExpressionAttributeValues=values,
                ConditionExpression='attribute_exists(#pk)',
            )
        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                raise ResourceNotFoundError(resource_type='Document', resource_id=f'{collection}/{document_id}') from e
            logger.error('DynamoDB error updating document', extra={
                'collection': collection,
                'document_id': document_id,
                'error': str(e),
            })
            raise ExternalServiceError(message=f'Failed to update {collection}/{document_id}: {e}',
                                       service_name='dynamodb') from e
        except BotoCoreError as e:
            raise ExternalServiceError(message=f'Failed to update {collection}/{document_id}: {e}',
                                       service_name='dynamodb') from e

        logger.info('Document updated', extra={
            'collection': collection,
            'document_id': document_id,
            'fields': list(fields),
        })
