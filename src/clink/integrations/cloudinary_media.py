"""
Cloudinary media host integration for rendered receipts.
"""

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from clink.handlers.utils.errors import ExternalServiceError
from clink.handlers.utils.observability import logger, tracer


class CloudinaryMediaHost:
    """Uploads files as raw resources using per-call credentials."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        self._credentials = {
            'cloud_name': cloud_name,
            'api_key': api_key,
            'api_secret': api_secret,
        }

    @tracer.capture_method
    def upload(self, file_path: str, folder: str, public_id: str) -> str:
        try:
            result = cloudinary.uploader.upload(
                file_path,
                resource_type='raw',
                folder=folder,
                public_id=public_id,
                overwrite=True,
                **self._credentials,
            )
        except CloudinaryError as e:
            logger.error('Cloudinary upload failed', extra={'public_id': public_id, 'error': str(e)})
            raise ExternalServiceError(message=f'Upload of {folder}/{public_id} failed: {e}',
                                       service_name='cloudinary') from e

        secure_url = result.get('secure_url')
        if not secure_url:
            raise ExternalServiceError(message=f'Upload of {folder}/{public_id} returned no URL',
                                       service_name='cloudinary')

        logger.info('Uploaded media', extra={'folder': folder, 'public_id': public_id, 'url': secure_url})
        return secure_url
