"""
Firebase Authentication integration.

Party accounts live in Firebase Auth; this module only issues password reset links.
"""

from typing import Any, Mapping, Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from clink.handlers.utils.errors import ExternalServiceError, ResourceNotFoundError
from clink.handlers.utils.observability import logger, tracer

FIREBASE_APP_NAME = 'clink'


class FirebaseAuthProvider:
    """Auth provider backed by a named firebase-admin app."""

    def __init__(self, service_account: Mapping[str, Any], app_name: str = FIREBASE_APP_NAME):
        self._service_account = dict(service_account)
        self._app_name = app_name
        self._app: Optional[firebase_admin.App] = None

    @property
    def app(self) -> firebase_admin.App:
        if self._app is None:
            try:
                self._app = firebase_admin.get_app(self._app_name)
            except ValueError:
                self._app = firebase_admin.initialize_app(
                    credentials.Certificate(self._service_account),
                    name=self._app_name,
                )
        return self._app

    @tracer.capture_method
    def generate_password_reset_link(self, email: str) -> str:
        try:
            link = auth.generate_password_reset_link(email, app=self.app)
        except auth.UserNotFoundError as e:
            raise ResourceNotFoundError(resource_type='User', resource_id=email) from e
        except (FirebaseError, ValueError) as e:
            logger.error('Firebase password reset link generation failed', extra={'error': str(e)})
            raise ExternalServiceError(message=f'Could not generate reset link: {e}', service_name='firebase-auth') from e

        logger.debug('Password reset link generated')
        return link
