"""
Third-party collaborator interfaces.

The logic layer depends only on these protocols; ``clink.dependencies`` wires the
production implementations found in the sibling modules.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class AuthProvider(Protocol):
    """Identity provider able to issue password reset links."""

    def generate_password_reset_link(self, email: str) -> str:
        ...


@runtime_checkable
class PaymentGateway(Protocol):
    """Payment processor with connected (sub-)accounts."""

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        application_fee_amount: int,
        destination_account_id: str,
    ) -> Dict[str, Any]:
        """Create a card payment intent; the result carries ``client_secret``."""
        ...

    def create_express_account(self, email: str) -> str:
        """Create a connected account and return its id."""
        ...

    def create_onboarding_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        ...

    def retrieve_account(self, account_id: str) -> Mapping[str, Any]:
        ...


@runtime_checkable
class MediaHost(Protocol):
    """Binary object host returning publicly resolvable URLs."""

    def upload(self, file_path: str, folder: str, public_id: str) -> str:
        """Upload, overwriting any object at the same path, and return its secure URL."""
        ...


@runtime_checkable
class Mailer(Protocol):
    """Outbound HTML mail relay."""

    def send(
        self,
        sender_name: str,
        to: str,
        subject: str,
        html: str,
        cc: Optional[Sequence[str]] = None,
    ) -> None:
        ...


__all__ = [
    'AuthProvider',
    'PaymentGateway',
    'MediaHost',
    'Mailer',
]
