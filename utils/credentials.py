import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from google.oauth2 import service_account

from constants.inventory import (
    AUTH_PROVIDER_X509_CERT_URL,
    AUTH_URI,
    SCOPES,
    TOKEN_URI,
)

logger = logging.getLogger(__name__)


def format_private_key(key: Optional[str]) -> Optional[str]:
    """Turn escaped newline sequences in a private key into real line breaks.

    Keys pasted into environment variables often arrive as '\\n' or '\\\\n'
    and the PEM parser rejects both forms.
    """
    if not key:
        return None
    return key.replace("\\\\n", "\n").replace("\\n", "\n")


@dataclass(frozen=True)
class GoogleCredentialsConfig:
    """Service account fields used to authenticate against Google APIs."""

    project_id: Optional[str] = None
    private_key_id: Optional[str] = None
    private_key: Optional[str] = None
    client_email: Optional[str] = None
    client_id: Optional[str] = None
    client_x509_cert_url: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GoogleCredentialsConfig":
        """Build the config from GOOGLE_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            project_id=env.get("GOOGLE_PROJECT_ID"),
            private_key_id=env.get("GOOGLE_PRIVATE_KEY_ID"),
            private_key=env.get("GOOGLE_PRIVATE_KEY"),
            client_email=env.get("GOOGLE_CLIENT_EMAIL"),
            client_id=env.get("GOOGLE_CLIENT_ID"),
            client_x509_cert_url=env.get("GOOGLE_CLIENT_X509_CERT_URL"),
        )

    @property
    def is_configured(self) -> bool:
        return bool((self.private_key or "").strip()) and bool((self.client_email or "").strip())

    def to_service_account_info(self) -> Dict[str, Any]:
        return {
            "type": "service_account",
            "project_id": self.project_id,
            "private_key_id": self.private_key_id,
            "private_key": format_private_key(self.private_key),
            "client_email": self.client_email,
            "client_id": self.client_id,
            "auth_uri": AUTH_URI,
            "token_uri": TOKEN_URI,
            "auth_provider_x509_cert_url": AUTH_PROVIDER_X509_CERT_URL,
            "client_x509_cert_url": self.client_x509_cert_url,
        }


def get_credentials(config: GoogleCredentialsConfig):
    """Gets read-only service account credentials for the given config."""
    logger.debug(f"Building service account credentials for {config.client_email}")
    return service_account.Credentials.from_service_account_info(
        config.to_service_account_info(), scopes=SCOPES
    )
