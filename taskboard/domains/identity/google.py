import logging
from typing import Dict, Any

from fastapi.concurrency import run_in_threadpool
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from taskboard.core.errors import AuthenticationError, InternalError, ValidationError
from taskboard.domains.identity.entities import ExternalIdentity

logger = logging.getLogger(__name__)


def identity_from_claims(claims: Dict[str, Any]) -> ExternalIdentity:
    """Извлечение учетных данных из проверенных claims"""
    subject = claims.get("sub")
    if not subject:
        raise AuthenticationError("Invalid Google credential")

    email = claims.get("email")
    if not email or claims.get("email_verified") is False:
        raise ValidationError("Email claim is required")

    return ExternalIdentity(
        subject=str(subject),
        email=email,
        name=claims.get("name") or email,
        photo=claims.get("picture")
    )


class GoogleIdentityVerifier:
    """Проверка Google ID токенов через google-auth"""

    def __init__(self, client_id: str):
        self.client_id = client_id
        self._request = google_requests.Request()

    async def verify(self, credential: str) -> ExternalIdentity:
        """Проверка подписи, audience и срока действия токена"""
        if not self.client_id:
            logger.error("GOOGLE_CLIENT_ID is not configured, Google login is unavailable")
            raise InternalError()

        try:
            # verify_oauth2_token синхронно ходит за сертификатами Google
            claims = await run_in_threadpool(
                id_token.verify_oauth2_token, credential, self._request, self.client_id
            )
        except google_exceptions.TransportError as e:
            logger.error(f"Failed to fetch Google certificates: {e}")
            raise InternalError()
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.info(f"Rejected Google credential: {e}")
            raise AuthenticationError("Invalid Google credential")

        return identity_from_claims(claims)
