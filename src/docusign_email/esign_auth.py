"""
JWT grant authentication against the DocuSign authorization server.

authenticate() returns either an AuthSession (token plus account id) or a
ConsentRedirect when the impersonated user has not yet granted consent to
the integration key. Consent is an expected first-run condition, so it is a
result and not an exception.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union
from urllib.parse import urlencode

from docusign_esign import ApiClient
from docusign_esign.client.api_exception import ApiException

from .errors import NoAccountError, describe_error, response_body_text
from .private_key_loader import load_private_key

logger = logging.getLogger(__name__)

SCOPES = ("signature", "impersonation")

# Validity window requested for the JWT assertion, in seconds.
TOKEN_EXPIRES_IN = 60

CONSENT_REQUIRED = "consent_required"


@dataclass
class AuthSession:
    """Bearer token and target account for a single envelope send."""

    access_token: str
    account_id: str
    consumed: bool = False

    needs_consent = False

    def __repr__(self) -> str:
        return f"AuthSession(account_id={self.account_id!r}, consumed={self.consumed})"


@dataclass(frozen=True)
class ConsentRedirect:
    """Consent URL the user agent must be sent to before JWT impersonation works."""

    url: str

    needs_consent = True


AuthResult = Union[AuthSession, ConsentRedirect]


def build_consent_url(auth_server: str, integration_key: str, redirect_uri: str,
                      scopes: Sequence[str] = SCOPES) -> str:
    """Build the interactive /oauth/auth URL used to grant first-time consent."""
    query = urlencode({
        "scope": " ".join(scopes),
        "redirect_uri": redirect_uri,
        "client_id": integration_key,
        "response_type": "code",
    })
    return f"https://{auth_server}/oauth/auth?{query}"


def oauth_error_code(error: ApiException) -> Optional[str]:
    """Return the OAuth "error" field from an SDK exception body, if it has one."""
    body = response_body_text(error)
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict):
        return payload.get("error")
    return None


def is_consent_required(error: ApiException) -> bool:
    """Check whether an authorization failure means consent was never granted."""
    code = oauth_error_code(error)
    if code is not None:
        return code == CONSENT_REQUIRED
    # The SDK raises without a JSON body for some non-2xx responses and puts
    # the server's answer into the reason text instead.
    text = f"{getattr(error, 'reason', None) or ''} {response_body_text(error)}"
    return CONSENT_REQUIRED in text


def authenticate(
    integration_key: str,
    impersonated_user_id: str,
    private_key_path: str,
    auth_server: str,
    redirect_uri: str,
    expires_in: int = TOKEN_EXPIRES_IN,
    api_client: Optional[ApiClient] = None,
) -> AuthResult:
    """
    Exchange JWT grant credentials for an access token and account id.

    Args:
        integration_key: DocuSign integration key (client id)
        impersonated_user_id: GUID of the user to act as
        private_key_path: Path to the RSA private key used to sign the assertion
        auth_server: OAuth host, e.g. account-d.docusign.com
        redirect_uri: Where the consent page sends the user back to
        expires_in: Validity window requested for the assertion, in seconds
        api_client: SDK client to use; a new one is created when omitted

    Returns:
        AuthSession on success, ConsentRedirect if consent must be granted first

    Raises:
        DocumentReadError: If the private key file cannot be read
        CredentialError: If the private key is not a valid RSA key
        NoAccountError: If the user has no DocuSign account
        ApiException: For any other authorization failure
    """
    private_key = load_private_key(private_key_path)

    if api_client is None:
        api_client = ApiClient()
    api_client.set_oauth_host_name(auth_server)

    try:
        token = api_client.request_jwt_user_token(
            client_id=integration_key,
            user_id=impersonated_user_id,
            oauth_host_name=auth_server,
            private_key_bytes=private_key,
            expires_in=expires_in,
            scopes=list(SCOPES),
        )
        access_token = token.access_token
        user_info = api_client.get_user_info(access_token)
    except ApiException as e:
        if is_consent_required(e):
            logger.info(f"Consent required for integration key {integration_key}")
            return ConsentRedirect(build_consent_url(auth_server, integration_key, redirect_uri))
        logger.error("DocuSign authentication failed: %s", describe_error(e))
        raise

    accounts = user_info.accounts or []
    if not accounts:
        logger.error(f"No accounts returned for user {impersonated_user_id}")
        raise NoAccountError(f"No accounts available for user {impersonated_user_id}")

    account_id = accounts[0].account_id
    logger.info(f"Successfully authenticated with DocuSign for account {account_id}")
    return AuthSession(access_token=access_token, account_id=account_id)
