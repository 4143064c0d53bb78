"""
Send PDF documents for signature through DocuSign using JWT grant authentication.
"""
from .errors import (
    CredentialError,
    DocumentReadError,
    EnvelopeAlreadySentError,
    NoAccountError,
    RemoteServiceError,
    SessionConsumedError,
    SigningError,
)
from .esign_auth import (
    TOKEN_EXPIRES_IN,
    AuthSession,
    ConsentRedirect,
    authenticate,
    build_consent_url,
)
from .esign_docusign import SigningRequest, create_envelope

__version__ = "1.0.0"

__all__ = [
    "AuthSession",
    "ConsentRedirect",
    "CredentialError",
    "DocumentReadError",
    "EnvelopeAlreadySentError",
    "NoAccountError",
    "RemoteServiceError",
    "SessionConsumedError",
    "SigningError",
    "SigningRequest",
    "TOKEN_EXPIRES_IN",
    "authenticate",
    "build_consent_url",
    "create_envelope",
]
