"""
Errors raised by the DocuSign email wrapper.

Remote failures are not wrapped: the SDK's ApiException is re-exported as
RemoteServiceError so callers can catch it by name while the very same
exception object propagates unchanged.
"""
from docusign_esign.client.api_exception import ApiException as RemoteServiceError


class SigningError(Exception):
    """Base class for errors raised locally by this package."""


class CredentialError(SigningError):
    """The RSA private key could not be parsed or is not an RSA key."""


class DocumentReadError(SigningError, OSError):
    """A document or key file could not be read from disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not read {path}: {reason}")


class NoAccountError(SigningError):
    """The authenticated user has no DocuSign account to send from."""


class EnvelopeAlreadySentError(SigningError):
    """The signing request was already submitted and can no longer change."""


class SessionConsumedError(SigningError):
    """An AuthSession was already used for a send."""


def response_body_text(error: RemoteServiceError) -> str:
    """Return the HTTP response body of an SDK exception as text, or ''."""
    body = getattr(error, "body", None)
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body or ""


def describe_error(error: BaseException) -> str:
    """
    Format an error for logs and HTTP responses.

    ApiException.__str__ reads attributes that only exist when the SDK built
    the exception from an HTTP response, so SDK errors are formatted from
    status, reason and body instead.
    """
    if not isinstance(error, RemoteServiceError):
        return str(error)

    parts = [f"({getattr(error, 'status', None)})", f"Reason: {getattr(error, 'reason', None)}"]
    body = response_body_text(error)
    if body:
        parts.append(f"HTTP response body: {body}")
    return " ".join(parts)


__all__ = [
    "SigningError",
    "CredentialError",
    "DocumentReadError",
    "NoAccountError",
    "EnvelopeAlreadySentError",
    "SessionConsumedError",
    "RemoteServiceError",
    "describe_error",
    "response_body_text",
]
