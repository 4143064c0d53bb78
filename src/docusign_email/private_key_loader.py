"""
Private key loader for JWT grant authentication.
"""
import logging

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import CredentialError, DocumentReadError

logger = logging.getLogger(__name__)


def load_private_key(path: str) -> bytes:
    """
    Load an RSA private key in PEM format from disk.

    Args:
        path: Filesystem path to the PEM file

    Returns:
        The PEM bytes, as expected by the SDK's JWT signer

    Raises:
        DocumentReadError: If the file cannot be read
        CredentialError: If the content is not an RSA private key
    """
    try:
        with open(path, "rb") as f:
            pem = f.read()
    except OSError as e:
        logger.error(f"Could not read private key file {path}: {e}")
        raise DocumentReadError(path, e.strerror or str(e)) from e

    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error(f"Invalid private key in {path}: {e}")
        raise CredentialError(f"Invalid private key format in {path}: {e}") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise CredentialError(f"Private key in {path} is not an RSA key")

    return pem
