from types import SimpleNamespace
from unittest import mock

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docusign_email.esign_auth import AuthSession


def _write_key(path, key):
    path.write_bytes(key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ))
    return path


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def rsa_key_file(tmp_path, rsa_key):
    return _write_key(tmp_path / "private.key", rsa_key)


@pytest.fixture
def ec_key_file(tmp_path):
    return _write_key(tmp_path / "ec.key", ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture
def make_pdf(tmp_path):
    """Create a one page PDF containing the given text, like the demo documents."""
    def _make_pdf(name, text="**signature_1**"):
        path = tmp_path / name
        c = canvas.Canvas(str(path), pagesize=letter)
        c.drawString(100, 750, f"Test Document {name}")
        c.drawString(100, 700, text)
        c.save()
        return path
    return _make_pdf


@pytest.fixture
def api_client():
    """SDK ApiClient double that returns token "T" and account "123"."""
    client = mock.MagicMock()
    client.request_jwt_user_token.return_value = SimpleNamespace(access_token="T", expires_in=3600)
    client.get_user_info.return_value = SimpleNamespace(accounts=[
        SimpleNamespace(account_id="123", is_default=True),
        SimpleNamespace(account_id="456", is_default=False),
    ])
    return client


@pytest.fixture
def session():
    return AuthSession(access_token="T", account_id="123")


@pytest.fixture
def envelopes_api():
    """Patch the SDK clients used for envelope creation."""
    with mock.patch("docusign_email.esign_docusign.ApiClient") as client_cls, \
            mock.patch("docusign_email.esign_docusign.EnvelopesApi") as envelopes_cls:
        api = envelopes_cls.return_value
        api.create_envelope.return_value = SimpleNamespace(envelope_id="ENV-1")
        api.client_cls = client_cls
        yield api
