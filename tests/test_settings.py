import json

import pytest

from docusign_email.settings import DEMO_BASE_PATH, PRODUCTION_BASE_PATH, Settings


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(Settings, "DOCUSIGN_INTEGRATION_KEY", "client-key")
    monkeypatch.setattr(Settings, "DOCUSIGN_USER_ID", "user-guid")
    monkeypatch.setattr(Settings, "DOCUSIGN_PRIVATE_KEY_FILE", "keys/private.key")
    monkeypatch.setattr(Settings, "ENVIRONMENT", "development")


def test_base_url_follows_environment(monkeypatch):
    monkeypatch.setattr(Settings, "ENVIRONMENT", "development")
    assert Settings.get_docusign_base_url() == DEMO_BASE_PATH
    monkeypatch.setattr(Settings, "ENVIRONMENT", "Production")
    assert Settings.is_production()
    assert Settings.get_docusign_base_url() == PRODUCTION_BASE_PATH


def test_get_docusign_config(configured):
    config = Settings.get_docusign_config()
    assert config["integration_key"] == "client-key"
    assert config["user_id"] == "user-guid"
    assert config["auth_server"] == Settings.DOCUSIGN_AUTH_SERVER
    assert config["expires_in"] == Settings.DOCUSIGN_TOKEN_EXPIRES_IN
    assert config["base_path"] == DEMO_BASE_PATH


def test_incomplete_config(configured, monkeypatch):
    monkeypatch.setattr(Settings, "DOCUSIGN_INTEGRATION_KEY", " ")
    assert not Settings.validate_docusign_config()
    with pytest.raises(ValueError, match="incomplete"):
        Settings.get_docusign_config()


def test_load_demo_recipients(tmp_path):
    path = tmp_path / "signers.json"
    signers = [{"email": "a@x.com", "name": "A", "sign_anchor": "**signature_1**"}]
    path.write_text(json.dumps(signers))

    assert Settings.load_demo_recipients(str(path)) == signers
    assert Settings.load_demo_recipients(str(tmp_path / "missing.json")) == []


def test_load_demo_recipients_rejects_non_list(tmp_path):
    path = tmp_path / "ccs.json"
    path.write_text('{"email": "a@x.com"}')
    with pytest.raises(ValueError):
        Settings.load_demo_recipients(str(path))


def test_load_required_demo_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="documents.json"):
        Settings.load_demo_recipients(str(tmp_path / "documents.json"), required=True)
