"""
Settings module for the DocuSign email wrapper.
Handles environment variable loading and validation.
"""
import json
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .esign_docusign import DEMO_BASE_PATH, PRODUCTION_BASE_PATH

# Load environment variables from .env file if it exists
load_dotenv()



class Settings:
    """Configuration settings loaded from environment variables."""

    # DocuSign Configuration
    DOCUSIGN_INTEGRATION_KEY: Optional[str] = os.getenv("DOCUSIGN_INTEGRATION_KEY")
    DOCUSIGN_USER_ID: Optional[str] = os.getenv("DOCUSIGN_USER_ID")
    DOCUSIGN_PRIVATE_KEY_FILE: str = os.getenv("DOCUSIGN_PRIVATE_KEY_FILE", "keys/private.key")
    DOCUSIGN_AUTH_SERVER: str = os.getenv("DOCUSIGN_AUTH_SERVER", "account-d.docusign.com")
    DOCUSIGN_REDIRECT_URI: str = os.getenv("DOCUSIGN_REDIRECT_URI", "http://localhost:8080/")
    DOCUSIGN_TOKEN_EXPIRES_IN: int = int(os.getenv("DOCUSIGN_TOKEN_EXPIRES_IN", "60"))
    DOCUSIGN_EMAIL_SUBJECT: str = os.getenv("DOCUSIGN_EMAIL_SUBJECT", "Please sign this document set")

    # Demo envelope contents
    DEMO_DOCUMENTS_FILE: str = os.getenv("DEMO_DOCUMENTS_FILE", "config/documents.json")
    DEMO_SIGNERS_FILE: str = os.getenv("DEMO_SIGNERS_FILE", "config/signers.json")
    DEMO_CCS_FILE: str = os.getenv("DEMO_CCS_FILE", "config/ccs.json")

    # Server Configuration
    PORT: int = int(os.getenv("PORT", "8080"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    @classmethod
    def validate_docusign_config(cls) -> bool:
        """Validate that all required DocuSign environment variables are set."""
        required_vars = [
            cls.DOCUSIGN_INTEGRATION_KEY,
            cls.DOCUSIGN_USER_ID,
            cls.DOCUSIGN_PRIVATE_KEY_FILE,
            cls.DOCUSIGN_AUTH_SERVER,
            cls.DOCUSIGN_REDIRECT_URI,
        ]
        return all(var is not None and var.strip() != "" for var in required_vars)

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def get_docusign_base_url(cls) -> str:
        """Get the eSignature REST base path for the current environment."""
        if cls.is_production():
            return PRODUCTION_BASE_PATH
        else:
            return DEMO_BASE_PATH

    @classmethod
    def get_docusign_config(cls) -> dict:
        """Get DocuSign configuration as a dictionary."""
        if not cls.validate_docusign_config():
            raise ValueError("DocuSign configuration is incomplete. Please set all required environment variables.")

        return {
            "integration_key": cls.DOCUSIGN_INTEGRATION_KEY,
            "user_id": cls.DOCUSIGN_USER_ID,
            "private_key_file": cls.DOCUSIGN_PRIVATE_KEY_FILE,
            "auth_server": cls.DOCUSIGN_AUTH_SERVER,
            "redirect_uri": cls.DOCUSIGN_REDIRECT_URI,
            "expires_in": cls.DOCUSIGN_TOKEN_EXPIRES_IN,
            "base_path": cls.get_docusign_base_url(),
        }

    @staticmethod
    def load_demo_recipients(path: str, required: bool = False) -> List[Dict[str, Any]]:
        """
        Load a JSON list of documents, signers or CCs for the demo envelope.

        A missing optional file is treated as an empty list.

        Raises:
            FileNotFoundError: If a required file does not exist
        """
        if not os.path.exists(path):
            if required:
                raise FileNotFoundError(f"Demo configuration file not found: {path}")
            return []
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
        if not isinstance(entries, list):
            raise ValueError(f"{path} must contain a JSON list")
        return entries


# Global settings instance
settings = Settings()
