#!/usr/bin/env python3
"""
Demo HTTP entry point.
Sends the configured demo envelope, or redirects the browser to the DocuSign
consent page on first use.
"""
import logging
from typing import Any, Dict, Union

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse, RedirectResponse

from .errors import describe_error
from .esign_auth import ConsentRedirect, authenticate
from .esign_docusign import SigningRequest
from .settings import settings

logger = logging.getLogger(__name__)

app = FastAPI(title="DocuSign Email Demo")


def send_demo_envelope() -> Union[str, ConsentRedirect]:
    """Authenticate and send the demo envelope. Returns the envelope id, or the consent redirect."""
    config = settings.get_docusign_config()

    result = authenticate(
        config["integration_key"],
        config["user_id"],
        config["private_key_file"],
        config["auth_server"],
        config["redirect_uri"],
        expires_in=config["expires_in"],
    )
    if result.needs_consent:
        return result

    request = SigningRequest(settings.DOCUSIGN_EMAIL_SUBJECT)
    request.add_documents(settings.load_demo_recipients(settings.DEMO_DOCUMENTS_FILE, required=True))
    request.set_signers(settings.load_demo_recipients(settings.DEMO_SIGNERS_FILE))
    request.set_cc(settings.load_demo_recipients(settings.DEMO_CCS_FILE))
    return request.send(result, base_path=config["base_path"])


@app.get("/health")
def health_check() -> Dict[str, Any]:
    """Health check with DocuSign configuration status."""
    return {
        "status": "healthy",
        "docusign": {
            "configured": settings.validate_docusign_config(),
            "environment": settings.ENVIRONMENT,
        },
    }


@app.get("/")
def index():
    """Send the demo envelope."""
    try:
        outcome = send_demo_envelope()
    except Exception as e:
        message = describe_error(e)
        logger.error(f"❌ Demo envelope failed: {message}")
        return JSONResponse(status_code=500, content={"success": False, "error": message})

    if isinstance(outcome, ConsentRedirect):
        logger.info("🔑 Redirecting to DocuSign consent page")
        return RedirectResponse(outcome.url)

    logger.info(f"📧 Demo envelope sent: {outcome}")
    return {"success": True, "envelope_id": outcome}


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    logger.info(f"🚀 Starting demo server on {settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
