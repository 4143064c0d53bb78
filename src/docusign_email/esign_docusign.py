"""
DocuSign envelope builder.
Collects documents, signers and carbon copies, then sends the envelope.
"""
import base64
import logging
from typing import Iterable, List, Mapping

from docusign_esign import ApiClient, EnvelopesApi
from docusign_esign.models import (
    CarbonCopy, Document, EnvelopeDefinition, Recipients, SignHere, Signer, Tabs
)

from .errors import DocumentReadError, EnvelopeAlreadySentError, SessionConsumedError, describe_error
from .esign_auth import AuthSession

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Please sign this document set"

DEMO_BASE_PATH = "https://demo.docusign.net/restapi"
PRODUCTION_BASE_PATH = "https://www.docusign.net/restapi"

# Sign-here tab position relative to the matched anchor text
ANCHOR_UNITS = "pixels"
ANCHOR_X_OFFSET = "20"
ANCHOR_Y_OFFSET = "10"


def create_envelope(session: AuthSession, envelope_definition: EnvelopeDefinition,
                    base_path: str = DEMO_BASE_PATH) -> str:
    """
    Submit an envelope definition with a single create-envelope call.

    Args:
        session: Authenticated session carrying the bearer token and account id
        envelope_definition: Fully built envelope
        base_path: eSignature REST base path (demo or production)

    Returns:
        DocuSign envelope ID

    Raises:
        ApiException: If the DocuSign API call fails
    """
    api_client = ApiClient()
    api_client.host = base_path
    api_client.set_default_header("Authorization", f"Bearer {session.access_token}")
    envelopes_api = EnvelopesApi(api_client)

    try:
        envelope_summary = envelopes_api.create_envelope(
            session.account_id,
            envelope_definition=envelope_definition,
            merge_roles_on_draft="true",
            change_routing_order="true",
        )
    except Exception as e:
        logger.error("DocuSign envelope creation failed: %s", describe_error(e))
        raise

    logger.info(f"DocuSign envelope created: {envelope_summary.envelope_id}")
    return envelope_summary.envelope_id


class SigningRequest:
    """
    A single envelope being prepared for signature.

    Documents are replaced on every add_documents() call while signers and
    carbon copies accumulate across calls. Recipient ids and routing order are
    assigned only by send(), signers first and carbon copies after them.
    """

    def __init__(self, subject: str = DEFAULT_SUBJECT):
        self.envelope_definition = EnvelopeDefinition(email_subject=subject, documents=[])
        self.signers: List[Signer] = []
        self.ccs: List[CarbonCopy] = []
        self.sent = False

    @property
    def documents(self) -> List[Document]:
        return self.envelope_definition.documents

    def _check_not_sent(self):
        if self.sent:
            raise EnvelopeAlreadySentError("Envelope was already sent")

    def add_documents(self, documents: Iterable[Mapping[str, str]] = ()):
        """
        Set the envelope's PDF documents, replacing any previously added.

        Args:
            documents: Mappings with 'path' and 'name' keys, in envelope order

        Raises:
            DocumentReadError: If any file cannot be read; the previous
                document list is kept in that case
        """
        self._check_not_sent()

        ds_documents = []
        for i, document in enumerate(documents, 1):
            path = document["path"]
            try:
                with open(path, "rb") as file:
                    content = file.read()
            except OSError as e:
                logger.error(f"Failed to read document {path}: {e}")
                raise DocumentReadError(path, e.strerror or str(e)) from e

            ds_documents.append(Document(
                document_base64=base64.b64encode(content).decode("utf-8"),
                name=document["name"],
                file_extension="pdf",
                document_id=str(i),
            ))

        self.envelope_definition.documents = ds_documents
        logger.info(f"Added {len(ds_documents)} document(s) to envelope")

    def set_signers(self, signers: Iterable[Mapping[str, str]] = ()):
        """
        Append signers, each with one sign-here tab placed at its anchor text.

        Args:
            signers: Mappings with 'email', 'name' and 'sign_anchor' keys

        Raises:
            KeyError: If an entry lacks a key; no signer from the call is added
        """
        self._check_not_sent()

        ds_signers = []
        for signer in signers:
            sign_here = SignHere(
                anchor_string=signer["sign_anchor"],
                anchor_units=ANCHOR_UNITS,
                anchor_x_offset=ANCHOR_X_OFFSET,
                anchor_y_offset=ANCHOR_Y_OFFSET,
            )
            ds_signers.append(Signer(
                email=signer["email"],
                name=signer["name"],
                tabs=Tabs(sign_here_tabs=[sign_here]),
            ))

        self.signers.extend(ds_signers)
        logger.info(f"Envelope now has {len(self.signers)} signer(s)")

    def set_cc(self, ccs: Iterable[Mapping[str, str]] = ()):
        """Append carbon copy recipients from mappings with 'email' and 'name' keys."""
        self._check_not_sent()

        ds_ccs = [CarbonCopy(email=cc["email"], name=cc["name"]) for cc in ccs]

        self.ccs.extend(ds_ccs)
        logger.info(f"Envelope now has {len(self.ccs)} carbon copy recipient(s)")

    def assign_recipients(self) -> Recipients:
        """Number signers then carbon copies from 1; routing order equals recipient id."""
        recipient_id = 1
        for recipient in [*self.signers, *self.ccs]:
            recipient.recipient_id = str(recipient_id)
            recipient.routing_order = str(recipient_id)
            recipient_id += 1

        return Recipients(signers=self.signers, carbon_copies=self.ccs)

    def send(self, session: AuthSession, base_path: str = DEMO_BASE_PATH) -> str:
        """
        Send the envelope for signature.

        Args:
            session: Result of a successful authenticate() call, not yet used
            base_path: eSignature REST base path (demo or production)

        Returns:
            DocuSign envelope ID

        Raises:
            EnvelopeAlreadySentError: If this request was already sent
            SessionConsumedError: If the session was already used for a send
            ApiException: If the DocuSign API call fails
        """
        self._check_not_sent()
        if session.consumed:
            raise SessionConsumedError("AuthSession was already used; authenticate again")

        self.envelope_definition.recipients = self.assign_recipients()
        self.envelope_definition.status = "sent"

        session.consumed = True
        self.sent = True
        return create_envelope(session, self.envelope_definition, base_path)
