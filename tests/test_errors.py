from docusign_esign.client.api_exception import ApiException

from docusign_email.errors import DocumentReadError, NoAccountError, describe_error, response_body_text


def test_describe_api_error_without_http_response():
    error = ApiException(status=0, reason="SSLError: certificate verify failed")

    assert describe_error(error) == "(0) Reason: SSLError: certificate verify failed"


def test_describe_api_error_includes_body():
    error = ApiException(status=400, reason="Bad Request")
    error.body = b'{"error":"invalid_grant"}'

    message = describe_error(error)

    assert message.startswith("(400) Reason: Bad Request")
    assert 'HTTP response body: {"error":"invalid_grant"}' in message


def test_describe_local_errors():
    assert describe_error(NoAccountError("No accounts available for user u")) == "No accounts available for user u"
    assert describe_error(DocumentReadError("a.pdf", "No such file")) == "Could not read a.pdf: No such file"


def test_response_body_text():
    error = ApiException(status=400, reason="Bad Request")
    assert response_body_text(error) == ""
    error.body = b"consent_required"
    assert response_body_text(error) == "consent_required"
