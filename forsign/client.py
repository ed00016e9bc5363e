"""
ForSign Client

HTTP layer for the ForSign API. Handles authentication and correlation
headers, request execution, response parsing and mapping of failures
onto the exception hierarchy.

One call blocks until the server answers or the transport times out.
Nothing is retried automatically.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import requests

from .auth import API_KEY_HEADER, ApiKeyCredential, Credential
from .config import Config
from .exceptions import ApiError, ConfigurationError, InvalidArgumentError, ValidationError
from .file_cache import FileInformationCache
from .operation_builder import OperationBuilder
from .repository import OperationRepository
from .responses import DocumentUploadResponse

logger = logging.getLogger(__name__)

USER_AGENT = 'ForSignPythonClient/1.0'
CORRELATION_ID_HEADER = 'X-Correlation-Id'
UPLOAD_PATH = '/api/v2/document/upload'

# Raw bodies are cut to this many characters in messages and logs
MAX_SNIPPET_LENGTH = 800

STATUS_DESCRIPTIONS = {
    400: 'Bad request. The request was invalid or cannot be processed.',
    401: 'Authentication failed. Please check your API key.',
    402: 'Insufficient credits. Your account does not have enough credits to perform this operation.',
    403: "You don't have permission to perform this operation.",
    404: 'Resource not found.',
    422: 'Validation error. The request contains invalid data.',
    429: 'Too many requests. You have exceeded the rate limit.',
    500: 'An internal server error occurred.',
}

_REDACTED_HEADERS = {API_KEY_HEADER.lower(), 'authorization'}
_PDF_SIGNATURE = b'%PDF-'


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def describe_status(status_code: int) -> str:
    return STATUS_DESCRIPTIONS.get(status_code, f"Error processing request: HTTP {status_code}")


def truncate(text: str, limit: int = MAX_SNIPPET_LENGTH) -> str:
    """Trim `text` to at most `limit` characters, ending with an ellipsis when cut."""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit - 1] + '…'


def redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    return {
        name: ('***' if name.lower() in _REDACTED_HEADERS else value)
        for name, value in headers.items()
    }


def extract_messages(body: Any) -> Optional[List[Any]]:
    """
    Pull the error message list out of an error body.

    Looks at `messages`, `errors` and `error` in that order; the first
    one present wins. A single string becomes a one-item list and a
    {field: message(s)} mapping becomes a list of {key, value} entries.
    """
    if not isinstance(body, dict):
        return None

    messages = None
    for key in ('messages', 'errors', 'error'):
        if body.get(key) is not None:
            messages = body[key]
            break

    if messages is None:
        return None
    if isinstance(messages, list):
        return messages
    if isinstance(messages, dict):
        return [
            {'key': field, 'value': '; '.join(map(str, value)) if isinstance(value, list) else value}
            for field, value in messages.items()
        ]
    return [messages]


def _format_message(entry: Any) -> str:
    if isinstance(entry, dict) and 'key' in entry and 'value' in entry:
        return f"{entry['key']}: {entry['value']}"
    return str(entry)


class Client:
    """
    Client for ForSign API operations.

    Provides:
        - request(): the single HTTP entry point used by every endpoint
        - upload_file(): PDF upload
        - operations: the OperationRepository for operation endpoints
        - create_operation_builder(): OperationBuilder factory

    Usage:
        client = Client(api_key='...')
        upload = client.upload_file('contract.pdf')
        request = client.create_operation_builder('Contract')...build()
        created = client.operations.create(request)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = (base_url or Config.FORSIGN_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else Config.FORSIGN_TIMEOUT
        self.connect_timeout = connect_timeout if connect_timeout is not None else Config.FORSIGN_CONNECT_TIMEOUT
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.credential: Optional[Credential] = None
        self.file_cache = FileInformationCache()
        self._operations = None

        if api_key is not None:
            self.set_credential(ApiKeyCredential(api_key))

    @classmethod
    def from_config(cls, **kwargs) -> 'Client':
        """Build a client from FORSIGN_* environment settings."""
        return cls(api_key=Config.FORSIGN_API_KEY or None, **kwargs)

    def set_credential(self, credential: Credential) -> 'Client':
        self.credential = credential
        return self

    @property
    def operations(self) -> OperationRepository:
        if self._operations is None:
            self._operations = OperationRepository(self)
        return self._operations

    def create_operation_builder(self, operation_name: str) -> OperationBuilder:
        return OperationBuilder(operation_name)

    def _get_headers(self) -> Dict[str, str]:
        """Standard headers plus the credential header."""
        if self.credential is None:
            raise ConfigurationError("Credential must be set before making API calls.")

        headers = {
            'User-Agent': USER_AGENT,
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        headers.update(self.credential.authorization_header())
        return headers

    def _build_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        json_body: Optional[Any] = None,
        files: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Execute one API call.

        Args:
            method: HTTP method
            path: Path relative to the base URL (e.g. "/api/v1/operation")
            json_body: JSON payload
            files: Multipart files, as accepted by requests
            params: Query parameters
            headers: Extra headers; may override X-Correlation-Id

        Returns:
            Parsed JSON body ({} when the body is empty)

        Raises:
            ConfigurationError: no credential set (no request is sent)
            ValidationError: HTTP 422 carrying a message list
            ApiError: any other HTTP error, an unparseable success body,
                or a transport failure (status_code 0)
        """
        request_headers = self._get_headers()
        request_headers.update(headers or {})
        if not request_headers.get(CORRELATION_ID_HEADER):
            request_headers[CORRELATION_ID_HEADER] = generate_correlation_id()
        correlation_id = request_headers[CORRELATION_ID_HEADER]

        # Multipart: requests sets Content-Type with the boundary itself
        if files is not None:
            request_headers.pop('Content-Type', None)

        url = self._build_url(path)

        try:
            response = self.session.request(
                method,
                url,
                headers=request_headers,
                json=json_body,
                files=files,
                params=params,
                timeout=(self.connect_timeout, self.timeout)
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} (correlation {correlation_id}): {e}")
            raise ApiError(
                f"API request failed: {e}",
                status_code=0,
                request_id=correlation_id
            ) from e

        status_code = response.status_code
        raw_body = response.text or ''
        body, parse_error = self._parse_body(raw_body)

        if status_code >= 400:
            self._raise_for_error(
                method=method,
                url=url,
                status_code=status_code,
                body=body,
                raw_body=raw_body,
                request_headers=request_headers,
                json_body=json_body,
                is_multipart=files is not None,
                response_headers=dict(response.headers),
                correlation_id=correlation_id
            )

        if parse_error is not None:
            self.logger.error(f"Unparseable response from {method} {url}: {parse_error}")
            raise ApiError(
                f"Failed to parse response: {parse_error}",
                status_code=status_code,
                response_body=truncate(raw_body),
                request_id=correlation_id
            )

        return body

    @staticmethod
    def _parse_body(raw_body: str) -> Tuple[Any, Optional[str]]:
        if not raw_body.strip():
            return {}, None
        try:
            return json.loads(raw_body), None
        except ValueError as e:
            return None, str(e)

    def _raise_for_error(
        self,
        method: str,
        url: str,
        status_code: int,
        body: Any,
        raw_body: str,
        request_headers: Dict[str, str],
        json_body: Any,
        is_multipart: bool,
        response_headers: Dict[str, str],
        correlation_id: str
    ) -> None:
        messages = extract_messages(body)
        snippet = truncate(raw_body)

        error_message = describe_status(status_code)
        if messages:
            error_message += " - Details: " + " | ".join(_format_message(m) for m in messages)
        elif snippet:
            error_message += f" - Body: {snippet}"

        if is_multipart:
            logged_body = '[multipart]'
        else:
            logged_body = json_body
        self.logger.error(
            f"API request returned error: status={status_code} method={method} url={url} "
            f"headers={redact_headers(request_headers)} body={logged_body} "
            f"response_headers={response_headers} response_snippet={snippet}"
        )

        if status_code == 422 and messages is not None:
            raise ValidationError(
                error_message,
                status_code=status_code,
                messages=messages,
                response_body=snippet,
                request_id=correlation_id
            )

        raise ApiError(
            error_message,
            status_code=status_code,
            messages=messages,
            response_body=snippet,
            request_id=correlation_id
        )

    def upload_file(self, file_path: Union[str, Path]) -> DocumentUploadResponse:
        """
        Upload a PDF so it can be referenced by signature positions.

        The file must exist, carry a .pdf extension and actually be a PDF.
        The returned reference is also kept in `file_cache`.

        Raises:
            InvalidArgumentError: missing file or not a PDF
            ApiError / ValidationError: as for request()
        """
        path = Path(file_path)
        if not path.is_file():
            raise InvalidArgumentError(f"File not found at path: {path}")

        if path.suffix.lower() != '.pdf':
            raise InvalidArgumentError("Only PDF files are supported.")

        with path.open('rb') as stream:
            if stream.read(len(_PDF_SIGNATURE)) != _PDF_SIGNATURE:
                raise InvalidArgumentError("Only PDF files are supported.")
            stream.seek(0)

            body = self.request(
                'POST',
                UPLOAD_PATH,
                files={'file': (path.name, stream, 'application/pdf')}
            )

        response = DocumentUploadResponse(body)
        if response.id:
            self.file_cache.remember(response.to_file_information())
            self.logger.info(f"Uploaded document {path.name} as {response.id}")
        return response
