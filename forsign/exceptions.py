"""
ForSign Client Exceptions

Custom exceptions for request construction and API call failures.
"""

from typing import Any, Dict, List, Optional


class ForSignError(Exception):
    """Base exception for all ForSign client errors."""
    pass


class ConfigurationError(ForSignError):
    """
    Raised when the client is not configured to make API calls.

    The typical case is a missing credential: the call fails before
    any network attempt is made.
    """
    pass


class InvalidArgumentError(ForSignError, ValueError):
    """
    Raised when a builder or request object receives malformed input.

    Empty required strings, non-positive page numbers or identifiers,
    empty required collections. Raised at the call that received the
    bad value, never at network time.
    """
    pass


class OperationBuildError(ForSignError):
    """Raised by OperationBuilder.build() when the operation is incomplete."""
    pass


class ApiError(ForSignError):
    """
    Raised when an API call fails.

    Covers HTTP error statuses, unparseable success bodies and
    transport failures (status_code 0, original exception chained
    as __cause__).
    """
    def __init__(
        self,
        message: str,
        status_code: int = 0,
        messages: Optional[List[Any]] = None,
        response_body: Optional[str] = None,
        request_id: Optional[str] = None
    ):
        self.status_code = status_code
        self.messages = messages
        self.response_body = response_body
        self.request_id = request_id
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)

    def formatted_messages(self) -> Optional[str]:
        """
        Render the message list one entry per line.

        Entries shaped like {"key": ..., "value": ...} become "key: value";
        plain strings are kept as-is; anything else is skipped.
        """
        if self.messages is None:
            return None

        formatted = []
        for entry in self.messages:
            if isinstance(entry, dict) and 'key' in entry and 'value' in entry:
                formatted.append(f"{entry['key']}: {entry['value']}")
            elif isinstance(entry, str):
                formatted.append(entry)

        return "\n".join(formatted) if formatted else None


class ValidationError(ApiError):
    """
    Raised on HTTP 422 responses that carry a message list.

    The raw list is kept in `messages`; `validation_errors` maps each
    field key to its message.
    """
    def __init__(
        self,
        message: str,
        status_code: int = 422,
        messages: Optional[List[Any]] = None,
        response_body: Optional[str] = None,
        request_id: Optional[str] = None
    ):
        super().__init__(
            message,
            status_code=status_code,
            messages=messages,
            response_body=response_body,
            request_id=request_id
        )

    @property
    def validation_errors(self) -> Dict[str, str]:
        errors = {}
        for entry in self.messages or []:
            if isinstance(entry, dict) and 'key' in entry and 'value' in entry:
                errors[entry['key']] = entry['value']
        return errors

    def has_error_for(self, field: str) -> bool:
        return field in self.validation_errors

    def get_error_for(self, field: str) -> Optional[str]:
        return self.validation_errors.get(field)
