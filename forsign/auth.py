"""
Credentials

A credential contributes the authentication header(s) to every
API request.
"""

from typing import Dict

from .exceptions import InvalidArgumentError

API_KEY_HEADER = 'X-Api-Key'


class Credential:
    """Base class for request credentials."""

    def authorization_header(self) -> Dict[str, str]:
        raise NotImplementedError


class ApiKeyCredential(Credential):
    """Static API key sent in the X-Api-Key header."""

    def __init__(self, api_key: str):
        if not api_key:
            raise InvalidArgumentError("API key cannot be empty")
        self.api_key = api_key

    def authorization_header(self) -> Dict[str, str]:
        return {API_KEY_HEADER: self.api_key}

    def __repr__(self) -> str:
        return f"ApiKeyCredential(api_key='...{self.api_key[-4:]}')"
