"""
ForSign Enumerations

Wire-level enumerations. Values are exactly what the API expects in
request payloads (integers for channels and signature types, language
codes for Language).
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Union

from .exceptions import InvalidArgumentError


def _normalize(value: str) -> str:
    return value.strip().lower().replace(' ', '').replace('_', '')


class Language(Enum):
    """Operation display language."""
    PORTUGUESE = "pt-br"
    ENGLISH = "en-us"
    SPANISH = "es-es"

    @classmethod
    def from_string(cls, value: str) -> 'Language':
        if not isinstance(value, str) or not value.strip():
            raise InvalidArgumentError("Language cannot be empty.")
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"Unsupported language: {value}")


class NotificationChannel(Enum):
    """How a member is notified about the operation."""
    EMAIL = 0
    SMS = 1
    WHATSAPP = 2
    NONE = 3

    @property
    def label(self) -> str:
        return _CHANNEL_LABELS[self.name]

    @classmethod
    def from_string(cls, value: str) -> 'NotificationChannel':
        for member in cls:
            if _normalize(member.label) == _normalize(value):
                return member
        raise InvalidArgumentError(f"Unsupported notification channel: {value}")


class AuthenticationChannel(Enum):
    """Second-factor channel a member must confirm before signing."""
    EMAIL = 0
    SMS = 1
    WHATSAPP = 2

    @property
    def label(self) -> str:
        return _CHANNEL_LABELS[self.name]

    @classmethod
    def from_string(cls, value: str) -> 'AuthenticationChannel':
        for member in cls:
            if _normalize(member.label) == _normalize(value):
                return member
        raise InvalidArgumentError(f"Unsupported authentication channel: {value}")


_CHANNEL_LABELS = {
    'EMAIL': 'Email',
    'SMS': 'SMS',
    'WHATSAPP': 'WhatsApp',
    'NONE': 'None',
}


class SignatureType(Enum):
    """Signature styles accepted by the API."""
    CLICK = 0
    DRAW = 1
    TEXT = 2
    STAMP = 3
    USER_CHOICE = 4
    AUTOMATIC_STAMP = 5
    RUBRIC = 6
    CERTIFICATE = 7

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').title()

    @property
    def description(self) -> str:
        return _SIGNATURE_DESCRIPTIONS[self]

    @classmethod
    def from_string(cls, value: str) -> 'SignatureType':
        for member in cls:
            if _normalize(member.name) == _normalize(value):
                return member
        raise InvalidArgumentError(f"Unsupported signature type: {value}")


_SIGNATURE_DESCRIPTIONS = {
    SignatureType.CLICK: 'Signature by clicking, typically representing a simple consent.',
    SignatureType.DRAW: 'Signature by drawing, often used for a handwritten signature.',
    SignatureType.TEXT: 'Signature in text form.',
    SignatureType.STAMP: 'Signature using a predefined stamp or seal.',
    SignatureType.USER_CHOICE: 'Allows the user to choose the type of signature.',
    SignatureType.AUTOMATIC_STAMP: 'Automatic stamp signature, where the stamp is applied automatically.',
    SignatureType.RUBRIC: 'Rubric signature, typically a small and stylized handwritten signature or text.',
    SignatureType.CERTIFICATE: 'Certificate-based signature, using a local digital certificate.',
}


class InputAttachmentType(Enum):
    """How a member may provide a requested attachment."""
    CAMERA_SIDE_BACK = 1
    CAMERA_SIDE_FRONT = 2
    UPLOAD_FILE = 4

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').title()

    @classmethod
    def from_string(cls, value: str) -> 'InputAttachmentType':
        for member in cls:
            if _normalize(member.name) == _normalize(value):
                return member
        raise InvalidArgumentError(f"Unsupported input attachment type: {value}")


class AttachmentFileType(Enum):
    """File extensions a member may upload for an attachment request."""
    PDF = "pdf"
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    TIFF = "tiff"
    TIF = "tif"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES.get(self.value, 'application/octet-stream')

    @classmethod
    def from_extension(cls, extension: str) -> 'AttachmentFileType':
        try:
            return cls(extension.strip().lstrip('.').lower())
        except ValueError:
            raise InvalidArgumentError(f"Unsupported attachment file type: {extension}")

    @classmethod
    def from_mime_type(cls, mime_type: str) -> 'AttachmentFileType':
        by_mime = {
            'application/pdf': cls.PDF,
            'image/png': cls.PNG,
            'image/jpeg': cls.JPEG,
            'image/tiff': cls.TIFF,
        }
        if mime_type not in by_mime:
            raise InvalidArgumentError(f"Unsupported MIME type: {mime_type}")
        return by_mime[mime_type]

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'AttachmentFileType':
        suffix = Path(path).suffix
        if not suffix:
            raise InvalidArgumentError(f"Could not determine file extension from path: {path}")
        return cls.from_extension(suffix)


_MIME_TYPES: Dict[str, str] = {
    'pdf': 'application/pdf',
    'png': 'image/png',
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'tiff': 'image/tiff',
    'tif': 'image/tiff',
}
