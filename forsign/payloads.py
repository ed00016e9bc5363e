"""
Operation Payloads

Compiled, immutable wire representations. These are what the
builders produce and what gets serialized into the create-operation
request body. Keys in to_dict() follow the API's casing exactly.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .enums import AuthenticationChannel, NotificationChannel, SignatureType
from .exceptions import InvalidArgumentError


def format_datetime(value: datetime) -> str:
    """ISO-8601 timestamp, second precision (offset included when aware)."""
    return value.isoformat(timespec='seconds')


@dataclass(frozen=True)
class OperationDocument:
    """An entry in the operation's Files list."""
    id: str
    description: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise InvalidArgumentError("Document ID cannot be empty.")

    def to_dict(self) -> Dict[str, Any]:
        data = {'Id': self.id}
        if self.description is not None:
            data['Description'] = self.description
        return data


@dataclass(frozen=True)
class Metadata:
    """Free-form key/value pair attached to the operation."""
    key: str
    value: str

    def __post_init__(self):
        if not self.key:
            raise InvalidArgumentError("Metadata key cannot be empty.")

    def to_dict(self) -> Dict[str, Any]:
        return {'Key': self.key, 'Value': self.value}


@dataclass(frozen=True)
class ManualFinish:
    """Completion mode block: manual finish flag plus optional deadline."""
    has_manual_finish: bool = False
    date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'HasManualFinish': self.has_manual_finish}
        if self.date is not None:
            data['Date'] = format_datetime(self.date)
        return data


@dataclass(frozen=True)
class AttachmentMemberDto:
    """Attachment request as sent for a member. `id` is 0 on creation."""
    id: int
    name: str
    description: str
    required: bool
    file_types: Tuple[str, ...] = ()
    files_allowed: int = 1
    input_types: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Id': self.id,
            'Name': self.name,
            'Description': self.description,
            'Required': self.required,
            'FileType': list(self.file_types),
            'FilesAllowed': self.files_allowed,
            'InputAttachment': list(self.input_types),
        }


@dataclass(frozen=True)
class OperationMember:
    """
    A compiled signer or observer.

    Signatures, Rubrics and FormFields are already in wire shape
    (see positions.py and forms.py).
    """
    name: str
    email: str
    role: Optional[str] = None
    phone: Optional[str] = None
    document: Optional[str] = None
    observer: bool = False
    order_position: int = 0
    notification_channel: NotificationChannel = NotificationChannel.EMAIL
    authentication_channel: Optional[AuthenticationChannel] = None
    signature_type: SignatureType = SignatureType.DRAW
    attachments: Tuple[AttachmentMemberDto, ...] = ()
    form_fields: Tuple[Dict[str, Any], ...] = ()
    signatures: Tuple[Dict[str, Any], ...] = ()
    rubrics: Tuple[Dict[str, Any], ...] = ()
    has_signature_tag: bool = False
    sign_position_tag: Optional[str] = None
    form_title: Optional[str] = None
    form_description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'Role': self.role,
            'Name': self.name,
            'Email': self.email,
            'Observer': self.observer,
            'OrderPosition': self.order_position,
            'NotificationChannel': self.notification_channel.value,
            'SignatureType': self.signature_type.value,
            'Attachments': [a.to_dict() for a in self.attachments],
            'FormFields': list(self.form_fields),
            'Signatures': list(self.signatures),
            'Rubrics': list(self.rubrics),
            'HasSignatureTag': self.has_signature_tag,
            'SignPositionTag': self.sign_position_tag,
            'FormTitle': self.form_title,
            'FormDescription': self.form_description,
        }

        if self.authentication_channel is not None:
            data['AuthenticationChannel'] = self.authentication_channel.value

        if self.phone is not None:
            data['Phone'] = self.phone

        if self.document is not None:
            data['Document'] = self.document

        return data


@dataclass(frozen=True)
class OperationRequest:
    """
    The complete create-operation payload.

    Produced once by OperationBuilder.build(); never mutated afterwards.
    """
    name: str
    language: str
    members: Tuple[OperationMember, ...]
    files: Tuple[OperationDocument, ...] = ()
    display_cover: bool = True
    groups: Tuple[int, ...] = ()
    order: bool = False
    member_movement_warning: bool = False
    on_premises: bool = False
    metadata: Tuple[Metadata, ...] = ()
    optional_message: Optional[str] = None
    expiration_date: Optional[datetime] = None
    external_id: Optional[str] = None
    operation_model_id: Optional[int] = None
    manual_finish: Optional[ManualFinish] = None

    def get_file(self, file_id: str) -> Optional[OperationDocument]:
        return next((f for f in self.files if f.id == file_id), None)

    def get_metadata(self, key: str) -> List[str]:
        """Values stored under `key` (keys are not required to be unique)."""
        return [m.value for m in self.metadata if m.key == key]

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'Name': self.name,
            'Language': self.language,
            'DisplayCover': self.display_cover,
            'Files': [f.to_dict() for f in self.files],
            'Members': [m.to_dict() for m in self.members],
            'Groups': list(self.groups),
            'Order': self.order,
            'MemberMovementWarning': self.member_movement_warning,
            'OnPremises': self.on_premises,
            'Metadata': [m.to_dict() for m in self.metadata],
        }

        if self.optional_message is not None:
            data['OptionalMessage'] = self.optional_message

        if self.expiration_date is not None:
            data['ExpirationDate'] = format_datetime(self.expiration_date)

        if self.external_id is not None:
            data['ExternalId'] = self.external_id

        if self.operation_model_id is not None:
            data['OperationModelId'] = self.operation_model_id

        if self.manual_finish is not None:
            data['ManualFinish'] = self.manual_finish.to_dict()

        return data
