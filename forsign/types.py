"""
ForSign Builder-Side Types

Value objects a caller assembles before building an operation:
file references, signature positions, channel selectors, attachment
requests and the Signer itself.

Selectors (Notification, DoubleAuthentication, SignatureInformation)
are closed variants: a frozen dataclass whose `kind`/`channel` field
names the variant and whose remaining fields carry its payload. They
validate on construction, so a selector that exists is always usable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .enums import (
    AttachmentFileType,
    AuthenticationChannel,
    InputAttachmentType,
    SignatureType,
)
from .exceptions import InvalidArgumentError
from .payloads import AttachmentMemberDto

if TYPE_CHECKING:
    from .forms import FormField


def validate_page(page: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page <= 0:
        raise InvalidArgumentError("Page number must be a positive integer.")


@dataclass(frozen=True)
class FileInformation:
    """
    Reference to a document previously uploaded to ForSign.

    Attributes:
        file_id: Identifier returned by the upload endpoint
        file_name: Display name, sent as the document description
    """
    file_id: str
    file_name: str

    def __post_init__(self):
        if not self.file_id:
            raise InvalidArgumentError("File ID cannot be empty.")


@dataclass(frozen=True)
class SignaturePosition:
    """A fixed signature location: page (1-based) and percentage coordinates."""
    file_information: FileInformation
    page: int
    coordinate_x: str
    coordinate_y: str
    print_signature: bool = True

    def __post_init__(self):
        validate_page(self.page)


@dataclass(frozen=True)
class RubricPosition(SignaturePosition):
    """A fixed rubric (initials) location. Same shape as SignaturePosition."""
    pass


@dataclass(frozen=True)
class TagPosition:
    """
    A signature location found at fulfillment time by searching the
    document text for `tag_pattern` (e.g. "{{signature}}").
    """
    file_information: FileInformation
    tag_pattern: str

    def __post_init__(self):
        if not self.tag_pattern:
            raise InvalidArgumentError("Tag pattern cannot be empty.")


class NotificationKind(Enum):
    EMAIL = "email"
    NONE = "none"


@dataclass(frozen=True)
class Notification:
    """
    How a signer is told about the operation.

    Use Notification.email(address) or Notification.none().
    """
    kind: NotificationKind
    address: Optional[str] = None

    def __post_init__(self):
        if self.kind == NotificationKind.EMAIL and not self.address:
            raise InvalidArgumentError("Email cannot be empty.")

    @classmethod
    def email(cls, address: str) -> 'Notification':
        return cls(NotificationKind.EMAIL, address)

    @classmethod
    def none(cls) -> 'Notification':
        return cls(NotificationKind.NONE)


@dataclass(frozen=True)
class DoubleAuthentication:
    """
    Second-factor verification a signer completes before signing.

    `contact` is the email address for EMAIL and the phone number
    for SMS and WHATSAPP.
    """
    channel: AuthenticationChannel
    contact: str

    def __post_init__(self):
        if not self.contact:
            if self.channel == AuthenticationChannel.EMAIL:
                raise InvalidArgumentError("Email cannot be null or empty.")
            raise InvalidArgumentError("Phone number cannot be null or empty.")

    @classmethod
    def email(cls, address: str) -> 'DoubleAuthentication':
        return cls(AuthenticationChannel.EMAIL, address)

    @classmethod
    def sms(cls, phone: str) -> 'DoubleAuthentication':
        return cls(AuthenticationChannel.SMS, phone)

    @classmethod
    def whatsapp(cls, phone: str) -> 'DoubleAuthentication':
        return cls(AuthenticationChannel.WHATSAPP, phone)


class SignatureInformationKind(Enum):
    DEFAULT = "default"
    AUTOMATIC_STAMP = "automatic-stamp"


@dataclass(frozen=True)
class SignatureInformation:
    """
    Which signature style the signer uses.

    SignatureInformation.default(kind) lets the signer sign with `kind`.
    SignatureInformation.automatic_stamp(stamp_id) applies a stored stamp;
    its nominal type is STAMP.
    """
    kind: SignatureInformationKind
    signature_type: SignatureType
    print_signature: bool = True
    stamp_id: Optional[str] = None

    def __post_init__(self):
        if self.kind == SignatureInformationKind.AUTOMATIC_STAMP and not self.stamp_id:
            raise InvalidArgumentError("Stamp ID cannot be empty.")

    @classmethod
    def default(cls, signature_type: SignatureType, print_signature: bool = True) -> 'SignatureInformation':
        return cls(SignatureInformationKind.DEFAULT, signature_type, print_signature)

    @classmethod
    def automatic_stamp(cls, stamp_id: str) -> 'SignatureInformation':
        return cls(SignatureInformationKind.AUTOMATIC_STAMP, SignatureType.STAMP, True, stamp_id)

    @property
    def is_automatic_stamp(self) -> bool:
        return self.kind == SignatureInformationKind.AUTOMATIC_STAMP


@dataclass
class Attachment:
    """A file the signer is asked to provide (ID card, proof of address...)."""
    name: str
    description: str
    required: bool
    file_types: List[AttachmentFileType] = field(default_factory=list)
    max_files: int = 1
    input_types: List[InputAttachmentType] = field(default_factory=list)

    def __post_init__(self):
        if not self.name:
            raise InvalidArgumentError("Attachment name cannot be empty.")

    def permit_file_type(self, file_type: AttachmentFileType) -> 'Attachment':
        self.file_types.append(file_type)
        return self

    def permit_attachment_by_input(self, input_type: InputAttachmentType) -> 'Attachment':
        self.input_types.append(input_type)
        return self

    def to_member_dto(self) -> AttachmentMemberDto:
        """Convert to the wire DTO. The server assigns the real ID; 0 is a placeholder."""
        return AttachmentMemberDto(
            id=0,
            name=self.name,
            description=self.description,
            required=self.required,
            file_types=tuple(t.extension for t in self.file_types),
            files_allowed=self.max_files,
            input_types=tuple(t.value for t in self.input_types)
        )


def _default_signature_information() -> SignatureInformation:
    return SignatureInformation.default(SignatureType.DRAW)


@dataclass
class Signer:
    """
    Everything needed to add one participant to an operation.

    Mutable while the caller configures it; OperationBuilder.add_signer()
    reads it once and compiles it into an OperationMember.
    """
    name: str = ''
    email: str = ''
    role: str = ''
    phone: Optional[str] = None
    document: Optional[str] = None
    form_title: str = ''
    form_description: str = ''
    notification: Optional[Notification] = None
    double_authentication: Optional[DoubleAuthentication] = None
    signature_type: SignatureInformation = field(default_factory=_default_signature_information)
    signature_positions: List[SignaturePosition] = field(default_factory=list)
    rubric_positions: List[RubricPosition] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)
    form_fields: List['FormField'] = field(default_factory=list)
    tag_position: Optional[TagPosition] = None

    def add_signature_in_position(
        self,
        file_information: FileInformation,
        page: int,
        coordinate_x: str,
        coordinate_y: str,
        print_signature: bool = True
    ) -> 'Signer':
        self.signature_positions.append(
            SignaturePosition(file_information, page, coordinate_x, coordinate_y, print_signature)
        )
        return self

    def add_rubric_in_position(
        self,
        file_information: FileInformation,
        page: int,
        coordinate_x: str,
        coordinate_y: str,
        print_signature: bool = True
    ) -> 'Signer':
        self.rubric_positions.append(
            RubricPosition(file_information, page, coordinate_x, coordinate_y, print_signature)
        )
        return self

    def set_tag_signature_position(self, tag_position: TagPosition) -> 'Signer':
        """Place the signature by tag. A signer holds at most one tag position."""
        if self.tag_position is not None:
            raise InvalidArgumentError("Signer already has a tag signature position.")
        self.tag_position = tag_position
        return self

    def request_attachment(self, attachment: Attachment) -> 'Signer':
        self.attachments.append(attachment)
        return self

    def add_form_field(self, form_field: 'FormField') -> 'Signer':
        self.form_fields.append(form_field)
        return self
