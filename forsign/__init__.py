"""
ForSign Client

A client library for the ForSign document-signing API. Operations are
assembled with builders, compiled into an immutable request and sent
through the Client.

Usage:
    from forsign import Client, Signer, Notification, SignatureInformation, SignatureType, Language

    client = Client(api_key='...')
    document = client.upload_file('contract.pdf').to_file_information()

    signer = Signer(name='Jane Doe', email='jane@example.com')
    signer.notification = Notification.email('jane@example.com')
    signer.signature_type = SignatureInformation.default(SignatureType.DRAW)
    signer.add_signature_in_position(document, 1, '50%', '80%')

    request = (
        client.create_operation_builder('Contract')
        .set_language(Language.ENGLISH)
        .add_signer(signer)
        .build()
    )
    created = client.operations.create(request)
"""

from .enums import (
    Language,
    NotificationChannel,
    AuthenticationChannel,
    SignatureType,
    InputAttachmentType,
    AttachmentFileType
)

from .exceptions import (
    ForSignError,
    ConfigurationError,
    InvalidArgumentError,
    OperationBuildError,
    ApiError,
    ValidationError
)

from .types import (
    FileInformation,
    SignaturePosition,
    RubricPosition,
    TagPosition,
    Notification,
    DoubleAuthentication,
    SignatureInformation,
    Attachment,
    Signer
)

from .forms import FormField, FormFieldPosition, TextFormField, CheckboxFormField
from .payloads import OperationRequest, OperationMember, OperationDocument, Metadata, ManualFinish
from .operation_builder import OperationBuilder, InsecureRedirectUrlWarning
from .member_builder import MemberBuilder
from .auth import Credential, ApiKeyCredential
from .client import Client
from .repository import OperationRepository
from .file_cache import FileInformationCache

__all__ = [
    # Enums
    'Language',
    'NotificationChannel',
    'AuthenticationChannel',
    'SignatureType',
    'InputAttachmentType',
    'AttachmentFileType',

    # Exceptions
    'ForSignError',
    'ConfigurationError',
    'InvalidArgumentError',
    'OperationBuildError',
    'ApiError',
    'ValidationError',

    # Types
    'FileInformation',
    'SignaturePosition',
    'RubricPosition',
    'TagPosition',
    'Notification',
    'DoubleAuthentication',
    'SignatureInformation',
    'Attachment',
    'Signer',
    'FormField',
    'FormFieldPosition',
    'TextFormField',
    'CheckboxFormField',

    # Payloads
    'OperationRequest',
    'OperationMember',
    'OperationDocument',
    'Metadata',
    'ManualFinish',

    # Builders
    'OperationBuilder',
    'MemberBuilder',
    'InsecureRedirectUrlWarning',

    # API
    'Credential',
    'ApiKeyCredential',
    'Client',
    'OperationRepository',
    'FileInformationCache',
]
