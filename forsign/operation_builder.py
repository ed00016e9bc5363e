"""
Operation Builder

Fluent builder that collects operation settings and signers and
produces one immutable OperationRequest.

Usage:
    request = (
        OperationBuilder('Service Agreement')
        .set_language(Language.ENGLISH)
        .set_signers_order_requirement(True)
        .add_signer(signer)
        .build()
    )
"""

import dataclasses
import logging
import warnings
from datetime import datetime
from typing import List, Optional, Union

from .enums import Language
from .exceptions import InvalidArgumentError, OperationBuildError
from .member_builder import MemberBuilder
from .payloads import ManualFinish, Metadata, OperationMember, OperationRequest
from .positions import DocumentRegistry
from .types import Signer

logger = logging.getLogger(__name__)

REDIRECT_URL_METADATA_KEY = '@module/redirect-url'


class InsecureRedirectUrlWarning(UserWarning):
    """Emitted when a redirect URL does not use HTTPS."""
    pass


class OperationBuilder:
    """
    Builds an OperationRequest.

    Signers are compiled as they are added; documents they reference
    are collected once each into the operation's Files list. Member
    ordering is applied at build() time.
    """

    def __init__(self, name: str):
        self._name = name
        self._language: Optional[str] = None
        self._display_cover = True
        self._order = False
        self._member_movement_warning = False
        self._on_premises = False
        self._optional_message: Optional[str] = None
        self._expiration_date: Optional[datetime] = None
        self._external_id: Optional[str] = None
        self._operation_model_id: Optional[int] = None
        self._manual_finish: Optional[bool] = None
        self._groups: List[int] = []
        self._metadata: List[Metadata] = []
        self._members: List[OperationMember] = []
        self._documents = DocumentRegistry()

    @classmethod
    def initialize_with_name(cls, name: str) -> 'OperationBuilder':
        return cls(name)

    def set_signers_order_requirement(self, is_ordered: bool) -> 'OperationBuilder':
        self._order = is_ordered
        return self

    def set_expiration_date(self, date: datetime) -> 'OperationBuilder':
        self._expiration_date = date
        return self

    def with_external_id(self, external_id: str) -> 'OperationBuilder':
        self._external_id = external_id
        return self

    def set_in_person_signing(self, in_person_signing: bool) -> 'OperationBuilder':
        self._on_premises = in_person_signing
        return self

    def with_optional_message(self, optional_message: str) -> 'OperationBuilder':
        self._optional_message = optional_message
        return self

    def set_member_movement_warning(self, enabled: bool) -> 'OperationBuilder':
        self._member_movement_warning = enabled
        return self

    def with_operation_model_id(self, operation_model_id: int) -> 'OperationBuilder':
        if operation_model_id <= 0:
            raise InvalidArgumentError("Operation model ID must be greater than zero.")
        self._operation_model_id = operation_model_id
        return self

    def set_manual_finish(self, has_manual_finish: bool) -> 'OperationBuilder':
        """Require (or not) an explicit completion call. Carries the expiration date if set."""
        self._manual_finish = has_manual_finish
        return self

    def add_group(self, group_id: int) -> 'OperationBuilder':
        self._groups.append(group_id)
        return self

    def set_language(self, language: Union[Language, str]) -> 'OperationBuilder':
        if not isinstance(language, Language):
            language = Language.from_string(language)
        self._language = language.value
        return self

    def set_display_cover(self, display_cover: bool) -> 'OperationBuilder':
        self._display_cover = display_cover
        return self

    def add_signer(self, signer: Signer) -> 'OperationBuilder':
        """Compile `signer` and append it to the member list."""
        self._members.append(MemberBuilder.build(signer, self._documents))
        return self

    def add_metadata(self, key: str, value: str) -> 'OperationBuilder':
        self._metadata.append(Metadata(key, value))
        return self

    def with_redirect_url(self, url: str) -> 'OperationBuilder':
        """
        Redirect signers to `url` after signing.

        Stored as reserved metadata. Must be http:// or https://;
        plain http is accepted with an InsecureRedirectUrlWarning.
        """
        if not url:
            raise InvalidArgumentError("Redirect URL cannot be empty.")
        if not url.startswith(('http://', 'https://')):
            raise InvalidArgumentError("Redirect URL must start with http:// or https://.")
        if not url.startswith('https://'):
            warnings.warn(
                "For security reasons, it is recommended to use HTTPS for redirect URLs.",
                InsecureRedirectUrlWarning,
                stacklevel=2
            )

        return self.add_metadata(REDIRECT_URL_METADATA_KEY, url)

    def build(self) -> OperationRequest:
        """
        Validate and produce the request.

        Raises:
            OperationBuildError: name empty, no signer added, or no language set
        """
        self._validate()

        members = tuple(
            dataclasses.replace(member, order_position=(index + 1) if self._order else 0)
            for index, member in enumerate(self._members)
        )

        manual_finish = None
        if self._manual_finish is not None:
            manual_finish = ManualFinish(
                has_manual_finish=self._manual_finish,
                date=self._expiration_date
            )

        request = OperationRequest(
            name=self._name,
            language=self._language,
            members=members,
            files=self._documents.documents(),
            display_cover=self._display_cover,
            groups=tuple(self._groups),
            order=self._order,
            member_movement_warning=self._member_movement_warning,
            on_premises=self._on_premises,
            metadata=tuple(self._metadata),
            optional_message=self._optional_message,
            expiration_date=self._expiration_date,
            external_id=self._external_id,
            operation_model_id=self._operation_model_id,
            manual_finish=manual_finish
        )

        logger.debug(
            f"Built operation '{self._name}' with {len(members)} member(s) "
            f"and {len(request.files)} document(s)"
        )
        return request

    def _validate(self) -> None:
        if not self._name:
            raise OperationBuildError("Operation name is required.")
        if not self._members:
            raise OperationBuildError("At least one member is required.")
        if not self._language:
            raise OperationBuildError("Language is required.")
