"""
Member Builder

Compiles a Signer into the OperationMember the API expects,
registering every document the signer references on the parent
operation's DocumentRegistry along the way.
"""

import logging
from typing import Any, Dict, List

from .channels import resolve_channels
from .enums import SignatureType
from .payloads import OperationMember
from .positions import DocumentRegistry, compile_positions
from .types import Signer

logger = logging.getLogger(__name__)


class MemberBuilder:
    """
    Builds OperationMember objects from Signer configurations.

    Takes:
        - A Signer (read once, not modified)
        - The operation's DocumentRegistry (documents are added to it)

    Returns:
        - An OperationMember with OrderPosition 0; the operation builder
          assigns ordering.
    """

    @classmethod
    def build(cls, signer: Signer, registry: DocumentRegistry) -> OperationMember:
        """
        Compile one signer.

        Args:
            signer: Signer configuration
            registry: Document registry of the operation being built

        Returns:
            The compiled member
        """
        channels = resolve_channels(signer)

        signatures = compile_positions(signer.signature_positions, registry)
        rubrics = compile_positions(signer.rubric_positions, registry)

        has_signature_tag = False
        sign_position_tag = None
        if signer.tag_position is not None:
            registry.register(signer.tag_position.file_information)
            has_signature_tag = True
            sign_position_tag = signer.tag_position.tag_pattern

        form_fields = cls._build_form_fields(signer, registry)

        member = OperationMember(
            name=signer.name,
            email=channels.email,
            role=signer.role,
            phone=channels.phone,
            document=signer.document,
            notification_channel=channels.notification_channel,
            authentication_channel=channels.authentication_channel,
            signature_type=cls._resolve_signature_type(signer),
            attachments=tuple(a.to_member_dto() for a in signer.attachments),
            form_fields=form_fields,
            signatures=signatures,
            rubrics=rubrics,
            has_signature_tag=has_signature_tag,
            sign_position_tag=sign_position_tag,
            form_title=signer.form_title,
            form_description=signer.form_description
        )

        logger.debug(
            f"Built member '{signer.name}': {len(signatures)} signature(s), "
            f"{len(rubrics)} rubric(s), {len(form_fields)} form field(s)"
        )
        return member

    @classmethod
    def _resolve_signature_type(cls, signer: Signer) -> SignatureType:
        # Automatic stamping is modeled server-side as a click signature.
        # The stamp ID is not sent.
        if signer.signature_type.is_automatic_stamp:
            return SignatureType.CLICK
        return signer.signature_type.signature_type

    @classmethod
    def _build_form_fields(cls, signer: Signer, registry: DocumentRegistry) -> tuple:
        entries: List[Dict[str, Any]] = []
        for form_field in signer.form_fields:
            for position in form_field.positions:
                registry.register(position.file_information)
            entries.extend(form_field.to_api_format())
        return tuple(entries)
