#!/usr/bin/env python3
"""
Create an operation whose signature location is found by tag, with a
form field and an attachment request.

The PDF must contain the text {{signature}} where the signature goes.

Usage:
    FORSIGN_API_KEY=... python3 examples/create_operation_with_tags.py contract.pdf signer@example.com
"""

import sys

from forsign import (
    ApiError,
    Attachment,
    AttachmentFileType,
    Client,
    FormFieldPosition,
    InputAttachmentType,
    Language,
    Notification,
    Signer,
    TagPosition,
    TextFormField
)


def main(pdf_path: str, signer_email: str) -> int:
    client = Client.from_config()

    try:
        document = client.upload_file(pdf_path).to_file_information()

        id_card = (
            Attachment('ID card', 'Photo of the front of your ID card', required=True)
            .permit_file_type(AttachmentFileType.PDF)
            .permit_file_type(AttachmentFileType.JPG)
            .permit_attachment_by_input(InputAttachmentType.CAMERA_SIDE_FRONT)
            .permit_attachment_by_input(InputAttachmentType.UPLOAD_FILE)
        )
        full_name = (
            TextFormField('Full name')
            .with_instructions('As printed on your ID card')
            .is_required()
            .on_position(FormFieldPosition(document, 1, '10%', '70%'))
        )

        signer = Signer(name='Signer', email=signer_email)
        signer.notification = Notification.email(signer_email)
        signer.set_tag_signature_position(TagPosition(document, '{{signature}}'))
        signer.request_attachment(id_card)
        signer.add_form_field(full_name)

        request = (
            client.create_operation_builder('Tagged Agreement')
            .set_language(Language.PORTUGUESE)
            .add_metadata('source', 'examples')
            .add_signer(signer)
            .build()
        )
        created = client.operations.create(request)
    except ApiError as e:
        print(f"Failed ({e.status_code}): {e.message}")
        return 1

    print(f"Operation {created.id} created")
    return 0


if __name__ == '__main__':
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    sys.exit(main(sys.argv[1], sys.argv[2]))
