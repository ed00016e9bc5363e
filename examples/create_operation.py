#!/usr/bin/env python3
"""
Upload a PDF and send it to one signer.

Usage:
    FORSIGN_API_KEY=... python3 examples/create_operation.py contract.pdf signer@example.com
"""

import logging
import sys
from datetime import datetime, timedelta

from forsign import (
    ApiError,
    Client,
    DoubleAuthentication,
    Language,
    Notification,
    SignatureInformation,
    SignatureType,
    Signer,
    ValidationError
)


def main(pdf_path: str, signer_email: str) -> int:
    logging.basicConfig(level=logging.INFO)
    client = Client.from_config()

    try:
        document = client.upload_file(pdf_path).to_file_information()

        signer = Signer(name='Signer', email=signer_email, role='Customer')
        signer.notification = Notification.email(signer_email)
        signer.double_authentication = DoubleAuthentication.email(signer_email)
        signer.signature_type = SignatureInformation.default(SignatureType.DRAW)
        signer.add_signature_in_position(document, 1, '50%', '80%')
        signer.add_rubric_in_position(document, 1, '90%', '95%')

        request = (
            client.create_operation_builder('Service Agreement')
            .set_language(Language.ENGLISH)
            .set_expiration_date(datetime.now() + timedelta(days=7))
            .with_redirect_url('https://example.com/signed')
            .add_signer(signer)
            .build()
        )
        created = client.operations.create(request)
    except ValidationError as e:
        print(f"Rejected: {e.formatted_messages()}")
        return 1
    except ApiError as e:
        print(f"Failed ({e.status_code}): {e.message}")
        return 1

    print(f"Operation {created.id} created")
    for member in created.members:
        print(f"  {member.get('name')}: {member.get('signUrl')}")
    return 0


if __name__ == '__main__':
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    sys.exit(main(sys.argv[1], sys.argv[2]))
