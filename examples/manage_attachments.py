#!/usr/bin/env python3
"""
Review a member's attachments: download pending files, approve the
ones that were uploaded and reject required ones that are missing.

Usage:
    FORSIGN_API_KEY=... python3 examples/manage_attachments.py <member-id> <output-dir>
"""

import sys
from pathlib import Path

from forsign import ApiError, Client


def main(member_id: int, output_dir: Path) -> int:
    client = Client.from_config()
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        attachments = client.operations.get_member_attachments(member_id)

        approve = []
        reject = []
        for attachment in attachments:
            if not attachment.is_pending:
                continue
            if not attachment.has_uploaded_files:
                if attachment.required:
                    reject.append({'id': attachment.id, 'reason': 'No file was uploaded.'})
                continue

            for uploaded in attachment.uploaded_files:
                download = client.operations.download_attachment(int(uploaded['id']))
                target = output_dir / (download.file_name or f"attachment-{uploaded['id']}")
                download.save_to_file(target)
                print(f"Saved {target} ({download.human_readable_file_size})")
            approve.append(attachment.id)

        if approve:
            client.operations.approve_attachments(member_id, approve)
        if reject:
            client.operations.reject_attachments(member_id, reject)
    except ApiError as e:
        print(f"Failed ({e.status_code}): {e.message}")
        return 1

    print(f"Approved {len(approve)}, rejected {len(reject)}")
    return 0


if __name__ == '__main__':
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    sys.exit(main(int(sys.argv[1]), Path(sys.argv[2])))
