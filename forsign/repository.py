"""
Operation Repository

Per-endpoint calls for operations and member attachments. Each method
validates its arguments, delegates to Client.request() and wraps the
result in a response object.
"""

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Dict, List

from .exceptions import ApiError, InvalidArgumentError
from .payloads import OperationRequest, format_datetime
from .responses import (
    AttachmentDownloadResponse,
    MemberAttachmentResponse,
    OperationCancelResponse,
    OperationCompleteResponse,
    OperationCreatedResponse,
    OperationSetAutomaticCompletionResponse,
    OperationSetManualCompletionResponse,
    OperationZipResponse,
)

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)

CREATE_CONTENT_LANGUAGE = 'pt-BR'
MIN_AUTOMATIC_COMPLETION_LEAD = timedelta(hours=1)


def _require_positive(value: int, label: str) -> None:
    if value <= 0:
        raise InvalidArgumentError(f"{label} must be greater than zero.")


class OperationRepository:
    """
    Operation and attachment endpoints.

    Obtained through Client.operations.
    """

    def __init__(self, client: 'Client'):
        self.client = client

    def create(self, request: OperationRequest) -> OperationCreatedResponse:
        """
        Create an operation.

        The created operation is returned under data.data; a body
        without that envelope is rejected.
        """
        response = self.client.request(
            'POST',
            '/api/v1/operation',
            json_body=request.to_dict(),
            headers={'Content-Language': CREATE_CONTENT_LANGUAGE}
        )

        data = response.get('data') if isinstance(response, dict) else None
        if not isinstance(data, dict) or data.get('data') is None:
            raise ApiError("Invalid response format from server")

        created = OperationCreatedResponse(data['data'])
        logger.info(f"Operation created: {created.id}")
        return created

    def complete(self, operation_id: int) -> OperationCompleteResponse:
        _require_positive(operation_id, "Operation ID")
        response = self.client.request('POST', f"/api/v2/operation/{operation_id}/complete")
        return OperationCompleteResponse(response)

    def cancel(self, operation_id: int, message: str) -> OperationCancelResponse:
        """Cancel an operation. `message` is the reason shown to members."""
        _require_positive(operation_id, "Operation ID")
        if not message:
            raise InvalidArgumentError("Cancellation message cannot be empty.")

        response = self.client.request(
            'POST',
            f"/api/v2/operation/{operation_id}/cancel",
            json_body={'message': message}
        )
        return OperationCancelResponse(response)

    def set_automatic_completion(self, operation_id: int, end_date: datetime) -> OperationSetAutomaticCompletionResponse:
        """
        Finish the operation automatically at `end_date`.

        end_date must be at least one hour in the future.
        """
        _require_positive(operation_id, "Operation ID")

        now = datetime.now(end_date.tzinfo) if end_date.tzinfo else datetime.now()
        if end_date <= now + MIN_AUTOMATIC_COMPLETION_LEAD:
            raise InvalidArgumentError("End date must be at least one hour in the future.")

        response = self.client.request(
            'PATCH',
            f"/api/v2/operation/{operation_id}/set-automatic-completion",
            json_body={'endDate': format_datetime(end_date)}
        )
        return OperationSetAutomaticCompletionResponse(response)

    def set_manual_completion(self, operation_id: int) -> OperationSetManualCompletionResponse:
        _require_positive(operation_id, "Operation ID")
        response = self.client.request('PATCH', f"/api/v2/operation/{operation_id}/set-manual-completion")
        return OperationSetManualCompletionResponse(response)

    def download_zip(self, operation_id: int) -> OperationZipResponse:
        """Download the operation's documents as a base64 ZIP archive."""
        _require_positive(operation_id, "Operation ID")
        response = self.client.request('GET', f"/api/v1/operation/{operation_id}/zip")

        if not isinstance(response, dict) or response.get('data') is None:
            raise ApiError("Invalid response format from server")
        return OperationZipResponse(response['data'])

    def get_member_attachments(self, member_id: int) -> List[MemberAttachmentResponse]:
        _require_positive(member_id, "Member ID")
        response = self.client.request('GET', f"/api/v2/attachment/member/{member_id}")

        # Returned either as a bare list or under `data`
        if isinstance(response, dict):
            response = response.get('data') or []
        return [MemberAttachmentResponse(item) for item in response]

    def approve_attachments(self, operation_member_id: int, attachment_ids: List[int]) -> None:
        _require_positive(operation_member_id, "Operation member ID")
        if not attachment_ids:
            raise InvalidArgumentError("Attachment IDs cannot be empty.")

        self.client.request(
            'POST',
            '/api/v2/attachment/approve',
            json_body={
                'operationMemberId': operation_member_id,
                'attachmentIds': list(attachment_ids),
            }
        )

    def reject_attachments(self, operation_member_id: int, rejected_attachments: List[Dict[str, Any]]) -> None:
        """
        Reject attachments.

        Args:
            operation_member_id: Member the attachments belong to
            rejected_attachments: [{'id': ..., 'reason': ...}, ...]; every
                entry needs an id and a non-empty reason
        """
        _require_positive(operation_member_id, "Operation member ID")
        if not rejected_attachments:
            raise InvalidArgumentError("Rejected attachments cannot be empty.")
        for attachment in rejected_attachments:
            if attachment.get('id') is None or not attachment.get('reason'):
                raise InvalidArgumentError("Each rejected attachment must have an ID and a non-empty reason.")

        self.client.request(
            'POST',
            '/api/v2/attachment/reject',
            json_body={
                'operationMemberId': operation_member_id,
                'rejectedAttachments': list(rejected_attachments),
            }
        )

    def download_attachment(self, attachment_id: int) -> AttachmentDownloadResponse:
        _require_positive(attachment_id, "Attachment ID")
        response = self.client.request('GET', f"/api/v2/attachment/{attachment_id}/download")
        if isinstance(response, dict) and isinstance(response.get('data'), dict):
            response = response['data']
        return AttachmentDownloadResponse(response)
