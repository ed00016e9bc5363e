"""
API Responses

Thin wrappers over parsed response bodies. Each keeps the raw data
and exposes typed accessors; missing keys fall back to empty values
rather than raising.
"""

import base64
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .enums import InputAttachmentType
from .types import FileInformation

logger = logging.getLogger(__name__)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; None when absent or malformed."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (ValueError, TypeError, AttributeError):
        logger.warning(f"Could not parse date: {value}")
        return None


def human_readable_size(size: int) -> str:
    """
    Format a byte count.

    Examples:
        0 -> "0 B"
        1536 -> "1.5 KB"
    """
    units = ['B', 'KB', 'MB', 'GB', 'TB']
    scaled = float(max(size, 0))
    power = 0
    while scaled >= 1024 and power < len(units) - 1:
        scaled /= 1024
        power += 1
    scaled = round(scaled, 2)
    if scaled == int(scaled):
        scaled = int(scaled)
    return f"{scaled} {units[power]}"


class BaseResponse:
    """Base wrapper holding the parsed body."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data = data or {}

    @property
    def raw_data(self) -> Dict[str, Any]:
        return self.data

    def to_dict(self) -> Dict[str, Any]:
        return self.data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"


class DocumentUploadResponse(BaseResponse):
    """Result of a document upload: {meta, data: {id, fileName, totalPages, imagesDetail}}."""

    @property
    def meta(self) -> Dict[str, Any]:
        return self.data.get('meta') or {'message': ''}

    @property
    def payload(self) -> Dict[str, Any]:
        return self.data.get('data') or {}

    @property
    def id(self) -> Optional[str]:
        return self.payload.get('id')

    @property
    def file_name(self) -> Optional[str]:
        return self.payload.get('fileName')

    @property
    def total_pages(self) -> int:
        return int(self.payload.get('totalPages') or 0)

    @property
    def images_detail(self) -> List[Dict[str, Any]]:
        return self.payload.get('imagesDetail') or []

    def get_page_detail(self, page_number: int) -> Optional[Dict[str, Any]]:
        for page in self.images_detail:
            if 'page' in page and int(page['page']) == page_number:
                return page
        return None

    def get_page_size(self, page_number: int) -> Optional[Dict[str, float]]:
        detail = self.get_page_detail(page_number)
        if detail and 'originalSize' in detail:
            size = detail['originalSize'] or {}
            return {
                'width': float(size.get('width', 0.0)),
                'height': float(size.get('height', 0.0)),
            }
        return None

    def to_file_information(self) -> FileInformation:
        """Reference to use in signature positions."""
        return FileInformation(self.id, self.file_name or '')


class OperationCreatedResponse(BaseResponse):
    """The created operation, with its members and observers."""

    @property
    def id(self) -> int:
        return int(self.data.get('id') or 0)

    @property
    def name(self) -> str:
        return str(self.data.get('name') or '')

    @property
    def members(self) -> List[Dict[str, Any]]:
        return self.data.get('members') or []

    @property
    def observers(self) -> List[Dict[str, Any]]:
        return self.data.get('observers') or []

    def get_member_by_id(self, member_id: int) -> Optional[Dict[str, Any]]:
        return next((m for m in self.members if 'id' in m and int(m['id']) == member_id), None)

    def get_member_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        return next((m for m in self.members if m.get('name') == name), None)

    def get_observer_by_id(self, observer_id: int) -> Optional[Dict[str, Any]]:
        return next((o for o in self.observers if 'id' in o and int(o['id']) == observer_id), None)

    def get_observer_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        return next((o for o in self.observers if o.get('name') == name), None)

    def get_signing_url(self, member_id: int) -> Optional[str]:
        member = self.get_member_by_id(member_id)
        return member.get('signUrl') if member else None


class OperationStatusResponse(BaseResponse):
    """
    Common envelope of operation state changes:
    {success, statusCode, message, data: {id, name, status, ...}}.
    """

    @property
    def success(self) -> bool:
        return bool(self.data.get('success', False))

    @property
    def status_code(self) -> int:
        return int(self.data.get('statusCode') or 0)

    @property
    def message(self) -> str:
        return str(self.data.get('message') or '')

    @property
    def payload(self) -> Dict[str, Any]:
        return self.data.get('data') or {}

    @property
    def operation_id(self) -> int:
        return int(self.payload.get('id') or 0)

    @property
    def operation_name(self) -> str:
        return str(self.payload.get('name') or '')

    @property
    def operation_status(self) -> str:
        return str(self.payload.get('status') or '')


class OperationCompleteResponse(OperationStatusResponse):

    @property
    def completion_date(self) -> Optional[datetime]:
        return parse_datetime(self.payload.get('completionDate'))


class OperationCancelResponse(OperationStatusResponse):

    @property
    def cancellation_date(self) -> Optional[datetime]:
        return parse_datetime(self.payload.get('cancellationDate'))


class _CompletionModeResponse(OperationStatusResponse):

    @property
    def end_date(self) -> Optional[datetime]:
        return parse_datetime(self.payload.get('endDate'))

    @property
    def completion_type(self) -> str:
        return str(self.payload.get('completionType') or '')


class OperationSetAutomaticCompletionResponse(_CompletionModeResponse):

    @property
    def is_automatic_completion(self) -> bool:
        return self.completion_type == 'automatic'


class OperationSetManualCompletionResponse(_CompletionModeResponse):

    @property
    def is_manual_completion(self) -> bool:
        return self.completion_type == 'manual'


class OperationZipResponse(BaseResponse):
    """Signed operation archive, base64-encoded in `base64File`."""

    @property
    def name(self) -> str:
        return str(self.data.get('name') or '')

    @property
    def base64_file(self) -> str:
        return str(self.data.get('base64File') or '')

    @property
    def file_content(self) -> bytes:
        if not self.base64_file:
            return b''
        return base64.b64decode(self.base64_file)

    @property
    def file_size(self) -> int:
        return len(self.file_content)

    @property
    def human_readable_file_size(self) -> str:
        return human_readable_size(self.file_size)

    def save_to_file(self, path: Union[str, Path]) -> bool:
        content = self.file_content
        if not content:
            return False
        Path(path).write_bytes(content)
        return True


class MemberAttachmentResponse(BaseResponse):
    """One attachment requested from a member, with upload and review state."""

    @property
    def id(self) -> int:
        return int(self.data.get('id') or 0)

    @property
    def name(self) -> str:
        return str(self.data.get('name') or '')

    @property
    def description(self) -> str:
        return str(self.data.get('description') or '')

    @property
    def required(self) -> bool:
        return bool(self.data.get('required', False))

    @property
    def allowed_file_types(self) -> List[str]:
        return self.data.get('fileType') or []

    @property
    def files_allowed(self) -> int:
        return int(self.data.get('filesAllowed') or 0)

    @property
    def allowed_input_types(self) -> List[int]:
        return self.data.get('inputAttachment') or []

    def allows_input(self, input_type: InputAttachmentType) -> bool:
        return input_type.value in self.allowed_input_types

    @property
    def uploaded_files(self) -> List[Dict[str, Any]]:
        return self.data.get('files') or []

    @property
    def has_uploaded_files(self) -> bool:
        return bool(self.uploaded_files)

    @property
    def status(self) -> str:
        return str(self.data.get('status') or '')

    @property
    def is_approved(self) -> bool:
        return self.status == 'approved'

    @property
    def is_rejected(self) -> bool:
        return self.status == 'rejected'

    @property
    def is_pending(self) -> bool:
        return self.status == 'pending'

    @property
    def rejection_reason(self) -> Optional[str]:
        return self.data.get('rejectionReason')


class AttachmentDownloadResponse(BaseResponse):
    """A downloaded attachment: {contentType, fileName, content (base64)}."""

    @property
    def content_type(self) -> Optional[str]:
        return self.data.get('contentType')

    @property
    def file_name(self) -> Optional[str]:
        return self.data.get('fileName')

    @property
    def base64_content(self) -> Optional[str]:
        return self.data.get('content')

    @property
    def content(self) -> Optional[bytes]:
        if self.base64_content is None:
            return None
        return base64.b64decode(self.base64_content)

    @property
    def file_extension(self) -> Optional[str]:
        if not self.file_name:
            return None
        suffix = Path(self.file_name).suffix
        return suffix[1:] if suffix else None

    @property
    def file_size(self) -> int:
        content = self.content
        return len(content) if content is not None else 0

    @property
    def human_readable_file_size(self) -> str:
        return human_readable_size(self.file_size)

    @property
    def data_uri(self) -> Optional[str]:
        if self.content_type is None or self.base64_content is None:
            return None
        return f"data:{self.content_type};base64,{self.base64_content}"

    def save_to_file(self, path: Union[str, Path]) -> bool:
        content = self.content
        if content is None:
            return False
        Path(path).write_bytes(content)
        return True
