"""
Position Compiler

Turns signature/rubric positions into the API's nested position
records and keeps the operation's document list free of duplicates.
"""

import logging
from typing import Any, Dict, List, Tuple, Union

from .payloads import OperationDocument
from .types import FileInformation, RubricPosition, SignaturePosition

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """
    The operation's Files list, keyed by document identifier.

    Registration is idempotent: the first FileInformation seen for an
    identifier wins and insertion order is preserved.
    """

    def __init__(self):
        self._documents: Dict[str, OperationDocument] = {}

    def register(self, file_information: FileInformation) -> None:
        if file_information.file_id in self._documents:
            return
        self._documents[file_information.file_id] = OperationDocument(
            id=file_information.file_id,
            description=file_information.file_name
        )
        logger.debug(f"Registered document {file_information.file_id}")

    def __contains__(self, file_id: str) -> bool:
        return file_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def documents(self) -> Tuple[OperationDocument, ...]:
        return tuple(self._documents.values())


def position_to_api_format(position: Union[SignaturePosition, RubricPosition]) -> Dict[str, Any]:
    """One position object yields exactly one page entry."""
    return {
        'DocumentId': position.file_information.file_id,
        'PrintSignature': position.print_signature,
        'Positions': [
            {
                'Page': position.page,
                'CoordenateX': position.coordinate_x,
                'CoordenateY': position.coordinate_y,
            }
        ],
    }


def compile_positions(
    positions: List[Union[SignaturePosition, RubricPosition]],
    registry: DocumentRegistry
) -> Tuple[Dict[str, Any], ...]:
    """Register each position's document, then emit its wire record."""
    records = []
    for position in positions:
        registry.register(position.file_information)
        records.append(position_to_api_format(position))
    return tuple(records)
