"""
Form Fields

Fields a signer fills in while signing. A field may be placed at
several positions; each position becomes its own wire entry.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import InvalidArgumentError
from .types import FileInformation, validate_page

DEFAULT_FIELD_HEIGHT = 2.48
DEFAULT_FIELD_WIDTH = 24.66
DEFAULT_TEXT_MAX_LENGTH = 500


def _percent(value: float) -> str:
    return f"{value:.2f}%"


@dataclass(frozen=True)
class FormFieldPosition:
    """Where a form field is drawn: document, page (1-based), coordinates."""
    file_information: FileInformation
    page: int
    coordinate_x: str
    coordinate_y: str

    def __post_init__(self):
        validate_page(self.page)


@dataclass
class FormField:
    """
    Base for form field definitions.

    Subclasses implement to_api_format(), returning one wire entry per
    position.
    """
    name: str
    instructions: str = ''
    required: bool = False
    value: Optional[str] = None
    height: float = DEFAULT_FIELD_HEIGHT
    width: float = DEFAULT_FIELD_WIDTH
    positions: List[FormFieldPosition] = field(default_factory=list)

    def __post_init__(self):
        if not self.name:
            raise InvalidArgumentError("Field name cannot be empty.")

    def with_instructions(self, instructions: str) -> 'FormField':
        self.instructions = instructions
        return self

    def is_required(self, required: bool = True) -> 'FormField':
        self.required = required
        return self

    def with_value(self, value: str) -> 'FormField':
        self.value = value
        return self

    def with_size(self, height: float, width: float) -> 'FormField':
        self.height = height
        self.width = width
        return self

    def on_position(self, position: FormFieldPosition) -> 'FormField':
        self.positions.append(position)
        return self

    def _position_entry(self, position: FormFieldPosition) -> Dict[str, Any]:
        return {
            'Page': position.page,
            'CoordenateX': position.coordinate_x,
            'CoordenateY': position.coordinate_y,
            'Height': _percent(self.height),
            'Width': _percent(self.width),
        }

    def to_api_format(self) -> List[Dict[str, Any]]:
        raise NotImplementedError


@dataclass
class TextFormField(FormField):
    """Free-text input, limited to `max_length` characters."""
    max_length: int = DEFAULT_TEXT_MAX_LENGTH

    def with_max_length(self, max_length: int) -> 'TextFormField':
        self.max_length = max_length
        return self

    def to_api_format(self) -> List[Dict[str, Any]]:
        return [
            {
                'Name': self.name,
                'Description': self.instructions,
                'Required': self.required,
                'Type': 'Others',
                'FieldType': 'Text',
                'Max': self.max_length,
                'Value': self.value,
                'DocumentId': position.file_information.file_id,
                'Positions': [self._position_entry(position)],
            }
            for position in self.positions
        ]


@dataclass
class CheckboxFormField(FormField):
    """
    A set of checkbox options. The option equal to `value` is sent
    pre-checked ("X").
    """
    options: List[str] = field(default_factory=list)

    def with_options(self, options: List[str]) -> 'CheckboxFormField':
        self.options = list(options)
        return self

    def to_api_format(self) -> List[Dict[str, Any]]:
        entries = []
        for position in self.positions:
            options = [
                {
                    'Name': option,
                    'CoordenateX': position.coordinate_x,
                    'CoordenateY': position.coordinate_y,
                    'Height': _percent(self.height),
                    'Width': _percent(self.width),
                    'Value': 'X' if option == self.value else '',
                }
                for option in self.options
            ]
            entries.append({
                'Name': self.name,
                'Description': self.instructions,
                'Required': self.required,
                'Type': 'Others',
                'Variant': 'Checkbox',
                'FieldType': 'Select',
                'Value': self.value,
                'DocumentId': position.file_information.file_id,
                'Positions': [self._position_entry(position)],
                'Options': options,
            })
        return entries
