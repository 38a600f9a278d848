"""Collaborators built on decoded messages: section layout and .syx files."""

from .sections import SectionKind, MessageSection, message_sections
from .file_formats import (
    load_messages,
    load_message,
    split_file,
    extract_payload,
)
