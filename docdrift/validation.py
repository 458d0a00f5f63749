"""
Content validation for enriched documents.

Checks a document against the rules the storage collaborator enforces, so
invalid documents are reported before a resolution is executed.
"""

import re

from docdrift.errors import DocumentValidationError
from docdrift.models import EnrichedDocument


MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 5000
MAX_SECTION_TITLE_LENGTH = 100

_IDENTIFIER = re.compile(r"^[a-zA-Z0-9\-_]+$")
_SEMVER_PREFIX = re.compile(r"^\d+\.\d+\.\d+")


def validate_document(document: EnrichedDocument) -> list[str]:
    """
    Collect every validation error of a document.

    Args:
        document: The document to check

    Returns:
        Human-readable error messages, empty if the document is valid
    """
    errors: list[str] = []
    content = document.content
    metadata = document.metadata

    if not content.title.strip():
        errors.append("Document title is required")
    if not content.description.strip():
        errors.append("Document description is required")

    if document.original_input is not None and not document.original_input.content.strip():
        errors.append("Original input content is required")

    if len(content.title) > MAX_TITLE_LENGTH:
        errors.append(f"Document title must be {MAX_TITLE_LENGTH} characters or less")
    if len(content.description) > MAX_DESCRIPTION_LENGTH:
        errors.append(
            f"Document description must be {MAX_DESCRIPTION_LENGTH} characters or less"
        )

    for number, section in enumerate(content.sections, start=1):
        if not section.title.strip():
            errors.append(f"Section {number} title is required")
        if not section.content.strip():
            errors.append(f"Section {number} content is required")
        if len(section.title) > MAX_SECTION_TITLE_LENGTH:
            errors.append(
                f"Section {number} title must be {MAX_SECTION_TITLE_LENGTH} characters or less"
            )

    if metadata.service_name and not _IDENTIFIER.match(metadata.service_name):
        errors.append(
            "Service name can only contain alphanumeric characters, hyphens, and underscores"
        )
    if metadata.version and not _SEMVER_PREFIX.match(metadata.version):
        errors.append("Version must follow semantic versioning format (e.g., 1.0.0)")

    for number, tag in enumerate(metadata.tags or [], start=1):
        if not _IDENTIFIER.match(tag):
            errors.append(
                f"Tag {number} can only contain alphanumeric characters, hyphens, and underscores"
            )

    return errors


def ensure_valid(document: EnrichedDocument) -> EnrichedDocument:
    """
    Return the document unchanged if it is valid.

    Raises:
        DocumentValidationError: Listing every rule the document violates
    """
    errors = validate_document(document)
    if errors:
        raise DocumentValidationError(errors)
    return document
