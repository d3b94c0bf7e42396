"""Reference manifest parsing and classification."""

from .generated import GeneratedFiles, is_generated
from .models import Diagnostic, ReferenceOrder, ReferenceSet
from .parser import ManifestEncodingError, ManifestFormatError, parse_references

__all__ = [
    "Diagnostic",
    "GeneratedFiles",
    "ManifestEncodingError",
    "ManifestFormatError",
    "ReferenceOrder",
    "ReferenceSet",
    "is_generated",
    "parse_references",
]
