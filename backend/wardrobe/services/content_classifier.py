"""
Wardrobe Backend — Content-Type Classifier
===========================================

What:  Decides whether uploaded bytes really are what the client says they are.
Why:   A client-declared MIME type or logical type is trivially spoofed; only the
       byte signature of the content is trusted.
How:   python-magic (libmagic) reads the leading bytes and names a MIME type.
       That MIME type is mapped to the internal logical-type vocabulary and
       compared with the declared `logical_type`.

Decision table:
    ┌──────────────────────────────┬────────────────────────────────────┐
    │ libmagic result              │ outcome                            │
    ├──────────────────────────────┼────────────────────────────────────┤
    │ no signature matched         │ 415 UnsupportedContentError        │
    │ recognised, maps to declared │ accepted                           │
    │ recognised, maps elsewhere   │ 400 ValidationError (mismatch)     │
    │ recognised, maps to nothing  │ 400 ValidationError (e.g. PNG)     │
    └──────────────────────────────┴────────────────────────────────────┘

    libmagic has no "unknown" answer; when nothing matches it falls back to
    generic types, listed in UNRECOGNIZED_MIME_TYPES, or to a text/* guess.
"""

import logging

from wardrobe.exceptions import UnsupportedContentError, ValidationError
from wardrobe.models.garment import LOGICAL_TYPES

logger = logging.getLogger(__name__)

# Sniffed MIME → logical type
SNIFFED_TO_LOGICAL = {
    "image/jpeg": "image",
    "application/pdf": "pdf",
    "audio/mpeg": "audio",
    "video/mp4": "video",
}

# Logical type → Content-Type used when serving the stored bytes
CONTENT_TYPES = {
    "image": "image/jpeg",
    "audio": "audio/mpeg",
    "video": "video/mp4",
    "pdf": "application/pdf",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

UNRECOGNIZED_MIME_TYPES = {
    "application/octet-stream",
    "application/x-empty",
    "inode/x-empty",
    "application/json",
    "application/xml",
}


def is_unrecognised(mime_type: str) -> bool:
    """
    True when libmagic found no binary signature.

    Text payloads (HTML, XML, JSON, scripts, plain text) are guessed from
    their contents rather than a magic number, so they count as unrecognised.
    """
    return not mime_type or mime_type in UNRECOGNIZED_MIME_TYPES or mime_type.startswith("text/")


def content_type_for(logical_type: str) -> str:
    """Map a stored logical type to the Content-Type header for downloads."""
    return CONTENT_TYPES.get(logical_type, DEFAULT_CONTENT_TYPE)


class ContentClassifier:
    """
    Sniffs uploads and checks them against the declared logical type.

    Stateless; one shared instance is used by GarmentService.
    """

    def detect_mime(self, content: bytes) -> str:
        """
        Return libmagic's MIME type for the given bytes.

        Imported lazily so the application can start (and serve everything
        except uploads) on hosts where libmagic is missing; an upload on such
        a host fails with a 500 from classify().
        """
        import magic

        return magic.from_buffer(content, mime=True)

    def classify(self, content: bytes, declared_type: str) -> str:
        """
        Validate uploaded content against the declared logical type.

        Args:
            content:       Raw uploaded bytes
            declared_type: Client-declared logical type (already checked to be
                           one of LOGICAL_TYPES)

        Returns:
            The sniffed MIME type.

        Raises:
            UnsupportedContentError: no known byte signature (→ 415)
            ValidationError:         content is a different type (→ 400)
        """
        if not content:
            raise UnsupportedContentError(
                message="Unsupported file content: the uploaded file is empty.",
            )

        mime_type = self.detect_mime(content)

        if is_unrecognised(mime_type):
            logger.info("Rejected upload with unrecognised signature (detected=%s)", mime_type)
            raise UnsupportedContentError(
                message="Unsupported file content: the file type could not be recognised.",
                context={"detected_mime": mime_type},
            )

        actual_type = SNIFFED_TO_LOGICAL.get(mime_type)
        if actual_type != declared_type:
            raise ValidationError(
                message=(
                    f"File content does not match the declared type '{declared_type}' "
                    f"(detected '{mime_type}')."
                ),
                field="logical_type",
                context={
                    "declared": declared_type,
                    "detected_mime": mime_type,
                    "allowed": list(LOGICAL_TYPES),
                },
            )

        return mime_type


content_classifier = ContentClassifier()
