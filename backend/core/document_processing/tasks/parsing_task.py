"""
Text extraction task.

Turns uploaded bytes plus their declared media type into plain text.
PDFs go through pypdf; text formats are decoded as UTF-8; JSON is
re-serialized with two-space indentation.

Dependencies: pypdf
System role: First stage of document ingestion pipeline
"""

import io
import json
import logging

from pypdf import PdfReader

from backend.core.exceptions import ExtractionError, UnsupportedMediaTypeError

logger = logging.getLogger(__name__)

PDF = "application/pdf"
PLAIN_TEXT_TYPES = frozenset({"text/plain", "text/markdown", "text/csv"})
JSON_TYPE = "application/json"
WORD_TYPES = frozenset(
    {
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


class ParsingTask:
    """Extract plain text from document bytes."""

    def supports(self, media_type: str) -> bool:
        return (
            media_type == PDF
            or media_type == JSON_TYPE
            or media_type in PLAIN_TEXT_TYPES
            or media_type in WORD_TYPES
        )

    def extract(
        self,
        content: bytes,
        media_type: str,
        document_id: str | None = None,
    ) -> str:
        """
        Extract text from document content.

        Args:
            content: Raw document bytes
            media_type: Declared media type of the content
            document_id: Document ID for error context

        Returns:
            str: Extracted text (never empty or whitespace-only)

        Raises:
            UnsupportedMediaTypeError: When media_type has no extractor
            ExtractionError: When content is corrupt or yields no text
        """
        if not self.supports(media_type):
            raise UnsupportedMediaTypeError(media_type, document_id=document_id)

        try:
            if media_type == PDF:
                text = self._extract_pdf(content)
            elif media_type == JSON_TYPE:
                text = json.dumps(
                    json.loads(content.decode("utf-8")), indent=2, ensure_ascii=False
                )
            elif media_type in WORD_TYPES:
                # Best effort: binary Word formats are decoded leniently
                text = content.decode("utf-8", errors="replace")
            else:
                text = content.decode("utf-8")
        except Exception as e:
            logger.error(
                f"{__name__}:extract - Failed to extract text",
                extra={"document_id": document_id, "media_type": media_type, "error": str(e)},
            )
            raise ExtractionError(
                f"Failed to extract text from file: {e}",
                document_id=document_id,
                media_type=media_type,
            ) from e

        if not text or not text.strip():
            raise ExtractionError(
                "Document contains no extractable text",
                document_id=document_id,
                media_type=media_type,
            )

        logger.debug(
            f"{__name__}:extract - Extracted {len(text)} characters",
            extra={"document_id": document_id, "media_type": media_type},
        )
        return text

    def _extract_pdf(self, content: bytes) -> str:
        reader = PdfReader(io.BytesIO(content))
        pages = [page.extract_text() or "" for page in reader.pages]
        return "\n".join(pages)
