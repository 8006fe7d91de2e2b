"""
Text chunking task built on the langchain TextSplitter interface.

Splits extracted text into fixed-size, overlapping character windows.
For a text of length N, chunk size C and overlap O the splitter produces
ceil((N - O) / (C - O)) segments, and exactly one when N <= C.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

from langchain_text_splitters import TextSplitter

from backend.core.exceptions import ConfigurationError, ExtractionError


class WindowTextSplitter(TextSplitter):
    """Fixed-size character windows advanced by chunk_size - chunk_overlap."""

    def split_text(self, text: str) -> list[str]:
        size = self._chunk_size
        step = size - self._chunk_overlap
        segments: list[str] = []
        start = 0
        while True:
            segments.append(text[start : start + size])
            if start + size >= len(text):
                return segments
            start += step


class ChunkingTask:
    """Split text into overlapping fixed-size segments."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ConfigurationError: When chunk_size < 1 or overlap is not smaller than chunk_size
        """
        if chunk_size < 1 or chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ConfigurationError(
                "Invalid chunking parameters",
                {"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        # Windows are raw slices, so the segments reassemble the source text exactly.
        self._splitter = WindowTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            strip_whitespace=False,
        )

    def split(self, text: str, document_id: str | None = None) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text
            document_id: Document ID for error context

        Returns:
            list[str]: Ordered segments

        Raises:
            ExtractionError: When text is empty
        """
        if not text:
            raise ExtractionError("Document contains no extractable text", document_id=document_id)

        return self._splitter.split_text(text)
