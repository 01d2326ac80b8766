"""Overlapping recursive text splitting.

Content is first partitioned on the coarsest separator that keeps pieces
within ``chunk_size - overlap`` characters (paragraph, line, sentence, word).
Every chunk after the first is then prefixed with the ``overlap`` characters
that precede it, so dropping the first ``overlap`` characters of each later
chunk and concatenating gives back the original content exactly.
"""

import structlog
from langchain_text_splitters import RecursiveCharacterTextSplitter

from web_retrieval.errors import ConfigurationError
from web_retrieval.retrieval.models import RetrievedDocument, TextChunk

logger = structlog.get_logger(__name__)

SEPARATORS = ["\n\n", "\n", ". ", " "]


def validate_chunking(chunk_size: int, overlap: int) -> None:
    """
    Check chunking parameters.

    Raises:
        ConfigurationError: If chunk_size is not positive, overlap is negative
            or overlap is not smaller than chunk_size
    """
    if chunk_size <= 0:
        raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0:
        raise ConfigurationError(f"chunk_overlap must be non-negative, got {overlap}")
    if overlap >= chunk_size:
        raise ConfigurationError(
            f"chunk_overlap ({overlap}) must be smaller than chunk_size ({chunk_size})"
        )


class OverlapTextSplitter:
    """Split documents into bounded, overlapping chunks without losing text."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200):
        """
        Initialize splitter.

        Args:
            chunk_size: Maximum chunk length in characters
            chunk_overlap: Characters repeated from the previous chunk
        """
        validate_chunking(chunk_size, chunk_overlap)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

        # Partition only: separators kept, nothing stripped, no overlap
        self._partitioner = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size - chunk_overlap,
            chunk_overlap=0,
            length_function=len,
            separators=SEPARATORS,
            keep_separator="end",
            strip_whitespace=False,
        )

    def partition(self, content: str) -> list[str]:
        """Split content into consecutive pieces whose concatenation is the content."""
        if not content:
            return []

        pieces = self._partitioner.split_text(content)
        if "".join(pieces) != content:
            # Fall back to the whole text rather than lose any of it
            logger.warning("Partition did not cover content, keeping it whole", content_length=len(content))
            return [content]

        # Every later chunk needs a full overlap window before it
        while len(pieces) > 1 and len(pieces[0]) < self.chunk_overlap:
            pieces[0:2] = [pieces[0] + pieces[1]]

        return pieces

    def split_text(self, content: str) -> list[str]:
        """Split content into overlapping chunks."""
        chunks = []
        start = 0
        for piece in self.partition(content):
            prefix = content[max(0, start - self.chunk_overlap):start]
            chunks.append(prefix + piece)
            start += len(piece)
        return chunks

    def split_documents(self, documents: list[RetrievedDocument]) -> list[TextChunk]:
        """Split documents, keeping document order and a back-reference to each source URL."""
        chunks: list[TextChunk] = []

        for doc in documents:
            texts = self.split_text(doc.page_content)
            chunks.extend(
                TextChunk(text=text, source_url=doc.url, index=idx)
                for idx, text in enumerate(texts)
            )

            oversized = sum(1 for text in texts if len(text) > self.chunk_size)
            if oversized:
                logger.debug("Unsplittable units kept whole", url=doc.url, oversized_chunks=oversized)

        logger.info(
            "Documents chunked",
            documents=len(documents),
            total_chunks=len(chunks),
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
        )
        return chunks


def split_documents(
    documents: list[RetrievedDocument], chunk_size: int, overlap: int
) -> list[TextChunk]:
    """Split documents into overlapping chunks of at most ``chunk_size`` characters."""
    return OverlapTextSplitter(chunk_size=chunk_size, chunk_overlap=overlap).split_documents(documents)
