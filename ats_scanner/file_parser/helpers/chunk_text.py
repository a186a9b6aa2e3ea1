"""chunk_text.py
Used to chunk a continuous output of text into a list of overlapping TextChunks.
"""

from typing import List, Optional

from ats_scanner.config import SCANNER_DEFAULTS
from ats_scanner.exceptions import ChunkingConfigError
from ats_scanner.models import TextChunk

def _validate_chunk_config(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size is None or chunk_size <= 0:
        raise ChunkingConfigError(chunk_size, chunk_overlap, "chunk_size must be positive")
    if chunk_overlap is None or chunk_overlap < 0:
        raise ChunkingConfigError(chunk_size, chunk_overlap, "chunk_overlap must not be negative")
    if chunk_overlap >= chunk_size:
        raise ChunkingConfigError(
            chunk_size, chunk_overlap, "chunk_overlap must be smaller than chunk_size"
        )


def chunk_text(
    text: str,
    chunk_size: int = SCANNER_DEFAULTS.CHUNK_SIZE,
    chunk_overlap: int = SCANNER_DEFAULTS.CHUNK_OVERLAP,
) -> List[TextChunk]:
    """
    Split the input text into overlapping `TextChunk` objects.

    Each chunk is at most `chunk_size` characters long. When a chunk would
    end in the middle of a word, it is shortened back to the last whitespace
    character (space, tab, newline, etc.) inside the window, as long as that
    still moves the window past the overlap. Words longer than the window
    are cut at `chunk_size`.

    The next chunk starts `chunk_overlap` characters before the end of the
    previous one, so consecutive chunks share context and there is never a
    gap between them. Trailing content shorter than `chunk_size` is kept as
    the final chunk.

    Args:
        text (str): The text to split into chunks.
        chunk_size (int): Maximum size of each chunk. Defaults to
            `SCANNER_DEFAULTS.CHUNK_SIZE`.
        chunk_overlap (int): Number of characters repeated at the start of the
            following chunk. Defaults to `SCANNER_DEFAULTS.CHUNK_OVERLAP`.

    Returns:
        List[TextChunk]: Sequential chunks with `chunk_index`, `text` and
            `source_offset`. Empty when `text` is empty.

    Raises:
        ChunkingConfigError: If `chunk_size <= 0`, `chunk_overlap < 0` or
            `chunk_overlap >= chunk_size`.
    """
    _validate_chunk_config(chunk_size, chunk_overlap)

    chunks = []
    start = 0
    chunk_index = 1
    text_length = len(text)

    while start < text_length:
        end = min(start + chunk_size, text_length)

        # Pull the end back to whitespace to avoid splitting a word
        if end < text_length and not text[end].isspace():
            for i in range(end - 1, start + chunk_overlap, -1):
                if text[i].isspace():
                    end = i + 1  # include the whitespace
                    break

        chunks.append(TextChunk(chunk_index=chunk_index, text=text[start:end], source_offset=start))
        chunk_index += 1

        if end >= text_length:
            break

        # end > start + chunk_overlap, so the window always advances
        start = end - chunk_overlap

    return chunks


def join_document_chunk_text(
    chunks: List[TextChunk],
    char_limit: Optional[int] = None,
) -> str:
    """
    Reconstruct the original text from a list of `TextChunk` objects,
    removing the characters repeated by chunk overlap.

    Each chunk is assumed to have been produced by `chunk_text`, so its
    `source_offset` locates it in the original document.

    Args:
        chunks (List[TextChunk]): Chunks to join.
        char_limit (int | None): Maximum number of characters to include in
            the final text. If None, all text is included.

    Returns:
        str: Combined sequential text from all chunks with overlaps removed.
    """
    chunks_sorted = sorted(chunks, key=lambda c: (c.source_offset, c.chunk_index))

    parts = []
    covered_until = 0
    for chunk in chunks_sorted:
        chunk_end = chunk.source_offset + len(chunk.text)
        if chunk_end <= covered_until:
            continue
        skip = max(0, covered_until - chunk.source_offset)
        parts.append(chunk.text[skip:])
        covered_until = chunk_end

    combined_text = "".join(parts)

    if char_limit is not None:
        combined_text = combined_text[:char_limit]

    return combined_text
