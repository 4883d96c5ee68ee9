"""KCS chunking: fixed-size word groups with per-chunk metadata."""
import logging
import math
from datetime import datetime
from typing import List, Optional

from .schema import DocumentChunk, iso_timestamp, epoch_ms, utc_now

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000


def split_words(text: str) -> List[str]:
    """Split on runs of whitespace; leading/trailing whitespace yields no empty tokens."""
    return text.split()


def chunk(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    now: Optional[datetime] = None,
) -> List[DocumentChunk]:
    """
    Partition text into consecutive groups of at most chunk_size words.

    Every chunk of one call shares the same capture time and reports the same
    total_chunks (== len(result)). Empty text returns [].
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    words = split_words(text or "")
    if not words:
        return []

    moment = now or utc_now()
    created_at = iso_timestamp(moment)
    stamp = epoch_ms(moment)
    total_chunks = math.ceil(len(words) / chunk_size)

    chunks = []
    for position, start in enumerate(range(0, len(words), chunk_size)):
        group = words[start:start + chunk_size]
        content = " ".join(group)
        chunks.append(DocumentChunk(
            id=f"chunk_{position}_{stamp}",
            content=content,
            position=position,
            total_chunks=total_chunks,
            character_count=len(content),
            word_count=len(group),
            created_at=created_at,
        ))

    logger.debug("Chunked %d words into %d chunks of <= %d", len(words), total_chunks, chunk_size)
    return chunks
