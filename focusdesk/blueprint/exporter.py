"""
KCS export serialization.

  json  -> {"chunks": [...]} pretty-printed with a two-space indent
  jsonl -> one compact record per chunk, newline separated, no trailing newline
"""
import json
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Union

from .chunker import chunk, DEFAULT_CHUNK_SIZE
from .schema import DocumentChunk, ExportFormat, ExportError

logger = logging.getLogger(__name__)

_COMPACT = (",", ":")


def _as_format(fmt: Union[ExportFormat, str]) -> ExportFormat:
    if isinstance(fmt, ExportFormat):
        return fmt
    return ExportFormat.from_str(fmt)


def serialize(chunks: Sequence[DocumentChunk], fmt: Union[ExportFormat, str] = ExportFormat.JSON) -> str:
    fmt = _as_format(fmt)
    if fmt is ExportFormat.JSON:
        return json.dumps({"chunks": [c.to_dict() for c in chunks]}, indent=2, ensure_ascii=False)
    return "\n".join(
        json.dumps(c.to_dict(), separators=_COMPACT, ensure_ascii=False) for c in chunks
    )


def parse(data: str, fmt: Union[ExportFormat, str] = ExportFormat.JSON) -> List[DocumentChunk]:
    """Read an export produced by serialize() back into chunks."""
    fmt = _as_format(fmt)
    try:
        if fmt is ExportFormat.JSON:
            doc = json.loads(data)
            if not isinstance(doc, dict) or not isinstance(doc.get("chunks"), list):
                raise ExportError("JSON export must be an object with a 'chunks' list")
            records = doc["chunks"]
        else:
            records = [json.loads(line) for line in data.splitlines() if line.strip()]
        return [DocumentChunk.from_dict(r) for r in records]
    except json.JSONDecodeError as e:
        raise ExportError(f"Invalid {fmt.value} export: {e}") from e
    except (KeyError, TypeError) as e:
        raise ExportError(f"Malformed chunk record in {fmt.value} export: {e}") from e


def export_kcs(
    text: str,
    fmt: Union[ExportFormat, str] = ExportFormat.JSON,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    now: Optional[datetime] = None,
) -> str:
    """Chunk the KCS text and serialize it in one step."""
    chunks = chunk(text, chunk_size, now=now)
    if not chunks:
        logger.info("KCS is empty, exporting zero chunks")
    return serialize(chunks, fmt)
