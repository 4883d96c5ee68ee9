"""
File exchange: whole-file text import and named export blobs.

Export names carry a category prefix and the capture time in epoch ms:
  ir_1700000000000.md, kcs_1700000000000.json, kcs_1700000000000.jsonl
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .chunker import DEFAULT_CHUNK_SIZE
from .exporter import export_kcs as serialize_kcs
from .normalizer import normalize_instructions, DEFAULT_HEADER
from .schema import Blueprint, epoch_ms, utc_now

logger = logging.getLogger(__name__)

IR_PREFIX = "ir"
KCS_PREFIX = "kcs"


def read_text_file(path: Optional[Union[str, Path]]) -> Optional[str]:
    """Read a whole text file. No path (cancelled selection) returns None."""
    if not path:
        return None
    # platform default decoding, no size limit
    with open(path, "r") as f:
        return f.read()


def export_filename(prefix: str, extension: str, now: Optional[datetime] = None) -> str:
    return f"{prefix}_{epoch_ms(now)}.{extension}"


def _write(directory: Union[str, Path], filename: str, data: str) -> Path:
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    destination = out_dir / filename
    destination.write_text(data)
    logger.info(f"Wrote {len(data)} chars to {destination}")
    return destination


def export_ir(
    blueprint: Blueprint,
    directory: Union[str, Path],
    now: Optional[datetime] = None,
    default_header: str = DEFAULT_HEADER,
) -> Path:
    """Write the normalized IR as Markdown."""
    markdown = normalize_instructions(blueprint.ir, default_header)
    return _write(directory, export_filename(IR_PREFIX, "md", now), markdown)


def export_kcs(
    blueprint: Blueprint,
    directory: Union[str, Path],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    now: Optional[datetime] = None,
) -> Path:
    """Write the chunked KCS in the blueprint's chosen format."""
    moment = now or utc_now()
    data = serialize_kcs(blueprint.kcs, blueprint.kcs_format, chunk_size, now=moment)
    filename = export_filename(KCS_PREFIX, blueprint.kcs_format.extension, moment)
    return _write(directory, filename, data)
