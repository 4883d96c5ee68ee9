"""
Blueprint organizer data model.

Wire shapes match the stored/exported JSON:

  Blueprint     {"ir", "kcs", "kcsFormat"}
  SavedProfile  {"name", "data": Blueprint, "timestamp"}
  DocumentChunk {"id", "content", "metadata": {"chunkIndex", "totalChunks",
                 "characterCount", "wordCount", "timestamp"}}
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, Optional


class ExportError(ValueError):
    """Raised for unknown export formats or unparseable export data."""
    pass


class ExportFormat(Enum):
    """KCS export formats."""
    JSON = "json"      # single pretty-printed document
    JSONL = "jsonl"    # one compact record per line

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str) -> "ExportFormat":
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            raise ExportError(f"Unknown export format: {value!r} (expected json or jsonl)")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC timestamp with millisecond precision, e.g. 2024-01-01T12:00:00.000Z."""
    moment = (moment or utc_now()).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def epoch_ms(moment: Optional[datetime] = None) -> int:
    moment = moment or utc_now()
    return int(moment.timestamp()) * 1000 + moment.microsecond // 1000


@dataclass(frozen=True)
class DocumentChunk:
    """One fixed-size slice of the KCS text plus its metadata."""

    id: str
    content: str
    position: int
    total_chunks: int
    character_count: int
    word_count: int
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "metadata": {
                "chunkIndex": self.position,
                "totalChunks": self.total_chunks,
                "characterCount": self.character_count,
                "wordCount": self.word_count,
                "timestamp": self.created_at,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentChunk":
        meta = data["metadata"]
        return cls(
            id=data["id"],
            content=data["content"],
            position=int(meta["chunkIndex"]),
            total_chunks=int(meta["totalChunks"]),
            character_count=int(meta["characterCount"]),
            word_count=int(meta["wordCount"]),
            created_at=meta["timestamp"],
        )


@dataclass(frozen=True)
class Blueprint:
    """The document pair being edited, plus the chosen KCS export format."""

    ir: str = ""
    kcs: str = ""
    kcs_format: ExportFormat = ExportFormat.JSON

    def to_dict(self) -> Dict[str, Any]:
        return {"ir": self.ir, "kcs": self.kcs, "kcsFormat": self.kcs_format.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Blueprint":
        return cls(
            ir=str(data.get("ir", "")),
            kcs=str(data.get("kcs", "")),
            kcs_format=ExportFormat.from_str(data.get("kcsFormat", "json")),
        )


@dataclass(frozen=True)
class SavedProfile:
    """A named blueprint snapshot. Names are not required to be unique."""

    name: str
    content: Blueprint
    saved_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "data": self.content.to_dict(),
            "timestamp": self.saved_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedProfile":
        return cls(
            name=str(data["name"]),
            content=Blueprint.from_dict(data["data"]),
            saved_at=str(data.get("timestamp", "")),
        )
