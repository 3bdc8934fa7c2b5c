"""
Upload progress data models.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class ProgressEvent(BaseModel):
    """
    Incremental upload progress for one attempt.

    Delivered synchronously to the caller's on_upload_progress sink, one per
    transmitted chunk. Progress restarts from zero on every retry attempt.
    """
    model_config = ConfigDict(frozen=True)

    sent_bytes: int = Field(..., ge=0, description="Bytes of the body transmitted so far")
    total_bytes: int = Field(..., ge=0, description="Total body size in bytes")
    percentage: float = Field(..., ge=0.0, le=1.0, description="sent_bytes / total_bytes")
    speed_bytes_per_sec: float = Field(
        default=0.0,
        ge=0.0,
        description="Moving-window throughput estimate"
    )


@dataclass(frozen=True)
class SpeedSample:
    """One timestamped point in the speed estimator's window."""

    timestamp_ms: int
    sent_bytes: int
