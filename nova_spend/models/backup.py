"""
Backup Document

The full-state export/import payload.

DESIGN DECISION: The four fields carry the RAW stored documents, not parsed
models. A backup is a byte-for-byte snapshot of the store, so an export
followed by an import reproduces the store exactly, even records that the
current schema would reject. Shape problems surface later, when readers
apply their field-level defaults.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BackupDocument(BaseModel):
    """Snapshot of all four persisted records."""
    model_config = ConfigDict(extra="ignore")

    settings: Any = Field(
        default_factory=dict,
        description="Raw settings record"
    )
    stats: Any = Field(
        default_factory=dict,
        description="Raw stats record"
    )
    transactions: Any = Field(
        default_factory=list,
        description="Raw ledger, newest first"
    )
    currency: Any = Field(
        default="",
        description="Raw legacy currency record"
    )

    def to_json(self) -> str:
        """Human-readable JSON, as written to backup files."""
        return json.dumps(self.model_dump(mode="json"), indent=2, ensure_ascii=False)
