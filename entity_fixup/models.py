from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class ReportSummary(BaseModel):
    files_found: int = 0
    processed: int = 0
    errors: int = 0


class ReportItem(BaseModel):
    file: str
    issue: str
    message: str
    encoding: Optional[str] = None


class BatchReport(BaseModel):
    directory: str
    summary: ReportSummary = Field(default_factory=ReportSummary)
    processed: List[str] = Field(default_factory=list)
    errors: List[ReportItem] = Field(default_factory=list)

    def record_success(self, name: str) -> None:
        self.processed.append(name)
        self.summary.processed += 1

    def record_error(self, name: str, issue: str, message: str, encoding: Optional[str] = None) -> None:
        self.errors.append(ReportItem(file=name, issue=issue, message=message, encoding=encoding))
        self.summary.errors += 1
