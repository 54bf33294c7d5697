"""Lighthouse report Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Audit(BaseModel):
    """A single Lighthouse audit entry.

    A missing or null score marks an informative or not-applicable audit.
    """

    model_config = ConfigDict(populate_by_name=True)

    score: float | None = None
    display_value: str | None = Field(default=None, alias="displayValue")


class LighthouseResult(BaseModel):
    """The subset of a Lighthouse JSON report the task relies on."""

    model_config = ConfigDict(populate_by_name=True)

    audits: dict[str, Audit] = Field(default_factory=dict)
    requested_url: str | None = Field(default=None, alias="requestedUrl")
    final_url: str | None = Field(default=None, alias="finalUrl")
    lighthouse_version: str | None = Field(default=None, alias="lighthouseVersion")

    @field_validator("audits", mode="before")
    @classmethod
    def _null_audits_are_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class ReportMeta(BaseModel):
    """Sidecar attachment that names the report tab in the pipeline UI."""

    model_config = ConfigDict(populate_by_name=True)

    tab_name: str = Field(alias="tabName")
    report_file_name: str = Field(alias="reportFileName")
    meta_file_name: str = Field(alias="metaFileName")
