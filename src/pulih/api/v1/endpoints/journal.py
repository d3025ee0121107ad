"""
Journal Endpoints

Panic episode journal: entry CRUD, legacy import and monthly
analytics. All routes act on the authenticated caller's entries only.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import AliasChoices, BaseModel, Field, field_validator

from pulih.api.dependencies import get_current_owner, get_journal_service
from pulih.domain.enums.condition import Condition
from pulih.domain.exceptions import ValidationError
from pulih.domain.models.analytics import MonthlyAnalytics
from pulih.domain.models.episode import (
    MAX_OCCURRED_AT_LENGTH,
    EpisodeDraft,
    EpisodeRecord,
    parse_occurred_at,
)
from pulih.domain.models.user import OwnerContext
from pulih.services.journal import JournalService

router = APIRouter()

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


# Request/Response Models

class EntryRequest(BaseModel):
    """Editable fields of a journal entry."""

    occurred_at: str = Field(
        ...,
        max_length=MAX_OCCURRED_AT_LENGTH,
        description="ISO 8601 time of the episode (YYYY-MM-DD...)",
    )
    triggers: str = Field(default="", max_length=2000, description="Comma or semicolon separated")
    symptoms: str = Field(default="", max_length=2000, description="Comma or semicolon separated")
    strategies: str = Field(default="", max_length=2000, description="Comma or semicolon separated")
    notes: str = Field(default="", max_length=4000)
    condition: int = Field(default=0, ge=0, le=2, description="0 still anxious, 1 improved, 2 calm")

    model_config = {
        "json_schema_extra": {
            "example": {
                "occurred_at": "2024-05-01T09:00:00+07:00",
                "triggers": "crowds, deadline",
                "symptoms": "palpitations; shortness of breath",
                "strategies": "box breathing",
                "notes": "",
                "condition": 1,
            }
        }
    }

    @field_validator("occurred_at")
    @classmethod
    def validate_occurred_at(cls, v: str) -> str:
        parse_occurred_at(v)
        return v.strip()

    def to_draft(self) -> EpisodeDraft:
        try:
            return EpisodeDraft(
                occurred_at=self.occurred_at,
                triggers=self.triggers,
                symptoms=self.symptoms,
                strategies=self.strategies,
                notes=self.notes,
                condition=Condition(self.condition),
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e


class ImportEntry(EntryRequest):
    """Entry exported by the device-local journal (``timestamp`` accepted)."""

    occurred_at: str = Field(
        ...,
        max_length=MAX_OCCURRED_AT_LENGTH,
        validation_alias=AliasChoices("occurred_at", "timestamp"),
    )


class ImportRequest(BaseModel):
    entries: list[ImportEntry] = Field(default_factory=list, max_length=5000)


class ImportResponse(BaseModel):
    imported: int
    skipped: bool


class EntryResponse(BaseModel):
    """Stored journal entry."""

    id: UUID
    occurred_at: str
    triggers: str
    symptoms: str
    strategies: str
    notes: str
    condition: int
    condition_label: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: EpisodeRecord) -> "EntryResponse":
        return cls(
            id=record.id,
            occurred_at=record.occurred_at,
            triggers=record.triggers,
            symptoms=record.symptoms,
            strategies=record.strategies,
            notes=record.notes,
            condition=int(record.condition),
            condition_label=record.condition.label,
            created_at=record.created_at,
        )


class TagCountResponse(BaseModel):
    tag: str
    count: int


class SummaryResponse(BaseModel):
    total_count: int
    average_gap_days: Optional[int] = None
    dominant_time_of_day: Optional[str] = None
    average_condition: Optional[str] = None
    average_condition_value: Optional[float] = None


class SeriesResponse(BaseModel):
    labels: list[str]
    values: list[int]


class AnalyticsResponse(BaseModel):
    """Monthly journal analytics."""

    month: str
    has_data: bool
    summary: SummaryResponse
    top_triggers: list[TagCountResponse]
    top_symptoms: list[TagCountResponse]
    top_strategies: list[TagCountResponse]
    series: SeriesResponse
    entries: list[EntryResponse]

    @classmethod
    def from_analytics(cls, report: MonthlyAnalytics) -> "AnalyticsResponse":
        data = report.to_dict()
        return cls(
            **data,
            entries=[EntryResponse.from_record(record) for record in report.entries],
        )


class MonthsResponse(BaseModel):
    months: list[str]


# Routes

@router.get("/entries", response_model=list[EntryResponse], summary="List journal entries")
async def list_entries(
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> list[EntryResponse]:
    """The caller's entries, newest first."""
    return [EntryResponse.from_record(r) for r in await journal.list_entries(owner)]


@router.post(
    "/entries",
    response_model=EntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a panic episode",
)
async def create_entry(
    request: EntryRequest,
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> EntryResponse:
    record = await journal.create_entry(owner, request.to_draft())
    return EntryResponse.from_record(record)


@router.get("/entries/{entry_id}", response_model=EntryResponse)
async def get_entry(
    entry_id: UUID,
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> EntryResponse:
    return EntryResponse.from_record(await journal.get_entry(owner, entry_id))


@router.put("/entries/{entry_id}", response_model=EntryResponse)
async def update_entry(
    entry_id: UUID,
    request: EntryRequest,
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> EntryResponse:
    """Replace every editable field of an entry."""
    record = await journal.update_entry(owner, entry_id, request.to_draft())
    return EntryResponse.from_record(record)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: UUID,
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> Response:
    await journal.delete_entry(owner, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/import", response_model=ImportResponse, summary="Import a device-local journal")
async def import_entries(
    request: ImportRequest,
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> ImportResponse:
    """
    One-time import of entries kept on the device.

    Skipped when the caller already has entries on the server.
    """
    drafts = [entry.to_draft() for entry in request.entries]
    imported = await journal.import_entries(owner, drafts)
    return ImportResponse(imported=imported, skipped=imported == 0 and bool(drafts))


@router.get("/analytics", response_model=AnalyticsResponse, summary="Monthly analytics")
async def monthly_analytics(
    month: str = Query(..., pattern=MONTH_PATTERN, description="YYYY-MM"),
    top_n: Optional[int] = Query(default=None, ge=1, le=20),
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> AnalyticsResponse:
    """
    Summary, top tags and condition chart for one month.

    An empty month returns ``has_data: false`` with null statistics.
    """
    report = await journal.monthly_analytics(owner, month, top_n)
    return AnalyticsResponse.from_analytics(report)


@router.get("/months", response_model=MonthsResponse, summary="Months with entries")
async def available_months(
    owner: OwnerContext = Depends(get_current_owner),
    journal: JournalService = Depends(get_journal_service),
) -> MonthsResponse:
    return MonthsResponse(months=await journal.available_months(owner))
