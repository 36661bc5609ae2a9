"""Data models for institution records and resolution results."""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# State code used by custom entries that have no real location.
NO_LOCATION_STATE = "XX"


class MatchSource(str, Enum):
    """Where a resolution came from."""

    REFERENCE = "reference"
    UNMATCHED = "unmatched"


class MatchStage(str, Enum):
    """Pipeline stage that produced a resolution."""

    BLANK = "blank"
    SPECIAL = "special"
    EXACT = "exact"
    NORMALIZED = "normalized"
    SUBSTRING = "substring"
    PREFIX = "prefix"
    NONE = "none"


class InstitutionRecord(BaseModel):
    """One row of the reference dataset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(
        validation_alias=AliasChoices("id", "unitid"),
        description="Stable identifier, unique per physical institution",
    )
    name: str = Field(description="Canonical display name")
    alias: Optional[str] = Field(
        default="", description="Alternate names delimited by , ; or |"
    )
    city: str = Field(default="")
    state: str = Field(default="")
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("alias", "city", "state", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def has_location(self) -> bool:
        """True when city and state describe a real place."""
        return bool(self.city and self.state and self.state != NO_LOCATION_STATE)

    @property
    def location_label(self) -> str:
        return f"{self.city}, {self.state}"


class CanonicalVariant(BaseModel):
    """A record placed in its canonical group with a ranking score."""

    model_config = ConfigDict(frozen=True)

    base_name: str
    campus_descriptor: str = ""
    record: InstitutionRecord
    score: int


class Resolution(BaseModel):
    """Result of resolving one free-text institution name."""

    model_config = ConfigDict(populate_by_name=True)

    original_name: Optional[str] = Field(alias="originalName")
    standard_name: Optional[str] = Field(default=None, alias="standardName")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    source: MatchSource = MatchSource.UNMATCHED
    match_stage: MatchStage = Field(default=MatchStage.NONE, alias="matchStage")

    @property
    def is_matched(self) -> bool:
        return self.source == MatchSource.REFERENCE

    @classmethod
    def unmatched(cls, original_name: Optional[str], stage: MatchStage = MatchStage.NONE) -> "Resolution":
        """Build the universal no-match fallback."""
        return cls(
            original_name=original_name,
            standard_name=None,
            latitude=None,
            longitude=None,
            confidence=0.0,
            source=MatchSource.UNMATCHED,
            match_stage=stage,
        )

    @classmethod
    def from_record(
        cls,
        original_name: str,
        record: Optional[InstitutionRecord],
        standard_name: str,
        confidence: float,
        stage: MatchStage,
    ) -> "Resolution":
        """Build a matched resolution, taking coordinates from the record if any."""
        return cls(
            original_name=original_name,
            standard_name=standard_name,
            latitude=record.latitude if record else None,
            longitude=record.longitude if record else None,
            confidence=confidence,
            source=MatchSource.REFERENCE,
            match_stage=stage,
        )
