"""
Record schemas

Pydantic models for everything stored on the hosted backend plus the
validation result types shared by the validators.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any, Literal
from datetime import date as Date, datetime
from enum import Enum

from app.config import get_standings_config
from ranking.models import Participant, EventEntry, EventResult


class ValidationSeverity(str, Enum):
    """Validation error severity"""
    CRITICAL = "critical"   # cannot save
    HIGH = "high"           # cannot save, needs user action
    MEDIUM = "medium"       # can save, shown as warning
    LOW = "low"             # can save, logged only
    INFO = "info"


class ValidationError(BaseModel):
    """Single validation finding"""
    error_type: str = Field(..., description="Error code")
    severity: ValidationSeverity = Field(..., description="Severity")
    message: str = Field(..., description="Message")
    field: Optional[str] = Field(None, description="Related field")
    value: Optional[Any] = Field(None, description="Offending value")
    suggestion: Optional[str] = Field(None, description="How to fix")


class ValidationResult(BaseModel):
    """Validation outcome"""
    is_valid: bool = Field(default=True, description="Overall validity")
    errors: List[ValidationError] = Field(default_factory=list)
    warnings: List[ValidationError] = Field(default_factory=list)
    validated_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_critical_errors(self) -> bool:
        return any(e.severity in [ValidationSeverity.CRITICAL, ValidationSeverity.HIGH] for e in self.errors)

    @property
    def can_save(self) -> bool:
        """Whether the data may be stored"""
        return not self.has_critical_errors

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )


# ==================== Enums ====================

class CompetitionType(str, Enum):
    """Competition format"""
    INDIVIDUAL_FREE = "individual-free"
    PAIR_FREE = "pair-free"
    INDIVIDUAL_CRITERIUM = "individual-criterium"
    PAIR_CRITERIUM = "pair-criterium"

    @property
    def is_criterium(self) -> bool:
        return self in (CompetitionType.INDIVIDUAL_CRITERIUM, CompetitionType.PAIR_CRITERIUM)


FolderType = Literal["individual-criterium", "pair-criterium"]

KLASSE_OPTIONS = ["U15", "U20", "U25", "S", "M", "V", "D"]


def default_sector_sizes() -> List[int]:
    """One sector of the configured size"""
    return [get_standings_config().default_sector_size]


# ==================== Competitions ====================

class ParticipantSchema(BaseModel):
    """Participant as stored inside a saved competition (camelCase JSON)"""

    id: int = Field(..., ge=1, description="Participant number within the event")
    name: str = Field(default="", description="Name")
    club: Optional[str] = Field(None, description="Club")
    klasse: Optional[str] = Field(None, description="Class/category label")
    place: Optional[int] = Field(None, ge=1, description="Draw position")
    weights: List[Optional[int]] = Field(default_factory=list, description="Weights in grams")
    weighing_confirmed: bool = Field(default=False, alias="weighingConfirmed")
    has_paid: bool = Field(default=False, alias="hasPaid")
    total_weight: int = Field(default=0, ge=0, alias="totalWeight")
    points: Optional[int] = Field(None, ge=0, description="Sector rank")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("place", mode="before")
    @classmethod
    def empty_place(cls, v):
        """0 / '' mean 'no draw position yet'"""
        if v in (0, "", None):
            return None
        return v

    @field_validator("weights")
    @classmethod
    def validate_weights(cls, v: List[Optional[int]]) -> List[Optional[int]]:
        for weight in v:
            if weight is not None and weight < 0:
                raise ValueError(f"Weight cannot be negative: {weight}")
        return v

    def to_participant(self) -> Participant:
        return Participant(
            id=self.id,
            name=self.name,
            club=self.club,
            klasse=self.klasse,
            place=self.place,
            weights=list(self.weights),
            weighing_confirmed=self.weighing_confirmed,
            has_paid=self.has_paid,
        )

    def to_entry(self) -> EventEntry:
        return EventEntry(
            name=self.name,
            klasse=self.klasse,
            points=self.points,
            total_weight=self.total_weight,
        )

    class Config:
        populate_by_name = True


class CompetitionDetailsSchema(BaseModel):
    """Competition header entered before registration"""

    name: str = Field(default="", description="Name, 'W<n>' for criterium events")
    date: Date = Field(..., description="Date")
    location: str = Field(default="", description="Location")
    type: CompetitionType = Field(default=CompetitionType.INDIVIDUAL_FREE)
    criterium_folder_id: Optional[str] = Field(None, description="Owning criterium folder")

    @field_validator("name", "location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return (v or "").strip()

    @model_validator(mode="after")
    def drop_folder_for_free_types(self) -> "CompetitionDetailsSchema":
        """Only criterium events belong to a folder"""
        if not CompetitionType(self.type).is_criterium:
            self.criterium_folder_id = None
        return self


class SavedCompetitionSchema(CompetitionDetailsSchema):
    """Finalized event result set (saved_competitions row)"""

    id: Optional[str] = Field(None, description="Record id")
    user_id: Optional[str] = Field(None, description="Owner")
    participants: List[ParticipantSchema] = Field(default_factory=list)
    sector_sizes: List[int] = Field(default_factory=default_sector_sizes)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("sector_sizes")
    @classmethod
    def positive_sector_sizes(cls, v: List[int]) -> List[int]:
        if any(size <= 0 for size in v):
            raise ValueError(f"Sector sizes must be positive: {v}")
        return v

    def to_participants(self) -> List[Participant]:
        return [p.to_participant() for p in self.participants]

    def to_event_result(self) -> EventResult:
        return EventResult(
            label=self.name,
            participants=[p.to_entry() for p in self.participants if p.name],
        )


class CriteriumFolderSchema(BaseModel):
    """Criterium folder (criterium_folders row)"""

    id: Optional[str] = None
    user_id: Optional[str] = None
    name: str = Field(..., min_length=1, description="Folder name")
    type: FolderType = Field(..., description="individual or pair criterium")
    created_at: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name cannot be empty")
        return v


# ==================== Club profile ====================

class PhoneNumber(BaseModel):
    country_code: str = Field(default="+32", alias="countryCode")
    number: str = ""

    class Config:
        populate_by_name = True


class ClubDetailsSchema(BaseModel):
    """Club profile (club_details row)"""

    id: Optional[str] = None
    user_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    street: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""
    phone_numbers: List[PhoneNumber] = Field(default_factory=list)
    rules_file_url: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    public_name: bool = True
    public_address: bool = False
    public_phone: bool = False
    public_rules: bool = False
    public_website: bool = False
    public_email: bool = False

    @field_validator("phone_numbers", mode="before")
    @classmethod
    def legacy_phone_numbers(cls, v):
        """Older rows store plain strings"""
        if not v:
            return []
        return [{"number": p} if isinstance(p, str) else p for p in v]

    def public_view(self) -> Dict[str, Any]:
        """Only the fields the club chose to publish"""
        view: Dict[str, Any] = {}
        if self.public_name:
            view["name"] = self.name
        if self.public_address:
            view.update(street=self.street, postal_code=self.postal_code, city=self.city, country=self.country)
        if self.public_phone:
            view["phone_numbers"] = [p.model_dump() for p in self.phone_numbers]
        if self.public_rules and self.rules_file_url:
            view["rules_file_url"] = self.rules_file_url
        if self.public_website and self.website:
            view["website"] = self.website
        if self.public_email and self.email:
            view["email"] = self.email
        return view


# ==================== Calendar ====================

class CalendarEventSchema(BaseModel):
    """Published calendar entry (calendar_events row)"""

    id: Optional[str] = None
    date: Date
    name: str = Field(..., min_length=1)
    type: Literal["fixed-rod", "feeder", "open", "open-float"]
    format: Literal["single", "pair", "trio", "other"] = "single"
    access: Literal["members-only", "public"] = "public"
    water_type: Literal["public", "bream-pond", "carp-pond", "allround-pond"] = "public"
    number_pickup_time: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    postal_code: str = ""
    city: str = ""
    country: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    poster_url: Optional[str] = None


# ==================== Weigh-in access ====================

class WeighingAccessLinkSchema(BaseModel):
    """Delegated weigh-in access (weighing_access_links row)"""

    id: Optional[str] = None
    competition_id: str = Field(..., min_length=1)
    sectors: List[str] = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    expires_at: datetime
    created_by: str
    created_at: Optional[datetime] = None
