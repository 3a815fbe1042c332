"""Wire models for OpenCritic JSON payloads.

Validation is strict: values are never coerced between types, so a score
sent as a string or a boolean id is rejected. Unknown keys are ignored.
"""

from typing import Any

from pydantic import AliasChoices, AwareDatetime, BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from .game import CompanyRef, GameRecord, GenreRef, PlatformRef, ReleaseStub


class WireModel(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)


class ReleaseStubPayload(WireModel):
    id: int
    name: str

    def to_stub(self) -> ReleaseStub:
        return ReleaseStub(id=self.id, name=self.name)


class GenrePayload(WireModel):
    name: str

    def to_ref(self) -> GenreRef:
        return GenreRef(name=self.name)


class PlatformPayload(WireModel):
    name: str
    short_name: str = Field(validation_alias="shortName")

    def to_ref(self) -> PlatformRef:
        return PlatformRef(name=self.name, short_name=self.short_name)


class CompanyPayload(WireModel):
    name: str
    type: str

    def to_ref(self) -> CompanyRef:
        return CompanyRef(name=self.name, type=self.type)


class GameDetailPayload(WireModel):
    """Full game details from ``/game/{id}``.

    The array fields are sent as ``genres`` or ``Genres`` depending on the
    endpoint; the lower-case key wins when both are present.
    """

    name: str
    first_release_date: AwareDatetime = Field(validation_alias="firstReleaseDate", strict=False)
    genres: list[GenrePayload] = Field(validation_alias=AliasChoices("genres", "Genres"))
    platforms: list[PlatformPayload] = Field(validation_alias=AliasChoices("platforms", "Platforms"))
    average_score: float = Field(validation_alias="averageScore")
    tier: str
    companies: list[CompanyPayload] | None = Field(
        default=None,
        validation_alias=AliasChoices("companies", "Companies"),
    )

    @field_validator("first_release_date", mode="before")
    @classmethod
    def _timestamp_must_be_text(cls, value: Any) -> Any:
        # Lax datetime parsing would also accept unix timestamps
        if not isinstance(value, str):
            raise ValueError("expected an ISO 8601 timestamp string")
        return value

    def to_record(self) -> GameRecord:
        return GameRecord(
            name=self.name,
            first_release_date=self.first_release_date,
            genres=tuple(genre.to_ref() for genre in self.genres),
            platforms=tuple(platform.to_ref() for platform in self.platforms),
            average_score=float(self.average_score),
            tier=self.tier,
            companies=tuple(company.to_ref() for company in self.companies or ()),
        )
