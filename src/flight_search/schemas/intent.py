"""
Structured flight search intent extracted from natural language.

The language model's JSON output is parsed into this model. It is
advisory input for pre-filling the search form, never authoritative.
"""

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.flight_search.schemas.search import CabinClass

TRAVEL_CLASS_TO_CABIN: Dict[str, CabinClass] = {
    "ECONOMY": CabinClass.ECONOMY,
    "PREMIUM_ECONOMY": CabinClass.PREMIUM_ECONOMY,
    "BUSINESS": CabinClass.BUSINESS,
    "FIRST": CabinClass.FIRST,
}


class FlightSearchIntent(BaseModel):
    """Best-effort partial search parameters plus a freeform intent hint."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    origin: Optional[str] = None
    destination: Optional[str] = None
    departure_date: Optional[date] = None
    return_date: Optional[date] = None
    adults: int = Field(default=1, ge=1)
    travel_class: Optional[str] = None
    intent: Literal["search", "explore", "recommend"] = "search"
    preferences: List[str] = Field(default_factory=list)

    @field_validator("departure_date", "return_date", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> Any:
        # Models sometimes answer "next week" or "" instead of YYYY-MM-DD
        if value in (None, ""):
            return None
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            return None

    @field_validator("adults", mode="before")
    @classmethod
    def _at_least_one(cls, value: Any) -> Any:
        try:
            return max(int(value), 1)
        except (TypeError, ValueError):
            return 1

    @field_validator("intent", mode="before")
    @classmethod
    def _known_intent(cls, value: Any) -> Any:
        if value in ("search", "explore", "recommend"):
            return value
        return "search"

    @field_validator("preferences", mode="before")
    @classmethod
    def _preference_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @property
    def cabin_class(self) -> Optional[CabinClass]:
        """Cabin class named by the model, if it is a known code."""
        if not self.travel_class:
            return None
        key = self.travel_class.strip().upper().replace(" ", "_")
        return TRAVEL_CLASS_TO_CABIN.get(key)

    def to_search_params_update(self) -> Dict[str, Any]:
        """
        Map the intent onto a partial SearchParams update.

        Only fields the model actually supplied are included, so merging
        the result never clears what the user already entered.
        """
        update: Dict[str, Any] = {}
        if self.origin:
            update["origin"] = self.origin.strip().upper()
        if self.destination:
            update["destination"] = self.destination.strip().upper()
        if self.departure_date:
            update["departure_date"] = self.departure_date
        if self.return_date:
            update["return_date"] = self.return_date
        if "adults" in self.model_fields_set:
            update["passengers"] = self.adults
        if self.cabin_class is not None:
            update["cabin_class"] = self.cabin_class
        return update
