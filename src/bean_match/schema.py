"""Data models for bean-match."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class CoffeeDescriptor(BaseModel):
    """Distinguishing attributes of a coffee used for similarity scoring."""

    name: str
    id: str | None = None
    origin_country: str | None = None
    region: str | None = None
    farm: str | None = None
    process: str | None = None
    variety: str | None = None
    altitude: float | None = None

    @field_validator("origin_country", "region", "farm", "process", "variety", "id", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        return _blank_to_none(value)

    @classmethod
    def from_coffee(cls, coffee: Coffee) -> CoffeeDescriptor:
        return cls(
            id=coffee.id,
            name=coffee.name,
            origin_country=coffee.origin_country,
            region=coffee.region,
            farm=coffee.farm,
            process=coffee.process,
            variety=coffee.variety,
            altitude=coffee.altitude,
        )

    @classmethod
    def from_extracted(cls, coffee: ExtractedCoffee) -> CoffeeDescriptor:
        return cls(
            name=coffee.name,
            origin_country=coffee.origin_country,
            region=coffee.region,
            farm=coffee.farm,
            process=coffee.process,
            variety=coffee.variety,
            altitude=coffee.altitude,
        )


class FlavorProfile(BaseModel):
    """Structured 1-10 flavor scores reported by the vision model."""

    acidity: float | None = None
    body: float | None = None
    sweetness: float | None = None
    aroma: float | None = None
    balance: float | None = None
    aftertaste: float | None = None
    notes: list[str] | None = None


class ExtractedRoaster(BaseModel):
    name: str = ""
    country: str | None = None
    website: str | None = None
    description: str | None = None
    founded_year: int | None = None
    specialty: str | None = None
    size_category: str | None = None
    roasting_style: str | None = None


class ExtractedCoffee(BaseModel):
    name: str = ""
    origin_country: str | None = None
    region: str | None = None
    subregion: str | None = None
    farm: str | None = None
    producer: str | None = None
    cooperative: str | None = None
    variety: str | None = None
    variety_details: str | None = None
    process: str | None = None
    process_details: str | None = None
    altitude: float | None = None
    altitude_range: str | None = None
    harvest_season: str | None = None
    certification: str | None = None
    cupping_score: float | None = None
    tasting_notes: str | None = None
    flavor_profile: FlavorProfile | None = None
    coffee_story: str | None = None


class ExtractedBag(BaseModel):
    size_g: float | None = None
    roast_date: str | None = None
    price: float | None = None
    purchase_location: str | None = None


class ExtractedBagInfo(BaseModel):
    """Structured information extracted from a coffee bag photo."""

    roaster: ExtractedRoaster = Field(default_factory=ExtractedRoaster)
    coffee: ExtractedCoffee = Field(default_factory=ExtractedCoffee)
    bag: ExtractedBag = Field(default_factory=ExtractedBag)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class Roaster(BaseModel):
    id: str
    name: str
    country: str | None = None
    website: str | None = None
    description: str | None = None
    founded_year: int | None = None
    specialty: str | None = None
    size_category: str | None = None
    roasting_style: str | None = None
    created_at: str | None = None


class Coffee(BaseModel):
    id: str
    roaster_id: str
    name: str
    origin_country: str | None = None
    region: str | None = None
    subregion: str | None = None
    farm: str | None = None
    producer: str | None = None
    cooperative: str | None = None
    variety: str | None = None
    variety_details: str | None = None
    process: str | None = None
    process_details: str | None = None
    altitude: float | None = None
    altitude_range: str | None = None
    harvest_season: str | None = None
    certification: str | None = None
    cupping_score: float | None = None
    tasting_notes: str | None = None
    flavor_profile: FlavorProfile | None = None
    coffee_story: str | None = None
    created_at: str | None = None


class Bag(BaseModel):
    id: str
    coffee_id: str
    size_g: float | None = None
    price: float | None = None
    roast_date: str
    open_date: str | None = None
    finish_date: str | None = None
    purchase_location: str | None = None
    photo_url: str | None = None
    created_at: str | None = None


class Brew(BaseModel):
    """One extraction from a bag."""

    id: str
    bag_id: str
    method: str
    dose_g: float
    yield_g: float
    time_s: float
    grind_setting: str
    water_temp_c: float | None = None
    rating: float
    flavor_tags: list[str] | None = None
    notes: str | None = None
    brew_date: str | None = None
    created_at: str | None = None
