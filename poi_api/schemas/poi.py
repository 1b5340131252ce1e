import re
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from poi_api.domain.poi import POI, DayOfWeek, PoiStatus

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def _enum_values(enum_cls) -> str:
    return ", ".join(member.value for member in enum_cls)


def _check_status(value: Any) -> Any:
    if isinstance(value, PoiStatus):
        return value
    if value not in [s.value for s in PoiStatus]:
        raise PydanticCustomError(
            "enum",
            "Status must be one of: {values}",
            {"values": _enum_values(PoiStatus)},
        )
    return value


def _reject_null(value: Any) -> Any:
    if value is None:
        raise PydanticCustomError("null_value", "Field may not be null")
    return value


def _check_time(value: Any, label: str) -> Any:
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise PydanticCustomError(
            "time_format",
            "{label} must be in HH:MM format",
            {"label": label},
        )
    return value


class PayloadModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AddressIn(PayloadModel):
    country: str = Field(..., min_length=1, description="Country")
    zip_code: str = Field(..., min_length=1, description="Zip / postal code")
    city: str = Field(..., min_length=1, description="City")
    street: str = Field(..., min_length=1, description="Street")
    house_number: str = Field(..., min_length=1, description="House number")


class OpeningHoursIn(PayloadModel):
    day_of_week: DayOfWeek = Field(..., description="Day of the week")
    open_time: str = Field(..., description="Opening time, HH:MM (24h)")
    close_time: str = Field(..., description="Closing time, HH:MM (24h)")
    is_closed: StrictBool = Field(..., description="Closed for the whole day")

    @field_validator("day_of_week", mode="before")
    @classmethod
    def check_day_of_week(cls, value: Any) -> Any:
        if isinstance(value, DayOfWeek):
            return value
        if value not in [d.value for d in DayOfWeek]:
            raise PydanticCustomError(
                "enum",
                "Day of week must be one of: {values}",
                {"values": _enum_values(DayOfWeek)},
            )
        return value

    @field_validator("open_time", mode="before")
    @classmethod
    def check_open_time(cls, value: Any) -> Any:
        return _check_time(value, "Open time")

    @field_validator("close_time", mode="before")
    @classmethod
    def check_close_time(cls, value: Any) -> Any:
        return _check_time(value, "Close time")


class PoiCreate(PayloadModel):
    name: str = Field(..., min_length=1, description="Display name of the POI")
    status: PoiStatus = Field(..., description="ONLINE, OFFLINE or MAINTENANCE")
    address: Optional[AddressIn] = Field(None, description="Postal address")
    opening_hours: Optional[List[OpeningHoursIn]] = Field(
        None, description="Weekly schedule, one entry per day"
    )

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> Any:
        return _check_status(value)

    # Optional means "may be omitted", not "may be null"
    @field_validator("address", "opening_hours", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class PoiUpdate(PayloadModel):
    """Partial update: absent fields stay untouched, present ones are validated as on create."""

    name: Optional[str] = Field(None, min_length=1)
    status: Optional[PoiStatus] = None
    address: Optional[AddressIn] = None
    opening_hours: Optional[List[OpeningHoursIn]] = None

    # Defaults are not validated, so these only fire for fields sent explicitly.
    @field_validator("name", "address", "opening_hours", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> Any:
        return _check_status(_reject_null(value))


class PoiStatusUpdate(PayloadModel):
    status: PoiStatus

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> Any:
        return _check_status(value)


class PoiSummaryOut(PayloadModel):
    """Scalar POI fields, as returned by the create endpoint."""

    id: str
    name: str
    status: PoiStatus
    created_at: datetime
    updated_at: datetime


class Pagination(PayloadModel):
    page: int
    limit: int
    total: int
    pages: int


class PoiPage(PayloadModel):
    data: List[POI]
    pagination: Pagination


class MessageOut(BaseModel):
    message: str
