"""Request bodies.

Each endpoint that takes JSON parses it through one of these models;
``parse`` turns pydantic's error list into the ``{field: message}`` map
carried by a 422 response.
"""
from datetime import date, datetime, timezone
from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from inventory_app.errors import ValidationError
from inventory_app.models.item import Item

Email = Annotated[EmailStr, AfterValidator(str.lower)]
Name = Annotated[str, Field(min_length=1, max_length=255)]
Password = Annotated[str, Field(min_length=8)]
ImagePath = Optional[Annotated[str, Field(max_length=255)]]
ItemStatus = Literal[Item.STATUS_AVAILABLE, Item.STATUS_UNAVAILABLE, Item.STATUS_MAINTENANCE]


def _matches_password(value, info: ValidationInfo):
    if value != info.data.get("password"):
        raise ValueError("The password confirmation does not match.")
    return value


Confirmation = Optional[Annotated[str, AfterValidator(_matches_password)]]


class RequestSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # "<field>.missing" / "<field>.invalid" overrides for pydantic's wording
    messages: ClassVar[dict] = {}


class RegisterRequest(RequestSchema):
    name: Name
    email: Email
    password: Password
    password_confirmation: Confirmation = None
    profile_image: ImagePath = None


class LoginRequest(RequestSchema):
    email: Email
    password: str = Field(min_length=1)


class ProfileRequest(RequestSchema):
    name: Name
    email: Email
    profile_image: ImagePath = None


class PasswordRequest(RequestSchema):
    current_password: str = Field(min_length=1)
    password: Password
    password_confirmation: Confirmation = None


class CategoryRequest(RequestSchema):
    name: Name
    description: Optional[str] = None


class ItemRequest(RequestSchema):
    name: Name
    description: Optional[str] = None
    category_id: int
    quantity: int = Field(ge=1)
    image: ImagePath = None
    status: Optional[ItemStatus] = None


class ItemUpdateRequest(ItemRequest):
    quantity: int = Field(ge=0)


def _as_utc_datetime(value) -> datetime:
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class BorrowRequest(RequestSchema):
    item_id: int
    borrow_date: Union[date, datetime]
    due_date: Union[date, datetime]

    messages: ClassVar[dict] = {
        "item_id.missing": "The item selection is required.",
        "borrow_date.missing": "The borrow date is required.",
        "borrow_date.invalid": "The borrow date must be a valid date.",
        "due_date.missing": "The due date is required.",
        "due_date.invalid": "The due date must be a valid date.",
    }

    @field_validator("borrow_date")
    @classmethod
    def borrow_date_not_in_past(cls, value):
        value = _as_utc_datetime(value)
        if value.date() < datetime.utcnow().date():
            raise ValueError("The borrow date must be today or a future date.")
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_after_borrow_date(cls, value, info: ValidationInfo):
        value = _as_utc_datetime(value)
        borrow_date = info.data.get("borrow_date")
        if borrow_date is not None and value <= borrow_date:
            raise ValueError("The due date must be after the borrow date.")
        return value


def _message(schema, field: str, err: dict) -> str:
    rule = err["type"]
    if rule not in ("missing", "value_error"):
        rule = "invalid"
    custom = schema.messages.get(f"{field}.{rule}")
    if custom:
        return custom
    if rule == "missing":
        return f"The {field.replace('_', ' ')} field is required."
    return err["msg"].removeprefix("Value error, ")


def parse(schema, data):
    try:
        return schema.model_validate(data or {})
    except PydanticValidationError as e:
        errors = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "body"
            errors.setdefault(field, _message(schema, field, err))
        raise ValidationError("The given data was invalid.", errors=errors)
