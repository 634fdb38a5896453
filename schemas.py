from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Request bodies, one per resource. The client sends camelCase keys;
# model_dump() gives the snake_case column names used by models.py.
# imageUrl is never read from the body, only the upload handler sets it.


# largest value an INTEGER column holds on every store we target
MAX_INT = 2**31 - 1

Count = Annotated[int, Field(ge=0, le=MAX_INT)]
RowId = Annotated[int, Field(ge=1, le=MAX_INT)]
# matches the Numeric(18, 2) money columns
Money = Annotated[Decimal, Field(max_digits=18, decimal_places=2)]


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class CategoryIn(RequestModel):
    name: str = Field(..., min_length=1)


class CustomerIn(RequestModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: str = Field(..., min_length=1)


class ProductIn(RequestModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Money = Field(..., ge=0)
    stock_quantity: Count
    category_id: Optional[RowId] = None


class OrderIn(RequestModel):
    order_date: datetime
    customer_id: Optional[RowId] = None
    total_amount: Money

    @field_validator('order_date')
    @classmethod
    def store_as_utc(cls, value):
        # the column has no offset, aware times are kept as naive UTC
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class OrderItemIn(RequestModel):
    order_id: Optional[RowId] = None
    product_id: Optional[RowId] = None
    quantity: int = Field(..., ge=-MAX_INT - 1, le=MAX_INT)
    subtotal: Money


class EmployeeIn(RequestModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: str
    salary: Money


# Authentication bodies use PascalCase keys; camelCase and lowercase are accepted too

class SignUpIn(BaseModel):
    user_name: str = Field(..., min_length=1, validation_alias=AliasChoices("UserName", "userName", "username"))
    email: str = Field(..., min_length=1, validation_alias=AliasChoices("Email", "email"))
    password: str = Field(..., min_length=1, validation_alias=AliasChoices("Password", "password"))


class LoginIn(BaseModel):
    user_name: str = Field(..., min_length=1, validation_alias=AliasChoices("UserName", "userName", "username"))
    password: str = Field(..., min_length=1, validation_alias=AliasChoices("Password", "password"))
