"""
Domain models for Retail Analytics.

Defines the transaction schema of the retail sales table. The model is frozen
and fully typed; raw input reaches it only through the validator, which maps
coercion failures onto the package's error taxonomy.
"""
from __future__ import annotations

import re
from datetime import date, time
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

# Bare numbers parse as Unix timestamps or seconds in pydantic's lax mode.
_NUMERIC_TEXT = re.compile(r"[+-]?\d+(\.\d*)?([eE][+-]?\d+)?")


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class TransactionRecord(BaseModel):
    """
    Representation of a single retail sale event.
    """

    transaction_id: int = Field(..., gt=0, description="Primary key, unique per store.")
    sale_date: date = Field(..., description="Calendar date of the sale.")
    sale_time: time = Field(..., description="Time of day of the sale.")
    customer_id: int = Field(..., gt=0, description="Purchasing customer.")
    gender: Gender = Field(..., description="Customer gender.")
    age: int = Field(..., gt=0, description="Customer age in years.")
    category: str = Field(..., min_length=1, description="Product category (open text).")
    quantity: int = Field(..., ge=0, description="Units sold.")
    price_per_unit: Decimal = Field(..., ge=0, description="Unit price.")
    cogs: Decimal = Field(..., ge=0, description="Cost of goods sold.")
    total_sale: Decimal = Field(..., ge=0, description="Sale amount.")

    model_config = {
        "frozen": True,
        "str_strip_whitespace": True,
        "extra": "ignore",
    }

    @field_validator("sale_date", "sale_time", mode="before")
    @classmethod
    def _reject_numeric_temporal(cls, value):
        if isinstance(value, (bool, int, float, Decimal)):
            raise ValueError("expected a calendar value, not a number")
        if isinstance(value, str) and _NUMERIC_TEXT.fullmatch(value.strip()):
            raise ValueError("expected a calendar value, not a number")
        return value

    @field_validator("sale_time")
    @classmethod
    def _reject_time_zone(cls, value: time) -> time:
        if value.tzinfo is not None:
            raise ValueError("time of day must not carry a time zone")
        return value

    @field_validator(
        "transaction_id",
        "customer_id",
        "age",
        "quantity",
        "price_per_unit",
        "cogs",
        "total_sale",
        mode="before",
    )
    @classmethod
    def _reject_bool(cls, value):
        if isinstance(value, bool):
            raise ValueError("booleans are not numbers")
        return value


FIELD_NAMES: tuple[str, ...] = tuple(TransactionRecord.model_fields)


__all__ = ["FIELD_NAMES", "Gender", "TransactionRecord"]
