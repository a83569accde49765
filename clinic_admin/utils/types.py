"""
Shared SQLAlchemy column types
"""
import enum
from typing import Type

from sqlalchemy import Enum as SQLEnum


def _enum_values(enum_cls: Type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def StrEnum(enum_cls: Type[enum.Enum], name: str) -> SQLEnum:
    """
    Enum column stored as its lowercase value string

    Values (not member names) go to the database so rows written by
    raw SQL, such as the startup column migrations, decode cleanly.
    """
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=_enum_values,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        length=32,
    )
