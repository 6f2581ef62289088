from datetime import date, datetime
from typing import Optional

from pydantic import Field

from madrasa_portal.core.constants import ClassName
from madrasa_portal.schemas.common import CamelModel


class StudentBase(CamelModel):
    full_name: str = Field(min_length=1)
    class_name: ClassName
    phone: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    date_of_birth: Optional[date] = None


class StudentCreate(StudentBase):
    pass


class StudentUpdate(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=1)
    class_name: Optional[ClassName] = None
    phone: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    date_of_birth: Optional[date] = None


class StudentInDB(StudentBase):
    id: int
    created_at: datetime
    updated_at: datetime


class Student(StudentInDB):
    pass
