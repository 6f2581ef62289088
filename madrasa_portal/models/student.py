from sqlalchemy import Column, Date, Integer, String
from madrasa_portal.core.database import Base
from madrasa_portal.models.mixins import TimestampMixin


class Student(TimestampMixin, Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False, index=True)
    class_name = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    father_name = Column(String, nullable=True)
    mother_name = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
