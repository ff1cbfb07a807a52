# hms/db/models/accounts/doctor.py
from typing import Optional, List
from sqlmodel import Field, Relationship

from .base import AccountBase, new_id

class Doctor(AccountBase, table=True):
    __tablename__ = "doctors"
    id: str = Field(default_factory=new_id, primary_key=True)
    specialization: Optional[str] = Field(default=None, max_length=100)
    role: str = Field(default="doctor", max_length=20)

    # Relationships
    appointments: List["Appointment"] = Relationship(
        back_populates="doctor",
        sa_relationship_kwargs={"cascade": "all, delete"},
    )
