# hms/db/models/accounts/patient.py
from typing import List
from sqlmodel import Field, Relationship

from .base import AccountBase, new_id

class Patient(AccountBase, table=True):
    __tablename__ = "patients"
    id: str = Field(default_factory=new_id, primary_key=True)
    role: str = Field(default="patient", max_length=20)

    # Relationships
    appointments: List["Appointment"] = Relationship(
        back_populates="patient",
        sa_relationship_kwargs={"cascade": "all, delete"},
    )
