# hms/db/models/health/appointment.py
from typing import Optional
from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, date as date_type

from ..accounts.base import new_id, utc_now

APPOINTMENT_STATUSES = ("Scheduled", "Completed", "Cancelled", "Pending")

class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: str = Field(default_factory=new_id, primary_key=True)
    patient_id: str = Field(foreign_key="patients.id", index=True)
    doctor_id: str = Field(foreign_key="doctors.id", index=True)
    date: date_type
    time: str = Field(max_length=5)
    reason: str = Field(max_length=500)
    status: str = Field(default="Pending", max_length=20)
    notes: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Relationships
    patient: Optional["Patient"] = Relationship(back_populates="appointments")
    doctor: Optional["Doctor"] = Relationship(back_populates="appointments")
