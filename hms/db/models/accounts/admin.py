# hms/db/models/accounts/admin.py
from sqlmodel import Field

from .base import AccountBase, new_id

class Admin(AccountBase, table=True):
    __tablename__ = "admins"
    id: str = Field(default_factory=new_id, primary_key=True)
    role: str = Field(default="admin", max_length=20)
