from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from sqlmodel import Session, select

from .....db.models import Admin, Doctor, Patient
from .....application.ports.accounts_repo import AccountsRepository, AccountDto

MODELS = {
    "admin": Admin,
    "doctor": Doctor,
    "patient": Patient,
}


class SqlAccountsRepository(AccountsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, kind: str, row) -> AccountDto:
        return AccountDto(
            id=row.id,
            role=kind,
            email=row.email,
            name=row.name,
            surname=row.surname,
            phone=row.phone,
            street=row.street,
            city=row.city,
            state=row.state,
            zip_code=row.zip_code,
            country=row.country,
            date_of_birth=row.date_of_birth,
            gender=row.gender,
            specialization=getattr(row, "specialization", None),
            hashed_password=row.hashed_password,
            last_login=row.last_login,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _find(self, kind: str, account_id: str):
        model = MODELS[kind]
        return self.session.exec(select(model).where(model.id == account_id)).first()

    def get(self, kind: str, account_id: str) -> Optional[AccountDto]:
        row = self._find(kind, account_id)
        return self._to_dto(kind, row) if row else None

    def get_by_email(self, kind: str, email: str) -> Optional[AccountDto]:
        model = MODELS[kind]
        row = self.session.exec(select(model).where(model.email == email)).first()
        return self._to_dto(kind, row) if row else None

    def list(self, kind: str, exclude_id: Optional[str] = None) -> List[AccountDto]:
        model = MODELS[kind]
        query = select(model)
        if exclude_id is not None:
            query = query.where(model.id != exclude_id)
        rows = self.session.exec(query.order_by(model.created_at.asc())).all()
        return [self._to_dto(kind, r) for r in rows]

    def create(self, kind: str, fields: Dict[str, Any]) -> AccountDto:
        row = MODELS[kind](**fields)
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return self._to_dto(kind, row)

    def update(self, kind: str, account_id: str, fields: Dict[str, Any]) -> Optional[AccountDto]:
        row = self._find(kind, account_id)
        if not row:
            return None
        for key, value in fields.items():
            if hasattr(row, key):
                setattr(row, key, value)
        row.updated_at = datetime.now(timezone.utc)
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return self._to_dto(kind, row)

    def delete(self, kind: str, account_id: str) -> bool:
        row = self._find(kind, account_id)
        if not row:
            return False
        self.session.delete(row)
        self.session.commit()
        return True

    def set_password(self, kind: str, account_id: str, hashed_password: str) -> None:
        row = self._find(kind, account_id)
        if not row:
            return
        row.hashed_password = hashed_password
        row.updated_at = datetime.now(timezone.utc)
        self.session.add(row)
        self.session.commit()

    def touch_login(self, kind: str, account_id: str) -> None:
        row = self._find(kind, account_id)
        if not row:
            return
        row.last_login = datetime.now(timezone.utc)
        self.session.add(row)
        self.session.commit()
