import logging
from typing import Optional

from sqlmodel import Session

from .core.config import settings
from .application.ports.accounts_repo import AccountsRepository, AccountDto
from .application.ports.password_hasher import PasswordHasher
from .infrastructure.persistence.sqlalchemy.repositories.accounts_repository_sql import SqlAccountsRepository
from .infrastructure.security.bcrypt_hasher import BcryptPasswordHasher

logger = logging.getLogger(__name__)


def ensure_default_admin(accounts: AccountsRepository, hasher: PasswordHasher, email: str, password: str) -> Optional[AccountDto]:
    """Create the bootstrap administrator unless one with that email exists.

    Returns the created account, or None when nothing was inserted.
    """
    if accounts.get_by_email("admin", email):
        logger.info(f"Default admin {email} already present")
        return None
    admin = accounts.create("admin", {
        "name": "Default",
        "surname": "Admin",
        "email": email,
        "hashed_password": hasher.hash(password),
        "role": "admin",
    })
    logger.warning(f"Seeded default admin {email}; change its password after first login")
    return admin


def seed_admin(session: Session) -> Optional[AccountDto]:
    return ensure_default_admin(
        SqlAccountsRepository(session),
        BcryptPasswordHasher(),
        settings.DEFAULT_ADMIN_EMAIL,
        settings.DEFAULT_ADMIN_PASSWORD,
    )
