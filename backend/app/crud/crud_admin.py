import logging
from typing import Optional
from sqlalchemy.orm import Session
from app.core import security
from app.core.config import settings
from app.models.base import Admin, AdminRole

logger = logging.getLogger(__name__)


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.email == email).first()


def ensure_admin(db: Session) -> Admin:
    """Create the configured admin account if it does not exist yet."""
    admin = get_admin_by_email(db, settings.ADMIN_EMAIL)
    if admin:
        return admin
    admin = Admin(
        email=settings.ADMIN_EMAIL,
        hashed_password=security.get_password_hash(settings.ADMIN_PASSWORD),
        role=AdminRole.ADMIN.value,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Admin user created for %s", settings.ADMIN_EMAIL)
    return admin


def authenticate(db: Session, email: str, password: str) -> Optional[Admin]:
    admin = get_admin_by_email(db, email)
    if not admin or not admin.is_active:
        return None
    if not security.verify_password(password, admin.hashed_password):
        return None
    return admin
