from app.db.session import SessionLocal, engine, Base
from app.core.config import settings
from app.crud import crud_admin
from app.models import base  # noqa: F401  registers the tables

def init_db():
    print("Creating tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        # Check if admin exists
        if crud_admin.get_admin_by_email(db, settings.ADMIN_EMAIL):
            print("Admin already exists.")
        else:
            print(f"Creating admin '{settings.ADMIN_EMAIL}'...")
            crud_admin.ensure_admin(db)
            print("Admin created successfully!")
    finally:
        db.close()

if __name__ == "__main__":
    init_db()
