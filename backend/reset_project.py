import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv
from app.models.base import Project, StockItem, ProfitRecord

# Load environment variables
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    print("Error: DATABASE_URL not found in .env file")
    sys.exit(1)

# Connect to database
engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def cleanup_project(session_factory=SessionLocal):
    db = session_factory()
    try:
        print("Starting cleanup of BongoPortus inventory...")

        # The admins table is left alone so the login keeps working
        for model in (ProfitRecord, StockItem, Project):
            print(f"Cleaning table: {model.__tablename__}...")
            deleted = db.query(model).delete(synchronize_session=False)
            print(f"  removed {deleted} rows")

        db.commit()
        print("\nSUCCESS: All projects, stock items and profit records have been wiped.")
        print("Your admin account is still active.")

    except Exception as e:
        db.rollback()
        print(f"\nERROR during cleanup: {e}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    confirm = input("WARNING: This will delete ALL data (Projects, Stock, Profits) except the admin account. \nAre you sure? (type 'yes' to proceed): ")
    if confirm.lower() == 'yes':
        cleanup_project()
    else:
        print("Cleanup cancelled.")
