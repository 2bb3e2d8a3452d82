from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Date
from datetime import datetime
import pytz
from app.core.config import settings
from app.db.session import Base
import enum

LOCAL_TZ = pytz.timezone(settings.TIMEZONE)

def now_local():
    return datetime.now(LOCAL_TZ).replace(tzinfo=None)

class AdminRole(str, enum.Enum):
    ADMIN = "admin"

class ProjectStatus(str, enum.Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"

class StockStatus(str, enum.Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"

class ProfitCategory(str, enum.Enum):
    PROJECT = "project"
    STOCK = "stock"

class Admin(Base):
    __tablename__ = "admins"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), default=AdminRole.ADMIN.value)
    is_active = Column(Integer, default=1)
    created_at = Column(DateTime, default=now_local)

class Project(Base):
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    status = Column(String(30), default=ProjectStatus.PLANNING.value, index=True)
    start_date = Column(Date)
    budget = Column(Float, default=0.0)
    profit = Column(Float, default=0.0)
    description = Column(Text)
    created_at = Column(DateTime, default=now_local, index=True)
    updated_at = Column(DateTime, default=now_local, onupdate=now_local)

class StockItem(Base):
    __tablename__ = "stock"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False, index=True)
    category = Column(String(50), default="general")
    quantity = Column(Integer, default=0)
    unit_price = Column(Float, default=0.0)
    min_threshold = Column(Integer, default=0)  # at or below this the item is "low stock"
    supplier = Column(String(150))
    created_at = Column(DateTime, default=now_local)
    updated_at = Column(DateTime, default=now_local, onupdate=now_local)

class ProfitRecord(Base):
    __tablename__ = "profits"
    id = Column(Integer, primary_key=True, index=True)
    source = Column(String(150), nullable=False)
    category = Column(String(20), default=ProfitCategory.PROJECT.value, index=True)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    margin = Column(Float, default=0.0)  # percent
    description = Column(Text)
    created_at = Column(DateTime, default=now_local)
    updated_at = Column(DateTime, default=now_local, onupdate=now_local)
