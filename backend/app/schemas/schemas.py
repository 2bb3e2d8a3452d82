from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime, date
from app.models.base import ProfitCategory

# "date" is also a field name on profit records
RecordDate = date

def _not_null(v):
    # Update bodies may omit a required column but never blank it
    if v is None:
        raise ValueError("Field may not be null")
    return v

# ============================================================
# PROJECTS
# ============================================================

class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1)
    status: str = "planning"
    start_date: Optional[date] = None
    budget: float = 0.0
    profit: float = 0.0
    description: Optional[str] = None

class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    status: Optional[str] = None
    start_date: Optional[date] = None
    budget: Optional[float] = None
    profit: Optional[float] = None
    description: Optional[str] = None

    @field_validator("name", "status", "budget", "profit", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)

class ProjectOut(BaseModel):
    id: int
    name: str
    status: str
    start_date: Optional[date] = None
    budget: float
    profit: float
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# ============================================================
# STOCK
# ============================================================

class StockItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = "general"
    quantity: int = Field(0, ge=0)
    unit_price: float = Field(0.0, ge=0)
    min_threshold: int = Field(0, ge=0)
    supplier: Optional[str] = None

class StockItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    min_threshold: Optional[int] = Field(None, ge=0)
    supplier: Optional[str] = None

    @field_validator("name", "category", "quantity", "unit_price", "min_threshold", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)

class StockItemOut(BaseModel):
    id: int
    name: str
    category: str
    quantity: int
    unit_price: float
    min_threshold: int
    supplier: Optional[str] = None
    total_value: float = 0.0
    stock_status: str = "in-stock"
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# ============================================================
# PROFITS
# ============================================================

class ProfitRecordCreate(BaseModel):
    source: str = Field(..., min_length=1)
    category: ProfitCategory = ProfitCategory.PROJECT
    amount: float
    date: RecordDate
    margin: float = 0.0
    description: Optional[str] = None

    class Config:
        use_enum_values = True

class ProfitRecordUpdate(BaseModel):
    source: Optional[str] = Field(None, min_length=1)
    category: Optional[ProfitCategory] = None
    amount: Optional[float] = None
    date: Optional[RecordDate] = None
    margin: Optional[float] = None
    description: Optional[str] = None

    @field_validator("source", "category", "amount", "date", "margin", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)

    class Config:
        use_enum_values = True

class ProfitRecordOut(BaseModel):
    id: int
    source: str
    category: str
    amount: float
    date: RecordDate
    margin: float
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class MessageOut(BaseModel):
    message: str

# ============================================================
# DASHBOARD ANALYTICS
# ============================================================

class ActivityItem(BaseModel):
    icon: str
    title: str
    time: str

class DashboardAnalyticsOut(BaseModel):
    """Totals re-derived from every collection on each request"""
    total_projects: int
    total_stock_items: int
    total_profit: float
    stock_value: float
    projects_by_status: Dict[str, int]
    low_stock_items: int
    recent_activity: List[ActivityItem]

class ProfitAnalyticsOut(BaseModel):
    month: str
    monthly_profit: float
    project_revenue: float
    stock_revenue: float
    stock_value: float
    stock_turnover: float

class ImportResultOut(BaseModel):
    message: str
    success: int
    errors: List[str] = []

# ============================================================
# AUTH & ADMIN SCHEMAS
# ============================================================

class LoginRequest(BaseModel):
    email: str
    password: str

class AdminUser(BaseModel):
    email: str
    role: str

class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    user: AdminUser
    access_token: str
    token_type: str = "bearer"


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    sub: Optional[str] = None
    exp: Optional[int] = None


class AdminOut(BaseModel):
    id: int
    email: str
    role: str
    is_active: int
    created_at: datetime

    class Config:
        from_attributes = True
