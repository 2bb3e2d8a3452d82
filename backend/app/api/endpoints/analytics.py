from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.api import deps
from app.api.endpoints.profits import MONTH_PATTERN
from app.db.session import get_db
from app.models.base import Admin
from app.schemas.schemas import DashboardAnalyticsOut, ProfitAnalyticsOut
from app.crud import crud_inventory

router = APIRouter()

@router.get("/dashboard", response_model=DashboardAnalyticsOut)
def get_dashboard_analytics(db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    return crud_inventory.get_dashboard_analytics(db)

@router.get("/profit", response_model=ProfitAnalyticsOut)
def get_profit_analytics(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, defaults to the current month"),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(deps.get_current_active_admin)
) -> Any:
    return crud_inventory.get_profit_analytics(db, month=month)
