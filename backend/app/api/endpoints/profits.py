from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.api import deps
from app.db.session import get_db
from app.models.base import Admin, ProfitCategory
from app.schemas.schemas import ProfitRecordCreate, ProfitRecordUpdate, ProfitRecordOut, MessageOut
from app.crud import crud_inventory

router = APIRouter()

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

@router.get("", response_model=List[ProfitRecordOut])
def list_profits(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM"),
    category: Optional[ProfitCategory] = Query(None),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(deps.get_current_active_admin)
) -> Any:
    return crud_inventory.get_profit_records(db, month=month, category=category.value if category else None)

@router.get("/{record_id}", response_model=ProfitRecordOut)
def get_profit(record_id: int, db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    record = crud_inventory.get_profit_record(db, record_id)
    if not record: raise HTTPException(status_code=404, detail="Profit record not found")
    return record

@router.post("", response_model=ProfitRecordOut, status_code=status.HTTP_201_CREATED)
def create_profit(*, db: Session = Depends(get_db), record_in: ProfitRecordCreate, current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    return crud_inventory.create_profit_record(db, record_in)

@router.put("/{record_id}", response_model=ProfitRecordOut)
def update_profit(*, db: Session = Depends(get_db), record_id: int, record_in: ProfitRecordUpdate, current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    record = crud_inventory.update_profit_record(db, record_id, record_in)
    if not record: raise HTTPException(status_code=404, detail="Profit record not found")
    return record

@router.delete("/{record_id}", response_model=MessageOut)
def delete_profit(record_id: int, db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    if not crud_inventory.delete_profit_record(db, record_id):
        raise HTTPException(status_code=404, detail="Profit record not found")
    return {"message": "Profit record deleted successfully"}
