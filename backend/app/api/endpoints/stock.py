from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.api import deps
from app.db.session import get_db
from app.models.base import Admin
from app.schemas.schemas import StockItemCreate, StockItemUpdate, StockItemOut, MessageOut
from app.crud import crud_inventory

router = APIRouter()

@router.get("", response_model=List[StockItemOut])
def list_stock(low_stock: bool = Query(False), db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    items = crud_inventory.get_stock_items(db, low_stock=low_stock)
    return [crud_inventory.stock_item_out(i) for i in items]

@router.get("/{item_id}", response_model=StockItemOut)
def get_stock_item(item_id: int, db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    item = crud_inventory.get_stock_item(db, item_id)
    if not item: raise HTTPException(status_code=404, detail="Stock item not found")
    return crud_inventory.stock_item_out(item)

@router.post("", response_model=StockItemOut, status_code=status.HTTP_201_CREATED)
def create_stock_item(*, db: Session = Depends(get_db), item_in: StockItemCreate, current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    return crud_inventory.stock_item_out(crud_inventory.create_stock_item(db, item_in))

@router.put("/{item_id}", response_model=StockItemOut)
def update_stock_item(*, db: Session = Depends(get_db), item_id: int, item_in: StockItemUpdate, current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    item = crud_inventory.update_stock_item(db, item_id, item_in)
    if not item: raise HTTPException(status_code=404, detail="Stock item not found")
    return crud_inventory.stock_item_out(item)

@router.delete("/{item_id}", response_model=MessageOut)
def delete_stock_item(item_id: int, db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    if not crud_inventory.delete_stock_item(db, item_id):
        raise HTTPException(status_code=404, detail="Stock item not found")
    return {"message": "Stock item deleted successfully"}
