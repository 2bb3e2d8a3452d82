from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.api import deps
from app.db.session import get_db
from app.models.base import Admin
from app.schemas.schemas import ProjectCreate, ProjectUpdate, ProjectOut, MessageOut
from app.crud import crud_inventory

router = APIRouter()

@router.get("", response_model=List[ProjectOut])
def list_projects(status: Optional[str] = Query(None), db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    return crud_inventory.get_projects(db, status=status)

@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    project = crud_inventory.get_project(db, project_id)
    if not project: raise HTTPException(status_code=404, detail="Project not found")
    return project

@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(*, db: Session = Depends(get_db), project_in: ProjectCreate, current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    return crud_inventory.create_project(db, project_in)

@router.put("/{project_id}", response_model=ProjectOut)
def update_project(*, db: Session = Depends(get_db), project_id: int, project_in: ProjectUpdate, current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    project = crud_inventory.update_project(db, project_id, project_in)
    if not project: raise HTTPException(status_code=404, detail="Project not found")
    return project

@router.delete("/{project_id}", response_model=MessageOut)
def delete_project(project_id: int, db: Session = Depends(get_db), current_admin: Admin = Depends(deps.get_current_active_admin)) -> Any:
    if not crud_inventory.delete_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project deleted successfully"}
