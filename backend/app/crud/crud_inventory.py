import logging
from sqlalchemy.orm import Session
from app.models.base import (
    Project, StockItem, ProfitRecord, StockStatus, ProfitCategory, now_local
)
from app.schemas.schemas import (
    ProjectCreate, ProjectUpdate, StockItemCreate, StockItemUpdate,
    ProfitRecordCreate, ProfitRecordUpdate, StockItemOut
)
from typing import List, Optional, Dict, Any, Union
from datetime import datetime, date, timedelta

logger = logging.getLogger(__name__)

# Fields a client may never overwrite through an update body
PROTECTED_FIELDS = ("id", "created_at", "updated_at")

def _apply_update(db: Session, obj, update_data: Dict[str, Any]):
    for field, value in update_data.items():
        if field in PROTECTED_FIELDS:
            continue
        setattr(obj, field, value)
    obj.updated_at = now_local()
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def _delete(db: Session, obj) -> None:
    db.delete(obj)
    db.commit()

# ============================================================
# PROJECTS
# ============================================================

def get_projects(db: Session, status: Optional[str] = None) -> List[Project]:
    query = db.query(Project)
    if status:
        query = query.filter(Project.status == status)
    return query.order_by(Project.id).all()

def get_project(db: Session, project_id: int) -> Optional[Project]:
    return db.query(Project).filter(Project.id == project_id).first()

def create_project(db: Session, project: ProjectCreate) -> Project:
    now = now_local()
    db_project = Project(**project.model_dump(), created_at=now, updated_at=now)
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    logger.info("Created project %s (%s)", db_project.id, db_project.name)
    return db_project

def update_project(db: Session, project_id: int, project_in: ProjectUpdate) -> Optional[Project]:
    db_project = get_project(db, project_id)
    if not db_project:
        return None
    db_project = _apply_update(db, db_project, project_in.model_dump(exclude_unset=True))
    logger.info("Updated project %s", project_id)
    return db_project

def delete_project(db: Session, project_id: int) -> bool:
    db_project = get_project(db, project_id)
    if not db_project:
        return False
    _delete(db, db_project)
    logger.info("Deleted project %s", project_id)
    return True

# ============================================================
# STOCK
# ============================================================

def is_low_stock(item: StockItem) -> bool:
    return (item.quantity or 0) <= (item.min_threshold or 0)

def get_stock_status(item: StockItem) -> str:
    if (item.quantity or 0) == 0:
        return StockStatus.OUT_OF_STOCK.value
    if is_low_stock(item):
        return StockStatus.LOW_STOCK.value
    return StockStatus.IN_STOCK.value

def stock_item_out(item: StockItem) -> StockItemOut:
    item_out = StockItemOut.model_validate(item)
    item_out.total_value = (item.quantity or 0) * (item.unit_price or 0)
    item_out.stock_status = get_stock_status(item)
    return item_out

def get_stock_items(db: Session, low_stock: bool = False) -> List[StockItem]:
    items = db.query(StockItem).order_by(StockItem.id).all()
    if low_stock:
        items = [i for i in items if is_low_stock(i)]
    return items

def get_stock_item(db: Session, item_id: int) -> Optional[StockItem]:
    return db.query(StockItem).filter(StockItem.id == item_id).first()

def get_stock_item_by_name(db: Session, name: str) -> Optional[StockItem]:
    return db.query(StockItem).filter(StockItem.name == name).first()

def create_stock_item(db: Session, item: StockItemCreate) -> StockItem:
    now = now_local()
    db_item = StockItem(**item.model_dump(), created_at=now, updated_at=now)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    logger.info("Created stock item %s (%s)", db_item.id, db_item.name)
    return db_item

def update_stock_item(db: Session, item_id: int, item_in: StockItemUpdate) -> Optional[StockItem]:
    db_item = get_stock_item(db, item_id)
    if not db_item:
        return None
    db_item = _apply_update(db, db_item, item_in.model_dump(exclude_unset=True))
    logger.info("Updated stock item %s", item_id)
    return db_item

def delete_stock_item(db: Session, item_id: int) -> bool:
    db_item = get_stock_item(db, item_id)
    if not db_item:
        return False
    _delete(db, db_item)
    logger.info("Deleted stock item %s", item_id)
    return True

# ============================================================
# PROFITS
# ============================================================

def month_bounds(month: str):
    """Return the first day of a YYYY-MM month and the first day of the next one."""
    start = datetime.strptime(month, "%Y-%m").date()
    end = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
    return start, end

def get_profit_records(db: Session, month: Optional[str] = None, category: Optional[str] = None) -> List[ProfitRecord]:
    query = db.query(ProfitRecord)
    if month:
        start, end = month_bounds(month)
        query = query.filter(ProfitRecord.date >= start, ProfitRecord.date < end)
    if category:
        query = query.filter(ProfitRecord.category == category)
    return query.order_by(ProfitRecord.id).all()

def get_profit_record(db: Session, record_id: int) -> Optional[ProfitRecord]:
    return db.query(ProfitRecord).filter(ProfitRecord.id == record_id).first()

def create_profit_record(db: Session, record: ProfitRecordCreate) -> ProfitRecord:
    now = now_local()
    db_record = ProfitRecord(**record.model_dump(), created_at=now, updated_at=now)
    db.add(db_record)
    db.commit()
    db.refresh(db_record)
    logger.info("Created profit record %s (%s %.2f)", db_record.id, db_record.source, db_record.amount)
    return db_record

def update_profit_record(db: Session, record_id: int, record_in: ProfitRecordUpdate) -> Optional[ProfitRecord]:
    db_record = get_profit_record(db, record_id)
    if not db_record:
        return None
    db_record = _apply_update(db, db_record, record_in.model_dump(exclude_unset=True))
    logger.info("Updated profit record %s", record_id)
    return db_record

def delete_profit_record(db: Session, record_id: int) -> bool:
    db_record = get_profit_record(db, record_id)
    if not db_record:
        return False
    _delete(db, db_record)
    logger.info("Deleted profit record %s", record_id)
    return True

# ============================================================
# DASHBOARD ANALYTICS
# ============================================================

def format_amount(amount: float) -> str:
    """1500 -> '1,500', 1500.5 -> '1,500.5', at most three decimals"""
    return f"{amount:,.3f}".rstrip("0").rstrip(".")

def format_time_ago(value: Union[datetime, date, None], now: Optional[datetime] = None) -> str:
    if value is None:
        return "Unknown"
    if not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())
    now = now or now_local()
    diff_in_minutes = int((now - value).total_seconds() // 60)

    if diff_in_minutes < 60:
        return f"{diff_in_minutes} minutes ago"
    elif diff_in_minutes < 1440:
        return f"{diff_in_minutes // 60} hours ago"
    return f"{diff_in_minutes // 1440} days ago"

def _project_timestamp(project: Project):
    ts = project.created_at or project.start_date
    if ts is None:
        ts = datetime.min
    elif not isinstance(ts, datetime):
        ts = datetime.combine(ts, datetime.min.time())
    # later inserts win ties
    return ts, project.id or 0

def generate_recent_activity(projects: List[Project], stock: List[StockItem],
                             profits: List[ProfitRecord], now: Optional[datetime] = None) -> List[Dict[str, str]]:
    activities = []

    recent_projects = sorted(projects, key=_project_timestamp, reverse=True)[:2]
    for project in recent_projects:
        activities.append({
            "icon": "fas fa-project-diagram",
            "title": f"Project {project.status}: {project.name}",
            "time": format_time_ago(project.created_at or project.start_date, now),
        })

    for item in [i for i in stock if is_low_stock(i)][:2]:
        activities.append({
            "icon": "fas fa-exclamation-triangle",
            "title": f"Low stock alert: {item.name}",
            "time": "Now",
        })

    recent_profits = sorted(profits, key=lambda r: r.date, reverse=True)[:1]
    for profit in recent_profits:
        activities.append({
            "icon": "fas fa-chart-line",
            "title": f"Profit recorded: ${format_amount(profit.amount or 0)} from {profit.source}",
            "time": format_time_ago(profit.date, now),
        })

    return activities[:4]

def get_dashboard_analytics(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Recompute every dashboard total from a full read of all three collections"""
    projects = get_projects(db)
    stock = get_stock_items(db)
    profits = get_profit_records(db)

    projects_by_status: Dict[str, int] = {}
    for p in projects:
        projects_by_status[p.status] = projects_by_status.get(p.status, 0) + 1

    return {
        "total_projects": len(projects),
        "total_stock_items": sum(i.quantity or 0 for i in stock),
        "total_profit": sum(r.amount or 0 for r in profits),
        "stock_value": get_stock_value(stock),
        "projects_by_status": projects_by_status,
        "low_stock_items": len([i for i in stock if is_low_stock(i)]),
        "recent_activity": generate_recent_activity(projects, stock, profits, now),
    }

def get_stock_value(stock: List[StockItem]) -> float:
    return sum((i.quantity or 0) * (i.unit_price or 0) for i in stock)

def get_profit_analytics(db: Session, month: Optional[str] = None) -> Dict[str, Any]:
    month = month or now_local().strftime("%Y-%m")
    start, end = month_bounds(month)
    profits = get_profit_records(db)
    stock_value = get_stock_value(get_stock_items(db))

    monthly_profit = sum(r.amount or 0 for r in profits if start <= r.date < end)
    project_revenue = sum(r.amount or 0 for r in profits if r.category == ProfitCategory.PROJECT.value)
    stock_revenue = sum(r.amount or 0 for r in profits if r.category == ProfitCategory.STOCK.value)
    stock_turnover = round(stock_revenue / stock_value * 100, 1) if stock_value > 0 else 0.0

    return {
        "month": month,
        "monthly_profit": monthly_profit,
        "project_revenue": project_revenue,
        "stock_revenue": stock_revenue,
        "stock_value": stock_value,
        "stock_turnover": stock_turnover,
    }
