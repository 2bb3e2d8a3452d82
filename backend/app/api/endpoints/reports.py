import csv
import io
import logging
from datetime import datetime
import pandas as pd
from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from app.api import deps
from app.db.session import get_db
from app.models.base import Admin, now_local
from app.crud import crud_inventory
from app.schemas.schemas import StockItemCreate, ImportResultOut
from reportlab.lib.pagesizes import letter
from reportlab.lib import colors
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet

logger = logging.getLogger(__name__)

router = APIRouter()

def _plain(value) -> str:
    """Render a cell the way a browser prints a number: 5000.0 -> '5000'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def _csv_response(content: str, filename: str) -> StreamingResponse:
    headers = {
        'Content-Disposition': f'attachment; filename="{filename}"'
    }
    return StreamingResponse(iter([content]), headers=headers, media_type='text/csv')

def _write_section(buffer: io.StringIO, title: str, columns, rows) -> None:
    buffer.write(f"{title}\n")
    buffer.write(",".join(columns) + "\n")
    df = pd.DataFrame(rows, columns=columns)
    df.to_csv(buffer, index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")

@router.get("/export/full")
def export_full(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(deps.get_current_active_admin)
):
    projects = crud_inventory.get_projects(db)
    stock = crud_inventory.get_stock_items(db)
    profits = crud_inventory.get_profit_records(db)
    today = now_local().date()

    buffer = io.StringIO()
    buffer.write("INVENTORY MANAGEMENT SYSTEM - FULL EXPORT\n")
    buffer.write(f"Export Date: {today.month}/{today.day}/{today.year}\n")
    buffer.write(f"Total Projects: {len(projects)}\n")
    buffer.write(f"Total Stock Value: ${crud_inventory.format_amount(crud_inventory.get_stock_value(stock))}\n")
    buffer.write(f"Total Profit: ${crud_inventory.format_amount(sum(r.amount or 0 for r in profits))}\n\n")

    _write_section(buffer, "PROJECTS", ["Name", "Status", "Start Date", "Budget", "Profit", "Description"], [
        [p.name, p.status, _plain(p.start_date), _plain(p.budget), _plain(p.profit), p.description or ""]
        for p in projects
    ])
    buffer.write("\n")

    _write_section(buffer, "STOCK ITEMS", ["Name", "Category", "Quantity", "Unit Price", "Total Value", "Min Threshold", "Supplier"], [
        [i.name, i.category, _plain(i.quantity), _plain(i.unit_price),
         _plain((i.quantity or 0) * (i.unit_price or 0)), _plain(i.min_threshold), i.supplier or ""]
        for i in stock
    ])
    buffer.write("\n")

    _write_section(buffer, "PROFIT RECORDS", ["Source", "Type", "Amount", "Date", "Margin"], [
        [r.source, r.category, _plain(r.amount), _plain(r.date), f"{_plain(r.margin)}%"]
        for r in profits
    ])

    logger.info("Full export generated: %d projects, %d stock items, %d profit records",
                len(projects), len(stock), len(profits))
    return _csv_response(buffer.getvalue(), f"inventory-full-export-{today.isoformat()}.csv")

@router.get("/export/profits")
def export_profit_report(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(deps.get_current_active_admin)
):
    profits = crud_inventory.get_profit_records(db)
    df = pd.DataFrame(
        [[r.source, r.category, _plain(r.amount), _plain(r.date), f"{_plain(r.margin)}%"] for r in profits],
        columns=["Source", "Type", "Amount", "Date", "Margin"],
    )
    # rows are joined, not terminated
    return _csv_response(df.to_csv(index=False, lineterminator="\n").rstrip("\n"), "profit-report.csv")

@router.get("/export/stock")
def export_stock(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(deps.get_current_active_admin)
):
    data = []
    for item in crud_inventory.get_stock_items(db):
        data.append({
            "Name": item.name,
            "Category": item.category,
            "Quantity": item.quantity,
            "Unit Price": item.unit_price,
            "Total Value": (item.quantity or 0) * (item.unit_price or 0),
            "Min Threshold": item.min_threshold,
            "Supplier": item.supplier,
            "Status": crud_inventory.get_stock_status(item)
        })

    df = pd.DataFrame(data, columns=["Name", "Category", "Quantity", "Unit Price", "Total Value", "Min Threshold", "Supplier", "Status"])
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        df.to_excel(writer, index=False, sheet_name='Stock')

    output.seek(0)
    headers = {
        'Content-Disposition': 'attachment; filename="stock_report.xlsx"'
    }
    return StreamingResponse(output, headers=headers, media_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')

@router.get("/profits/pdf")
def export_profits_pdf(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(deps.get_current_active_admin)
):
    profits = crud_inventory.get_profit_records(db)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter)
    elements = []

    styles = getSampleStyleSheet()
    title_style = styles['Title']
    subheading_style = styles['Heading3']
    normal_style = styles['Normal']

    # Header
    elements.append(Paragraph("BongoPortus - Profit Report", title_style))
    elements.append(Paragraph(f"Generated Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}", normal_style))
    elements.append(Paragraph(f"Generated By: {current_admin.email}", normal_style))
    elements.append(Spacer(1, 20))

    # Table Header
    data = [["Source", "Type", "Amount", "Date", "Margin"]]

    total_amount = 0.0
    for r in profits:
        data.append([
            r.source,
            r.category,
            f"${crud_inventory.format_amount(r.amount or 0)}",
            r.date.strftime('%Y-%m-%d'),
            f"{_plain(r.margin)}%"
        ])
        total_amount += r.amount or 0

    table = Table(data, colWidths=[150, 70, 90, 80, 60])
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
        ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
        ('GRID', (0, 0), (-1, -1), 1, colors.black)
    ]))

    elements.append(table)
    elements.append(Spacer(1, 20))
    elements.append(Paragraph(f"Total Profit: ${crud_inventory.format_amount(total_amount)}", subheading_style))

    doc.build(elements)
    buffer.seek(0)

    headers = {
        'Content-Disposition': 'attachment; filename="profit_report.pdf"'
    }
    return StreamingResponse(buffer, headers=headers, media_type='application/pdf')

@router.post("/import/stock", response_model=ImportResultOut)
async def import_stock_excel(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(deps.get_current_active_admin)
):
    if not file.filename or not file.filename.endswith(('.xlsx', '.xls')):
        raise HTTPException(status_code=400, detail="Invalid file format")

    contents = await file.read()
    df = pd.read_excel(io.BytesIO(contents))

    required = ['name', 'category', 'quantity', 'unit_price']
    if not all(col in df.columns for col in required):
        raise HTTPException(status_code=400, detail=f"Missing columns. Required: {required}")

    success_count = 0
    errors = []

    for index, row in df.iterrows():
        try:
            if pd.isna(row["name"]) or not str(row["name"]).strip():
                raise ValueError("Name is required.")
            name = str(row["name"]).strip()
            quantity = int(row['quantity'])

            # Rows for a known item top up its quantity
            item = crud_inventory.get_stock_item_by_name(db, name)
            if item:
                if (item.quantity or 0) + quantity < 0:
                    raise ValueError("Quantity cannot go below zero.")
                item.quantity = (item.quantity or 0) + quantity
                item.updated_at = now_local()
                db.commit()
            else:
                item_in = StockItemCreate(
                    name=name,
                    category=str(row['category']) if pd.notna(row['category']) else "general",
                    quantity=quantity,
                    unit_price=float(row['unit_price']),
                    min_threshold=int(row['min_threshold']) if 'min_threshold' in df.columns and pd.notna(row['min_threshold']) else 0,
                    supplier=str(row['supplier']) if 'supplier' in df.columns and pd.notna(row['supplier']) else None
                )
                crud_inventory.create_stock_item(db, item_in)
            success_count += 1
        except ValueError as e:
            msg = str(e)
            if "invalid literal for int()" in msg or "NaN" in msg:
                errors.append(f"Row {index+2}: Quantity must be a number.")
            elif "could not convert string to float" in msg:
                errors.append(f"Row {index+2}: Unit price must be a number.")
            else:
                errors.append(f"Row {index+2}: {msg}")

    logger.info("Stock import %s: %d rows imported, %d errors", file.filename, success_count, len(errors))
    return {"message": "Import completed", "success": success_count, "errors": errors}
