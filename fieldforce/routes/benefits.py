from typing import Optional

from fastapi import APIRouter, Depends

from ..config import settings
from ..services.mileage import aggregate_mileage, format_money
from ..services.time_savings import estimate_time_savings
from ..services.timesheet import calculate_timesheet
from ..services.windows import format_period, parse_window
from ..storage.provider import Storage, get_storage


router = APIRouter(prefix="/api", tags=["benefits"])


@router.get("/mileage/{employee_id}")
def get_mileage(
    employee_id: str,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    storage: Storage = Depends(get_storage),
):
    start, end = parse_window(startDate, endDate)
    fixes = storage.employee_locations(employee_id, start, end)
    summary = aggregate_mileage(fixes, start, end)
    reimbursement = format_money(summary.reimbursement)
    return {
        "totalMiles": f"{summary.total_miles:.2f}",
        "reimbursement": reimbursement,
        "period": summary.period,
        "message": f"You've earned {reimbursement} in mileage reimbursement!",
    }


@router.get("/timesheet/{employee_id}")
def get_timesheet(
    employee_id: str,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    storage: Storage = Depends(get_storage),
):
    start, end = parse_window(startDate, endDate)
    tasks = storage.completed_tasks(employee_id, start, end)
    employee = storage.get_employee(employee_id)
    hourly_rate = (employee.hourly_rate if employee else None) or settings.default_hourly_rate

    sheet = calculate_timesheet(tasks, hourly_rate)
    return {
        "totalHours": f"{sheet.total_hours:.1f}",
        "regularHours": f"{sheet.regular_hours:.1f}",
        "overtime": f"{sheet.overtime:.1f}",
        "regularPay": format_money(sheet.regular_pay),
        "overtimePay": format_money(sheet.overtime_pay),
        "totalPay": format_money(sheet.total_pay),
        "period": format_period(start, end),
    }


@router.get("/time-savings/{employee_id}")
def get_time_savings(employee_id: str, storage: Storage = Depends(get_storage)):
    savings = estimate_time_savings(storage.completed_tasks(employee_id))
    time_saved = f"{savings.time_saved:.1f}"
    if savings.time_saved > 0:
        message = f"You saved {time_saved} hours thanks to optimized routing!"
    else:
        message = "Keep tracking for time savings insights!"
    return {
        "timeSaved": time_saved,
        "efficiency": f"{savings.efficiency_percent:.1f}" if savings.actual_hours > 0 else "0",
        "message": message,
        "tip": "AI routing helps you finish faster and earn more",
    }
