# dao/report.py
"""
Số liệu dẫn xuất: cảnh báo tồn thấp, dashboard, tài chính.
Mọi hàm tính toán nhận snapshot + `now`, không tự đọc đồng hồ,
nên cùng input luôn ra cùng output.
"""
from datetime import datetime, date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from dateutil.relativedelta import relativedelta
from db.models.patient import Patient
from db.models.product import Product, ProductStatus
from db.models.treatment import Treatment
from dao import inventory as inv_dao
from utils.errors import ValidationError

PERIODS = ("day", "week", "month", "year")


def _midnight(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def _as_datetime(v) -> Optional[datetime]:
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return v
    if isinstance(v, date):
        return datetime(v.year, v.month, v.day)
    try:
        dt = datetime.fromisoformat(str(v).replace("Z", "+00:00"))
    except ValueError:
        return None
    # so sánh với `now` naive
    return dt.replace(tzinfo=None) if dt.tzinfo else dt


# ---------- alerts ----------
def low_stock_products(products: Iterable[Product]) -> List[Product]:
    """Giữ nguyên thứ tự snapshot (name asc)."""
    return [
        p
        for p in products
        if p.status == ProductStatus.ACTIVE
        and inv_dao.is_low_stock(p, p.inventory_items)
    ]


def fetch_low_stock_products() -> List[Product]:
    return low_stock_products(
        Product.query.filter(Product.status == ProductStatus.ACTIVE)
        .order_by(Product.name.asc())
        .all()
    )


# ---------- dashboard ----------
def dashboard_stats(
    patients: Iterable[Patient],
    products: Iterable[Product],
    treatments: Iterable[Treatment],
    now: datetime,
) -> Dict:
    patients = list(patients)
    today = _midnight(now)
    tomorrow = today + timedelta(days=1)
    thirty_days_ago = now - timedelta(days=30)

    today_patients = 0
    for p in patients:
        checkup = _as_datetime((p.dental_history or {}).get("lastCheckup"))
        if checkup is not None and today <= checkup < tomorrow:
            today_patients += 1

    new_patients = sum(
        1 for p in patients if p.created_at is not None and p.created_at >= thirty_days_ago
    )

    revenue = sum(
        (
            Decimal(str(t.cost or 0))
            for t in treatments
            if t.date is not None and t.date >= thirty_days_ago
        ),
        Decimal("0"),
    )

    return {
        "todayPatients": today_patients,
        "newPatients": new_patients,
        "lowStockCount": len(low_stock_products(products)),
        "revenueLastThirtyDays": revenue,
        "patientStats": {
            "total": len(patients),
            "withImplants": sum(
                1 for p in patients if (p.dental_history or {}).get("implants")
            ),
            "withAllergies": sum(
                1 for p in patients if (p.medical_history or {}).get("allergies")
            ),
        },
    }


def fetch_dashboard_stats(now: Optional[datetime] = None) -> Dict:
    return dashboard_stats(
        Patient.query.all(),
        Product.query.filter(Product.status == ProductStatus.ACTIVE)
        .order_by(Product.name.asc())
        .all(),
        Treatment.query.all(),
        now or datetime.now(),
    )


# ---------- finance ----------
def period_start(period: str, now: datetime) -> datetime:
    if period == "day":
        return _midnight(now)
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return now - relativedelta(months=1)
    if period == "year":
        return now - relativedelta(years=1)
    raise ValidationError(f"Unknown period: {period}")


def filter_treatments_by_period(
    treatments: Iterable[Treatment], period: str, now: datetime
) -> List[Treatment]:
    cutoff = period_start(period, now)
    return [t for t in treatments if t.date is not None and t.date >= cutoff]


def finance_stats(treatments: Iterable[Treatment], period: str, now: datetime) -> Dict:
    selected = filter_treatments_by_period(treatments, period, now)
    total = Decimal("0")
    count_by_type: Dict[str, int] = {}
    revenue_by_type: Dict[str, Decimal] = {}
    for t in selected:
        cost = Decimal(str(t.cost or 0))
        key = t.type.value
        total += cost
        count_by_type[key] = count_by_type.get(key, 0) + 1
        revenue_by_type[key] = revenue_by_type.get(key, Decimal("0")) + cost

    count = len(selected)
    return {
        "period": period,
        "total": total,
        "average": (total / count) if count else Decimal("0"),
        "count": count,
        "count_by_type": count_by_type,
        "revenue_by_type": revenue_by_type,
    }


def fetch_finance_stats(period: str, now: Optional[datetime] = None) -> Dict:
    return finance_stats(Treatment.query.all(), period, now or datetime.now())
