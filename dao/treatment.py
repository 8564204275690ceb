# dao/treatment.py
"""
Treatment và các dòng sản phẩm dùng trong treatment.

- Giá tính theo sale_price HIỆN TẠI của sản phẩm, không chụp giá lúc thêm dòng.
- Kiểm tra tồn chỉ mang tính chặn nhập liệu: lưu treatment KHÔNG trừ kho,
  không sinh InventoryMovement.
- Sửa treatment = xoá hết dòng cũ rồi thêm lại toàn bộ (trong cùng 1 transaction).
"""
import logging
from collections import defaultdict
from datetime import datetime, date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from configs import db
from db.models.patient import Patient
from db.models.product import Product
from db.models.inventory import InventoryItem
from db.models.treatment import Treatment, TreatmentProduct, TreatmentType
from dao import inventory as inv_dao
from utils.errors import NotAuthenticated, PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)


def _dec(x) -> Decimal:
    return Decimal(str(x or 0))


def _to_treatment_type(v) -> TreatmentType:
    if isinstance(v, TreatmentType):
        return v
    s = (v or "").strip().upper()
    try:
        return TreatmentType[s]
    except KeyError:
        raise ValidationError("Unknown treatment type.")


def _parse_date(s) -> datetime:
    if isinstance(s, datetime):
        return s
    if isinstance(s, date):
        return datetime(s.year, s.month, s.day)
    if not s:
        raise ValidationError("Treatment date is required.")
    try:
        return datetime.strptime(s, "%Y-%m-%d")
    except ValueError:
        raise ValidationError("Dates must use the YYYY-MM-DD format.")


# ---------- cost engine (pure) ----------
def compute_total_cost(lines: Iterable[Dict], catalog: Dict[int, object]) -> Decimal:
    """
    Tổng = Σ sale_price * quantity.
    Sản phẩm không còn trong catalog thì tính 0, không báo lỗi.
    """
    total = Decimal("0")
    for ln in lines:
        product = catalog.get(int(ln["product_id"]))
        if product is None:
            continue
        total += _dec(product.sale_price) * int(ln["quantity"])
    return total


def line_subtotals(lines: Iterable[Dict], catalog: Dict[int, object]) -> List[Dict]:
    rows = []
    for ln in lines:
        product = catalog.get(int(ln["product_id"]))
        price = _dec(product.sale_price) if product is not None else Decimal("0")
        rows.append(
            {
                "product_id": int(ln["product_id"]),
                "name": product.name if product is not None else "",
                "quantity": int(ln["quantity"]),
                "unit_price": price,
                "subtotal": price * int(ln["quantity"]),
            }
        )
    return rows


def add_line(lines: List[Dict], product_id, quantity) -> List[Dict]:
    """Cùng product thì cộng dồn quantity, không tạo dòng trùng. Trả list mới."""
    qty = inv_dao._positive_int(quantity)
    if not product_id:
        raise ValidationError("Please choose a product.")
    product_id = int(product_id)
    new_lines = []
    merged = False
    for ln in lines:
        if int(ln["product_id"]) == product_id:
            new_lines.append({"product_id": product_id, "quantity": int(ln["quantity"]) + qty})
            merged = True
        else:
            new_lines.append(dict(ln))
    if not merged:
        new_lines.append({"product_id": product_id, "quantity": qty})
    return new_lines


def remove_line(lines: List[Dict], index: int) -> List[Dict]:
    return [dict(ln) for i, ln in enumerate(lines) if i != int(index)]


def validate_stock(
    lines: Iterable[Dict], inventory_snapshot: Iterable, catalog: Dict[int, object]
) -> List[str]:
    """Mỗi dòng thiếu hàng -> 1 message. List rỗng = được phép lưu."""
    by_product = defaultdict(list)
    for it in inventory_snapshot:
        by_product[int(it.product_id)].append(it)

    errors = []
    for ln in lines:
        pid = int(ln["product_id"])
        available = inv_dao.total_quantity(by_product.get(pid, []))
        if available < int(ln["quantity"]):
            product = catalog.get(pid)
            name = product.name if product is not None else f"#{pid}"
            errors.append(f"Insufficient stock for {name} (available: {available})")
    return errors


# ---------- queries ----------
def list_treatments(search: Optional[str] = None) -> List[Treatment]:
    q = Treatment.query.join(Patient, Patient.id == Treatment.patient_id)
    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        type_hits = [t for t in TreatmentType if term.lower() in t.value.lower()]
        conds = [
            (Patient.first_name + " " + Patient.last_name).ilike(like),
            Treatment.notes.ilike(like),
        ]
        if type_hits:
            conds.append(Treatment.type.in_(type_hits))
        q = q.filter(or_(*conds))
    return q.order_by(Treatment.date.desc(), Treatment.id.desc()).all()


def get_treatment(treatment_id: int) -> Optional[Treatment]:
    return Treatment.query.get(treatment_id)


def current_catalog() -> Dict[int, Product]:
    return {p.id: p for p in Product.query.all()}


def lines_of(treatment: Treatment) -> List[Dict]:
    return [{"product_id": ln.product_id, "quantity": ln.quantity} for ln in treatment.lines]


# ---------- mutations ----------
def _normalize_lines(lines: Iterable[Dict]) -> List[Dict]:
    normalized: List[Dict] = []
    for ln in lines or []:
        normalized = add_line(normalized, ln.get("product_id"), ln.get("quantity"))
    return normalized


def _prepare(patient_id, type, lines):
    if not patient_id or not Patient.query.get(int(patient_id)):
        raise ValidationError("Please choose a patient.")
    t_type = _to_treatment_type(type)
    norm = _normalize_lines(lines)

    # đọc mới catalog + tồn mỗi lần lưu, không dùng dữ liệu cũ của form
    catalog = current_catalog()
    errors = validate_stock(norm, InventoryItem.query.all(), catalog)
    if errors:
        raise ValidationError("\n".join(errors), messages=errors)
    return t_type, norm, compute_total_cost(norm, catalog)


def _replace_lines(treatment: Treatment, lines: List[Dict]) -> None:
    TreatmentProduct.query.filter_by(treatment_id=treatment.id).delete()
    db.session.expire(treatment, ["lines"])
    for ln in lines:
        db.session.add(
            TreatmentProduct(
                treatment_id=treatment.id,
                product_id=ln["product_id"],
                quantity=ln["quantity"],
            )
        )


def create_treatment(
    patient_id: int,
    date,
    type,
    notes: str | None,
    lines: List[Dict],
    actor_id: Optional[int],
) -> Treatment:
    if actor_id is None:
        raise NotAuthenticated("User not authenticated")
    t_type, norm, cost = _prepare(patient_id, type, lines)
    t = Treatment(
        patient_id=int(patient_id),
        date=_parse_date(date),
        type=t_type,
        notes=notes or None,
        cost=cost,
        created_by=int(actor_id),
    )
    db.session.add(t)
    db.session.flush()  # cần t.id
    _replace_lines(t, norm)
    _commit()
    logger.info("Created treatment %s (%s, cost %s)", t.id, t_type.value, cost)
    return t


def update_treatment(
    treatment_id: int,
    patient_id: int,
    date,
    type,
    notes: str | None,
    lines: List[Dict],
) -> Treatment:
    t = Treatment.query.get_or_404(treatment_id)
    t_type, norm, cost = _prepare(patient_id, type, lines)
    t.patient_id = int(patient_id)
    t.date = _parse_date(date)
    t.type = t_type
    t.notes = notes or None
    t.cost = cost
    # thay toàn bộ lines: id các dòng sẽ đổi sau mỗi lần sửa
    _replace_lines(t, norm)
    _commit()
    return t


def delete_treatment(treatment_id: int) -> None:
    t = Treatment.query.get_or_404(treatment_id)
    db.session.delete(t)
    _commit()


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Treatment commit failed")
        raise PersistenceFailure("Could not save the treatment.") from e
