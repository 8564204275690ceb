import logging
from typing import Optional, List
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from configs import db
from db.models.supplier import Supplier
from db.models.product import Product
from utils.errors import PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)


def list_suppliers(search: Optional[str] = None) -> List[Supplier]:
    q = Supplier.query
    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        q = q.filter(
            or_(
                Supplier.name.ilike(like),
                Supplier.email.ilike(like),
                Supplier.phone.like(like),
            )
        )
    return q.order_by(Supplier.name.asc()).all()


def get_supplier(supplier_id: int) -> Optional[Supplier]:
    return Supplier.query.get(supplier_id)


def _require_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Supplier name is required.")
    return name


def create_supplier(
    name: str,
    phone: str | None,
    email: str | None,
    customer_reference: str | None = None,
) -> Supplier:
    s = Supplier(
        name=_require_name(name),
        phone=phone or None,
        email=email or None,
        customer_reference=customer_reference or None,
    )
    db.session.add(s)
    _commit()
    return s


def update_supplier(supplier_id: int, **fields) -> Supplier:
    s = Supplier.query.get_or_404(supplier_id)
    if "name" in fields:
        fields["name"] = _require_name(fields["name"])
    for k, v in fields.items():
        setattr(s, k, v if k == "name" else (v or None))
    _commit()
    return s


def delete_supplier(supplier_id: int) -> bool:
    cnt = Product.query.filter_by(supplier_id=supplier_id).count()
    if cnt > 0:
        # còn sản phẩm tham chiếu -> controller flash cảnh báo
        return False
    sup = Supplier.query.get(supplier_id)
    if not sup:
        return False
    db.session.delete(sup)
    _commit()
    return True


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Supplier commit failed")
        raise PersistenceFailure("Could not save the supplier.") from e
