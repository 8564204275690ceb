# dao/product.py
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from configs import db
from db.models.product import Product, ProductStatus, CATEGORY_NAMES
from db.models.supplier import Supplier
from dao import inventory as inv_dao
from utils.errors import PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)


def _dec(x, label: str) -> Decimal:
    try:
        d = Decimal(str(x if x not in (None, "") else 0))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{label} must be a number.")
    if not d.is_finite():
        raise ValidationError(f"{label} must be a number.")
    if d < 0:
        raise ValidationError(f"{label} cannot be negative.")
    return d


def _non_negative_int(x, label: str) -> int:
    try:
        n = int(x if x not in (None, "") else 0)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")
    if n < 0:
        raise ValidationError(f"{label} cannot be negative.")
    return n


def _to_status(v) -> ProductStatus:
    if isinstance(v, ProductStatus):
        return v
    s = (v or "").strip().upper()
    try:
        return ProductStatus[s]
    except KeyError:
        raise ValidationError("Unknown product status.")


# ---------- queries ----------
def list_products(search: Optional[str] = None, sort: Optional[str] = None) -> List[Product]:
    q = Product.query
    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        q = q.filter(
            or_(
                Product.name.ilike(like),
                Product.sku.ilike(like),
                Product.category.ilike(like),
            )
        )
    if sort == "asc":
        q = q.order_by(Product.category.asc(), Product.name.asc())
    elif sort == "desc":
        q = q.order_by(Product.category.desc(), Product.name.asc())
    else:
        q = q.order_by(Product.name.asc())
    return q.all()


def get_product(product_id: int) -> Optional[Product]:
    return Product.query.get(product_id)


def validate_sku(sku: str, exclude_id: Optional[int] = None) -> str:
    """SKU phải có và không trùng với sản phẩm khác (bỏ qua chính nó khi sửa)."""
    sku = (sku or "").strip()
    if not sku:
        raise ValidationError("SKU is required.")
    qry = Product.query.filter(Product.sku == sku)
    if exclude_id:
        qry = qry.filter(Product.id != int(exclude_id))
    if db.session.query(qry.exists()).scalar():
        raise ValidationError("This SKU already exists.")
    return sku


def _clean_fields(
    name, category, supplier_id, unit_cost, sale_price, reorder_point, reorder_quantity
) -> dict:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Product name is required.")
    if category not in CATEGORY_NAMES:
        raise ValidationError("Please choose a valid category.")
    if not supplier_id or not Supplier.query.get(int(supplier_id)):
        raise ValidationError("Please choose a supplier.")
    return dict(
        name=name,
        category=category,
        supplier_id=int(supplier_id),
        unit_cost=_dec(unit_cost, "Unit cost"),
        sale_price=_dec(sale_price, "Sale price"),
        reorder_point=_non_negative_int(reorder_point, "Reorder point"),
        reorder_quantity=_non_negative_int(reorder_quantity, "Reorder quantity"),
    )


# ---------- mutations ----------
def create_product(
    sku: str,
    name: str,
    category: str,
    supplier_id: int,
    unit_cost=0,
    sale_price=0,
    reorder_point=0,
    reorder_quantity=0,
    description: str | None = None,
    storage_location: str | None = None,
    status=None,
) -> Product:
    sku = validate_sku(sku)
    fields = _clean_fields(
        name, category, supplier_id, unit_cost, sale_price, reorder_point, reorder_quantity
    )
    p = Product(
        sku=sku,
        description=description or None,
        storage_location=storage_location or None,
        status=_to_status(status) if status else ProductStatus.ACTIVE,
        **fields,
    )
    db.session.add(p)
    db.session.flush()  # cần p.id
    # mỗi sản phẩm có sẵn 1 bản ghi tồn, quantity 0, lô INITIAL
    inv_dao.ensure_inventory_item(p.id)
    _commit()
    logger.info("Created product %s (%s)", p.sku, p.id)
    return p


def update_product(
    product_id: int,
    sku: str,
    name: str,
    category: str,
    supplier_id: int,
    unit_cost=0,
    sale_price=0,
    reorder_point=0,
    reorder_quantity=0,
    description: str | None = None,
    storage_location: str | None = None,
    status=None,
) -> Product:
    p = Product.query.get_or_404(product_id)
    p.sku = validate_sku(sku, exclude_id=p.id)
    for k, v in _clean_fields(
        name, category, supplier_id, unit_cost, sale_price, reorder_point, reorder_quantity
    ).items():
        setattr(p, k, v)
    p.description = description or None
    p.storage_location = storage_location or None
    if status:
        p.status = _to_status(status)
    _commit()
    return p


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Product commit failed")
        raise PersistenceFailure("Could not save the product.") from e
