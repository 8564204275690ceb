from configs import db
from datetime import datetime
import enum


class ProductStatus(enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    OUT_OF_STOCK = "OUT_OF_STOCK"


# (id, tên hiển thị) - danh mục cố định của phòng khám
PRODUCT_CATEGORIES = [
    ("implants", "Implants dentaires"),
    ("surgical-drills", "Forets et fraises chirurgicaux"),
    ("osteotomes", "Ostéotomes"),
    ("surgical-tools", "Pinces et élévateurs"),
    ("navigation-systems", "Systèmes de navigation chirurgicale"),
    ("imaging-equipment", "Radiographie et imagerie"),
    ("surgical-motors", "Moteurs chirurgicaux"),
    ("suture-materials", "Matériaux de suture"),
    ("bone-materials", "Matériaux de régénération osseuse"),
    ("anesthetics", "Anesthésiques locaux"),
    ("sterilization", "Équipement de stérilisation"),
    ("planning-software", "Logiciels de planification"),
    ("prosthetic-materials", "Matériel de prothèse"),
    ("surgical-suction", "Équipement d'aspiration chirurgicale"),
    ("surgical-lighting", "Éclairage chirurgical"),
    ("protective-equipment", "Vêtements et équipements de protection"),
]
CATEGORY_NAMES = dict(PRODUCT_CATEGORIES)


class Product(db.Model):
    __tablename__ = "product"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    sku = db.Column(db.String(60), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)

    supplier_id = db.Column(db.Integer, db.ForeignKey("supplier.id"), nullable=False)
    supplier = db.relationship("Supplier", backref="products")

    unit_cost = db.Column(db.Numeric(12, 2), default=0)
    sale_price = db.Column(db.Numeric(12, 2), default=0)
    reorder_point = db.Column(db.Integer, default=0, nullable=False)
    reorder_quantity = db.Column(db.Integer, default=0, nullable=False)
    storage_location = db.Column(db.String(120))

    status = db.Column(
        db.Enum(ProductStatus, name="productstatus"),
        default=ProductStatus.ACTIVE,
        nullable=False,
    )
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def category_name(self) -> str:
        return CATEGORY_NAMES.get(self.category, self.category)

    def __repr__(self):
        return f"<Product {self.sku}>"
