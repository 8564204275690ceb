from .user import User
from .supplier import Supplier
from .product import Product

from .inventory import InventoryItem, InventoryMovement
from .patient import Patient
from .treatment import Treatment, TreatmentProduct

__all__ = [n for n in dir() if n[:1].isupper()]
