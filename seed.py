# seed.py - dữ liệu mẫu: nhà cung cấp, sản phẩm, bệnh nhân
from configs import db
from db.models.supplier import Supplier
from db.models.product import Product
from db.models.patient import Patient
from dao import product as product_dao, patient as patient_dao
from app import app  # Flask app


# -------- Suppliers --------
def seed_suppliers():
    suppliers = [
        # name, phone, email, customer_reference
        ("Dentaire Distribution", "+33 1 40 00 00 01", "contact@dentaire-distrib.fr", "CLI-0042"),
        ("Implant Direct Europe", "+33 1 40 00 00 02", "orders@implantdirect.eu", "IDE-7781"),
        ("Medisteril", "+33 4 72 00 00 03", "service@medisteril.fr", None),
    ]
    for name, phone, email, ref in suppliers:
        s = Supplier.query.filter_by(name=name).first()
        if not s:
            db.session.add(
                Supplier(name=name, phone=phone, email=email, customer_reference=ref)
            )
        else:
            # cập nhật nhẹ nếu đã tồn tại
            s.phone = phone
            s.email = email
            s.customer_reference = ref
    db.session.commit()
    print("✓ Suppliers seeded/updated")


def get_supplier_id(name: str) -> int:
    s = Supplier.query.filter_by(name=name).first()
    if not s:
        raise RuntimeError(f"Supplier '{name}' missing. Run seed_suppliers() first.")
    return s.id


# -------- Products --------
def seed_products():
    products = [
        # sku, name, category, supplier, unit_cost, sale_price, reorder_point, reorder_qty, location
        ("IMP-TI-4010", "Implant titane 4.0x10", "implants", "Implant Direct Europe", 120, 350, 5, 20, "Armoire A1"),
        ("IMP-ZR-4512", "Implant zircone 4.5x12", "implants", "Implant Direct Europe", 180, 520, 3, 10, "Armoire A1"),
        ("DRL-2MM", "Foret pilote 2 mm", "surgical-drills", "Dentaire Distribution", 25, 60, 4, 12, "Tiroir B2"),
        ("SUT-RES-40", "Fil résorbable 4-0", "suture-materials", "Dentaire Distribution", 3, 9, 30, 100, "Tiroir C1"),
        ("ANE-ART-4", "Articaïne 4% (cartouche)", "anesthetics", "Medisteril", 1, 4, 50, 200, "Réfrigérateur"),
        ("BONE-XEN-05", "Substitut osseux 0.5 g", "bone-materials", "Implant Direct Europe", 45, 110, 5, 10, "Armoire A2"),
    ]
    for sku, name, category, supplier, cost, price, rp, rq, location in products:
        if Product.query.filter_by(sku=sku).first():
            continue
        product_dao.create_product(
            sku=sku,
            name=name,
            category=category,
            supplier_id=get_supplier_id(supplier),
            unit_cost=cost,
            sale_price=price,
            reorder_point=rp,
            reorder_quantity=rq,
            storage_location=location,
        )
    print("✓ Products seeded (INITIAL inventory rows created)")


# -------- Patients --------
def seed_patients():
    patients = [
        ("Marie", "Dupont", "marie.dupont@example.com", "0601020304", "1980-04-12", ["Pénicilline"], []),
        ("Jean", "Martin", None, "0605060708", "1975-11-02", [], [
            {"position": "36", "date": "2023-05-10", "type": "Titane", "surgeon": "Dr. Leroy"}
        ]),
        ("Sophie", "Bernard", "sophie.b@example.com", None, None, [], []),
    ]
    for first, last, email, phone, dob, allergies, implants in patients:
        if Patient.query.filter_by(first_name=first, last_name=last).first():
            continue
        patient_dao.create_patient(
            first_name=first,
            last_name=last,
            email=email,
            phone=phone,
            date_of_birth=dob,
            medical_history={"allergies": allergies},
            dental_history={"implants": implants},
        )
    print("✓ Patients seeded")


if __name__ == "__main__":
    with app.app_context():
        db.create_all()
        seed_suppliers()
        seed_products()
        seed_patients()
