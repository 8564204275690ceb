from configs import db
from werkzeug.security import generate_password_hash
from db.models.user import User, UserRole
from app import app  # lấy app để chạy context

with app.app_context():
    users = [
        User(
            email="admin@clinic.local",
            password_hash=generate_password_hash("1"),
            full_name="System Admin",
            role=UserRole.ADMIN,
            is_active=True,
        ),
        User(
            email="dentist@clinic.local",
            password_hash=generate_password_hash("1"),
            full_name="Dr. Dentist",
            role=UserRole.DENTIST,
            is_active=True,
        ),
        User(
            email="assistant@clinic.local",
            password_hash=generate_password_hash("1"),
            full_name="Dental Assistant",
            role=UserRole.ASSISTANT,
            is_active=True,
        ),
        User(
            email="accountant@clinic.local",
            password_hash=generate_password_hash("1"),
            full_name="Clinic Accountant",
            role=UserRole.ACCOUNTANT,
            is_active=True,
        ),
    ]

    for u in users:
        if not User.query.filter_by(email=u.email).first():
            db.session.add(u)
    db.session.commit()

    print("✅ Seeded users with all defined roles")
