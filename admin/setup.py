# admin/setup.py
from flask import redirect, url_for, request, flash
from flask_login import current_user, logout_user
from flask_admin import Admin, AdminIndexView, expose
from flask_admin.contrib.sqla import ModelView
from flask_admin.menu import MenuLink
from configs import db
from db.models.user import UserRole


# Chặn truy cập nếu không phải admin


class MyAdminIndex(AdminIndexView):
    @expose("/")
    def index(self):
        # Chưa đăng nhập -> đưa về trang login (KHÔNG flash lỗi)
        if not current_user.is_authenticated:
            return redirect(url_for("auth.login", next=request.url))

        if not current_user.has_role(UserRole.ADMIN):
            flash("You are not allowed to open the admin area.", "danger")
            return redirect(url_for("main.home"))

        return super().index()

    @expose("/logout")
    def admin_logout(self):
        if current_user.is_authenticated:
            logout_user()
            flash("Signed out", "success")
        return redirect(url_for("auth.login"))

    def is_accessible(self):
        return current_user.is_authenticated and current_user.has_role(UserRole.ADMIN)

    def inaccessible_callback(self, name, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for("auth.login", next=request.url))

        flash("You are not allowed to open the admin area.", "danger")
        return redirect(url_for("main.home"))


class SecureModelView(ModelView):
    can_view_details = True
    can_export = True

    def is_accessible(self):
        return current_user.is_authenticated and current_user.has_role(UserRole.ADMIN)

    def inaccessible_callback(self, name, **kwargs):
        return redirect(url_for("auth.login", next=request.url))


class UserView(SecureModelView):
    column_exclude_list = ["password_hash"]
    column_searchable_list = ["email", "full_name"]
    form_excluded_columns = ["password_hash"]


class ProductView(SecureModelView):
    column_searchable_list = ["sku", "name"]
    column_filters = ["status", "category", "supplier_id"]
    column_list = ["id", "sku", "name", "category", "supplier", "sale_price", "status"]


# movement là sự kiện bất biến: chỉ xem, không sửa/xoá
class MovementView(SecureModelView):
    can_create = False
    can_edit = False
    can_delete = False
    column_filters = ["type", "product_id", "created_at"]
    column_list = ["id", "product", "type", "quantity", "batch_number", "reference", "created_at"]


class TreatmentView(SecureModelView):
    column_filters = ["type", "date", "patient_id"]
    column_list = ["id", "patient", "date", "type", "cost"]


def init_admin(app):

    admin = Admin(
        app,
        name="Clinic Admin",
        index_view=MyAdminIndex(url="/manage"),
        url="/manage",
    )
    # Import model ở đây để tránh circular import
    from db.models.user import User
    from db.models.supplier import Supplier
    from db.models.product import Product
    from db.models.inventory import InventoryItem, InventoryMovement
    from db.models.patient import Patient
    from db.models.treatment import Treatment, TreatmentProduct

    admin.add_view(
        UserView(User, db.session, category="System", endpoint="admin_user", name="Users")
    )
    admin.add_view(
        SecureModelView(
            Supplier,
            db.session,
            category="Master Data",
            endpoint="admin_supplier",
            name="Suppliers",
        )
    )
    admin.add_view(
        ProductView(
            Product,
            db.session,
            category="Master Data",
            endpoint="admin_product",
            name="Products",
        )
    )
    admin.add_view(
        SecureModelView(
            InventoryItem,
            db.session,
            category="Inventory",
            endpoint="admin_inventory_item",
            name="Inventory Items",
        )
    )
    admin.add_view(
        MovementView(
            InventoryMovement,
            db.session,
            category="Inventory",
            endpoint="admin_inventory_movement",
            name="Movements",
        )
    )
    admin.add_view(
        SecureModelView(
            Patient,
            db.session,
            category="Clinic",
            endpoint="admin_patient",
            name="Patients",
        )
    )
    admin.add_view(
        TreatmentView(
            Treatment,
            db.session,
            category="Clinic",
            endpoint="admin_treatment",
            name="Treatments",
        )
    )
    admin.add_view(
        SecureModelView(
            TreatmentProduct,
            db.session,
            category="Clinic",
            endpoint="admin_treatment_product",
            name="Treatment Lines",
        )
    )
    admin.add_link(
        MenuLink(
            name="Logout",
            category="System",
            endpoint="admin.admin_logout",
        )
    )

    return admin
