from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required
from dao import supplier as supplier_dao
from utils.errors import PersistenceFailure

supplier_bp = Blueprint("supplier_web", __name__)


def _form_fields():
    return dict(
        name=request.form.get("name", ""),
        phone=request.form.get("phone"),
        email=request.form.get("email"),
        customer_reference=request.form.get("customer_reference"),
    )


@supplier_bp.route("/suppliers")
@login_required
def suppliers_list():
    q = request.args.get("q", "")
    suppliers = supplier_dao.list_suppliers(search=q)
    return render_template("supplier/suppliers.html", suppliers=suppliers, q=q)


@supplier_bp.route("/suppliers/add", methods=["GET", "POST"])
@login_required
def suppliers_add():
    if request.method == "POST":
        try:
            supplier_dao.create_supplier(**_form_fields())
            flash("Supplier added", "success")
            return redirect(url_for("supplier_web.suppliers_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except PersistenceFailure:
            flash("Could not save the supplier, please try again.", "danger")
    return render_template("supplier/supplier_form.html", action="add", supplier=None)


@supplier_bp.route("/suppliers/edit/<int:supplier_id>", methods=["GET", "POST"])
@login_required
def suppliers_edit(supplier_id: int):
    s = supplier_dao.get_supplier(supplier_id)
    if not s:
        flash("Supplier not found", "warning")
        return redirect(url_for("supplier_web.suppliers_list"))
    if request.method == "POST":
        try:
            supplier_dao.update_supplier(supplier_id, **_form_fields())
            flash("Supplier updated", "success")
            return redirect(url_for("supplier_web.suppliers_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except PersistenceFailure:
            flash("Could not save the supplier, please try again.", "danger")
    return render_template("supplier/supplier_form.html", action="edit", supplier=s)


@supplier_bp.route("/suppliers/delete/<int:supplier_id>", methods=["POST"])
@login_required
def suppliers_delete(supplier_id: int):
    try:
        ok = supplier_dao.delete_supplier(supplier_id)
    except PersistenceFailure:
        flash("Could not delete the supplier, please try again.", "danger")
        return redirect(url_for("supplier_web.suppliers_list"))
    if not ok:
        flash("Cannot delete: the supplier still has products.", "warning")
    else:
        flash("Supplier deleted", "success")
    return redirect(url_for("supplier_web.suppliers_list"))
