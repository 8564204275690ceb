from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify
from flask_login import login_required
from dao import product as product_dao, supplier as supplier_dao, inventory as inv_dao
from db.models.product import PRODUCT_CATEGORIES, ProductStatus
from utils.errors import PersistenceFailure

product_bp = Blueprint("product_web", __name__)


def _form_fields():
    return dict(
        sku=request.form.get("sku", ""),
        name=request.form.get("name", ""),
        category=request.form.get("category", ""),
        supplier_id=request.form.get("supplier_id"),
        unit_cost=request.form.get("unit_cost"),
        sale_price=request.form.get("sale_price"),
        reorder_point=request.form.get("reorder_point"),
        reorder_quantity=request.form.get("reorder_quantity"),
        description=request.form.get("description"),
        storage_location=request.form.get("storage_location"),
        status=request.form.get("status"),
    )


def _render_form(action, product):
    return render_template(
        "product/product_form.html",
        action=action,
        product=product,
        suppliers=supplier_dao.list_suppliers(),
        categories=PRODUCT_CATEGORIES,
        statuses=list(ProductStatus),
    )


@product_bp.route("/products")
@login_required
def products_list():
    q = request.args.get("q", "")
    sort = request.args.get("sort")
    products = product_dao.list_products(search=q, sort=sort)
    rows = [
        {
            "product": p,
            "on_hand": inv_dao.total_quantity(p.inventory_items),
            "low": inv_dao.is_low_stock(p, p.inventory_items),
        }
        for p in products
    ]
    return render_template("product/products.html", rows=rows, q=q, sort=sort)


@product_bp.route("/products/api/check-sku")
@login_required
def products_api_check_sku():
    sku = request.args.get("sku", "")
    exclude_id = request.args.get("exclude_id", type=int)
    try:
        product_dao.validate_sku(sku, exclude_id=exclude_id)
    except ValueError as e:
        return jsonify({"ok": False, "error": str(e)})
    return jsonify({"ok": True})


@product_bp.route("/products/add", methods=["GET", "POST"])
@login_required
def products_add():
    if request.method == "POST":
        try:
            product_dao.create_product(**_form_fields())
            flash("Product added", "success")
            return redirect(url_for("product_web.products_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except PersistenceFailure:
            flash("Could not save the product, please try again.", "danger")
    return _render_form("add", None)


@product_bp.route("/products/edit/<int:product_id>", methods=["GET", "POST"])
@login_required
def products_edit(product_id: int):
    p = product_dao.get_product(product_id)
    if not p:
        flash("Product not found", "warning")
        return redirect(url_for("product_web.products_list"))
    if request.method == "POST":
        try:
            product_dao.update_product(product_id, **_form_fields())
            flash("Product updated", "success")
            return redirect(url_for("product_web.products_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except PersistenceFailure:
            flash("Could not save the product, please try again.", "danger")
    return _render_form("edit", p)
