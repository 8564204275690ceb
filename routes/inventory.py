from datetime import date
from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required
from dao import inventory as inv_dao, product as product_dao
from db.models.inventory import MovementType
from utils.auth import current_actor_id
from utils.errors import NotAuthenticated, PersistenceFailure

inventory_bp = Blueprint("inventory_web", __name__)


@inventory_bp.route("/inventory/movements")
@login_required
def movements_list():
    product_id = request.args.get("product_id", type=int)
    movements = inv_dao.list_movements(product_id)
    product = product_dao.get_product(product_id) if product_id else None
    return render_template(
        "inventory/movements.html", movements=movements, product=product
    )


@inventory_bp.route("/inventory/movements/add/<int:product_id>", methods=["GET", "POST"])
@login_required
def movements_add(product_id: int):
    p = product_dao.get_product(product_id)
    if not p:
        flash("Product not found", "warning")
        return redirect(url_for("product_web.products_list"))
    if request.method == "POST":
        try:
            inv_dao.apply_movement(
                product_id=p.id,
                type=request.form.get("type", "IN"),
                quantity=request.form.get("quantity"),
                batch_number=request.form.get("batch_number", ""),
                actor_id=current_actor_id(),
                reference=request.form.get("reference"),
                notes=request.form.get("notes"),
            )
            flash("Movement recorded", "success")
            return redirect(url_for("product_web.products_list"))
        except ValueError as e:
            flash(str(e), "warning")
        except NotAuthenticated:
            flash("Please sign in again.", "danger")
            return redirect(url_for("auth.login"))
        except PersistenceFailure:
            flash("Could not record the movement, please try again.", "danger")
    return render_template(
        "inventory/movement_form.html",
        product=p,
        types=list(MovementType),
        # lô mặc định: SKU-ngày
        default_batch=f"{p.sku}-{date.today().isoformat()}",
    )
