from flask import Blueprint, render_template, request, redirect, url_for, flash, session
from flask_login import login_user, logout_user, current_user
from dao import user as user_dao

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        session.pop("_flashes", None)

        email = request.form.get("email", "").strip()
        password = request.form.get("password", "")
        user = user_dao.authenticate(email, password)

        if not user:
            flash("Invalid email or password", "danger")
            return render_template("auth/login.html")

        if not user.is_active:
            flash("This account is disabled", "warning")
            return render_template("auth/login.html")

        login_user(user, remember=True)
        flash("Signed in", "success")
        next_url = request.args.get("next") or url_for("main.home")
        return redirect(next_url)

    return render_template("auth/login.html")


@auth_bp.route("/logout")
def logout():
    if current_user.is_authenticated:
        logout_user()
        session.pop("_flashes", None)
        flash("Signed out", "info")
    return redirect(url_for("auth.login"))
