from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError

from src import db
from src.auth import auth_bp
from src.auth.models import User
from src.auth.roles import Role
from src.auth.utils import hash_password, validate_password, validate_username, verify_password
from src.security import SecurityLogger, csrf_protect


@auth_bp.route("/login", methods=["GET", "POST"])
@csrf_protect
def login():
    if current_user.is_authenticated:
        return redirect(url_for("auth.dashboard"))

    if request.method == "GET":
        return render_template("auth/login.html")

    username = (request.form.get("username") or "").strip()
    password = request.form.get("password") or ""
    remember = request.form.get("remember") == "on"

    if not username or not password:
        flash("Username and password are required.", "error")
        return redirect(url_for("auth.login"))

    user = User.query.filter_by(username=username).first()
    if user is None or not verify_password(password, user.password_hash):
        SecurityLogger.log_failed_login(username)
        flash("Invalid username or password.", "error")
        return redirect(url_for("auth.login"))

    login_user(user, remember=remember)
    SecurityLogger.log_successful_login(user.id, user.username)
    return redirect(url_for(user.role.dashboard_endpoint))


@auth_bp.route("/register", methods=["GET", "POST"])
@csrf_protect
def register():
    if current_user.is_authenticated:
        return redirect(url_for("auth.dashboard"))

    if request.method == "GET":
        return render_template("auth/register.html", roles=list(Role))

    username = (request.form.get("username") or "").strip()
    password = request.form.get("password") or ""

    ok, error = validate_username(username)
    if ok:
        ok, error = validate_password(password)
    if not ok:
        flash(error, "error")
        return redirect(url_for("auth.register"))

    try:
        role = Role.parse(request.form.get("role") or Role.PARTICIPANT.value)
    except ValueError:
        flash("Please choose a valid role.", "error")
        return redirect(url_for("auth.register"))

    if User.query.filter_by(username=username).first():
        flash("User with this username already exists.", "error")
        return redirect(url_for("auth.register"))

    user = User(username=username, password_hash=hash_password(password), role=role)
    try:
        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error while registering user")
        flash("Internal server error while creating user. Please try again later.", "error")
        return redirect(url_for("auth.register"))

    current_app.logger.info(f"Registered user {user.username} with role {role.value}")
    flash("Registration successful! You can now log in.", "success")
    return redirect(url_for("auth.login"))


@auth_bp.route("/logout")
def logout():
    logout_user()
    flash("You have been logged out.", "info")
    return redirect(url_for("auth.login"))


@auth_bp.route("/dashboard")
@login_required
def dashboard():
    """Send the logged-in user to the dashboard for their role."""
    return redirect(url_for(current_user.role.dashboard_endpoint))
