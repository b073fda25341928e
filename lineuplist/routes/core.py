from flask import Blueprint, current_app, render_template

from ..festivals import list_for_dropdown

core_bp = Blueprint("core", __name__)


@core_bp.route("/health")
def health():
    return "healthy"


@core_bp.route("/")
def index():
    return render_template(
        "home.html",
        prod=current_app.config["SETTINGS"].prod,
        supportedFestivals=list_for_dropdown(),
    )


@core_bp.route("/faq")
def faq():
    return render_template("faq.html", prod=current_app.config["SETTINGS"].prod)
