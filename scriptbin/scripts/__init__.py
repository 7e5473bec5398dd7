"""Script hosting blueprint."""
from flask import Blueprint


scripts_bp = Blueprint("scripts", __name__)

from . import routes  # noqa: E402
