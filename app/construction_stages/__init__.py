from flask import Blueprint

construction_stages_bp = Blueprint('construction_stages', __name__, url_prefix='/constructionStages')

from . import routes  # noqa: E402,F401
