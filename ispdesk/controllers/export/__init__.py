from flask import Blueprint

export_bp = Blueprint('export_bp', __name__)


from .export import *
