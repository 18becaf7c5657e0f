from flask import Blueprint

# 注意：url_prefix 在 portfolio/__init__.py 注册时设置，这里不重复设置
stories_bp = Blueprint('stories', __name__)

from . import routes
