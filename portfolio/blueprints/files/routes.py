from flask import send_from_directory

from . import files_bp
from portfolio.extensions import store


@files_bp.route('/<path:filename>', methods=['GET'])
def uploaded_file(filename):
    """上传目录静态文件 (send_from_directory 拒绝越界路径)"""
    return send_from_directory(store.uploads_dir, filename)
