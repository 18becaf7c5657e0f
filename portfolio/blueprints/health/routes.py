from flask import jsonify

from . import health_bp


@health_bp.route('', methods=['GET'])
def health():
    """健康检查 (不受 IP 封禁影响)"""
    return jsonify({'status': 'ok'})
