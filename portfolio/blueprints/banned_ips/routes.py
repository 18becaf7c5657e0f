from flask import g, jsonify

from . import banned_ips_bp
from portfolio.schemas import BannedIpCreate
from portfolio.services.inbox_service import BannedIpService
from portfolio.utils.decorators import admin_required, validate_body


@banned_ips_bp.route('', methods=['GET'])
@admin_required
def list_banned_ips():
    return jsonify(BannedIpService.list_banned())


@banned_ips_bp.route('', methods=['POST'])
@admin_required
@validate_body(BannedIpCreate)
def ban_ip():
    entry = BannedIpService.ban(g.body.ip, g.body.reason)
    return jsonify(entry), 201


@banned_ips_bp.route('/<path:ip>', methods=['DELETE'])
@admin_required
def unban_ip(ip):
    # IPv6 地址包含 ':'，路由参数已由 werkzeug 解码
    BannedIpService.unban(ip)
    return '', 204
