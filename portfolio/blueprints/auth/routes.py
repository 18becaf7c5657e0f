from flask import g, jsonify

from . import auth_bp
from portfolio.schemas import LoginRequest, PasswordChangeRequest
from portfolio.services.auth_service import AuthService
from portfolio.utils.decorators import admin_required, validate_body
from portfolio.utils.security import rate_limit


@auth_bp.route('/login', methods=['POST'])
@rate_limit(max_requests=5, window=15 * 60, message='Too many login attempts, please try again later')
@validate_body(LoginRequest)
def login():
    """管理员登录，返回 Bearer 令牌"""
    token = AuthService.login(g.body.username, g.body.password)
    return jsonify({'token': token})


@auth_bp.route('/me', methods=['GET'])
@admin_required
def me():
    return jsonify({'role': g.admin.get('role', 'admin')})


@auth_bp.route('/password', methods=['PUT'])
@rate_limit(max_requests=3, window=60 * 60,
            message='Too many password change attempts, please try again later')
@admin_required
@validate_body(PasswordChangeRequest)
def change_password():
    AuthService.change_password(g.body.currentPassword, g.body.newPassword)
    return jsonify({'message': 'Password updated successfully'})
