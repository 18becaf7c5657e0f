"""管理员认证服务"""
from flask import current_app

from portfolio.exceptions import Unauthorized, ValidationError
from portfolio.extensions import store
from portfolio.utils.auth import create_admin_token, hash_password, verify_password


class AuthService:

    @staticmethod
    def login(username, password):
        """
        校验管理员账号并签发令牌
        配置中的 ADMIN_PASSWORD 始终可以登录，并会重置已存储的哈希 (用于找回密码)
        """
        if username.strip() != current_app.config['ADMIN_USERNAME']:
            raise Unauthorized('Invalid credentials')

        if verify_password(password, store.data['adminPasswordHash']):
            return create_admin_token()

        if password != current_app.config['ADMIN_PASSWORD']:
            raise Unauthorized('Invalid credentials')

        # 只有需要重置哈希时才落盘
        with store.mutation() as data:
            data['adminPasswordHash'] = hash_password(password)
        current_app.logger.warning('Admin password hash reset from configured password')

        return create_admin_token()

    @staticmethod
    def change_password(current_password, new_password):
        with store.mutation() as data:
            stored = data['adminPasswordHash']
            current_valid = verify_password(current_password, stored) or \
                current_password == current_app.config['ADMIN_PASSWORD']
            if not current_valid:
                raise Unauthorized('Current password is incorrect')
            if verify_password(new_password, stored):
                raise ValidationError('New password must be different from the current password')
            data['adminPasswordHash'] = hash_password(new_password)
