from functools import wraps

from flask import g, request
from pydantic import ValidationError as SchemaError

from portfolio.exceptions import Unauthorized, ValidationError
from portfolio.utils.auth import decode_admin_token


def admin_required(f):
    """
    检查请求是否携带有效的管理员令牌 (Authorization: Bearer <token>)
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = request.headers.get('Authorization', '')
        if not header.startswith('Bearer '):
            raise Unauthorized('Unauthorized')
        claims = decode_admin_token(header.split(' ', 1)[1].strip())
        if not claims or claims.get('role') != 'admin':
            raise Unauthorized('Invalid or expired token')
        g.admin = claims
        return f(*args, **kwargs)
    return decorated_function


def validate_body(schema):
    """
    使用 pydantic 模型校验 JSON 请求体
    校验通过后模型实例保存在 g.body 中
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            payload = request.get_json(silent=True)
            if payload is None:
                payload = {}
            try:
                g.body = schema.model_validate(payload)
            except SchemaError as e:
                errors = [
                    {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
                    for err in e.errors()
                ]
                raise ValidationError('Validation error', payload={'errors': errors})
            return f(*args, **kwargs)
        return decorated_function
    return decorator
