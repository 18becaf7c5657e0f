"""
管理员认证工具：密码哈希与 JWT 令牌
"""
import hashlib
import hmac
from datetime import datetime, timedelta, timezone

from flask import current_app
from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

ALGORITHM = 'HS256'

# 旧版 "salt:hexkey" scrypt 哈希参数
LEGACY_SCRYPT_N = 16384
LEGACY_SCRYPT_R = 8
LEGACY_SCRYPT_P = 1
LEGACY_SCRYPT_DKLEN = 64


def hash_password(password):
    return generate_password_hash(password)


def _verify_legacy_scrypt(password, stored):
    salt, _, expected = stored.partition(':')
    if not salt or not expected:
        return False
    derived = hashlib.scrypt(
        password.encode('utf-8'),
        salt=salt.encode('utf-8'),
        n=LEGACY_SCRYPT_N,
        r=LEGACY_SCRYPT_R,
        p=LEGACY_SCRYPT_P,
        dklen=LEGACY_SCRYPT_DKLEN,
    )
    return hmac.compare_digest(derived.hex(), expected.lower())


def verify_password(password, stored):
    """
    校验密码，兼容三种存储格式：
    werkzeug 哈希 (method$salt$hash)、旧版 salt:hexkey、以及明文
    """
    if not stored or not isinstance(stored, str) or not isinstance(password, str):
        return False
    if '$' in stored:
        return check_password_hash(stored, password)
    if ':' in stored:
        return _verify_legacy_scrypt(password, stored)
    return hmac.compare_digest(stored.encode('utf-8'), password.encode('utf-8'))


def create_admin_token(role='admin'):
    expires = datetime.now(timezone.utc) + timedelta(hours=current_app.config['JWT_EXPIRES_HOURS'])
    payload = {'role': role, 'exp': expires}
    return jwt.encode(payload, current_app.config['JWT_SECRET'], algorithm=ALGORITHM)


def decode_admin_token(token):
    """解析令牌，失败返回 None"""
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET'], algorithms=[ALGORITHM])
    except JWTError:
        return None
