"""
安全工具函数：速率限制、IP 封禁检查、跨域响应头
"""
from functools import wraps
from datetime import datetime, timedelta
from threading import Lock

from flask import current_app, request, abort

from portfolio.exceptions import PermissionDenied
from portfolio.utils.helpers import get_client_ip

# 速率限制存储（单进程内存）
_rate_limit_storage = {}
_rate_limit_lock = Lock()


def rate_limit(max_requests=60, window=60, message='Too many requests, please try again later'):
    """
    API速率限制装饰器

    Args:
        max_requests: 时间窗口内最大请求数
        window: 时间窗口（秒）
        message: 超限时返回的提示
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not current_app.config.get('RATELIMIT_ENABLED', True):
                return func(*args, **kwargs)

            # 获取客户端标识（IP地址）
            client_id = get_client_ip()
            key = f"{func.__module__}.{func.__name__}:{client_id}"

            now = datetime.now()

            with _rate_limit_lock:
                # 清理过期记录
                _rate_limit_storage[key] = [
                    timestamp for timestamp in _rate_limit_storage.get(key, [])
                    if now - timestamp < timedelta(seconds=window)
                ]

                # 检查是否超限
                if len(_rate_limit_storage[key]) >= max_requests:
                    abort(429, description=message)

                # 记录本次请求
                _rate_limit_storage[key].append(now)

            return func(*args, **kwargs)
        return wrapper
    return decorator


def reset_rate_limits():
    with _rate_limit_lock:
        _rate_limit_storage.clear()


def check_ip_ban(store):
    """
    生成 before_request 钩子：封禁 IP 访问 /api 时直接拒绝 (健康检查除外)
    """
    def hook():
        if not request.path.startswith('/api') or request.path.startswith('/api/health'):
            return None
        ip = get_client_ip()
        if any(isinstance(entry, dict) and entry.get('ip') == ip for entry in store.data['bannedIps']):
            current_app.logger.warning(f'Blocked request from banned IP {ip} {request.method} {request.path}')
            raise PermissionDenied('Access forbidden: IP address is banned')
        return None
    return hook


def apply_cors_headers(response):
    """为白名单来源添加跨域响应头"""
    origin = request.headers.get('Origin')
    if origin and origin in current_app.config.get('ALLOWED_ORIGINS', []):
        response.headers['Access-Control-Allow-Origin'] = origin
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Allow-Headers'] = 'Authorization, Content-Type'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
        response.headers.add('Vary', 'Origin')
    elif origin:
        current_app.logger.warning(f'CORS blocked request from origin {origin}')
    return response
