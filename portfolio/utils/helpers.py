"""
通用小工具：ID 生成、标识符清洗、客户端 IP、浏览记录
"""
import copy
import random
import re
import string
import time

from flask import request

# 每个条目最多保留的浏览记录数量
MAX_VIEW_HISTORY = 1000

_BASE36 = string.digits + string.ascii_lowercase


def clone(value):
    return copy.deepcopy(value)


def _to_base36(number):
    if number == 0:
        return '0'
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return ''.join(reversed(digits))


def generate_id(prefix=''):
    """生成带前缀的短 ID，例如 proj_lx2k9f3a8b1c"""
    suffix = ''.join(random.choices(_BASE36, k=6))
    return f'{prefix}{_to_base36(int(time.time() * 1000))}{suffix}'


def sanitize_identifier(value):
    """小写化，非 [a-z0-9-_] 字符折叠为 '-'，并去掉首尾的 '-'"""
    text = '' if value is None else str(value)
    return re.sub(r'[^a-z0-9\-_]+', '-', text.lower()).strip('-')


def slugify_label(label):
    """分类标签 -> 分类 ID"""
    return re.sub(r'\s+', '-', label.strip().lower())


def get_client_ip():
    """优先读取反向代理传入的 X-Forwarded-For"""
    forwarded = request.headers.get('X-Forwarded-For')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or '0.0.0.0'


def build_view_record():
    return {
        'timestamp': int(time.time() * 1000),
        'ip': get_client_ip(),
        'userAgent': request.headers.get('User-Agent') or 'Unknown',
    }


def add_view_record(view_history, record):
    """追加浏览记录，只保留最近 MAX_VIEW_HISTORY 条"""
    updated = list(view_history) if isinstance(view_history, list) else []
    updated.append(record)
    return updated[-MAX_VIEW_HISTORY:]
