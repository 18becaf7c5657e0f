"""
上传文件命名与路径工具
负责 MIME -> 扩展名、上传文件命名、以及 /uploads 网络路径与磁盘路径之间的安全转换。
所有函数对非法输入都不抛异常，只做"原样返回"或"最佳猜测"。
"""
import base64
import binascii
import os
import random
import re
import string
import time
from urllib.parse import quote

UPLOADS_WEB_ROOT = '/uploads'
WORKSHOP_DIRNAME = 'workshop'
WORKSHOP_WEB_PATH = f'{UPLOADS_WEB_ROOT}/{WORKSHOP_DIRNAME}'
UPLOAD_KINDS = ('projects', 'stories', 'site')

IMAGE_FILE_PATTERN = re.compile(r'\.(jpe?g|png|gif|webp|avif|heic)$', re.IGNORECASE)
DATA_URI_PATTERN = re.compile(r'^data:(image/[a-zA-Z0-9+.\-]+);base64,(.+)$', re.DOTALL)

MIME_EXTENSIONS = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
    'image/svg+xml': 'svg',
    'image/avif': 'avif',
    'image/heic': 'heic',
    'video/mp4': 'mp4',
    'video/webm': 'webm',
    'video/ogg': 'ogv',
    'video/quicktime': 'mov',
}

ENTITY_KINDS = {
    'project': 'projects',
    'projects': 'projects',
    'story': 'stories',
    'stories': 'stories',
    'site': 'site',
    'content': 'site',
}

_BASE36 = string.digits + string.ascii_lowercase
# URL 组件编码时保留的字符 (与浏览器端一致)
ENCODE_SAFE_CHARS = "!*'()"


def extension_for_mime(mime):
    """根据 MIME 类型返回文件扩展名 (不带点)"""
    if not isinstance(mime, str):
        return 'bin'
    mime = mime.strip().lower()
    if mime in MIME_EXTENSIONS:
        return MIME_EXTENSIONS[mime]
    if '/' not in mime:
        return 'bin'
    subtype = mime.split('/', 1)[1]
    if not subtype:
        return 'bin'
    return subtype.replace('+xml', '', 1).replace('+', '.', 1)


def _sanitize_original_name(original_name):
    if not isinstance(original_name, str):
        return ''
    safe_name = re.sub(r'[^a-z0-9.-]+', '-', original_name.lower()).strip('-')
    # 去掉原始扩展名，扩展名统一由 MIME 决定
    return re.sub(r'\.[^.]+$', '', safe_name).strip('-')


def generate_upload_filename(extension, original_name=None):
    """
    生成唯一上传文件名
    格式: upload-<毫秒时间戳>-<6位base36随机串>[-<原文件名>][.<扩展名>]
    """
    token = ''.join(random.choices(_BASE36, k=6))
    base = f'upload-{int(time.time() * 1000)}-{token}'
    ext = ''
    if isinstance(extension, str) and extension.lstrip('.'):
        ext = '.' + extension.lstrip('.')

    stem = _sanitize_original_name(original_name)
    if stem:
        return f'{base}-{stem}{ext}'
    return f'{base}{ext}'


def is_within_directory(root, path):
    """判断 path 解析后是否仍位于 root 目录之内"""
    root = os.path.realpath(root)
    path = os.path.realpath(path)
    return path == root or path.startswith(root + os.sep)


def normalize_upload_path(value, uploads_dir):
    """
    把漂移的媒体引用规范化为 /uploads/<rest> 形式
    - 已是规范路径：原样返回
    - 含 '..' 或解析到上传目录之外：原样返回
    - 只有目标文件真实存在时才改写
    """
    if not isinstance(value, str):
        return value

    prefix = f'{UPLOADS_WEB_ROOT}/'
    if value.startswith(prefix):
        return value

    trimmed = value.strip()
    index = trimmed.find(prefix)
    if index == -1:
        return value

    candidate = trimmed[index:]
    relative_part = candidate[len(prefix):]
    if not relative_part or '..' in relative_part:
        return value

    try:
        resolved = os.path.realpath(os.path.join(uploads_dir, relative_part))
        if not is_within_directory(uploads_dir, resolved):
            return value
        if os.path.isfile(resolved):
            return candidate
    except (OSError, ValueError):
        # 例如路径中含有 NUL 字符
        return value

    return value


def build_uploads_relative_path(kind, entity_id, filename):
    return f'{UPLOADS_WEB_ROOT}/{kind}/{entity_id}/{filename}'


def build_workshop_gallery_file(filename):
    return {
        'filename': filename,
        'url': f"{WORKSHOP_WEB_PATH}/{quote(filename, safe=ENCODE_SAFE_CHARS)}",
    }


def resolve_entity_kind(value):
    """project/story/site 等别名 -> 上传子目录名；无法识别返回 None"""
    if not isinstance(value, str):
        return None
    return ENTITY_KINDS.get(value.strip().lower())


def parse_data_uri(value):
    """
    解析 base64 图片 data URI
    返回: (mime_type, bytes)，格式不对或解码失败返回 None
    """
    if not isinstance(value, str):
        return None
    match = DATA_URI_PATTERN.match(value)
    if not match:
        return None
    mime_type, encoded = match.groups()
    try:
        payload = base64.b64decode(encoded)
    except (binascii.Error, ValueError):
        return None
    return mime_type, payload
