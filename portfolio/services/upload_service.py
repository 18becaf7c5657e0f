"""上传服务：内容图片与工坊图库"""
import logging
import os

from portfolio.exceptions import PortfolioError, ValidationError
from portfolio.extensions import store
from portfolio.utils.helpers import sanitize_identifier
from portfolio.utils.uploads import (
    IMAGE_FILE_PATTERN,
    WORKSHOP_DIRNAME,
    build_uploads_relative_path,
    build_workshop_gallery_file,
    extension_for_mime,
    generate_upload_filename,
    parse_data_uri,
    resolve_entity_kind,
)

logger = logging.getLogger(__name__)


# 错误提示: (非 data URI, 格式不支持, 数据为空)
ENTITY_IMAGE_ERRORS = ('Invalid image payload', 'Unsupported image format', 'Empty image data')
GALLERY_IMAGE_ERRORS = (
    'Invalid image payload in request',
    'Unsupported image format provided',
    'Image data is empty',
)


def _check_data_uri(data_uri, errors=ENTITY_IMAGE_ERRORS):
    if not isinstance(data_uri, str) or not data_uri.startswith('data:'):
        raise ValidationError(errors[0])


def _decode_image(data_uri, errors=ENTITY_IMAGE_ERRORS):
    _check_data_uri(data_uri, errors)
    parsed = parse_data_uri(data_uri)
    if not parsed:
        raise ValidationError(errors[1])
    mime_type, payload = parsed
    if not payload:
        raise ValidationError(errors[2])
    return mime_type, payload


def _write_file(path, payload, error_message):
    try:
        with open(path, 'wb') as f:
            f.write(payload)
    except OSError as e:
        logger.error(f'Failed to write upload {path}: {e}')
        raise PortfolioError(error_message, code=500)


class UploadService:

    @staticmethod
    def workshop_dir():
        return os.path.join(store.uploads_dir, WORKSHOP_DIRNAME)

    @staticmethod
    def save_entity_image(data_uri, entity_type, entity_id, filename=None):
        """
        保存内容图片到 <uploads>/<kind>/<entityId>/ 下
        返回: 规范化的网络路径 /uploads/<kind>/<entityId>/<file>
        """
        _check_data_uri(data_uri)
        kind = resolve_entity_kind(entity_type)
        if not kind:
            raise ValidationError('Invalid entity type')
        safe_entity_id = sanitize_identifier(entity_id)
        if not safe_entity_id:
            raise ValidationError('Invalid entity identifier')

        mime_type, payload = _decode_image(data_uri)
        file_name = generate_upload_filename(extension_for_mime(mime_type), filename)
        entity_dir = os.path.join(store.uploads_dir, kind, safe_entity_id)
        try:
            os.makedirs(entity_dir, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to prepare upload directory {entity_dir}: {e}')
            raise PortfolioError('Failed to prepare upload directory', code=500)

        _write_file(os.path.join(entity_dir, file_name), payload, 'Failed to store image')
        logger.info(f'Stored upload {kind}/{safe_entity_id}/{file_name} ({len(payload)} bytes)')
        return build_uploads_relative_path(kind, safe_entity_id, file_name)

    @staticmethod
    def save_gallery_images(files):
        """批量保存工坊图库图片；先全部校验再写入"""
        decoded = []
        for file in files:
            mime_type, payload = _decode_image(file.get('data'), GALLERY_IMAGE_ERRORS)
            decoded.append((mime_type, payload, file.get('filename')))

        gallery_dir = UploadService.workshop_dir()
        try:
            os.makedirs(gallery_dir, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to prepare workshop gallery directory: {e}')
            raise PortfolioError('Failed to prepare gallery directory', code=500)

        saved = []
        for mime_type, payload, original_name in decoded:
            file_name = generate_upload_filename(extension_for_mime(mime_type), original_name)
            _write_file(os.path.join(gallery_dir, file_name), payload,
                        'Failed to store one of the gallery images')
            saved.append(build_workshop_gallery_file(file_name))
        return saved

    @staticmethod
    def list_gallery():
        gallery_dir = UploadService.workshop_dir()
        try:
            os.makedirs(gallery_dir, exist_ok=True)
            entries = os.listdir(gallery_dir)
        except OSError as e:
            logger.error(f'Failed to load workshop gallery images: {e}')
            raise PortfolioError('Failed to load workshop gallery images', code=500)
        names = sorted((name for name in entries if IMAGE_FILE_PATTERN.search(name)),
                       key=lambda name: (name.lower(), name))
        return [build_workshop_gallery_file(name) for name in names]
