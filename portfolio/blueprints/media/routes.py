from flask import current_app, jsonify, request

from . import media_bp
from portfolio.exceptions import ValidationError
from portfolio.extensions import store
from portfolio.services.media_service import MediaCleanupService
from portfolio.utils.decorators import admin_required


def _cleanup_service():
    return MediaCleanupService(store, store.uploads_dir)


@media_bp.route('/unused', methods=['GET'])
@admin_required
def list_unused():
    """列出未被任何内容引用的上传文件"""
    current_app.logger.info('Finding unused media files')
    files = _cleanup_service().find_unused_media()
    return jsonify({
        'files': files,
        'count': len(files),
        'totalSize': sum(file['size'] for file in files),
    })


@media_bp.route('/unused/delete', methods=['POST'])
@admin_required
def delete_unused():
    payload = request.get_json(silent=True) or {}
    files = payload.get('files') if isinstance(payload, dict) else None
    if not isinstance(files, list) or not files:
        raise ValidationError('No files specified for deletion')

    current_app.logger.info(f'Deleting {len(files)} unused media files')
    results = _cleanup_service().delete_unused_media(files)
    return jsonify({
        'message': f"Deleted {len(results['deleted'])} file(s)",
        'deleted': results['deleted'],
        'failed': results['failed'],
    })
