from flask import jsonify, request

from . import uploads_bp
from portfolio.exceptions import ValidationError
from portfolio.services.upload_service import UploadService
from portfolio.utils.decorators import admin_required
from portfolio.utils.security import rate_limit


@uploads_bp.route('', methods=['POST'])
@rate_limit(max_requests=20, window=15 * 60, message='Too many upload requests, please try again later')
@admin_required
def upload_image():
    """
    上传内容图片 (base64 data URI)
    请求: {data, filename?, entityType, entityId}
    返回: 201 {url}
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError('Invalid image payload')
    url = UploadService.save_entity_image(
        payload.get('data'),
        payload.get('entityType'),
        payload.get('entityId'),
        payload.get('filename'),
    )
    return jsonify({'url': url}), 201
