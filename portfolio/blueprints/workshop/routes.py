from flask import jsonify, request

from . import workshop_bp
from portfolio.exceptions import ValidationError
from portfolio.services.upload_service import UploadService
from portfolio.utils.decorators import admin_required
from portfolio.utils.security import rate_limit


@workshop_bp.route('/gallery', methods=['GET'])
def list_gallery():
    return jsonify({'files': UploadService.list_gallery()})


@workshop_bp.route('/gallery', methods=['POST'])
@rate_limit(max_requests=20, window=15 * 60, message='Too many upload requests, please try again later')
@admin_required
def upload_gallery():
    payload = request.get_json(silent=True)
    files = payload.get('files') if isinstance(payload, dict) else None
    if not isinstance(files, list) or not files:
        raise ValidationError('No images provided for upload')
    if not all(isinstance(file, dict) for file in files):
        raise ValidationError('Invalid image payload in request')
    return jsonify({'files': UploadService.save_gallery_images(files)}), 201
