from flask import jsonify, request

from . import content_bp
from portfolio.exceptions import ValidationError
from portfolio.services.site_service import SiteContentService
from portfolio.utils.decorators import admin_required


def _json_object(message):
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError(message)
    return payload


@content_bp.route('/about', methods=['GET'])
def get_about():
    return jsonify(SiteContentService.get_about())


@content_bp.route('/about', methods=['PUT'])
@admin_required
def update_about():
    """关于页内容：逐字段清洗，缺失或非法字段回退为默认值"""
    payload = _json_object('Invalid about content payload')
    return jsonify(SiteContentService.update_about(payload))


@content_bp.route('/contact', methods=['GET'])
def get_contact():
    return jsonify(SiteContentService.get_contact())


@content_bp.route('/contact', methods=['PUT'])
@admin_required
def update_contact():
    payload = _json_object('Invalid contact content payload')
    return jsonify(SiteContentService.update_contact(payload))
