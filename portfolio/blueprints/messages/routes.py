from flask import g, jsonify

from . import messages_bp
from portfolio.schemas import MessageCreate
from portfolio.services.inbox_service import MessageService
from portfolio.utils.decorators import admin_required, validate_body
from portfolio.utils.security import rate_limit


@messages_bp.route('', methods=['GET'])
@admin_required
def list_messages():
    return jsonify(MessageService.list_messages())


@messages_bp.route('', methods=['POST'])
@rate_limit(max_requests=5, window=60 * 60, message='Too many messages submitted, please try again later')
@validate_body(MessageCreate)
def create_message():
    """公开接口：访客留言"""
    return jsonify(MessageService.create_message(g.body.to_record())), 201


@messages_bp.route('/<message_id>/read', methods=['PATCH'])
@admin_required
def mark_read(message_id):
    return jsonify(MessageService.mark_read(message_id))


@messages_bp.route('/<message_id>', methods=['DELETE'])
@admin_required
def delete_message(message_id):
    MessageService.delete_message(message_id)
    return '', 204
