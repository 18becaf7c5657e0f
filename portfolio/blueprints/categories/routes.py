from flask import g, jsonify

from . import categories_bp
from portfolio.schemas import CategoryPayload
from portfolio.services.category_service import CategoryService
from portfolio.utils.decorators import admin_required, validate_body


@categories_bp.route('', methods=['GET'])
def list_categories():
    return jsonify(CategoryService.list_categories())


@categories_bp.route('', methods=['POST'])
@admin_required
@validate_body(CategoryPayload)
def create_category():
    return jsonify(CategoryService.create_category(g.body.label)), 201


@categories_bp.route('/<category_id>', methods=['PUT'])
@admin_required
@validate_body(CategoryPayload)
def update_category(category_id):
    return jsonify(CategoryService.update_category(category_id, g.body.label))


@categories_bp.route('/<category_id>', methods=['DELETE'])
@admin_required
def delete_category(category_id):
    CategoryService.delete_category(category_id)
    return '', 204
