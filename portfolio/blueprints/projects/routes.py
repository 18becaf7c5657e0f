from flask import g, jsonify

from . import projects_bp
from portfolio.schemas import ProjectCreate, ProjectUpdate
from portfolio.services.project_service import ProjectService
from portfolio.utils.decorators import admin_required, validate_body
from portfolio.utils.helpers import build_view_record
from portfolio.utils.security import rate_limit


@projects_bp.route('', methods=['GET'])
def list_projects():
    return jsonify(ProjectService.list_projects())


@projects_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    return jsonify(ProjectService.get_project(project_id))


@projects_bp.route('', methods=['POST'])
@admin_required
@validate_body(ProjectCreate)
def create_project():
    project = ProjectService.create_project(g.body.to_record())
    return jsonify(project), 201


@projects_bp.route('/<project_id>', methods=['PUT'])
@admin_required
@validate_body(ProjectUpdate)
def update_project(project_id):
    return jsonify(ProjectService.update_project(project_id, g.body.to_record()))


@projects_bp.route('/<project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    ProjectService.delete_project(project_id)
    return '', 204


@projects_bp.route('/<project_id>/feature', methods=['PATCH'])
@admin_required
def toggle_feature(project_id):
    return jsonify(ProjectService.toggle_feature(project_id))


@projects_bp.route('/<project_id>/view', methods=['POST'])
@rate_limit(max_requests=20, window=5 * 60, message='Too many view requests, please slow down')
def record_view(project_id):
    """公开接口：记录一次浏览"""
    views = ProjectService.record_view(project_id, build_view_record())
    return jsonify({'views': views})
