from flask import g, jsonify

from . import stories_bp
from portfolio.exceptions import Gone
from portfolio.schemas import StoryCreate, StoryUpdate
from portfolio.services.story_service import StoryService
from portfolio.utils.decorators import admin_required, validate_body
from portfolio.utils.helpers import build_view_record
from portfolio.utils.security import rate_limit


@stories_bp.route('', methods=['GET'])
def list_stories():
    return jsonify(StoryService.list_stories())


@stories_bp.route('/<story_id>', methods=['GET'])
def get_story(story_id):
    return jsonify(StoryService.get_story(story_id))


@stories_bp.route('', methods=['POST'])
@admin_required
@validate_body(StoryCreate)
def create_story():
    return jsonify(StoryService.create_story(g.body.to_record())), 201


@stories_bp.route('/<story_id>', methods=['PUT'])
@admin_required
@validate_body(StoryUpdate)
def update_story(story_id):
    return jsonify(StoryService.update_story(story_id, g.body.to_record()))


@stories_bp.route('/<story_id>', methods=['DELETE'])
@admin_required
def delete_story(story_id):
    StoryService.delete_story(story_id)
    return '', 204


@stories_bp.route('/<story_id>/feature', methods=['PATCH'])
@admin_required
def toggle_feature(story_id):
    raise Gone('Feature stories endpoint is no longer supported')


@stories_bp.route('/<story_id>/view', methods=['POST'])
@rate_limit(max_requests=20, window=5 * 60, message='Too many view requests, please slow down')
def record_view(story_id):
    views = StoryService.record_view(story_id, build_view_record())
    return jsonify({'views': views})
