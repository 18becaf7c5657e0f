"""摄影故事服务"""
from portfolio.exceptions import Conflict, NotFound, PermissionDenied
from portfolio.extensions import store
from portfolio.services.media_service import normalize_project_media
from portfolio.services.project_service import is_banned
from portfolio.utils.helpers import add_view_record, generate_id, sanitize_identifier

# 故事没有精选功能，旧数据中的 featured 字段一律丢弃
IGNORED_ON_UPDATE = ('id', 'views', 'viewHistory', 'featured')


def _find_index(stories, story_id):
    for index, story in enumerate(stories):
        if isinstance(story, dict) and story.get('id') == story_id:
            return index
    return -1


class StoryService:

    @staticmethod
    def list_stories():
        return store.data['stories']

    @staticmethod
    def get_story(story_id):
        index = _find_index(store.data['stories'], story_id)
        if index == -1:
            raise NotFound('Story not found')
        return store.data['stories'][index]

    @staticmethod
    def create_story(payload):
        provided_id = sanitize_identifier(payload['id']) if isinstance(payload.get('id'), str) else ''
        story_id = provided_id or generate_id('story_')

        story = {key: value for key, value in payload.items() if key != 'featured'}
        views = payload.get('views')
        story.update({
            'id': story_id,
            'views': views if isinstance(views, int) and not isinstance(views, bool) and views >= 0 else 0,
            'viewHistory': [],
            'contentBlocks': payload.get('contentBlocks') or [],
        })
        story, _ = normalize_project_media(story, store.uploads_dir)

        with store.mutation() as data:
            if _find_index(data['stories'], story_id) != -1:
                raise Conflict('Story already exists')
            data['stories'].append(story)
        return story

    @staticmethod
    def update_story(story_id, updates):
        updates = {key: value for key, value in updates.items() if key not in IGNORED_ON_UPDATE}
        with store.mutation() as data:
            index = _find_index(data['stories'], story_id)
            if index == -1:
                raise NotFound('Story not found')
            existing = data['stories'][index]
            story = {**existing, **updates, 'id': existing['id']}
            story, _ = normalize_project_media(story, store.uploads_dir)
            data['stories'][index] = story
        return story

    @staticmethod
    def delete_story(story_id):
        with store.mutation() as data:
            index = _find_index(data['stories'], story_id)
            if index == -1:
                raise NotFound('Story not found')
            del data['stories'][index]

    @staticmethod
    def record_view(story_id, view_record):
        with store.mutation() as data:
            index = _find_index(data['stories'], story_id)
            if index == -1:
                raise NotFound('Story not found')
            if is_banned(data, view_record['ip']):
                raise PermissionDenied('View blocked: IP address is banned')

            story = data['stories'][index]
            views = story.get('views')
            story['views'] = (views if isinstance(views, int) else 0) + 1
            story['viewHistory'] = add_view_record(story.get('viewHistory'), view_record)
        return story['views']
