"""作品服务"""
import time

from portfolio.exceptions import Conflict, NotFound, PermissionDenied
from portfolio.extensions import store
from portfolio.services.media_service import normalize_project_media, sanitize_project
from portfolio.utils.helpers import add_view_record, generate_id, sanitize_identifier

# 浏览数据只能通过浏览接口变更
PROTECTED_FIELDS = ('id', 'views', 'viewHistory', 'featuredAt')


def _now_ms():
    return int(time.time() * 1000)


def _apply_featured(project, featured):
    project['featured'] = bool(featured)
    if project['featured']:
        project['featuredAt'] = project.get('featuredAt') or _now_ms()
    else:
        project.pop('featuredAt', None)


def _find_index(projects, project_id):
    for index, project in enumerate(projects):
        if isinstance(project, dict) and project.get('id') == project_id:
            return index
    return -1


def is_banned(data, ip):
    return any(isinstance(entry, dict) and entry.get('ip') == ip for entry in data['bannedIps'])


class ProjectService:

    @staticmethod
    def list_projects():
        return [sanitize_project(project) for project in store.data['projects']]

    @staticmethod
    def get_project(project_id):
        index = _find_index(store.data['projects'], project_id)
        if index == -1:
            raise NotFound('Project not found')
        return sanitize_project(store.data['projects'][index])

    @staticmethod
    def create_project(payload):
        provided_id = sanitize_identifier(payload['id']) if isinstance(payload.get('id'), str) else ''
        project_id = provided_id or generate_id('proj_')

        views = payload.get('views')
        project = {
            **payload,
            'id': project_id,
            'views': views if isinstance(views, int) and not isinstance(views, bool) and views >= 0 else 0,
            'viewHistory': [],
        }
        project.pop('featuredAt', None)
        _apply_featured(project, payload.get('featured'))
        project, _ = normalize_project_media(project, store.uploads_dir)

        with store.mutation() as data:
            if _find_index(data['projects'], project_id) != -1:
                raise Conflict('Project already exists')
            data['projects'].append(project)
        return sanitize_project(project)

    @staticmethod
    def update_project(project_id, updates):
        updates = {key: value for key, value in updates.items() if key not in PROTECTED_FIELDS}
        with store.mutation() as data:
            index = _find_index(data['projects'], project_id)
            if index == -1:
                raise NotFound('Project not found')

            existing = data['projects'][index]
            project = {**existing, **updates, 'id': existing['id']}
            if not isinstance(project.get('viewHistory'), list):
                project['viewHistory'] = []
            if 'featured' in updates:
                _apply_featured(project, updates['featured'])

            project, _ = normalize_project_media(project, store.uploads_dir)
            data['projects'][index] = project
        return sanitize_project(project)

    @staticmethod
    def delete_project(project_id):
        with store.mutation() as data:
            index = _find_index(data['projects'], project_id)
            if index == -1:
                raise NotFound('Project not found')
            del data['projects'][index]

    @staticmethod
    def toggle_feature(project_id):
        with store.mutation() as data:
            index = _find_index(data['projects'], project_id)
            if index == -1:
                raise NotFound('Project not found')
            project = data['projects'][index]
            _apply_featured(project, not project.get('featured'))
        return sanitize_project(project)

    @staticmethod
    def record_view(project_id, view_record):
        """浏览数 +1 并追加浏览记录 (封禁 IP 不计数)"""
        with store.mutation() as data:
            index = _find_index(data['projects'], project_id)
            if index == -1:
                raise NotFound('Project not found')
            if is_banned(data, view_record['ip']):
                raise PermissionDenied('View blocked: IP address is banned')

            project = data['projects'][index]
            views = project.get('views')
            project['views'] = (views if isinstance(views, int) else 0) + 1
            project['viewHistory'] = add_view_record(project.get('viewHistory'), view_record)
        return project['views']
