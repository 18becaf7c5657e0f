"""
JSON 文件存储
内存中保存全部站点内容，启动时从磁盘加载，修改后显式调用 save_data() 落盘。

磁盘布局:
    projects.json  作品数组
    stories.json   故事数组
    db.json        分类 / 留言 / 封禁 IP / 关于 / 联系 / 管理员密码哈希
"""
import json
import logging
import os
import threading
from contextlib import contextmanager

from portfolio import defaults
from portfolio.services.media_service import normalize_project_media
from portfolio.utils.auth import hash_password
from portfolio.utils.helpers import clone
from portfolio.utils.uploads import UPLOAD_KINDS, WORKSHOP_DIRNAME

logger = logging.getLogger(__name__)

META_KEYS = ('categories', 'messages', 'bannedIps', 'about', 'contact', 'adminPasswordHash')


def default_data():
    return {
        'projects': clone(defaults.PROJECTS),
        'stories': clone(defaults.STORIES),
        'categories': clone(defaults.CATEGORIES),
        'messages': [],
        'bannedIps': [],
        'about': clone(defaults.ABOUT),
        'contact': clone(defaults.CONTACT),
        'adminPasswordHash': None,
    }


class JsonStore:
    """
    进程内唯一的内容存储 (Flask 扩展风格，先创建后绑定 app)

    单进程、单写者：save_data() 与 mutation() 共用一把可重入锁，
    保证"修改 + 落盘"不会与其它请求交错；多进程共享同一数据目录是不安全的。
    """

    def __init__(self, app=None):
        self.data = default_data()
        self.projects_file = None
        self.stories_file = None
        self.meta_file = None
        self.uploads_dir = None
        self.admin_password = None
        self._lock = threading.RLock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.configure(
            projects_file=app.config['PROJECTS_FILE'],
            stories_file=app.config['STORIES_FILE'],
            meta_file=app.config['META_FILE'],
            uploads_dir=app.config['UPLOADS_DIR'],
            admin_password=app.config['ADMIN_PASSWORD'],
        )
        app.extensions['json_store'] = self
        self.initialize()

    def configure(self, projects_file, stories_file, meta_file, uploads_dir, admin_password):
        self.projects_file = projects_file
        self.stories_file = stories_file
        self.meta_file = meta_file
        self.uploads_dir = uploads_dir
        self.admin_password = admin_password
        # 重新绑定时回到默认数据，避免残留上一次的内容
        self.data = default_data()

    def initialize(self):
        """启动时调用一次：确保文件存在，然后加载"""
        self.ensure_data_files()
        return self.load_data()

    # ------------------------------------------------------------------
    # 初始化
    # ------------------------------------------------------------------

    @staticmethod
    def _ensure_json_file(file_path, default_content):
        if os.path.exists(file_path):
            return
        os.makedirs(os.path.dirname(file_path) or '.', exist_ok=True)
        _write_json(file_path, default_content)
        logger.info(f'Seeded {os.path.basename(file_path)} with default content')

    def ensure_data_files(self):
        """幂等：补齐缺失的数据文件与上传子目录"""
        self._ensure_json_file(self.projects_file, defaults.PROJECTS)
        self._ensure_json_file(self.stories_file, defaults.STORIES)
        self._ensure_json_file(self.meta_file, defaults.DEFAULT_META)
        for kind in UPLOAD_KINDS + (WORKSHOP_DIRNAME,):
            os.makedirs(os.path.join(self.uploads_dir, kind), exist_ok=True)

    # ------------------------------------------------------------------
    # 加载
    # ------------------------------------------------------------------

    @staticmethod
    def _load_json(file_path, fallback, expected_type):
        name = os.path.basename(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                value = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f'Failed to load {name}, using defaults: {e}')
            return clone(fallback)
        if not isinstance(value, expected_type):
            logger.warning(f'Unexpected content in {name}, using defaults')
            return clone(fallback)
        return value

    @staticmethod
    def _heal_story(story):
        if not isinstance(story, dict):
            return story
        healed = {key: value for key, value in story.items() if key not in ('featured', 'viewHistory')}
        view_history = story.get('viewHistory')
        healed['viewHistory'] = view_history if isinstance(view_history, list) else []
        return healed

    def load_data(self):
        projects_raw = self._load_json(self.projects_file, defaults.PROJECTS, list)
        stories_raw = self._load_json(self.stories_file, defaults.STORIES, list)
        meta = self._load_json(self.meta_file, defaults.DEFAULT_META, dict)

        projects = []
        projects_changed = False
        for project in projects_raw:
            normalized, changed = normalize_project_media(project, self.uploads_dir)
            projects.append(normalized)
            projects_changed = projects_changed or changed

        stories = [self._heal_story(story) for story in stories_raw]

        needs_meta_save = False
        admin_password_hash = meta.get('adminPasswordHash')
        if not isinstance(admin_password_hash, str) or not admin_password_hash:
            admin_password_hash = hash_password(self.admin_password)
            needs_meta_save = True
            logger.info('Admin password hash missing, seeded from configured default password')

        def _list(key):
            value = meta.get(key)
            return value if isinstance(value, list) else []

        def _object(key, fallback):
            value = meta.get(key)
            return value if isinstance(value, dict) else clone(fallback)

        categories = _list('categories')
        if not categories:
            # 至少保留一个分类
            categories = clone(defaults.CATEGORIES)
            needs_meta_save = True
            logger.warning('No categories found, restored default categories')

        with self._lock:
            self.data = {
                'projects': projects,
                'stories': stories,
                'categories': categories,
                'messages': _list('messages'),
                'bannedIps': _list('bannedIps'),
                'about': _object('about', defaults.ABOUT),
                'contact': _object('contact', defaults.CONTACT),
                'adminPasswordHash': admin_password_hash,
            }

            if needs_meta_save or projects_changed:
                if projects_changed:
                    logger.info('Normalized legacy media references in projects')
                self.save_data()

        return self.data

    # ------------------------------------------------------------------
    # 读写
    # ------------------------------------------------------------------

    def get_data(self):
        """返回内存中的可变数据；修改后需调用 save_data()"""
        return self.data

    def save_data(self):
        """
        把当前内存数据写入三个 JSON 文件
        写入失败直接抛出 OSError，由调用方感知
        """
        with self._lock:
            meta = {key: self.data[key] for key in META_KEYS}
            _write_json(self.projects_file, self.data['projects'])
            _write_json(self.stories_file, self.data['stories'])
            _write_json(self.meta_file, meta)

    @contextmanager
    def mutation(self):
        """
        单写者上下文：持锁修改内存数据，正常退出时自动落盘
        with store.mutation() as data:
            data['messages'].insert(0, message)
        """
        with self._lock:
            yield self.data
            self.save_data()


def _write_json(file_path, payload):
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
