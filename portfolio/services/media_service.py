"""媒体引用规范化与未使用媒体清理服务"""
import logging
import os
import re
from urllib.parse import unquote

from portfolio.utils.uploads import (
    UPLOADS_WEB_ROOT,
    is_within_directory,
    normalize_upload_path,
)

logger = logging.getLogger(__name__)

# Markdown 图片语法 ![alt](url)
MARKDOWN_IMAGE_PATTERN = re.compile(r'!\[.*?\]\((.*?)\)')


def normalize_project_media(project, uploads_dir):
    """
    规范化作品 (或同结构的故事) 中的全部媒体引用
    返回: (record, changed)
    没有任何改动时返回原对象本身，不修改入参
    """
    if not isinstance(project, dict):
        return project, False

    changed = False
    normalized = dict(project)

    cover_image = project.get('coverImage')
    if isinstance(cover_image, str):
        value = normalize_upload_path(cover_image, uploads_dir)
        if value != cover_image:
            normalized['coverImage'] = value
            changed = True

    images = project.get('images')
    if isinstance(images, list):
        updated_images = []
        for entry in images:
            if isinstance(entry, str):
                value = normalize_upload_path(entry, uploads_dir)
                if value != entry:
                    changed = True
                updated_images.append(value)
            else:
                updated_images.append(entry)
        normalized['images'] = updated_images

    blocks = project.get('contentBlocks')
    if isinstance(blocks, list):
        updated_blocks = []
        for block in blocks:
            if not isinstance(block, dict):
                updated_blocks.append(block)
                continue
            new_block = None
            for field in ('image', 'video'):
                media = block.get(field)
                if not isinstance(media, str):
                    continue
                value = normalize_upload_path(media, uploads_dir)
                if value != media:
                    new_block = new_block or dict(block)
                    new_block[field] = value
            if new_block is not None:
                changed = True
                updated_blocks.append(new_block)
            else:
                updated_blocks.append(block)
        normalized['contentBlocks'] = updated_blocks

    if changed:
        return normalized, True
    return project, False


def sanitize_project(project):
    """对外输出的作品视图，保证 viewHistory 为列表"""
    if not isinstance(project, dict):
        return project
    result = dict(project)
    if not isinstance(result.get('viewHistory'), list):
        result['viewHistory'] = []
    return result


class MediaCleanupService:
    """
    未使用媒体扫描与清理
    对比存储中的引用与上传目录中的真实文件，找出并删除孤立文件
    """

    def __init__(self, store, uploads_dir):
        self.store = store
        self.uploads_dir = uploads_dir

    def collect_files(self, root=None, base=None):
        """递归列出目录下全部文件；读不了的目录记录警告后视为空目录"""
        root = root or self.uploads_dir
        base = base or root
        files = []
        try:
            with os.scandir(root) as entries:
                entries = list(entries)
        except OSError as e:
            logger.warning(f'Failed to read directory {root}: {e}')
            return files

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                files.extend(self.collect_files(entry.path, base))
            elif entry.is_file():
                files.append({
                    'filename': entry.name,
                    'path': entry.path,
                    'relative_path': os.path.relpath(entry.path, base),
                    'size': 0,
                })
        return files

    @staticmethod
    def _add(urls, value):
        if isinstance(value, str) and value:
            urls.add(value)

    @classmethod
    def _add_markdown(cls, urls, text):
        if isinstance(text, str) and text:
            for url in MARKDOWN_IMAGE_PATTERN.findall(text):
                cls._add(urls, url)

    @classmethod
    def _add_list(cls, urls, values):
        if isinstance(values, list):
            for value in values:
                cls._add(urls, value)

    @classmethod
    def _add_blocks(cls, urls, blocks):
        if not isinstance(blocks, list):
            return
        for block in blocks:
            if not isinstance(block, dict):
                continue
            cls._add(urls, block.get('image'))
            cls._add(urls, block.get('video'))
            cls._add_markdown(urls, block.get('description'))

    def extract_referenced_urls(self):
        """收集作品、故事与关于页中引用的全部媒体 URL"""
        data = self.store.data
        urls = set()

        projects = data.get('projects')
        if isinstance(projects, list):
            for project in projects:
                if not isinstance(project, dict):
                    continue
                self._add(urls, project.get('coverImage'))
                self._add(urls, project.get('image'))
                self._add(urls, project.get('hero'))
                self._add_list(urls, project.get('images'))
                self._add_list(urls, project.get('gallery'))
                self._add_markdown(urls, project.get('description'))
                self._add_blocks(urls, project.get('contentBlocks'))

        stories = data.get('stories')
        if isinstance(stories, list):
            for story in stories:
                if not isinstance(story, dict):
                    continue
                self._add(urls, story.get('coverImage'))
                self._add(urls, story.get('image'))
                self._add_list(urls, story.get('images'))
                self._add_markdown(urls, story.get('content'))
                self._add_blocks(urls, story.get('contentBlocks'))

        about = data.get('about')
        if isinstance(about, dict):
            self._add(urls, about.get('heroImage'))

        return urls

    def url_to_file_path(self, url):
        """/uploads/... -> 磁盘绝对路径；其它 URL 返回 None (仅用于集合比对，不做 I/O)"""
        prefix = f'{UPLOADS_WEB_ROOT}/'
        if not isinstance(url, str) or not url.startswith(prefix):
            return None
        return os.path.normpath(os.path.join(self.uploads_dir, url[len(prefix):]))

    def _referenced_paths(self):
        referenced = set()
        for url in self.extract_referenced_urls():
            for candidate in {url, unquote(url)}:
                file_path = self.url_to_file_path(candidate)
                if file_path:
                    referenced.add(file_path)
        return referenced

    def find_unused_media(self):
        """
        找出未被任何内容引用的上传文件，按大小降序
        返回: [{filename, path, size, url}]
        """
        all_files = self.collect_files(self.uploads_dir)

        for file in all_files:
            try:
                file['size'] = os.stat(file['path']).st_size
            except OSError as e:
                logger.warning(f"Failed to get stats for {file['path']}: {e}")

        referenced = self._referenced_paths()

        unused = [file for file in all_files if os.path.normpath(file['path']) not in referenced]
        unused.sort(key=lambda file: file['size'], reverse=True)

        return [
            {
                'filename': file['filename'],
                'path': file['relative_path'],
                'size': file['size'],
                'url': f"{UPLOADS_WEB_ROOT}/{file['relative_path'].replace(os.sep, '/')}",
            }
            for file in unused
        ]

    def delete_unused_media(self, relative_paths):
        """
        批量删除文件，单个失败不影响其它文件
        返回: {'deleted': [...], 'failed': [{'path', 'reason'}]}
        """
        results = {'deleted': [], 'failed': []}
        if not isinstance(relative_paths, list) or not relative_paths:
            return results

        for relative_path in relative_paths:
            if not isinstance(relative_path, str) or not relative_path.strip():
                results['failed'].append({'path': relative_path, 'reason': 'Invalid path'})
                continue

            full_path = os.path.join(self.uploads_dir, relative_path)
            parts = relative_path.replace('\\', '/').split('/')
            try:
                inside = '..' not in parts and is_within_directory(self.uploads_dir, full_path) \
                    and os.path.realpath(full_path) != os.path.realpath(self.uploads_dir)
            except ValueError:
                inside = False
            if not inside:
                logger.warning(f'Attempted to delete file outside uploads directory: {relative_path}')
                results['failed'].append({'path': relative_path, 'reason': 'Invalid path'})
                continue

            try:
                os.remove(full_path)
            except OSError as e:
                logger.warning(f'Failed to delete file {relative_path}: {e}')
                results['failed'].append({'path': relative_path, 'reason': e.strerror or str(e)})
                continue

            results['deleted'].append(relative_path)
            logger.info(f'Deleted unused media file {relative_path}')

        self.clean_empty_directories(self.uploads_dir)
        return results

    def clean_empty_directories(self, dir_path):
        """自底向上删除空目录，上传根目录本身保留"""
        try:
            with os.scandir(dir_path) as entries:
                subdirs = [entry.path for entry in entries if entry.is_dir(follow_symlinks=False)]
            for subdir in subdirs:
                self.clean_empty_directories(subdir)

            if os.path.realpath(dir_path) != os.path.realpath(self.uploads_dir) and not os.listdir(dir_path):
                os.rmdir(dir_path)
                logger.info(f'Removed empty directory {dir_path}')
        except OSError as e:
            logger.warning(f'Failed to clean directory {dir_path}: {e}')
