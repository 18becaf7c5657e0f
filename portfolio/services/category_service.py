"""作品分类服务"""
from portfolio.exceptions import Conflict, NotFound, ValidationError
from portfolio.extensions import store
from portfolio.utils.helpers import slugify_label


class CategoryService:

    @staticmethod
    def list_categories():
        return store.data['categories']

    @staticmethod
    def _find(categories, category_id):
        for category in categories:
            if isinstance(category, dict) and category.get('id') == category_id:
                return category
        return None

    @staticmethod
    def create_category(label):
        """分类 ID 由标签小写化、空白替换为 '-' 得到"""
        category_id = slugify_label(label)
        with store.mutation() as data:
            if CategoryService._find(data['categories'], category_id):
                raise Conflict('Category already exists')
            category = {'id': category_id, 'label': label.strip()}
            data['categories'].append(category)
        return category

    @staticmethod
    def update_category(category_id, label):
        with store.mutation() as data:
            category = CategoryService._find(data['categories'], category_id)
            if not category:
                raise NotFound('Category not found')
            category['label'] = label.strip()
        return category

    @staticmethod
    def delete_category(category_id):
        """
        删除分类
        所有校验在修改之前完成：最后一个分类、或仍被作品使用的分类不能删除
        """
        with store.mutation() as data:
            categories = data['categories']
            if len(categories) <= 1:
                raise ValidationError('Cannot delete the last category')

            category = CategoryService._find(categories, category_id)
            if not category:
                raise NotFound('Category not found')

            in_use = any(
                isinstance(project, dict) and project.get('category') == category_id
                for project in data['projects']
            )
            if in_use:
                raise ValidationError('Cannot delete category in use by projects')

            categories.remove(category)
