"""站点内容 (关于 / 联系) 服务"""
from portfolio.extensions import store
from portfolio.utils.sanitizers import sanitize_about_content, sanitize_contact_content


class SiteContentService:

    @staticmethod
    def get_about():
        return store.data['about']

    @staticmethod
    def update_about(payload):
        about = sanitize_about_content(payload)
        with store.mutation() as data:
            data['about'] = about
        return about

    @staticmethod
    def get_contact():
        return store.data['contact']

    @staticmethod
    def update_contact(payload):
        contact = sanitize_contact_content(payload)
        with store.mutation() as data:
            data['contact'] = contact
        return contact
