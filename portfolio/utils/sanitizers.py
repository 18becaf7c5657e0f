"""
站点内容 (关于 / 联系) 的清洗函数
非法或缺失的字段回退到默认内容，不抛异常。
"""
from portfolio import defaults
from portfolio.utils.helpers import clone


def sanitize_string(value, fallback=''):
    text = value.strip() if isinstance(value, str) else ''
    return text or fallback


def sanitize_string_list(values, fallback=None):
    fallback = [] if fallback is None else fallback
    if not isinstance(values, list):
        return fallback
    cleaned = [value.strip() for value in values if isinstance(value, str) and value.strip()]
    return cleaned or fallback


def sanitize_list_groups(groups, fallback=None):
    """[{title, items[]}]，标题和条目都为空的分组被丢弃"""
    fallback = [] if fallback is None else fallback
    if not isinstance(groups, list):
        return fallback
    cleaned = []
    for group in groups:
        if not isinstance(group, dict):
            continue
        title = sanitize_string(group.get('title'))
        items = sanitize_string_list(group.get('items'))
        if not title and not items:
            continue
        cleaned.append({'title': title or 'Untitled', 'items': items})
    return cleaned or fallback


def sanitize_entries(entries, fallback=None):
    """[{title, subtitle}]，用于工作经历与教育背景"""
    fallback = [] if fallback is None else fallback
    if not isinstance(entries, list):
        return fallback
    cleaned = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        title = sanitize_string(entry.get('title'))
        subtitle = sanitize_string(entry.get('subtitle'))
        if not title and not subtitle:
            continue
        cleaned.append({'title': title or 'Untitled', 'subtitle': subtitle})
    return cleaned or fallback


def sanitize_social_links(links, fallback=None):
    fallback = [] if fallback is None else fallback
    if not isinstance(links, list):
        return fallback
    cleaned = []
    for link in links:
        if not isinstance(link, dict):
            continue
        entry = {
            'type': sanitize_string(link.get('type')),
            'label': sanitize_string(link.get('label')),
            'url': sanitize_string(link.get('url')),
            'description': sanitize_string(link.get('description')),
        }
        if not entry['type'] or not entry['label'] or not entry['url']:
            continue
        cleaned.append(entry)
    return cleaned or fallback


def sanitize_about_content(payload):
    payload = payload if isinstance(payload, dict) else {}
    fallback = clone(defaults.ABOUT)
    return {
        'heroTitle': sanitize_string(payload.get('heroTitle'), fallback['heroTitle']),
        'heroParagraphs': sanitize_string_list(payload.get('heroParagraphs'), fallback['heroParagraphs']),
        'heroImage': sanitize_string(payload.get('heroImage'), fallback['heroImage']),
        'skills': sanitize_list_groups(payload.get('skills'), fallback['skills']),
        'tools': sanitize_list_groups(payload.get('tools'), fallback['tools']),
        'workExperience': sanitize_entries(payload.get('workExperience'), fallback['workExperience']),
        'education': sanitize_entries(payload.get('education'), fallback['education']),
    }


def sanitize_contact_content(payload):
    payload = payload if isinstance(payload, dict) else {}
    fallback = clone(defaults.CONTACT)
    email = payload.get('email') if isinstance(payload.get('email'), dict) else {}
    phone = payload.get('phone') if isinstance(payload.get('phone'), dict) else {}
    return {
        'title': sanitize_string(payload.get('title'), fallback['title']),
        'subtitle': sanitize_string(payload.get('subtitle'), fallback['subtitle']),
        'connectHeading': sanitize_string(payload.get('connectHeading'), fallback['connectHeading']),
        'connectDescription': sanitize_string(payload.get('connectDescription'), fallback['connectDescription']),
        'email': {
            'label': sanitize_string(email.get('label'), fallback['email']['label']),
            'address': sanitize_string(email.get('address'), fallback['email']['address']),
        },
        'phone': {
            'label': sanitize_string(phone.get('label'), fallback['phone']['label']),
            'number': sanitize_string(phone.get('number'), fallback['phone']['number']),
        },
        'socials': sanitize_social_links(payload.get('socials'), fallback['socials']),
    }
