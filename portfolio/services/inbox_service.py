"""留言与 IP 封禁服务"""
import time
from datetime import datetime, timezone

from portfolio.exceptions import Conflict, NotFound
from portfolio.extensions import store
from portfolio.utils.helpers import generate_id


def _iso_now():
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _find_message(messages, message_id):
    for index, message in enumerate(messages):
        if isinstance(message, dict) and message.get('id') == message_id:
            return index
    return -1


class MessageService:

    @staticmethod
    def list_messages():
        return store.data['messages']

    @staticmethod
    def create_message(payload):
        """新留言插入列表头部 (最新在前)"""
        message = {
            **payload,
            'id': generate_id('msg_'),
            'timestamp': _iso_now(),
            'read': False,
        }
        with store.mutation() as data:
            data['messages'].insert(0, message)
        return message

    @staticmethod
    def mark_read(message_id):
        with store.mutation() as data:
            index = _find_message(data['messages'], message_id)
            if index == -1:
                raise NotFound('Message not found')
            message = data['messages'][index]
            message['read'] = True
        return message

    @staticmethod
    def delete_message(message_id):
        with store.mutation() as data:
            index = _find_message(data['messages'], message_id)
            if index == -1:
                raise NotFound('Message not found')
            del data['messages'][index]


class BannedIpService:

    @staticmethod
    def list_banned():
        return store.data['bannedIps']

    @staticmethod
    def ban(ip, reason=None):
        with store.mutation() as data:
            if any(isinstance(entry, dict) and entry.get('ip') == ip for entry in data['bannedIps']):
                raise Conflict('IP address already banned')
            entry = {'ip': ip, 'bannedAt': int(time.time() * 1000)}
            if reason:
                entry['reason'] = reason
            data['bannedIps'].append(entry)
        return entry

    @staticmethod
    def unban(ip):
        with store.mutation() as data:
            for index, entry in enumerate(data['bannedIps']):
                if isinstance(entry, dict) and entry.get('ip') == ip:
                    del data['bannedIps'][index]
                    return
            raise NotFound('IP address not found')
