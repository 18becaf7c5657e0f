import click
from flask import current_app
from flask.cli import with_appcontext
from portfolio.extensions import store
from portfolio.services.media_service import MediaCleanupService
from portfolio.utils.auth import hash_password


def _format_size(size):
    for unit in ('B', 'KB', 'MB'):
        if size < 1024:
            return f'{size:.0f} {unit}' if unit == 'B' else f'{size:.1f} {unit}'
        size /= 1024
    return f'{size:.1f} GB'


@click.command('status')
@with_appcontext
def status():
    """
    [验证指令] 查看当前内容存储中的数据统计。
    """
    click.echo(click.style('📊 作品集内容存储状态:', fg='cyan', bold=True))

    data = store.get_data()
    unread = sum(1 for message in data['messages'] if isinstance(message, dict) and not message.get('read'))

    click.echo(f" - 作品 (Projects): \t{len(data['projects'])}")
    click.echo(f" - 故事 (Stories): \t{len(data['stories'])}")
    click.echo(f" - 分类 (Categories): \t{len(data['categories'])}")
    click.echo(f" - 留言 (Messages): \t{len(data['messages'])} (未读 {unread})")
    click.echo(f" - 封禁 IP (Banned): \t{len(data['bannedIps'])}")
    click.echo(f" - 数据文件: \t{store.meta_file}")
    click.echo(f" - 上传目录: \t{store.uploads_dir}")


@click.command('unused-media')
@click.option('--delete', is_flag=True, help='删除全部未使用的文件 (会先确认)')
@with_appcontext
def unused_media(delete):
    """
    [清理指令] 列出上传目录中未被任何内容引用的文件。
    使用 --delete 删除它们并清理空目录。
    """
    service = MediaCleanupService(store, store.uploads_dir)
    files = service.find_unused_media()

    if not files:
        click.echo(click.style('✔ 没有未使用的媒体文件。', fg='green'))
        return

    total = sum(file['size'] for file in files)
    for file in files:
        click.echo(f" - {file['url']} \t{_format_size(file['size'])}")
    click.echo(click.style(f'共 {len(files)} 个文件，{_format_size(total)}', fg='yellow'))

    if not delete:
        return

    click.confirm('确认删除以上文件？', abort=True)
    results = service.delete_unused_media([file['path'] for file in files])
    click.echo(click.style(f"✔ 已删除 {len(results['deleted'])} 个文件", fg='green'))
    for failure in results['failed']:
        click.echo(click.style(f"✘ {failure['path']}: {failure['reason']}", fg='red'))


@click.command('reset-password')
@click.option('--password', default=None, help='新密码 (默认使用配置中的 ADMIN_PASSWORD)')
@with_appcontext
def reset_password(password):
    """
    [运维指令] 重置管理员密码哈希。
    """
    password = password or current_app.config['ADMIN_PASSWORD']
    if len(password) < 8:
        raise click.BadParameter('密码至少需要 8 个字符', param_hint='--password')

    with store.mutation() as data:
        data['adminPasswordHash'] = hash_password(password)
    click.echo(click.style('✔ 管理员密码已重置。', fg='green'))
