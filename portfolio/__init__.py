import logging
import colorlog
from flask import Flask, jsonify, request
from flask.logging import default_handler
from werkzeug.exceptions import HTTPException
from config import config
from portfolio.exceptions import PortfolioError
from portfolio.extensions import store
from portfolio.utils.security import apply_cors_headers, check_ip_ban

# 导入 commands 模块，用于注册 CLI 命令
from portfolio import commands


def create_app(config_name='default', test_config=None):
    """作品集后端应用工厂函数"""
    app = Flask(__name__)

    # 1. 加载配置 (test_config 用于测试时覆盖数据目录等)
    app.config.from_object(config[config_name])
    if test_config:
        app.config.update(test_config)
    config[config_name].init_app(app)

    # 2. 配置日志 (先于存储初始化，加载时的告警才能输出)
    configure_logging(app)

    # 3. 初始化扩展
    store.init_app(app)

    # 4. 请求钩子：IP 封禁与跨域
    app.before_request(check_ip_ban(store))
    app.after_request(apply_cors_headers)

    # 5. 注册蓝图 (Blueprints)
    register_blueprints(app)

    # 6. 注册全局错误处理
    register_error_handlers(app)

    # 7. 注册 CLI 命令
    register_commands(app)

    return app


def register_blueprints(app):
    """注册所有 API 蓝图"""
    from portfolio.blueprints.health import health_bp
    app.register_blueprint(health_bp, url_prefix='/api/health')

    # 认证
    from portfolio.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # 作品与故事
    from portfolio.blueprints.projects import projects_bp
    app.register_blueprint(projects_bp, url_prefix='/api/projects')

    from portfolio.blueprints.stories import stories_bp
    app.register_blueprint(stories_bp, url_prefix='/api/stories')

    from portfolio.blueprints.categories import categories_bp
    app.register_blueprint(categories_bp, url_prefix='/api/categories')

    # 留言与封禁
    from portfolio.blueprints.messages import messages_bp
    app.register_blueprint(messages_bp, url_prefix='/api/messages')

    from portfolio.blueprints.banned_ips import banned_ips_bp
    app.register_blueprint(banned_ips_bp, url_prefix='/api/banned-ips')

    # 站点内容
    from portfolio.blueprints.content import content_bp
    app.register_blueprint(content_bp, url_prefix='/api/content')

    # 媒体上传与清理
    from portfolio.blueprints.uploads import uploads_bp
    app.register_blueprint(uploads_bp, url_prefix='/api/uploads')

    from portfolio.blueprints.workshop import workshop_bp
    app.register_blueprint(workshop_bp, url_prefix='/api/workshop')

    from portfolio.blueprints.media import media_bp
    app.register_blueprint(media_bp, url_prefix='/api/media')

    # 上传文件静态访问
    from portfolio.blueprints.files import files_bp
    app.register_blueprint(files_bp, url_prefix='/uploads')


def register_error_handlers(app):
    """所有错误统一返回 JSON: {message, ...}"""

    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(e):
        if e.code >= 500:
            app.logger.error(f'{request.method} {request.path} failed: {e.message}')
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(404)
    def not_found(e):
        app.logger.warning(f'Route not found {request.method} {request.path}')
        return jsonify({'message': 'Route not found', 'path': request.path}), 404

    @app.errorhandler(413)
    def payload_too_large(e):
        return jsonify({'message': 'Request payload too large'}), 413

    @app.errorhandler(HTTPException)
    def http_error(e):
        # 405 / 429 等，429 的 description 即限流提示
        return jsonify({'message': e.description}), e.code

    @app.errorhandler(500)
    def internal_server_error(e):
        original = getattr(e, 'original_exception', None) or e
        app.logger.error(f'Unhandled error {request.method} {request.path}: {original}')
        return jsonify({'message': 'Internal server error'}), 500


def register_commands(app):
    """注册 Flask CLI 命令"""
    app.cli.add_command(commands.status)
    app.cli.add_command(commands.unused_media)
    app.cli.add_command(commands.reset_password)


def configure_logging(app):
    """配置彩色控制台日志，提升开发体验"""
    if app.testing:
        return

    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if app.debug else logging.INFO)

    formatter = colorlog.ColoredFormatter(
        "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(message)s",
        datefmt="%H:%M:%S",
        reset=True,
        log_colors={
            'DEBUG':    'cyan',
            'INFO':     'green',
            'WARNING':  'yellow',
            'ERROR':    'red',
            'CRITICAL': 'red,bg_white',
        },
        secondary_log_colors={},
        style='%'
    )
    handler.setFormatter(formatter)

    # app.logger 即 "portfolio" 包日志，各模块的 getLogger(__name__) 会传播到这里
    # 重复创建 app 时不重复挂载
    app.logger.removeHandler(default_handler)
    if not any(isinstance(h.formatter, colorlog.ColoredFormatter) for h in app.logger.handlers):
        app.logger.addHandler(handler)
    app.logger.setLevel(logging.DEBUG if app.debug else logging.INFO)
