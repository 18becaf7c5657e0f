import os
from dotenv import load_dotenv

# 加载 .env 环境变量
load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))


def _build_allowed_origins():
    """基础跨域白名单 + DOMAIN 扩展"""
    origins = os.environ.get('ALLOWED_ORIGINS', 'http://localhost:5173,http://localhost:4000')
    domain = os.environ.get('DOMAIN')
    if domain:
        origins = ','.join([
            origins,
            f'http://{domain}',
            f'https://{domain}',
            f'http://{domain}:3000',
            f'http://{domain}:4000',
            f'http://{domain}:5173',
        ])
    return [origin.strip() for origin in origins.split(',') if origin.strip()]


class Config:
    """基础配置类"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'

    # 管理员与令牌配置
    JWT_SECRET = os.environ.get('JWT_SECRET') or 'replace-with-strong-secret'
    JWT_EXPIRES_HOURS = int(os.environ.get('JWT_EXPIRES_HOURS', 2))
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'

    # 数据文件配置 (JSON 文件存储)
    DATA_DIR = os.environ.get('DATA_DIR') or os.path.join(basedir, 'data')
    PROJECTS_FILE = os.environ.get('PROJECTS_FILE') or os.path.join(DATA_DIR, 'projects.json')
    STORIES_FILE = os.environ.get('STORIES_FILE') or os.path.join(DATA_DIR, 'stories.json')
    META_FILE = os.environ.get('META_FILE') or os.path.join(DATA_DIR, 'db.json')

    # 文件上传配置
    UPLOADS_DIR = os.environ.get('UPLOADS_DIR') or os.path.join(basedir, 'uploads')
    MAX_CONTENT_LENGTH = int(os.environ.get('BODY_SIZE_LIMIT_MB', 50)) * 1024 * 1024

    # 跨域与限流
    ALLOWED_ORIGINS = _build_allowed_origins()
    RATELIMIT_ENABLED = True

    @staticmethod
    def init_app(app):
        # 确保数据与上传目录存在
        for folder in (os.path.dirname(app.config['PROJECTS_FILE']), app.config['UPLOADS_DIR']):
            if not os.path.exists(folder):
                os.makedirs(folder)


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True


class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False

    # 生产环境不允许使用默认凭据
    JWT_SECRET = os.environ.get('JWT_SECRET')
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    @classmethod
    def init_app(cls, app):
        secret = app.config.get('JWT_SECRET')
        if not secret or secret == 'replace-with-strong-secret':
            raise RuntimeError('JWT_SECRET environment variable must be set to a strong secret')
        if len(secret) < 32:
            raise RuntimeError('JWT_SECRET must be at least 32 characters long')
        username = app.config.get('ADMIN_USERNAME')
        if not username or len(username) < 3:
            raise RuntimeError('ADMIN_USERNAME environment variable must be set (minimum 3 characters)')
        password = app.config.get('ADMIN_PASSWORD')
        if not password or len(password) < 8:
            raise RuntimeError('ADMIN_PASSWORD environment variable must be set (minimum 8 characters)')
        Config.init_app(app)


class TestingConfig(Config):
    TESTING = True
    JWT_SECRET = 'testing-secret-testing-secret-testing-secret'
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'admin12345'
    RATELIMIT_ENABLED = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
