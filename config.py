import os
basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'
    # 上传大小上限（MB），超出时返回 413
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_UPLOAD_MB', '50')) * 1024 * 1024
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'uploads')
    # 全部跟踪记录保存在一个 JSON 文档中
    TRACKING_DATA_FILE = os.environ.get('TRACKING_DATA_FILE') or \
        os.path.join(basedir, 'data', 'tracking.json')
    TRACKING_STORE = os.environ.get('TRACKING_STORE', 'json')
    # 对外分享链接的前缀，例如 https://pdf.example.com；为空时按请求 Host 推断
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL')
    TRUST_PROXY = os.environ.get('TRUST_PROXY', 'false').lower() in \
        ['true', 'on', '1']
    LOG_DIR = os.environ.get('LOG_DIR') or 'logs'
    PDFJS_CDN = os.environ.get('PDFJS_CDN') or \
        'https://cdnjs.cloudflare.com/ajax/libs/pdf.js/3.11.174'

class DevelopmentConfig(Config):
    DEBUG = True

class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False

class ProductionConfig(Config):
    # 生产环境通常部署在反向代理之后
    TRUST_PROXY = os.environ.get('TRUST_PROXY', 'true').lower() in \
        ['true', 'on', '1']

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
