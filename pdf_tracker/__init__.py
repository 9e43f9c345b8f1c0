from flask import Flask
from flask_compress import Compress
from flask_wtf.csrf import CSRFProtect
from werkzeug.middleware.proxy_fix import ProxyFix
from config import config

# 导入日志配置
from logging_config import setup_logging

from .utils.store import create_store

csrf = CSRFProtect()
compress = Compress()

def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    # 部署在反向代理之后时，用 X-Forwarded-For 还原访问者 IP
    if app.config.get('TRUST_PROXY'):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # 初始化扩展
    store = create_store(app.config.get('TRACKING_STORE', 'json'))
    store.init_app(app)
    csrf.init_app(app)
    compress.init_app(app)

    # 设置日志
    setup_logging(app)

    # 注册蓝图
    from .main import main as main_blueprint
    app.register_blueprint(main_blueprint)

    from .api import api as api_blueprint
    # API 由查看页脚本与 sendBeacon 调用，不带 CSRF token
    csrf.exempt(api_blueprint)
    app.register_blueprint(api_blueprint, url_prefix='/api')

    return app
