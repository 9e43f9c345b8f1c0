#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
PDF Tracker 日志配置
用于配置应用的日志记录
"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'

def setup_logging(app):
    """设置应用日志"""
    formatter = logging.Formatter(LOG_FORMAT)

    # 测试环境不写日志文件
    if not app.testing:
        log_dir = app.config.get('LOG_DIR') or 'logs'
        # 确保日志目录存在
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # 配置文件处理器
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'pdf_tracker.log'),
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)

        # 包内模块的 logger（pdf_tracker.*）会向上传递到 app.logger
        app.logger.addHandler(file_handler)

    # 设置日志级别
    app.logger.setLevel(logging.INFO)

    # 记录应用启动日志
    app.logger.info('PDF Tracker 启动')
