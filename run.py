#!/usr/bin/env python
import os
from dotenv import load_dotenv

# 先加载 .env，再按 FLASK_ENV 选择配置
load_dotenv()

from pdf_tracker import create_app
from pdf_tracker.models import TrackingRecord, AccessLogEntry
from pdf_tracker.utils.store import get_store

app = create_app(os.getenv('FLASK_ENV') or 'default')

@app.shell_context_processor
def make_shell_context():
    return dict(store=get_store(), TrackingRecord=TrackingRecord,
                AccessLogEntry=AccessLogEntry)

if __name__ == '__main__':
    # 本地开发可通过 FLASK_ENV=development 启动 debug，生产禁止强制开启
    app.run(host=os.getenv('HOST', '127.0.0.1'),
            port=int(os.getenv('PORT', '3000')),
            debug=app.config.get('DEBUG', False))
