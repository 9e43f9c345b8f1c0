#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
PDF Tracker 管理脚本
用于查看、删除跟踪记录以及清理孤立文件
"""

import sys
import os

# 添加项目根目录到Python路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from pdf_tracker import create_app
from pdf_tracker.utils.store import get_store
from pdf_tracker.utils.upload import remove_upload

def _create_app():
    load_dotenv()
    return create_app(os.getenv('FLASK_ENV') or 'default')

def list_records(app=None):
    """列出所有跟踪记录"""
    app = app or _create_app()
    with app.app_context():
        records = get_store().list()
        if not records:
            print("没有跟踪记录")
            return []

        print("跟踪记录列表:")
        print("短ID\t\t浏览\t下载\t上传时间\t\t\t文件名")
        print("-" * 100)
        for record in records.values():
            print(f"{record.short_id}\t{record.total_views}\t{record.total_downloads}\t"
                  f"{record.uploaded_at}\t{record.original_name}")
        return list(records.values())

def show_record(tracking_id, app=None):
    """显示单条记录的访问日志"""
    app = app or _create_app()
    with app.app_context():
        record = get_store().get(tracking_id)
        if not record:
            print(f"错误: 未找到跟踪ID为 {tracking_id} 的记录")
            return None

        print(f"文件名: {record.original_name}")
        print(f"分享链接: {record.viewer_url}")
        print(f"浏览: {record.total_views}  下载: {record.total_downloads}  页数: {record.page_count or '未知'}")
        for entry in record.access_logs:
            extra = ''
            if entry.page is not None:
                extra = f" page={entry.page}"
            if entry.has_session_summary:
                extra += f" time={entry.time_spent}s completion={entry.completion}%"
            print(f"  {entry.timestamp}  {entry.action:<9} {entry.ip or '-'}{extra}")
        return record

def delete_record(tracking_id, app=None):
    """删除记录及其 PDF 文件"""
    app = app or _create_app()
    with app.app_context():
        store = get_store()
        record = store.get(tracking_id)
        if not record:
            print(f"错误: 未找到跟踪ID为 {tracking_id} 的记录")
            return False

        remove_upload(record)
        store.delete(tracking_id)
        print(f"记录 '{record.original_name}' 删除成功")
        return True

def find_orphans(remove=False, app=None):
    """查找上传目录中没有对应记录的文件，remove=True 时一并删除"""
    app = app or _create_app()
    with app.app_context():
        upload_dir = app.config['UPLOAD_FOLDER']
        if not os.path.isdir(upload_dir):
            print(f"上传目录 {upload_dir} 不存在")
            return []

        known = {record.file_name for record in get_store().list().values()}
        orphans = sorted(f for f in os.listdir(upload_dir) if f not in known)
        if not orphans:
            print("没有孤立文件")
            return []

        for filename in orphans:
            if remove:
                os.remove(os.path.join(upload_dir, filename))
                print(f"  已删除 {filename}")
            else:
                print(f"  {filename}")
        return orphans

if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("用法:")
        print("  python manage.py list  # 列出所有跟踪记录")
        print("  python manage.py show <tracking_id>  # 显示访问日志")
        print("  python manage.py delete <tracking_id>  # 删除记录及文件")
        print("  python manage.py orphans [--remove]  # 列出（并删除）孤立文件")
        sys.exit(1)

    command = sys.argv[1]

    if command == 'list':
        list_records()

    elif command == 'show':
        if len(sys.argv) < 3:
            print("请提供跟踪ID")
            sys.exit(1)
        show_record(sys.argv[2])

    elif command == 'delete':
        if len(sys.argv) < 3:
            print("请提供跟踪ID")
            sys.exit(1)
        if not delete_record(sys.argv[2]):
            sys.exit(1)

    elif command == 'orphans':
        find_orphans(remove='--remove' in sys.argv)

    else:
        print(f"未知命令: {command}")
        sys.exit(1)
