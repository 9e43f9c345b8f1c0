import logging
import os
import uuid

from flask import current_app, request, url_for
from werkzeug.utils import secure_filename

from ..models import TrackingRecord
from ..models.tracking_record import generate_tracking_id
from .pdf_info import read_page_count
from .store import get_store

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = 'application/pdf'


class UploadError(Exception):
    """上传被拒绝（缺少文件、类型不符等），status 为对应的 HTTP 状态码"""

    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


def generate_filename(original_filename):
    """Generate the stored filename: a fresh UUID prefix plus the sanitised original name."""
    safe_name = secure_filename(original_filename or '') or 'document.pdf'
    return f"{uuid.uuid4()}-{safe_name}"


def upload_path(filename):
    return os.path.join(current_app.config['UPLOAD_FOLDER'], filename)


def build_server_url():
    """Base URL for shareable links.
    Prefer PUBLIC_BASE_URL if configured; otherwise http for localhost hosts, https for everything else.
    """
    base = current_app.config.get('PUBLIC_BASE_URL')
    if base:
        return base.rstrip('/')
    host = request.host
    protocol = 'http' if 'localhost' in host else 'https'
    return f"{protocol}://{host}"


def validate_upload(file):
    """只按声明的 Content-Type 判断，不检查文件内容"""
    if file is None or not file.filename:
        raise UploadError('No file uploaded')
    if file.mimetype != PDF_CONTENT_TYPE:
        raise UploadError('Only PDF files are allowed!')


def save_upload(file):
    """保存上传的 PDF 并创建跟踪记录，返回 (record, shareable_link, stats_url)"""
    validate_upload(file)

    tracking_id = generate_tracking_id()
    filename = generate_filename(file.filename)
    upload_dir = current_app.config['UPLOAD_FOLDER']
    os.makedirs(upload_dir, exist_ok=True)
    final_path = upload_path(filename)
    file.save(final_path)

    server_url = build_server_url()
    record = TrackingRecord.create(
        original_name=file.filename,
        file_name=filename,
        tracking_id=tracking_id,
        page_count=read_page_count(final_path),
    )
    record.viewer_url = f"{server_url}{url_for('main.viewer', short_id=record.short_id)}"

    store = get_store()
    try:
        if store.short_id_in_use(record.short_id):
            # 短 ID 冲突不做处理，查看链接会解析到先上传的那份文档
            logger.warning(f"Short id collision: {record.short_id} (new tracking id {tracking_id})")
        store.put(record)
    except Exception:
        # 记录写入失败时删除已保存的文件，避免留下孤立文件
        if os.path.exists(final_path):
            os.remove(final_path)
        raise

    stats_url = f"{server_url}{url_for('api.get_stats', tracking_id=tracking_id)}"
    logger.info(f"PDF uploaded: {file.filename} -> {filename} (tracking id {tracking_id})")
    return record, record.viewer_url, stats_url


def remove_upload(record):
    """删除记录对应的 PDF 文件，文件不存在时返回 False"""
    path = upload_path(record.file_name)
    if os.path.exists(path):
        os.remove(path)
        return True
    return False
