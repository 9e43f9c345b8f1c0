import logging
import os

from flask import render_template, current_app, send_file
from werkzeug.exceptions import RequestEntityTooLarge

from . import main
from .forms import UploadForm
from ..models.access_log import ACTION_VIEW
from ..utils.analytics import log_request_access
from ..utils.store import get_store
from ..utils.upload import UploadError, save_upload, upload_path

logger = logging.getLogger(__name__)

@main.route('/', methods=['GET', 'POST'])
def index():
    result = None
    error = None
    form = None
    try:
        # 表单构造时会解析请求体，超出大小限制在这里抛出
        form = UploadForm()
        if form.validate_on_submit():
            record, shareable_link, stats_url = save_upload(form.pdf.data)
            result = {
                'record': record,
                'shareable_link': shareable_link,
                'stats_url': stats_url,
            }
        elif form.errors:
            error = '; '.join(msg for messages in form.errors.values() for msg in messages)
    except UploadError as e:
        return render_template('index.html', form=form, result=None, error=e.message), e.status
    except RequestEntityTooLarge:
        return render_template('index.html', form=UploadForm(formdata=None), result=None, error='文件过大'), 413
    except Exception as e:
        logger.error(f"Upload page error: {str(e)}", exc_info=True)
        return render_template('index.html', form=form if form is not None else UploadForm(formdata=None), result=None,
                               error='上传失败，请稍后重试'), 500

    status = 400 if error else 200
    return render_template('index.html', form=form, result=result, error=error), status

@main.route('/v/<short_id>')
def viewer(short_id):
    try:
        store = get_store()
        record = store.find_by_short_id(short_id)
        if record is None:
            return render_template('not_found.html'), 404

        log_request_access(record, ACTION_VIEW)
        store.put(record)
    except Exception as e:
        logger.error(f"Error serving viewer {short_id}: {str(e)}", exc_info=True)
        return 'Error loading document', 500

    return render_template(
        'viewer.html',
        record=record,
        pdfjs_cdn=current_app.config['PDFJS_CDN'].rstrip('/')
    )

def _resolve_pdf(tracking_id):
    """返回 (record, path)；找不到时返回 (None, 错误文本)"""
    record = get_store().get(tracking_id)
    if record is None:
        return None, 'PDF not found'
    path = upload_path(record.file_name)
    if not os.path.exists(path):
        return None, 'PDF file not found'
    return record, path

@main.route('/get-pdf/<tracking_id>')
def get_pdf(tracking_id):
    try:
        record, path = _resolve_pdf(tracking_id)
        if record is None:
            return path, 404
        return send_file(path, mimetype='application/pdf')
    except Exception as e:
        logger.error(f"Error serving PDF {tracking_id}: {str(e)}", exc_info=True)
        return 'Error serving PDF', 500

@main.route('/download/<tracking_id>')
def download(tracking_id):
    # 下载计数由 /api/log-download 负责，这里只返回文件
    try:
        record, path = _resolve_pdf(tracking_id)
        if record is None:
            return path, 404
        return send_file(
            path,
            mimetype='application/pdf',
            as_attachment=True,
            download_name=record.original_name
        )
    except Exception as e:
        logger.error(f"Error downloading PDF {tracking_id}: {str(e)}", exc_info=True)
        return 'Error downloading PDF', 500
