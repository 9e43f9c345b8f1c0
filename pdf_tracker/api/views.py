import logging
import math

from flask import jsonify, request, send_file
from werkzeug.exceptions import RequestEntityTooLarge

from . import api
from ..models.access_log import ACTION_DOWNLOAD, ACTION_PAGE_VIEW
from ..utils.analytics import attach_session_summary, log_request_access
from ..utils.export import XLSX_MIMETYPE, build_access_log_workbook
from ..utils.store import get_store
from ..utils.upload import UploadError, remove_upload, save_upload

logger = logging.getLogger(__name__)


class BadRequestBody(ValueError):
    pass


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def _json_body(force=False):
    # sendBeacon 发送的是 text/plain，track-session 需要强制按 JSON 解析
    data = request.get_json(force=force, silent=True)
    if not isinstance(data, dict):
        raise BadRequestBody('Invalid JSON body')
    return data


def _tracking_id(data):
    tracking_id = data.get('trackingId')
    if not tracking_id or not isinstance(tracking_id, str):
        raise BadRequestBody('trackingId is required')
    return tracking_id


def _int_field(data, key, default=None):
    value = data.get(key, default)
    if value is None or isinstance(value, bool):
        raise BadRequestBody(f'{key} must be an integer')
    # JSON 允许 1e400 / Infinity，只接受有限且为整数值的浮点数
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise BadRequestBody(f'{key} must be an integer')
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise BadRequestBody(f'{key} must be an integer')


@api.route('/upload', methods=['POST'])
def upload():
    try:
        record, shareable_link, stats_url = save_upload(request.files.get('pdf'))
        return jsonify({
            'success': True,
            'trackingId': record.tracking_id,
            'shortId': record.short_id,
            'shareableLink': shareable_link,
            'statsUrl': stats_url,
            'message': 'PDF uploaded successfully! Share the link below.'
        })
    except UploadError as e:
        logger.info(f"Upload rejected: {e.message}")
        return _error(e.message, e.status)
    except RequestEntityTooLarge:
        return _error('File too large', 413)
    except Exception as e:
        logger.error(f"Upload error: {str(e)}", exc_info=True)
        return _error(str(e), 500)


@api.route('/log-download', methods=['POST'])
def log_download():
    try:
        tracking_id = _tracking_id(_json_body())
        store = get_store()
        record = store.get(tracking_id)
        if record is None:
            return _error('PDF not found', 404)
        log_request_access(record, ACTION_DOWNLOAD)
        store.put(record)
        return jsonify({'success': True})
    except BadRequestBody as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.error(f"Error logging download: {str(e)}", exc_info=True)
        return _error(str(e), 500)


@api.route('/track-page', methods=['POST'])
def track_page():
    try:
        data = _json_body()
        tracking_id = _tracking_id(data)
        page = _int_field(data, 'page')
        store = get_store()
        record = store.get(tracking_id)
        if record is None:
            return _error('PDF not found', 404)
        # 同一页的重复上报由查看页脚本去重，服务端照单全收
        log_request_access(record, ACTION_PAGE_VIEW, page=page)
        store.put(record)
        return jsonify({'success': True})
    except BadRequestBody as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.error(f"Error tracking page view: {str(e)}", exc_info=True)
        return _error(str(e), 500)


@api.route('/track-session', methods=['POST'])
def track_session():
    try:
        data = _json_body(force=True)
        tracking_id = _tracking_id(data)
        time_spent = _int_field(data, 'timeSpent', 0)
        pages_viewed = _int_field(data, 'pagesViewed', 0)
        total_pages = _int_field(data, 'totalPages', 0)

        store = get_store()
        record = store.get(tracking_id)
        # 记录已删除或尚无 view 日志时忽略本次上报
        if record is not None and attach_session_summary(record, time_spent, pages_viewed, total_pages):
            store.put(record)
        return jsonify({'success': True})
    except BadRequestBody as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.error(f"Error tracking session: {str(e)}", exc_info=True)
        return _error(str(e), 500)


@api.route('/stats/<tracking_id>')
def get_stats(tracking_id):
    try:
        record = get_store().get(tracking_id)
        if record is None:
            return _error('PDF not found', 404)
        return jsonify(record.to_json())
    except Exception as e:
        logger.error(f"Error reading stats {tracking_id}: {str(e)}", exc_info=True)
        return _error(str(e), 500)


@api.route('/stats')
def get_all_stats():
    try:
        records = get_store().list()
        return jsonify({key: record.to_json() for key, record in records.items()})
    except Exception as e:
        logger.error(f"Error reading stats: {str(e)}", exc_info=True)
        return _error(str(e), 500)


@api.route('/stats/<tracking_id>/export')
def export_stats(tracking_id):
    """导出单个文档的访问日志为 XLSX。"""
    try:
        record = get_store().get(tracking_id)
        if record is None:
            return _error('PDF not found', 404)
        output = build_access_log_workbook(record)
        return send_file(
            output,
            as_attachment=True,
            download_name=f'{record.short_id}_access_log.xlsx',
            mimetype=XLSX_MIMETYPE
        )
    except Exception as e:
        logger.error(f"Error exporting stats {tracking_id}: {str(e)}", exc_info=True)
        return _error(str(e), 500)


@api.route('/delete/<tracking_id>', methods=['DELETE'])
def delete(tracking_id):
    try:
        store = get_store()
        record = store.get(tracking_id)
        if record is None:
            return _error('PDF not found', 404)
        remove_upload(record)
        store.delete(tracking_id)
        logger.info(f"PDF deleted: {record.original_name} (tracking id {tracking_id})")
        return jsonify({'success': True, 'message': 'PDF deleted successfully'})
    except Exception as e:
        logger.error(f"Error deleting {tracking_id}: {str(e)}", exc_info=True)
        return _error(str(e), 500)
