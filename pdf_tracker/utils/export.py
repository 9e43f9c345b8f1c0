from io import BytesIO

from openpyxl import Workbook

from .analytics import page_view_counts

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

ACCESS_LOG_HEADERS = [
    '时间', '动作', 'IP', 'User-Agent', '页码',
    '停留秒数', '已读页数', '总页数', '完成度(%)'
]

def _cell(value):
    return '' if value is None else value

def build_access_log_workbook(record):
    """把一条记录的访问日志导出为 XLSX，返回 BytesIO。"""
    wb = Workbook()
    ws = wb.active
    ws.title = "Access Log"
    ws.append(ACCESS_LOG_HEADERS)

    for entry in record.access_logs:
        ws.append([
            entry.timestamp,
            entry.action,
            _cell(entry.ip),
            _cell(entry.user_agent),
            _cell(entry.page),
            _cell(entry.time_spent),
            _cell(entry.pages_viewed),
            _cell(entry.total_pages),
            _cell(entry.completion),
        ])

    summary = wb.create_sheet("Summary")
    summary.append(['文件名', record.original_name])
    summary.append(['Tracking ID', record.tracking_id])
    summary.append(['上传时间', record.uploaded_at])
    summary.append(['总浏览次数', record.total_views])
    summary.append(['总下载次数', record.total_downloads])
    summary.append(['总页数', _cell(record.page_count)])
    summary.append([])
    summary.append(['页码', '上报次数'])
    for page, count in page_view_counts(record).items():
        summary.append([page, count])

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
