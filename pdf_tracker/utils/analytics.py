import math

from flask import request

from ..models.access_log import AccessLogEntry, ACTION_VIEW, ACTION_DOWNLOAD, ACTION_PAGE_VIEW

def completion_percentage(pages_viewed, total_pages):
    """阅读完成度：round(pages_viewed / total_pages * 100)，.5 向上取整；总页数为 0 时返回 0"""
    if not total_pages or total_pages <= 0:
        return 0
    return int(math.floor(pages_viewed / total_pages * 100 + 0.5))

def log_access(record, action, ip=None, user_agent=None, **extra):
    """向记录追加一条访问日志，并更新对应计数（page_view 不计数）"""
    entry = AccessLogEntry(action, ip=ip, user_agent=user_agent, **extra)
    record.access_logs.append(entry)
    if action == ACTION_VIEW:
        record.total_views += 1
    elif action == ACTION_DOWNLOAD:
        record.total_downloads += 1
    return entry

def latest_view_entry(record):
    for entry in reversed(record.access_logs):
        if entry.action == ACTION_VIEW:
            return entry
    return None

def attach_session_summary(record, time_spent, pages_viewed, total_pages):
    """把阅读会话摘要写到最近一次 view 日志上（原地修改，不追加新日志）。

    查看页关闭时浏览器用 sendBeacon 上报，可能丢失也可能重复：
    重复上报覆盖同一条日志；没有 view 日志时返回 None。
    """
    entry = latest_view_entry(record)
    if entry is None:
        return None
    entry.time_spent = time_spent
    entry.pages_viewed = pages_viewed
    entry.total_pages = total_pages
    entry.completion = completion_percentage(pages_viewed, total_pages)
    return entry

def page_view_counts(record):
    """统计每个页码被上报的次数（服务端不去重，直接按日志计数）"""
    counts = {}
    for entry in record.access_logs:
        if entry.action == ACTION_PAGE_VIEW and entry.page is not None:
            counts[entry.page] = counts.get(entry.page, 0) + 1
    return dict(sorted(counts.items()))

def log_request_access(record, action, **extra):
    """按当前请求的访问者 IP 与 User-Agent 记录访问"""
    return log_access(
        record, action,
        ip=request.remote_addr,
        user_agent=request.headers.get('User-Agent'),
        **extra
    )
