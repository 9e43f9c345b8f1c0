from datetime import datetime, timezone

ACTION_VIEW = 'view'
ACTION_DOWNLOAD = 'download'
ACTION_PAGE_VIEW = 'page_view'
ACTIONS = (ACTION_VIEW, ACTION_DOWNLOAD, ACTION_PAGE_VIEW)

def utc_now_iso():
    """当前 UTC 时间，ISO-8601 毫秒精度并以 Z 结尾（如 2024-05-01T08:00:00.000Z）"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

class AccessLogEntry:
    """一次访问事件：view / download / page_view"""

    # 可选字段：JSON 键名 -> 属性名
    OPTIONAL_FIELDS = {
        'page': 'page',
        'timeSpent': 'time_spent',
        'pagesViewed': 'pages_viewed',
        'totalPages': 'total_pages',
        'completion': 'completion',
    }

    def __init__(self, action, ip=None, user_agent=None, timestamp=None, page=None,
                 time_spent=None, pages_viewed=None, total_pages=None, completion=None):
        if action not in ACTIONS:
            raise ValueError(f'unknown access action: {action}')
        self.timestamp = timestamp or utc_now_iso()
        self.action = action
        self.ip = ip
        self.user_agent = user_agent
        self.page = page
        # 会话摘要字段，仅在 view 记录上由 attach_session_summary 写入
        self.time_spent = time_spent
        self.pages_viewed = pages_viewed
        self.total_pages = total_pages
        self.completion = completion

    @property
    def has_session_summary(self):
        return self.completion is not None

    def __repr__(self):
        return f'<AccessLogEntry {self.action} {self.timestamp}>'

    def to_json(self):
        data = {
            'timestamp': self.timestamp,
            'action': self.action,
            'ip': self.ip,
            'userAgent': self.user_agent,
        }
        for key, attr in self.OPTIONAL_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_json(cls, data):
        kwargs = {attr: data.get(key) for key, attr in cls.OPTIONAL_FIELDS.items()}
        return cls(
            action=data.get('action'),
            ip=data.get('ip'),
            user_agent=data.get('userAgent'),
            timestamp=data.get('timestamp'),
            **kwargs
        )
