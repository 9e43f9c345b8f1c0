import uuid

from .access_log import AccessLogEntry, utc_now_iso

def generate_tracking_id():
    return str(uuid.uuid4())

def short_id_for(tracking_id):
    """短 ID 取跟踪 ID 的第一段（8 位十六进制），不做唯一性校验"""
    return tracking_id.split('-')[0]

class TrackingRecord:
    """一份上传 PDF 的跟踪元数据，以 tracking_id 为键保存在记录存储中"""

    def __init__(self, tracking_id, original_name, file_name, short_id=None,
                 uploaded_at=None, access_logs=None, total_views=0,
                 total_downloads=0, allow_download=True, viewer_url=None,
                 page_count=None):
        self.tracking_id = tracking_id
        self.short_id = short_id or short_id_for(tracking_id)
        self.original_name = original_name
        self.file_name = file_name
        self.uploaded_at = uploaded_at or utc_now_iso()
        self.access_logs = list(access_logs or [])
        self.total_views = total_views
        self.total_downloads = total_downloads
        self.allow_download = allow_download
        self.viewer_url = viewer_url
        self.page_count = page_count

    @classmethod
    def create(cls, original_name, file_name, tracking_id=None, viewer_url=None, page_count=None):
        """新建一条计数为 0、访问日志为空的记录"""
        return cls(
            tracking_id=tracking_id or generate_tracking_id(),
            original_name=original_name,
            file_name=file_name,
            viewer_url=viewer_url,
            page_count=page_count,
        )

    def __repr__(self):
        return f'<TrackingRecord {self.short_id} {self.original_name}>'

    def __str__(self):
        return self.original_name

    def to_json(self):
        return {
            'trackingId': self.tracking_id,
            'shortId': self.short_id,
            'originalName': self.original_name,
            'fileName': self.file_name,
            'uploadedAt': self.uploaded_at,
            'accessLogs': [entry.to_json() for entry in self.access_logs],
            'totalViews': self.total_views,
            'totalDownloads': self.total_downloads,
            'allowDownload': self.allow_download,
            'viewerUrl': self.viewer_url,
            'pageCount': self.page_count,
        }

    @classmethod
    def from_json(cls, data):
        return cls(
            tracking_id=data['trackingId'],
            short_id=data.get('shortId'),
            original_name=data.get('originalName'),
            file_name=data.get('fileName'),
            uploaded_at=data.get('uploadedAt'),
            access_logs=[AccessLogEntry.from_json(item) for item in data.get('accessLogs') or []],
            total_views=data.get('totalViews', 0),
            total_downloads=data.get('totalDownloads', 0),
            allow_download=data.get('allowDownload', True),
            viewer_url=data.get('viewerUrl'),
            page_count=data.get('pageCount'),
        )
