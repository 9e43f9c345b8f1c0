import json
import logging
import os

from flask import current_app

from ..models import TrackingRecord
from ..models.tracking_record import short_id_for

logger = logging.getLogger(__name__)


class TrackingStore:
    """跟踪记录存储接口。

    所有处理函数都按 get -> 修改 -> put 的方式读写记录，不加锁：
    并发请求修改同一条记录时后写入者覆盖先写入者（计数和访问日志可能丢失更新）。
    需要加锁或换成嵌入式数据库时只需替换这里的实现。
    """

    def init_app(self, app):
        app.extensions['tracking_store'] = self

    def get(self, tracking_id):
        raise NotImplementedError

    def list(self):
        """返回 {tracking_id: TrackingRecord}，保持插入顺序"""
        raise NotImplementedError

    def put(self, record):
        raise NotImplementedError

    def delete(self, tracking_id):
        raise NotImplementedError

    def find_by_short_id(self, short_id):
        # 线性扫描；短 ID 冲突时返回最先插入的那条
        for record in self.list().values():
            if record.short_id == short_id:
                return record
        return None

    def short_id_in_use(self, short_id):
        return self.find_by_short_id(short_id) is not None


class JsonFileTrackingStore(TrackingStore):
    """把全部记录保存为单个 JSON 文档（{trackingId: record}），每次操作整份读写"""

    def __init__(self, data_file=None):
        self._data_file = data_file

    @property
    def data_file(self):
        return self._data_file or current_app.config['TRACKING_DATA_FILE']

    def _load(self):
        path = self.data_file
        if not os.path.exists(path):
            # 文件不存在时初始化为空集合
            self._save({})
            return {}
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _save(self, data):
        path = self.data_file
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get(self, tracking_id):
        data = self._load().get(tracking_id)
        if data is None:
            return None
        return TrackingRecord.from_json(data)

    def list(self):
        return {key: TrackingRecord.from_json(value) for key, value in self._load().items()}

    def put(self, record):
        data = self._load()
        data[record.tracking_id] = record.to_json()
        self._save(data)

    def delete(self, tracking_id):
        data = self._load()
        if tracking_id not in data:
            return False
        del data[tracking_id]
        self._save(data)
        return True

    def find_by_short_id(self, short_id):
        for key, value in self._load().items():
            # 缺少 shortId 的旧记录按跟踪 ID 推算，与 TrackingRecord.from_json 一致
            if (value.get('shortId') or short_id_for(key)) == short_id:
                return TrackingRecord.from_json(value)
        return None


class MemoryTrackingStore(TrackingStore):
    """进程内存储，仅用于测试和临时演示；进程退出即丢失"""

    def __init__(self):
        self._records = {}

    def get(self, tracking_id):
        data = self._records.get(tracking_id)
        return TrackingRecord.from_json(data) if data is not None else None

    def list(self):
        return {key: TrackingRecord.from_json(value) for key, value in self._records.items()}

    def put(self, record):
        # 存 JSON 快照而非对象本身，与文件存储的读写语义一致
        self._records[record.tracking_id] = record.to_json()

    def delete(self, tracking_id):
        return self._records.pop(tracking_id, None) is not None


STORE_BACKENDS = {
    'json': JsonFileTrackingStore,
    'memory': MemoryTrackingStore,
}


def create_store(backend):
    try:
        return STORE_BACKENDS[backend]()
    except KeyError:
        raise ValueError(f'unknown TRACKING_STORE backend: {backend}')


def get_store():
    return current_app.extensions['tracking_store']
