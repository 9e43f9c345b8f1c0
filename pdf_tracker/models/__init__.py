from .access_log import AccessLogEntry
from .tracking_record import TrackingRecord

__all__ = ['AccessLogEntry', 'TrackingRecord']
