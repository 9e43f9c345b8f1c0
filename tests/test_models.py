import unittest

from pdf_tracker.models import AccessLogEntry, TrackingRecord


class TestAccessLogEntry(unittest.TestCase):

    def test_to_json_omits_unset_optional_fields(self):
        entry = AccessLogEntry('view', ip='10.0.0.1', user_agent='pytest')
        data = entry.to_json()
        self.assertEqual(set(data), {'timestamp', 'action', 'ip', 'userAgent'})
        self.assertEqual(data['action'], 'view')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_page_view_keeps_page_number(self):
        entry = AccessLogEntry('page_view', page=3)
        self.assertEqual(entry.to_json()['page'], 3)

    def test_from_json_reads_session_summary(self):
        entry = AccessLogEntry.from_json({
            'timestamp': '2024-05-01T08:00:00.000Z',
            'action': 'view',
            'ip': '127.0.0.1',
            'userAgent': 'UA',
            'timeSpent': 42,
            'pagesViewed': 3,
            'totalPages': 4,
            'completion': 75,
        })
        self.assertEqual(entry.time_spent, 42)
        self.assertEqual(entry.completion, 75)
        self.assertTrue(entry.has_session_summary)

    def test_unknown_action_rejected(self):
        with self.assertRaises(ValueError):
            AccessLogEntry('share')


class TestTrackingRecord(unittest.TestCase):

    def test_create_starts_empty(self):
        record = TrackingRecord.create('report.pdf', 'abc-report.pdf')
        self.assertEqual(record.total_views, 0)
        self.assertEqual(record.total_downloads, 0)
        self.assertEqual(record.access_logs, [])
        self.assertTrue(record.allow_download)

    def test_short_id_is_first_segment(self):
        record = TrackingRecord.create('a.pdf', 'x.pdf', tracking_id='1a2b3c4d-0000-4000-8000-000000000000')
        self.assertEqual(record.short_id, '1a2b3c4d')

    def test_json_uses_camel_case_keys(self):
        record = TrackingRecord.create('a.pdf', 'x.pdf', viewer_url='http://localhost/v/abc', page_count=2)
        data = record.to_json()
        for key in ('trackingId', 'shortId', 'originalName', 'fileName', 'uploadedAt',
                    'accessLogs', 'totalViews', 'totalDownloads', 'allowDownload', 'viewerUrl'):
            self.assertIn(key, data)
        restored = TrackingRecord.from_json(data)
        self.assertEqual(restored.tracking_id, record.tracking_id)
        self.assertEqual(restored.page_count, 2)
