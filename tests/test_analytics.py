import unittest

from pdf_tracker.models import TrackingRecord
from pdf_tracker.utils.analytics import (
    attach_session_summary, completion_percentage, log_access, page_view_counts
)


class TestCompletionPercentage(unittest.TestCase):

    def test_rounds_to_nearest_percent(self):
        self.assertEqual(completion_percentage(3, 4), 75)
        self.assertEqual(completion_percentage(1, 3), 33)
        self.assertEqual(completion_percentage(2, 3), 67)

    def test_half_rounds_up(self):
        self.assertEqual(completion_percentage(1, 8), 13)

    def test_zero_total_pages(self):
        self.assertEqual(completion_percentage(5, 0), 0)
        self.assertEqual(completion_percentage(0, 0), 0)


class TestLogAccess(unittest.TestCase):

    def setUp(self):
        self.record = TrackingRecord.create('a.pdf', 'x-a.pdf')

    def test_view_increments_views(self):
        log_access(self.record, 'view', ip='1.2.3.4', user_agent='UA')
        self.assertEqual(self.record.total_views, 1)
        self.assertEqual(self.record.total_downloads, 0)
        self.assertEqual(len(self.record.access_logs), 1)
        self.assertEqual(self.record.access_logs[0].ip, '1.2.3.4')

    def test_download_increments_downloads(self):
        log_access(self.record, 'download')
        self.assertEqual(self.record.total_downloads, 1)
        self.assertEqual(self.record.total_views, 0)

    def test_page_view_only_appends(self):
        log_access(self.record, 'page_view', page=1)
        log_access(self.record, 'page_view', page=1)
        self.assertEqual(self.record.total_views, 0)
        self.assertEqual([e.page for e in self.record.access_logs], [1, 1])
        self.assertEqual(page_view_counts(self.record), {1: 2})


class TestAttachSessionSummary(unittest.TestCase):

    def setUp(self):
        self.record = TrackingRecord.create('a.pdf', 'x-a.pdf')

    def test_attaches_to_latest_view_without_appending(self):
        log_access(self.record, 'view')
        log_access(self.record, 'view')
        log_access(self.record, 'page_view', page=1)
        log_access(self.record, 'page_view', page=2)

        entry = attach_session_summary(self.record, 30, 2, 4)

        self.assertIs(entry, self.record.access_logs[1])
        self.assertEqual(len(self.record.access_logs), 4)
        self.assertEqual(entry.time_spent, 30)
        self.assertEqual(entry.pages_viewed, 2)
        self.assertEqual(entry.total_pages, 4)
        self.assertEqual(entry.completion, 50)
        self.assertFalse(self.record.access_logs[0].has_session_summary)

    def test_no_view_entry_is_tolerated(self):
        log_access(self.record, 'download')
        self.assertIsNone(attach_session_summary(self.record, 10, 1, 1))
        self.assertFalse(self.record.access_logs[0].has_session_summary)

    def test_duplicate_summary_overwrites(self):
        log_access(self.record, 'view')
        attach_session_summary(self.record, 10, 1, 4)
        attach_session_summary(self.record, 20, 4, 4)
        self.assertEqual(len(self.record.access_logs), 1)
        self.assertEqual(self.record.access_logs[0].time_spent, 20)
        self.assertEqual(self.record.access_logs[0].completion, 100)

    def test_zero_total_pages_gives_zero_completion(self):
        log_access(self.record, 'view')
        entry = attach_session_summary(self.record, 5, 0, 0)
        self.assertEqual(entry.completion, 0)
