import json
import os
import sys
import unittest
from contextlib import redirect_stdout
from io import StringIO

from .base import TrackerTestCase

# scripts/ 不是包，按路径导入
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'scripts'))

import backup
import manage


def _quiet(func, *args, **kwargs):
    with redirect_stdout(StringIO()):
        return func(*args, **kwargs)


class TestManage(TrackerTestCase):

    def test_list_and_show(self):
        data = self.upload_ok()
        self.client.get(f"/v/{data['shortId']}")

        records = _quiet(manage.list_records, app=self.app)
        self.assertEqual([r.tracking_id for r in records], [data['trackingId']])

        out = StringIO()
        with redirect_stdout(out):
            record = manage.show_record(data['trackingId'], app=self.app)
        self.assertEqual(record.total_views, 1)
        self.assertIn('view', out.getvalue())

    def test_delete_record(self):
        data = self.upload_ok()
        self.assertTrue(_quiet(manage.delete_record, data['trackingId'], app=self.app))
        self.assertEqual(self.stats(data['trackingId']).status_code, 404)
        self.assertEqual(os.listdir(self.upload_dir), [])
        self.assertFalse(_quiet(manage.delete_record, data['trackingId'], app=self.app))

    def test_orphans(self):
        self.upload_ok()
        stray = os.path.join(self.upload_dir, 'stray.pdf')
        with open(stray, 'wb') as f:
            f.write(b'%PDF-')

        self.assertEqual(_quiet(manage.find_orphans, app=self.app), ['stray.pdf'])
        self.assertTrue(os.path.exists(stray))
        self.assertEqual(_quiet(manage.find_orphans, remove=True, app=self.app), ['stray.pdf'])
        self.assertFalse(os.path.exists(stray))
        self.assertEqual(len(os.listdir(self.upload_dir)), 1)


class TestBackup(TrackerTestCase):

    def test_backup_and_restore(self):
        data = self.upload_ok()
        backup_dir = os.path.join(self.tmpdir, 'backups')

        backup_path = _quiet(backup.backup_data, self.data_file, backup_dir)
        self.assertTrue(os.path.exists(backup_path))
        self.assertEqual(_quiet(backup.list_backups, backup_dir), [os.path.basename(backup_path)])

        self.client.delete(f"/api/delete/{data['trackingId']}")
        self.assertEqual(self.client.get('/api/stats').get_json(), {})

        self.assertTrue(_quiet(backup.restore_data, self.data_file, backup_path))
        self.assertEqual(self.stats(data['trackingId']).status_code, 200)

    def test_restore_rejects_invalid_backup(self):
        bad = os.path.join(self.tmpdir, 'bad.json')
        with open(bad, 'w', encoding='utf-8') as f:
            json.dump([1, 2, 3], f)
        self.assertFalse(_quiet(backup.restore_data, self.data_file, bad))

    def test_missing_data_file(self):
        self.assertIsNone(_quiet(backup.backup_data, self.data_file + '.missing', self.tmpdir))


if __name__ == '__main__':
    unittest.main()
