import json
import os
import time
from unittest import mock

import ddt
import requests

from codeplug import config
from codeplug import errors
from codeplug import userdb
from tests.unit import base

USERS = {
    'users': [
        {'radio_id': 2621001, 'callsign': 'DL1ABC', 'fname': 'Hans',
         'surname': 'Meier', 'city': 'Berlin', 'state': 'Berlin',
         'country': 'Germany', 'remarks': ''},
        {'radio_id': 3100001, 'callsign': 'W1AW', 'fname': 'Hiram',
         'surname': None, 'city': 'Newington', 'state': 'Connecticut',
         'country': 'United States', 'remarks': 'ARRL'},
        {'radio_id': '2321005', 'callsign': 'OE1XYZ ', 'fname': 'Anna',
         'surname': '', 'city': 'Wien', 'state': '',
         'country': 'Austria', 'remarks': None},
        {'callsign': 'BROKEN'},
    ]
}


def users(ids):
    return [userdb.UserRecord(i, 'C%i' % i) for i in ids]


class TestUserRecord(base.BaseTest):
    def test_from_json(self):
        record = userdb.UserRecord.from_json(USERS['users'][1])
        self.assertEqual(3100001, record.id)
        self.assertEqual('W1AW', record.callsign)
        self.assertEqual('', record.surname)
        self.assertEqual('Hiram, Newington, Connecticut, United States, '
                         'ARRL', record.describe())

    def test_from_json_string_id(self):
        record = userdb.UserRecord.from_json(USERS['users'][2])
        self.assertEqual(2321005, record.id)
        self.assertEqual('OE1XYZ', record.callsign)
        self.assertEqual('Anna, Wien, Austria', record.describe())

    def test_from_json_no_id(self):
        record = userdb.UserRecord.from_json(USERS['users'][3])
        self.assertFalse(record.is_valid())

    def test_valid(self):
        self.assertTrue(userdb.UserRecord(1, 'A').is_valid())
        self.assertTrue(userdb.UserRecord(0xFFFFFF, 'A').is_valid())
        self.assertFalse(userdb.UserRecord(0, 'A').is_valid())
        self.assertFalse(userdb.UserRecord(0x1000000, 'A').is_valid())


class TestUserDatabase(base.BaseTest):
    def _write(self, name='users.json', data=USERS):
        path = os.path.join(self.tempdir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        return path

    def test_load(self):
        db = userdb.UserDatabase()
        self.assertEqual(4, db.load(self._write()))
        self.assertEqual(4, db.count())
        self.assertEqual('DL1ABC', db.records()[0].callsign)

    def test_load_garbage(self):
        path = os.path.join(self.tempdir.name, 'bad.json')
        with open(path, 'w') as f:
            f.write('{"users": [')
        self.assertRaises(errors.DownloadError,
                          userdb.UserDatabase().load, path)
        path = self._write('other.json', {'results': []})
        self.assertRaises(errors.DownloadError,
                          userdb.UserDatabase().load, path)

    def test_sort_by_distance(self):
        db = userdb.UserDatabase(users([3100001, 2621999, 2629000, 2621001,
                                        2620000, 1234567]))
        db.sort_by_distance(2621000)
        self.assertEqual([2621001, 2621999, 2620000, 2629000, 3100001,
                          1234567], [x.id for x in db])

    def test_sort_by_distance_ties(self):
        db = userdb.UserDatabase(users([2621013, 2621011]))
        db.sort_by_distance(2621012)
        self.assertEqual([2621011, 2621013], [x.id for x in db])

    @mock.patch('requests.get')
    def test_download(self, mock_get):
        mock_get.return_value.content = json.dumps(USERS).encode()
        path = os.path.join(self.tempdir.name, 'dl.json')
        db = userdb.UserDatabase()
        self.assertEqual(4, db.download(path=path))
        mock_get.assert_called_once_with(userdb.DEFAULT_URL,
                                         headers=userdb.HEADERS, timeout=60)
        mock_get.return_value.raise_for_status.assert_called_once_with()
        self.assertTrue(os.path.exists(path))

    @mock.patch('requests.get')
    def test_download_default_path(self, mock_get):
        mock_get.return_value.content = json.dumps(USERS).encode()
        db = userdb.UserDatabase()
        db.download()
        self.assertTrue(os.path.exists(os.path.join(
            self.tempdir.name, 'cache', userdb.CACHE_NAME)))

    @mock.patch('requests.get')
    def test_download_configured_url(self, mock_get):
        mock_get.return_value.content = json.dumps(USERS).encode()
        config.get('userdb').set('url', 'http://example.com/u.json')
        userdb.UserDatabase().download(
            path=os.path.join(self.tempdir.name, 'dl.json'))
        self.assertEqual('http://example.com/u.json',
                         mock_get.call_args[0][0])

    @mock.patch('requests.get')
    def test_download_uses_cache(self, mock_get):
        path = self._write()
        db = userdb.UserDatabase()
        self.assertEqual(4, db.download(path=path))
        mock_get.assert_not_called()

    @mock.patch('requests.get')
    def test_download_stale_cache(self, mock_get):
        mock_get.return_value.content = json.dumps({'users': []}).encode()
        path = self._write()
        old = time.time() - 8 * 86400
        os.utime(path, (old, old))
        self.assertEqual(0, userdb.UserDatabase().download(path=path))
        mock_get.assert_called_once()

    @mock.patch('requests.get')
    def test_download_force(self, mock_get):
        mock_get.return_value.content = json.dumps({'users': []}).encode()
        path = self._write()
        self.assertEqual(0, userdb.UserDatabase().download(path=path,
                                                           force=True))

    @mock.patch('requests.get')
    def test_download_fails(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError('nope')
        self.assertRaises(errors.DownloadError,
                          userdb.UserDatabase().download,
                          path=os.path.join(self.tempdir.name, 'x.json'))


@ddt.ddt
class TestSelection(base.BaseTest):
    def _records(self):
        records = users([7, 3, 7, 0, 5, 3, 7])
        for i, record in enumerate(records):
            record.name = 'n%i' % i
        return records

    @ddt.data(('first', [7, 3, 5], ['n0', 'n1', 'n4'], 1 + 3),
              ('last', [7, 3, 5], ['n6', 'n5', 'n4'], 1 + 3),
              ('reject', [5], ['n4'], 1 + 5))
    @ddt.unpack
    def test_duplicates(self, policy, ids, names, rejected):
        selection = userdb.Selection(
            duplicates=userdb.DuplicatePolicy(policy))
        result = selection.select(self._records(), 100)
        self.assertEqual(ids, [x.id for x in result.records])
        self.assertEqual(names, [x.name for x in result.records])
        self.assertEqual(rejected, result.rejected)
        self.assertEqual(len(ids), result.available)
        self.assertFalse(result.truncated)

    def test_default_policy(self):
        self.assertEqual(userdb.DuplicatePolicy.FIRST,
                         userdb.Selection().duplicates)

    @ddt.data(('last', userdb.DuplicatePolicy.LAST),
              ('REJECT', userdb.DuplicatePolicy.REJECT),
              ('bogus', userdb.DuplicatePolicy.FIRST))
    @ddt.unpack
    def test_configured_policy(self, value, policy):
        config.get('callsigndb').set('duplicates', value)
        self.assertEqual(policy, userdb.Selection().duplicates)

    def test_capacity(self):
        result = userdb.Selection().select(users(range(1, 11)), 4)
        self.assertTrue(result.truncated)
        self.assertEqual([1, 2, 3, 4], [x.id for x in result.records])
        self.assertEqual(10, result.available)

    def test_limit(self):
        result = userdb.Selection(limit=2).select(users(range(1, 4)), 10)
        self.assertTrue(result.truncated)
        self.assertEqual(2, len(result.records))
        self.assertRaises(ValueError, userdb.Selection, limit=-1)

    def test_reference_id(self):
        selection = userdb.Selection(reference_id=2621000)
        result = selection.select(users([3100001, 2621001, 2620500]), 2)
        self.assertEqual([2621001, 2620500], [x.id for x in result.records])

    def test_query(self):
        records = users([1, 2, 3])
        records[1].country = 'Germany'
        selection = userdb.Selection(query='country="Germany" OR id=3')
        result = selection.select(records, 10)
        self.assertEqual([2, 3], [x.id for x in result.records])
        self.assertEqual(0, result.rejected)
