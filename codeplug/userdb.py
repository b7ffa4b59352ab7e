# Copyright 2026 The codeplug developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import enum
import json
import logging
import os
import sys
import time

import requests

from codeplug import CODEPLUG_VERSION
from codeplug import common, config, errors, platform, userquery

LOG = logging.getLogger(__name__)

DEFAULT_URL = 'https://radioid.net/static/users.json'
DEFAULT_MAX_AGE = 7
CACHE_NAME = 'users.json'

HEADERS = {
    'User-Agent': 'codeplug/%s Python %i.%i.%i %s' % (
        CODEPLUG_VERSION,
        sys.version_info.major, sys.version_info.minor, sys.version_info.micro,
        sys.platform),
}


class UserRecord:
    """One entry of a DMR user database"""

    def __init__(self, id, callsign, name="", surname="", city="", state="",
                 country="", comment=""):
        self.id = id
        self.callsign = callsign
        self.name = name
        self.surname = surname
        self.city = city
        self.state = state
        self.country = country
        self.comment = comment

    def __repr__(self):
        return '<UserRecord %i %s>' % (self.id, self.callsign)

    def is_valid(self):
        return isinstance(self.id, int) and 0 < self.id <= common.MAX_DMR_ID

    def describe(self):
        """Return the text stored in the name field of the radio"""
        fullname = " ".join(x for x in (self.name, self.surname) if x)
        parts = [fullname, self.city, self.state, self.country, self.comment]
        return ", ".join(x for x in parts if x)

    @classmethod
    def from_json(cls, entry):
        try:
            dmr_id = int(entry['radio_id'])
        except (KeyError, TypeError, ValueError):
            dmr_id = 0
        return cls(dmr_id,
                   (entry.get('callsign') or '').strip(),
                   name=(entry.get('fname') or '').strip(),
                   surname=(entry.get('surname') or '').strip(),
                   city=(entry.get('city') or '').strip(),
                   state=(entry.get('state') or '').strip(),
                   country=(entry.get('country') or '').strip(),
                   comment=(entry.get('remarks') or '').strip())


def _common_prefix(a, b):
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def distance_key(reference_id):
    """Return a sort key putting IDs close to @reference_id first

    IDs sharing a longer decimal prefix with the reference sort first, then
    by absolute difference and finally by ID.
    """
    ref = str(reference_id)

    def key(record):
        return (-_common_prefix(ref, str(record.id)),
                abs(record.id - reference_id),
                record.id)

    return key


class UserDatabase:
    """A collection of user records, usually downloaded from radioid.net"""

    def __init__(self, records=None):
        self._records = list(records or [])

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def count(self):
        return len(self._records)

    def records(self):
        return list(self._records)

    def add(self, record):
        self._records.append(record)

    def parse(self, data):
        """Load records from the decoded users.json structure @data"""
        try:
            users = data['users']
        except (KeyError, TypeError):
            raise errors.DownloadError('User database has no users list')
        self._records = [UserRecord.from_json(x) for x in users]
        LOG.info('Loaded %i users', len(self._records))
        return len(self._records)

    def load(self, path):
        with open(path, encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise errors.DownloadError(
                    'Unable to parse %s: %s' % (path, e))
        return self.parse(data)

    def download(self, url=None, path=None, force=False):
        """Fetch the user database and load it

        A cached copy at @path is used as long as it is younger than the
        configured maximum age (in days).
        """
        conf = config.get('userdb')
        if url is None:
            url = conf.get('url', default=DEFAULT_URL)
        if path is None:
            path = platform.get_platform().cache_file(CACHE_NAME)
        max_age = conf.get_int('max_age', default=DEFAULT_MAX_AGE) * 86400

        if not force and os.path.exists(path):
            age = time.time() - os.path.getmtime(path)
            if age < max_age:
                LOG.info('Using cached user database %s (%i s old)',
                         path, age)
                return self.load(path)

        LOG.info('Downloading user database from %s', url)
        try:
            r = requests.get(url, headers=HEADERS, timeout=60)
            r.raise_for_status()
        except requests.exceptions.RequestException as e:
            LOG.error('Failed to download user database: %s' % e)
            raise errors.DownloadError(
                'Unable to download user database: %s' % e)

        with open(path, 'wb') as f:
            f.write(r.content)
        return self.load(path)

    def sort_by_distance(self, reference_id):
        self._records.sort(key=distance_key(reference_id))


class DuplicatePolicy(enum.Enum):
    FIRST = "first"
    LAST = "last"
    REJECT = "reject"


def default_duplicate_policy():
    value = config.get('callsigndb').get('duplicates', default='first')
    try:
        return DuplicatePolicy(value.lower())
    except ValueError:
        LOG.warning('Unknown duplicate policy %r, keeping first', value)
        return DuplicatePolicy.FIRST


class SelectionResult:
    def __init__(self, records, available, rejected, truncated):
        self.records = records
        self.available = available
        self.rejected = rejected
        self.truncated = truncated

    def __repr__(self):
        return ('<SelectionResult %i of %i (rejected %i, truncated %s)>' % (
            len(self.records), self.available, self.rejected,
            self.truncated))


class Selection:
    """Chooses which user records go into a database of limited size

    Records are taken in the order given (or ordered by distance to
    @reference_id), filtered by @query, stripped of invalid IDs and
    de-duplicated according to @duplicates.
    """

    def __init__(self, limit=None, query=None, duplicates=None,
                 reference_id=None):
        if limit is not None and limit < 0:
            raise ValueError('Selection limit must not be negative')
        self.limit = limit
        self.query = query
        if duplicates is None:
            duplicates = default_duplicate_policy()
        self.duplicates = duplicates
        self.reference_id = reference_id

    def _dedup(self, records):
        """Return (records, dropped) with one record per ID"""
        by_id = {}
        order = []
        seen = {}
        for record in records:
            seen[record.id] = seen.get(record.id, 0) + 1
            if record.id not in by_id:
                order.append(record.id)
                by_id[record.id] = record
            elif self.duplicates == DuplicatePolicy.LAST:
                by_id[record.id] = record

        if self.duplicates == DuplicatePolicy.REJECT:
            for dmr_id, count in seen.items():
                if count > 1:
                    LOG.debug('Rejecting %i records with ID %i',
                              count, dmr_id)
            order = [x for x in order if seen[x] == 1]

        result = [by_id[x] for x in order]
        return result, len(records) - len(result)

    def filter(self, records):
        """Return (records, rejected) in priority order"""
        records = list(records)
        if self.reference_id is not None:
            records.sort(key=distance_key(self.reference_id))
        if self.query:
            records = userquery.filter_records(records, self.query)

        valid = [x for x in records if x.is_valid()]
        rejected = len(records) - len(valid)
        if rejected:
            LOG.info('Rejected %i records with invalid IDs', rejected)

        valid, dropped = self._dedup(valid)
        if dropped:
            LOG.info('Dropped %i records with duplicate IDs (%s)',
                     dropped, self.duplicates.value)
        return valid, rejected + dropped

    def select(self, records, capacity):
        """Select at most @capacity records"""
        valid, rejected = self.filter(records)
        limit = capacity
        if self.limit is not None:
            limit = min(limit, self.limit)
        truncated = len(valid) > limit
        return SelectionResult(valid[:limit], len(valid), rejected,
                               truncated)
