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

"""
Callsign database images for the radio's caller ID display.

The MD-UV390 layout is:

  0x000000  count    3 bytes, big endian number of records
  0x000003  index    4096 x 4 bytes, big endian (id >> 12) << 20 | record
  0x004003  records  122197 x 120 bytes
                       ul24 id, 0xff, char callsign[16], char name[100]
  0xdfffdb  padding  0x25 bytes of 0xff

Records are sorted by ID. The index has one entry per distinct ID prefix
(id >> 12) pointing at the first record with that prefix; unused entries
and records are all 0xff.
"""

import bisect
import enum
import logging
import struct
import warnings

from codeplug import errors, logger, memmap, util, userdb

LOG = logging.getLogger(__name__)


class EncodeStatus(enum.Enum):
    SUCCESS = "success"
    TRUNCATED = "truncated"


class EncodeResult:
    def __init__(self, status, count, available, rejected, messages=None):
        self.status = status
        self.count = count
        self.available = available
        self.dropped = available - count
        self.rejected = rejected
        self.messages = messages or []

    def __repr__(self):
        return '<EncodeResult %s: %i of %i (dropped %i, rejected %i)>' % (
            self.status.value, self.count, self.available, self.dropped,
            self.rejected)

    @property
    def truncated(self):
        return self.status == EncodeStatus.TRUNCATED


class CallsignDB:
    """A callsign database image

    Subclasses for other radios override the layout constants.
    """

    CAPACITY = 122197
    INDEX_SIZE = 4096
    COUNT_SIZE = 3
    INDEX_ENTRY_SIZE = 4
    RECORD_SIZE = 120
    CALLSIGN_SIZE = 16
    NAME_SIZE = 100
    ID_SHIFT = 12
    OFFSET_BITS = 20
    IMAGE_SIZE = 0xE00000

    INVALID_ENTRY = 0xFFFFFFFF

    def __init__(self, data=None):
        if data is None:
            self._mmap = memmap.MemoryMap.filled(self.IMAGE_SIZE)
        else:
            if len(data) != self.IMAGE_SIZE:
                raise errors.EncodingFailure(
                    'Image is %i bytes, expected %i' % (len(data),
                                                        self.IMAGE_SIZE))
            self._mmap = memmap.MemoryMap(data)

    @classmethod
    def index_offset(cls):
        return cls.COUNT_SIZE

    @classmethod
    def records_offset(cls):
        return cls.COUNT_SIZE + cls.INDEX_SIZE * cls.INDEX_ENTRY_SIZE

    @classmethod
    def structure_size(cls):
        return cls.records_offset() + cls.CAPACITY * cls.RECORD_SIZE

    def _check_layout(self):
        if self.CAPACITY <= 0:
            raise errors.EncodingFailure('Capacity must be positive')
        if self.INDEX_SIZE <= 0:
            raise errors.EncodingFailure('Index size must be positive')
        if self.CAPACITY > (1 << self.OFFSET_BITS):
            raise errors.EncodingFailure(
                'Capacity %i exceeds the %i bit record offset' % (
                    self.CAPACITY, self.OFFSET_BITS))
        if self.structure_size() > self.IMAGE_SIZE:
            raise errors.EncodingFailure(
                'Layout needs 0x%x bytes, image is 0x%x' % (
                    self.structure_size(), self.IMAGE_SIZE))

    def _pack_record(self, record):
        return (util.pack_u24(record.id, bigendian=False) + b"\xff" +
                util.ascii_field(record.callsign, self.CALLSIGN_SIZE) +
                util.ascii_field(record.describe(), self.NAME_SIZE))

    def _build_index(self, records):
        entries = []
        last = None
        for i, record in enumerate(records):
            prefix = record.id >> self.ID_SHIFT
            if prefix != last:
                entries.append(prefix << self.OFFSET_BITS | i)
                last = prefix
        if len(entries) > self.INDEX_SIZE:
            raise errors.EncodingFailure(
                '%i index entries needed, only %i available' % (
                    len(entries), self.INDEX_SIZE))
        return entries

    def encode(self, records, selection=None):
        """Encode the user @records into this image

        Returns an EncodeResult. If not all records fit, the result status
        is TRUNCATED and a CapacityExceeded warning is issued. Messages
        logged while selecting and packing are kept in the result. Raises
        EncodingFailure if no record survives selection.
        """
        self._check_layout()
        if selection is None:
            selection = userdb.Selection()

        with logger.log_history(logging.INFO, 'codeplug') as history:
            status, selected = self._encode(records, selection)

        result = EncodeResult(status, len(selected.records),
                              selected.available, selected.rejected,
                              history.get_messages())
        LOG.info('Encoded callsign database: %s', result)
        return result

    def _encode(self, records, selection):
        selected = selection.select(records, self.CAPACITY)
        if not selected.records:
            raise errors.EncodingFailure(
                'No valid records to encode (%i rejected)' % (
                    selected.rejected))

        table = sorted(selected.records, key=lambda x: x.id)
        entries = self._build_index(table)

        self._mmap = memmap.MemoryMap.filled(self.IMAGE_SIZE)
        self._mmap.set(0, struct.pack(">I", len(table))[-self.COUNT_SIZE:])
        self._mmap.set(self.index_offset(),
                       b"".join(struct.pack(">I", x) for x in entries))
        self._mmap.set(self.records_offset(),
                       b"".join(self._pack_record(x) for x in table))

        if selected.truncated:
            status = EncodeStatus.TRUNCATED
            msg = 'Callsign database holds %i of %i users' % (
                len(table), selected.available)
            LOG.warning(msg)
            warnings.warn(msg, errors.CapacityExceeded)
        else:
            status = EncodeStatus.SUCCESS
        return status, selected

    def get_image(self):
        return self._mmap.get_packed()

    def save(self, path):
        with open(path, 'wb') as f:
            f.write(self.get_image())

    def get_count(self):
        raw = self._mmap.get(0, self.COUNT_SIZE)
        return int.from_bytes(raw, 'big')

    def get_index_entry(self, slot):
        """Return (prefix, record) of index @slot, or None if unused"""
        if not 0 <= slot < self.INDEX_SIZE:
            raise IndexError('Index slot %i out of range' % slot)
        pos = self.index_offset() + slot * self.INDEX_ENTRY_SIZE
        value, = struct.unpack(">I", self._mmap.get(pos,
                                                    self.INDEX_ENTRY_SIZE))
        if value == self.INVALID_ENTRY:
            return None
        mask = (1 << self.OFFSET_BITS) - 1
        return value >> self.OFFSET_BITS, value & mask

    def get_index(self):
        entries = []
        for slot in range(self.INDEX_SIZE):
            entry = self.get_index_entry(slot)
            if entry is None:
                break
            entries.append(entry)
        return entries

    def get_record(self, i):
        """Return record @i as a UserRecord with the name field as name"""
        if not 0 <= i < self.get_count():
            raise IndexError('Record %i out of range' % i)
        raw = self._mmap.get(self.records_offset() + i * self.RECORD_SIZE,
                             self.RECORD_SIZE)
        callsign_end = 4 + self.CALLSIGN_SIZE
        return userdb.UserRecord(
            util.unpack_u24(raw[0:3], bigendian=False),
            util.field_string(raw[4:callsign_end]),
            name=util.field_string(raw[callsign_end:]))

    def _record_id(self, i):
        pos = self.records_offset() + i * self.RECORD_SIZE
        return util.unpack_u24(self._mmap.get(pos, 3), bigendian=False)

    def lookup(self, dmr_id):
        """Find @dmr_id the way the radio does, returning a UserRecord

        The index is binary searched for the last prefix not above the one
        of @dmr_id, then records are scanned from there.
        """
        entries = self.get_index()
        prefixes = [prefix for prefix, _ in entries]
        slot = bisect.bisect_right(prefixes, dmr_id >> self.ID_SHIFT) - 1
        if slot < 0:
            return None

        count = self.get_count()
        for i in range(entries[slot][1], count):
            record_id = self._record_id(i)
            if record_id == dmr_id:
                return self.get_record(i)
            elif record_id > dmr_id:
                break
        return None
