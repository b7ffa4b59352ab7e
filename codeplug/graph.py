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

import contextlib
import logging
import threading

from codeplug import channel, common, contact, errors, objects
from codeplug import positioning, zone

LOG = logging.getLogger(__name__)


class Codeplug:
    """The root of a configuration graph

    Owns one list per entity kind plus the general radio settings. All
    cross references between entities must stay within one Codeplug.
    """

    # Lists in the order they are cleared and serialized
    LISTS = ("radio_ids", "contacts", "rx_group_lists", "channels",
             "zones", "scan_lists", "gps_systems", "aprs_systems",
             "roaming_zones")

    _valid_map = {
        "name": common.STRING,
        "intro_line1": common.STRING,
        "intro_line2": common.STRING,
        "mic_level": common.INT(1, 10),
        "speech": common.BOOLEAN,
    }

    _defaults = {
        "name": "",
        "intro_line1": "",
        "intro_line2": "",
        "mic_level": 2,
        "speech": False,
    }

    def __init__(self, name=""):
        self.__dict__['lock'] = threading.RLock()
        self.__dict__['_exporting'] = 0

        self.__dict__['radio_ids'] = positioning.RadioIDList(self)
        self.__dict__['contacts'] = contact.ContactList(self)
        self.__dict__['rx_group_lists'] = contact.RXGroupLists(self)
        self.__dict__['channels'] = channel.ChannelList(self)
        self.__dict__['zones'] = zone.ZoneList(self)
        self.__dict__['scan_lists'] = zone.ScanLists(self)
        self.__dict__['gps_systems'] = positioning.GPSSystems(self)
        self.__dict__['aprs_systems'] = positioning.APRSSystems(self)
        self.__dict__['roaming_zones'] = zone.RoamingZones(self)

        self._reset_settings()
        self.name = name

    def __repr__(self):
        return '<Codeplug %r>' % self.name

    def __setattr__(self, name, val):
        if name not in self._valid_map:
            raise AttributeError("No such setting `%s'" % name)
        self.check_mutable()
        if not self._valid_map[name](val):
            raise errors.ValidationError(
                name, "`%r' is not a valid value for `%s'" % (val, name))
        self.__dict__[name] = val

    def _reset_settings(self):
        for key, value in self._defaults.items():
            setattr(self, key, value)

    def get_codeplug(self):
        return self

    def lists(self):
        return [(name, getattr(self, name)) for name in self.LISTS]

    def is_exporting(self):
        return self._exporting > 0

    def check_mutable(self):
        """Raise GraphConsistencyError if an export pass is running"""
        if self._exporting:
            raise errors.GraphConsistencyError(
                'Codeplug cannot be modified during an export pass')

    @contextlib.contextmanager
    def export_pass(self):
        """Hold the lock and keep the graph read-only for the block"""
        with self.lock:
            self.__dict__['_exporting'] = self._exporting + 1
            try:
                yield self
            finally:
                self.__dict__['_exporting'] = self._exporting - 1

    def default_radio_id(self):
        if self.radio_ids.count():
            return self.radio_ids.at(0)
        return None

    def clear(self):
        """Delete every entity and reset the general settings"""
        with self.lock:
            self.check_mutable()
            for name, objlist in reversed(self.lists()):
                LOG.debug('Clearing %i %s', len(objlist), name)
                objlist.clear()
            self._reset_settings()

    def serialize(self):
        """Return the whole graph as a tree of plain dicts and lists"""
        with self.export_pass():
            context = objects.Context()
            counters = {}
            for _name, objlist in self.lists():
                for obj in objlist:
                    prefix = obj.ID_PREFIX
                    counters[prefix] = counters.get(prefix, 0) + 1
                    context.add(obj, "%s%i" % (prefix, counters[prefix]))

            tree = {"settings": {key: getattr(self, key)
                                 for key in self._valid_map}}
            for name, objlist in self.lists():
                tree[name] = [obj.serialize(context) for obj in objlist]
            return tree
