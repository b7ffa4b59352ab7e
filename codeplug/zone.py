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

from codeplug import objects


class ChannelMembers(objects.RefList):
    KINDS = ("Channel",)

    def __init__(self, owner, side):
        super().__init__(owner, name="%s.%s" % (owner.name, side))


class DigitalChannelMembers(ChannelMembers):
    KINDS = ("DigitalChannel",)


class Zone(objects.ConfigObject):
    """A named pair of channel lists for the A and B sides of the radio"""

    ID_PREFIX = "zone"

    def __init__(self, name, a=(), b=()):
        super().__init__(name)
        self._add_member_list("a", ChannelMembers(self, "a"))
        self._add_member_list("b", ChannelMembers(self, "b"))
        for channel in a:
            self.a.add(channel)
        for channel in b:
            self.b.add(channel)


class ScanList(objects.ConfigObject):
    """An ordered set of channels scanned together

    The priority channels may be None, a channel or common.SELECTED.
    A tx_channel of None means the last active channel is used.
    """

    ID_PREFIX = "scan"

    priority_channel = objects.Reference("Channel", allow_selected=True)
    secondary_priority_channel = objects.Reference("Channel",
                                                   allow_selected=True)
    tx_channel = objects.Reference("Channel", allow_selected=True)

    def __init__(self, name, channels=(), **kwargs):
        super().__init__(name)
        self._add_member_list("channels", ChannelMembers(self, "channels"))
        for channel in channels:
            self.channels.add(channel)
        for key, value in kwargs.items():
            setattr(self, key, value)


class RoamingZone(objects.ConfigObject):
    ID_PREFIX = "roam"

    def __init__(self, name, channels=()):
        super().__init__(name)
        self._add_member_list("channels",
                              DigitalChannelMembers(self, "channels"))
        for channel in channels:
            self.channels.add(channel)


class ZoneList(objects.ObjectList):
    KINDS = ("Zone",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="zones")


class ScanLists(objects.ObjectList):
    KINDS = ("ScanList",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="scan_lists")


class RoamingZones(objects.ObjectList):
    KINDS = ("RoamingZone",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="roaming_zones")
