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
Plain-text export of a codeplug.

The output is a set of fixed-width tables, one per kind of entity. All
numbers that refer to other entities are 1-based positions in the owning
list of the codeplug.
"""

import io
import logging

from codeplug import CODEPLUG_VERSION
from codeplug import common, positioning

LOG = logging.getLogger(__name__)

DIGITAL_HEADER = """\
# Table of digital channels.
# 1) Channel number: 1-1024
# 2) Name in quotes. E.g., "NAME"
# 3) Receive frequency in MHz
# 4) Transmit frequency or +/- offset in MHz
# 5) Transmit power: Max, High, Mid, Low, Min
# 6) Scan list: - or index in Scanlist table
# 7) Transmit timeout timer in seconds: 0, 15, 30, 45... 555
# 8) Receive only: -, +
# 9) Admit criteria: -, Free, Color
# 10) Color code: 0, 1, 2, 3... 15
# 11) Time slot: 1 or 2
# 12) Receive group list: - or index in Grouplist table
# 13) Contact for transmit: - or index in Contacts table
# 14) GPS System: - or index in GPS table.
#
Digital Name                Receive   Transmit  Power Scan TOT RO Admit  CC TS RxGL TxC GPS
"""

ANALOG_HEADER = """\
# Table of analog channels.
# 1) Channel number: 1-1024
# 2) Name in quotes.
# 3) Receive frequency in MHz
# 4) Transmit frequency or +/- offset in MHz
# 5) Transmit power: Max, High, Mid, Low, Min
# 6) Scan list: - or index
# 7) Transmit timeout timer in seconds: 0, 15, 30, 45... 555
# 8) Receive only: -, +
# 9) Admit criteria: -, Free, Tone
# 10) Squelch level: 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10
# 11) Guard tone for receive, or '-' to disable
# 12) Guard tone for transmit, or '-' to disable
# 13) Bandwidth in kHz: 12.5, 25
#
Analog  Name                Receive    Transmit Power Scan TOT RO Admit  Squelch RxTone TxTone Width
"""

ZONE_HEADER = """\
# Table of channel zones.
# 1) Zone number
# 2) Name in quotes.
# 3) VFO: Either A or B.
# 4) List of channels: numbers separated by comma
#
Zone    Name                VFO Channels
"""

SCANLIST_HEADER = """\
# Table of scan lists.
# 1) Scan list number: 1-250
# 2) Name in quotes.
# 3) Priority channel 1 (50% of scans): -, Sel or index
# 4) Priority channel 2 (25% of scans): -, Sel or index
# 5) Designated transmit channel: Last, Sel or index
# 6) List of channels: numbers separated by comma
#
Scanlist Name               PCh1 PCh2 TxCh Channels
"""

GPS_HEADER = """\
# Table of GPS systems.
# 1) GPS system ID
# 2) Name in quotes.
# 3) Destination contact ID.
# 4) Update period in seconds
# 5) Revert channel ID, Sel or '-'.
#
GPS  Name                Dest Period Revert
"""

CONTACT_HEADER = """\
# Table of contacts.
# 1) Contact number: 1-256
# 2) Name in quotes.
# 3) Call type: Group, Private, All or DTMF
# 4) Call ID: 1...16777215 or string with DTMF number
# 5) Call receive tone: -, +
#
Contact Name                Type    ID          RxTone
"""

GROUPLIST_HEADER = """\
# Table of group lists.
# 1) Group list number: 1-64
# 2) Name in quotes.
# 3) List of contacts: numbers separated by comma
#
Grouplist Name                Contacts
"""


def _cells(*columns):
    """Format (width, value) pairs as left-aligned, space padded cells"""
    return "".join("%-*s" % (width, value) for width, value in columns)


def _quoted(name):
    return '"%s"' % name


class TextExporter:
    """Writes a codeplug as a set of cross-referenced text tables"""

    def __init__(self, codeplug):
        self._codeplug = codeplug

    def _position(self, objlist, obj, unset="-"):
        """Return the 1-based position of @obj in @objlist as a string"""
        if obj is None:
            return unset
        if obj is common.SELECTED:
            return "Sel"
        return str(objlist.index(obj) + 1)

    def _channel(self, obj, unset="-"):
        return self._position(self._codeplug.channels, obj, unset)

    def _positions(self, objlist, members):
        return ",".join(self._position(objlist, x) for x in members)

    def _gps_position(self, pos_system):
        """APRS systems have no row in the GPS table"""
        if not isinstance(pos_system, positioning.GPSSystem):
            return "-"
        return self._position(self._codeplug.gps_systems, pos_system)

    def _frequencies(self, channel):
        rx = common.format_freq(channel.rx_frequency)
        if channel.tx_frequency < channel.rx_frequency:
            tx = common.format_freq(channel.tx_offset())
        else:
            tx = common.format_freq(channel.tx_frequency)
        return rx, tx

    def _channel_cells(self, channel):
        cp = self._codeplug
        rx, tx = self._frequencies(channel)
        return [
            (8, cp.channels.index(channel) + 1),
            (20, _quoted(channel.name)),
            (10, rx),
            (10, tx),
            (6, channel.power.value),
            (5, self._position(cp.scan_lists, channel.scan_list)),
            (4, channel.tx_timeout or "-"),
            (3, channel.rx_only and "+" or "-"),
            (7, channel.admit.value),
        ]

    def write_header(self, stream):
        stream.write("#\n"
                     "# Configuration generated by codeplug, "
                     "version %s\n"
                     "#\n\n" % CODEPLUG_VERSION)

    def write_settings(self, stream):
        cp = self._codeplug
        radio_id = cp.default_radio_id()
        stream.write(
            "# Unique DMR ID and name (quoted) of this radio.\n"
            "ID: %i\n"
            "Name: \"%s\"\n\n"
            "# Text displayed when the radio powers up (quoted).\n"
            "IntroLine1: \"%s\"\n"
            "IntroLine2: \"%s\"\n\n"
            "# Microphone amplification, value 1..10:\n"
            "MICLevel: %i\n\n"
            "# Speech-synthesis ('On' or 'Off'):\n"
            "Speech: %s\n\n" % (
                radio_id.number if radio_id else 0,
                cp.name, cp.intro_line1, cp.intro_line2, cp.mic_level,
                cp.speech and "On" or "Off"))

    def write_digital_channels(self, stream):
        cp = self._codeplug
        stream.write(DIGITAL_HEADER)
        for channel in cp.channels.digital_channels():
            row = _cells(
                *self._channel_cells(channel),
                (3, channel.color_code),
                (3, channel.time_slot.value),
                (5, self._position(cp.rx_group_lists, channel.rx_group_list)),
                (4, self._position(cp.contacts, channel.tx_contact)),
                (4, self._gps_position(channel.pos_system)))
            if channel.tx_contact is not None:
                row += "# %s" % channel.tx_contact.name
            stream.write(row + "\n")
        stream.write("\n")

    def write_analog_channels(self, stream):
        stream.write(ANALOG_HEADER)
        for channel in self._codeplug.channels.analog_channels():
            stream.write(_cells(
                *self._channel_cells(channel),
                (8, channel.squelch),
                (7, common.format_tone(channel.rx_tone)),
                (7, common.format_tone(channel.tx_tone)),
                (5, "%g" % channel.bandwidth.value)) + "\n")
        stream.write("\n")

    def write_zones(self, stream):
        cp = self._codeplug
        stream.write(ZONE_HEADER)
        for zone in cp.zones:
            for side, members in (("A", zone.a), ("B", zone.b)):
                if not members.count():
                    continue
                stream.write(_cells(
                    (8, cp.zones.index(zone) + 1),
                    (20, _quoted(zone.name)),
                    (4, side)))
                stream.write(self._positions(cp.channels, members) + "\n")
        stream.write("\n")

    def write_scan_lists(self, stream):
        cp = self._codeplug
        stream.write(SCANLIST_HEADER)
        for scan_list in cp.scan_lists:
            stream.write(_cells(
                (9, cp.scan_lists.index(scan_list) + 1),
                (20, _quoted(scan_list.name)),
                (5, self._channel(scan_list.priority_channel)),
                (5, self._channel(scan_list.secondary_priority_channel)),
                (5, self._channel(scan_list.tx_channel, unset="Last"))))
            stream.write(
                self._positions(cp.channels, scan_list.channels) + "\n")
        stream.write("\n")

    def write_gps_systems(self, stream):
        cp = self._codeplug
        stream.write(GPS_HEADER)
        for gps in cp.gps_systems:
            stream.write(_cells(
                (5, cp.gps_systems.index(gps) + 1),
                (20, _quoted(gps.name)),
                (5, self._position(cp.contacts, gps.contact)),
                (7, gps.period),
                (6, self._channel(gps.revert_channel))) + "\n")
        stream.write("\n")

    def write_contacts(self, stream):
        cp = self._codeplug
        stream.write(CONTACT_HEADER)
        for contact in cp.contacts:
            if contact.is_digital():
                kind = contact.type.value
                number = contact.number
            else:
                kind = "DTMF"
                number = _quoted(contact.number)
            stream.write(_cells(
                (8, cp.contacts.index(contact) + 1),
                (20, _quoted(contact.name)),
                (8, kind),
                (12, number),
                (6, contact.rx_tone and "+" or "-")) + "\n")
        stream.write("\n")

    def write_group_lists(self, stream):
        cp = self._codeplug
        stream.write(GROUPLIST_HEADER)
        for group_list in cp.rx_group_lists:
            stream.write(_cells(
                (10, cp.rx_group_lists.index(group_list) + 1),
                (20, _quoted(group_list.name))))
            stream.write(
                self._positions(cp.contacts, group_list.contacts) + "\n")
        stream.write("\n")

    def write(self, stream):
        """Write all tables to @stream

        Raises GraphConsistencyError if an entity references something
        outside of the codeplug.
        """
        with self._codeplug.export_pass():
            self.write_header(stream)
            self.write_settings(stream)
            self.write_digital_channels(stream)
            self.write_analog_channels(stream)
            self.write_zones(stream)
            self.write_scan_lists(stream)
            self.write_gps_systems(stream)
            self.write_contacts(stream)
            self.write_group_lists(stream)
        LOG.debug('Exported %i channels of %s',
                  len(self._codeplug.channels), self._codeplug)


def export_text(codeplug):
    """Return the text export of @codeplug as a string"""
    out = io.StringIO()
    TextExporter(codeplug).write(out)
    return out.getvalue()
