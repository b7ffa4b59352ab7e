import ddt

from codeplug import channel
from codeplug import common
from codeplug import contact
from codeplug import errors
from codeplug import graph
from tests.unit import base


@ddt.ddt
class TestChannelValidation(base.BaseTest):
    def _digital(self):
        return channel.DigitalChannel('D', 439.5625, 431.9625)

    def _analog(self):
        return channel.AnalogChannel('A', 145.5)

    @ddt.data(('name', ''),
              ('name', '   '),
              ('name', None),
              ('rx_frequency', 0),
              ('rx_frequency', -1.0),
              ('tx_frequency', 0.0),
              ('tx_timeout', -1),
              ('rx_only', 'yes'),
              ('rx_only', 1),
              ('rx_only', 0),
              ('power', 'High'),
              ('color_code', 16),
              ('color_code', -1),
              ('time_slot', 3),
              ('time_slot', 1),
              ('admit', channel.AnalogAdmit.TONE))
    @ddt.unpack
    def test_digital_invalid(self, field, value):
        ch = self._digital()
        before = getattr(ch, field)
        with self.assertRaises(errors.ValidationError) as cm:
            setattr(ch, field, value)
        self.assertEqual(field, cm.exception.field)
        self.assertEqual(before, getattr(ch, field))

    @ddt.data(('squelch', 11),
              ('squelch', -1),
              ('squelch', True),
              ('rx_tone', 67.1),
              ('rx_tone', 68),
              ('rx_tone', True),
              ('rx_tone', 'D024N'),
              ('tx_tone', 'D023X'),
              ('bandwidth', 25),
              ('admit', channel.DigitalAdmit.COLOR_CODE))
    @ddt.unpack
    def test_analog_invalid(self, field, value):
        ch = self._analog()
        before = getattr(ch, field)
        self.assertRaises(errors.ValidationError, setattr, ch, field, value)
        self.assertEqual(before, getattr(ch, field))

    @ddt.data(('rx_tone', 88.5),
              ('rx_tone', 100),
              ('rx_tone', 'D023N'),
              ('tx_tone', 'D754I'),
              ('tx_tone', 0),
              ('squelch', 0),
              ('squelch', 10),
              ('bandwidth', channel.Bandwidth.WIDE))
    @ddt.unpack
    def test_analog_valid(self, field, value):
        ch = self._analog()
        setattr(ch, field, value)
        self.assertEqual(value, getattr(ch, field))

    def test_integer_tone(self):
        ch = channel.AnalogChannel('A', 145.5, rx_tone=100)
        self.assertEqual('100.0', common.format_tone(ch.rx_tone))

    def test_constructor_validates(self):
        self.assertRaises(errors.ValidationError,
                          channel.DigitalChannel, 'D', 439.0, color_code=20)
        self.assertRaises(errors.ValidationError,
                          channel.AnalogChannel, '', 145.0)

    def test_unknown_attribute(self):
        ch = self._digital()
        self.assertRaises(AttributeError, setattr, ch, 'squelch', 1)
        self.assertRaises(AttributeError,
                          channel.AnalogChannel, 'A', 145.0, color_code=1)

    def test_defaults(self):
        ch = channel.AnalogChannel('A', 145.5)
        self.assertEqual(145.5, ch.tx_frequency)
        self.assertEqual(channel.Power.HIGH, ch.power)
        self.assertEqual(0, ch.rx_tone)
        self.assertIsNone(ch.scan_list)
        self.assertIsNone(ch.aprs_system)

    def test_variants(self):
        self.assertTrue(self._digital().is_digital())
        self.assertFalse(self._analog().is_digital())
        self.assertAlmostEqual(-7.6, self._digital().tx_offset())


class TestChannelList(base.BaseTest):
    def setUp(self):
        super().setUp()
        self.cp = graph.Codeplug()
        for i, cc in enumerate((1, 1, 2)):
            self.cp.channels.add(channel.DigitalChannel(
                'D%i' % i, 439.5625, 439.5625, color_code=cc,
                time_slot=channel.TimeSlot.TS1))
        self.cp.channels.add(channel.AnalogChannel('A', 145.5, 145.6))

    def test_find_digital_channel(self):
        found = self.cp.channels.find_digital_channel(
            439.5625, 439.5625, channel.TimeSlot.TS1, 2)
        self.assertIs(self.cp.channels.at(2), found)

    def test_find_digital_channel_first_match(self):
        found = self.cp.channels.find_digital_channel(
            439.5625, 439.5625, 1, 1)
        self.assertIs(self.cp.channels.at(0), found)

    def test_find_digital_channel_no_match(self):
        self.assertIsNone(self.cp.channels.find_digital_channel(
            439.5625, 439.5625, channel.TimeSlot.TS1, 3))
        self.assertIsNone(self.cp.channels.find_digital_channel(
            439.5625, 439.5625, channel.TimeSlot.TS2, 1))
        self.assertIsNone(self.cp.channels.find_digital_channel(
            439.5626, 439.5625, channel.TimeSlot.TS1, 1))

    def test_find_digital_channel_tolerance(self):
        found = self.cp.channels.find_digital_channel(
            439.5625000004, 439.5624999996, channel.TimeSlot.TS1, 2)
        self.assertIs(self.cp.channels.at(2), found)

    def test_find_analog_by_tx(self):
        self.assertIs(self.cp.channels.at(3),
                      self.cp.channels.find_analog_channel_by_tx_freq(145.6))
        self.assertIsNone(
            self.cp.channels.find_analog_channel_by_tx_freq(145.5))

    def test_split_by_kind(self):
        self.assertEqual(3, len(self.cp.channels.digital_channels()))
        self.assertEqual(1, len(self.cp.channels.analog_channels()))

    def test_only_channels(self):
        self.assertRaises(errors.ValidationError, self.cp.channels.add,
                          contact.DigitalContact('TG', number=9))
