import os

from codeplug import config
from codeplug import platform
from tests.unit import base


class TestConfig(base.BaseTest):
    def test_get_set(self):
        conf = config.get('userdb')
        self.assertIsNone(conf.get('url'))
        self.assertEqual('x', conf.get('url', default='x'))
        conf.set('url', 'http://example.com')
        self.assertEqual('http://example.com', conf.get('url'))
        self.assertTrue(conf.is_defined('url'))
        self.assertFalse(config.get('global').is_defined('url'))

    def test_int(self):
        conf = config.get('userdb')
        self.assertEqual(7, conf.get_int('max_age', default=7))
        conf.set_int('max_age', 3)
        self.assertEqual(3, conf.get_int('max_age'))
        conf.set('max_age', 'soon')
        self.assertEqual(7, conf.get_int('max_age', default=7))
        self.assertRaises(ValueError, conf.set_int, 'max_age', '3')

    def test_bool(self):
        conf = config.get()
        self.assertTrue(conf.get_bool('flag', default=True))
        conf.set_bool('flag', False)
        self.assertFalse(conf.get_bool('flag', default=True))

    def test_save_and_reload(self):
        conf = config.get('callsigndb')
        conf.set('duplicates', 'reject')
        config._CONFIG.save()
        cfg = os.path.join(platform.get_platform().config_dir(),
                           'codeplug.config')
        self.assertTrue(os.path.exists(cfg))

        config._CONFIG = None
        self.assertEqual('reject', config.get('callsigndb').get('duplicates'))

    def test_remove_option(self):
        conf = config.get('userdb')
        conf.set('url', 'foo')
        conf.remove_option('url')
        self.assertFalse(conf.is_defined('url'))
