import os
import tempfile


def pytest_configure(config):
    # Keep the user's ~/.codeplug out of test runs
    if not os.getenv('CODEPLUG_CONFIG_DIR'):
        os.environ['CODEPLUG_CONFIG_DIR'] = tempfile.mkdtemp(
            prefix='codeplug-test-')
