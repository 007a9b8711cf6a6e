
import logging
import re

from geotransform.utils.logging import LOGGER, warn_once


def test_logger_name():
    assert LOGGER.name == 'geotransform'
    assert LOGGER.level == logging.WARNING


def test_warn_once(caplog):
    warn_once('grid table missing')
    assert 'grid table missing' in caplog.text

    warn_once('grid table missing')
    assert len(re.findall('grid table missing', caplog.text)) == 1
