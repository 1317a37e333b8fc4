import gzip
import logging
import os
import shutil
import sys
import time
from logging.handlers import TimedRotatingFileHandler

log = logging.getLogger('gather_stream')
statuses = log.getChild('statuses')

STANDARD_FORMAT = '[%(levelname)s] %(asctime)s %(name)s %(funcName)s - %(message)s'
SIMPLE_FORMAT = '%(message)s'
HOUR_ROLL = '%Y-%m-%d-%H'


class LevelRangeFilter(logging.Filter):
    """Pass only records whose level lies within [level_min, level_max]."""

    def __init__(self, level_min, level_max):
        super().__init__()
        self.level_min = level_min
        self.level_max = level_max

    def filter(self, record):
        return self.level_min <= record.levelno <= self.level_max


def gzip_namer(name):
    return name + '.gz'


def gzip_rotator(source, dest):
    with open(source, 'rb') as src, gzip.open(dest, 'wb') as dst:
        shutil.copyfileobj(src, dst)
    os.remove(source)


class HourlyRotatingFileHandler(TimedRotatingFileHandler):
    """Roll over on the local clock hour rather than an hour after start."""

    def __init__(self, filename, **kwargs):
        super().__init__(filename, when='H', **kwargs)
        self.suffix = HOUR_ROLL

    def computeRollover(self, currentTime):
        t = time.localtime(currentTime)
        return int(currentTime) - t.tm_min * 60 - t.tm_sec + 3600


class ConsoleHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is when the record is emitted."""

    def __init__(self):
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


def hourly_handler(path):
    handler = HourlyRotatingFileHandler(path, encoding='utf-8', delay=True)
    handler.namer = gzip_namer
    handler.rotator = gzip_rotator
    return handler


class LogSink(object):
    """
    Owns every log destination of the collector.

    statuses.log receives the accepted raw messages (INFO only, bare message).
    warnings.log and the console receive WARNING and above from any logger,
    the streaming library included.
    """

    def __init__(self, log_dir='.'):
        os.makedirs(log_dir, exist_ok=True)
        self.log_dir = log_dir
        standard = logging.Formatter(STANDARD_FORMAT)

        self.statuses_handler = hourly_handler(os.path.join(log_dir, 'statuses.log'))
        self.statuses_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
        self.statuses_handler.addFilter(LevelRangeFilter(logging.INFO, logging.INFO))

        self.warnings_handler = hourly_handler(os.path.join(log_dir, 'warnings.log'))
        self.warnings_handler.setLevel(logging.WARNING)
        self.warnings_handler.setFormatter(standard)

        self.console_handler = ConsoleHandler()
        self.console_handler.setLevel(logging.WARNING)
        self.console_handler.setFormatter(standard)

        root = logging.getLogger()
        root.addHandler(self.warnings_handler)
        root.addHandler(self.console_handler)
        statuses.addHandler(self.statuses_handler)
        log.setLevel(logging.INFO)

    def status(self, raw):
        statuses.info(raw)

    def criteria(self, text):
        if text:
            statuses.info(text)

    def warning(self, exc):
        log.warning('%s: %s', type(exc).__name__, exc, stacklevel=2)

    def close(self):
        root = logging.getLogger()
        root.removeHandler(self.warnings_handler)
        root.removeHandler(self.console_handler)
        statuses.removeHandler(self.statuses_handler)
        for handler in (self.statuses_handler, self.warnings_handler, self.console_handler):
            handler.close()
