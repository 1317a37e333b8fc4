import json

import pytest

from gather_stream.log import LogSink


def make_status(lang='en', coordinates=(0.0, 0.0), **extra):
    status = {'id': 1, 'text': 'hello', 'lang': lang}
    if coordinates is not None:
        status['coordinates'] = {'type': 'Point', 'coordinates': list(coordinates)}
    else:
        status['coordinates'] = None
    status.update(extra)
    return json.dumps(status)


class RecordingSink(object):
    def __init__(self):
        self.statuses = []
        self.warnings = []

    def status(self, raw):
        self.statuses.append(raw)

    def warning(self, exc):
        self.warnings.append(exc)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def sink(tmp_path):
    log_sink = LogSink(str(tmp_path))
    yield log_sink
    log_sink.close()
