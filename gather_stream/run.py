import sys
import threading
import time

from gather_stream.client import start_stream, get_credentials
from gather_stream.filters import accept
from gather_stream.log import LogSink
from gather_stream.options import get_clargs

RECONNECT_DELAY = 5


class Counter(object):
    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self):
        return self._value

    def increment(self):
        with self._lock:
            self._value += 1
            return self._value


class StatusHandler(object):
    """Filter, count and log each raw payload handed over by the stream."""

    def __init__(self, options, sink, counter=None, out=None, report_every=1000):
        self.options = options
        self.sink = sink
        self.counter = counter if counter is not None else Counter()
        self.out = out
        self.report_every = report_every

    def handle(self, raw):
        if not accept(raw, self.options):
            return
        count = self.counter.increment()
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')
        self.sink.status(raw)
        if count % self.report_every == 0:
            print("{} messages received.".format(count), file=self.out or sys.stdout, flush=True)

    def handle_exception(self, exc):
        self.sink.warning(exc)


def main(argv=None):
    options = get_clargs(argv)
    try:
        credentials = get_credentials()
    except KeyError as e:
        sys.exit("Missing environment variable {}".format(e))

    sink = LogSink(options.log_dir)
    sink.criteria(options.criteria())
    handler = StatusHandler(options, sink)
    try:
        # tweepy returns from filter after reporting an exception; open a new stream
        while True:
            start_stream(handler, options, credentials)
            time.sleep(RECONNECT_DELAY)
    except KeyboardInterrupt:
        pass
    finally:
        sink.close()


if __name__ == '__main__':
    main()
