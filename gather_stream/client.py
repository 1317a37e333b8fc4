import os
import tweepy

CREDENTIAL_VARIABLES = (
    "TWITTER_CONSUMER_KEY",
    "TWITTER_CONSUMER_SECRET",
    "TWITTER_ACCESS_TOKEN_KEY",
    "TWITTER_ACCESS_TOKEN_SECRET",
)


def get_credentials(environ=None):
    """Read the OAuth 1.0a user context keys; raises KeyError naming the first missing one."""
    environ = os.environ if environ is None else environ
    return tuple(environ[name] for name in CREDENTIAL_VARIABLES)


def build_query(options):
    query = {
        'locations': [coord for corner in options.query_locations for coord in corner],
    }
    if options.languages is not None:
        query['languages'] = list(options.languages)
    return query


class StatusStream(tweepy.Stream):
    """
    Hands every raw payload of the filter stream to a message handler.
    Connection upkeep, retries and back-off stay with tweepy.
    """

    def __init__(self, handler, *credentials, **kwargs):
        super().__init__(*credentials, **kwargs)
        self.handler = handler

    def on_data(self, raw_data):
        self.handler.handle(raw_data)

    def on_exception(self, exception):
        self.handler.handle_exception(exception)


def start_stream(handler, options, credentials=None):
    if credentials is None:
        credentials = get_credentials()
    stream = StatusStream(handler, *credentials)
    stream.filter(**build_query(options))
    return stream
