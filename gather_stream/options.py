import sys
from dataclasses import dataclass
from argparse import (
    ArgumentParser,
    ArgumentDefaultsHelpFormatter
)

WHOLE_EARTH = ((-180.0, -90.0), (180.0, 90.0))
LOCATIONS_DOC = 'https://dev.twitter.com/docs/streaming-apis/parameters#locations'


@dataclass(frozen=True)
class StreamOptions:
    languages: tuple = None
    locations: tuple = None
    no_bounding_box: bool = False
    log_dir: str = '.'

    @property
    def query_locations(self):
        return self.locations if self.locations is not None else WHOLE_EARTH

    def criteria(self):
        """Describe the active filters the way they are echoed into statuses.log."""
        parts = []
        if self.languages is not None:
            parts.append('languages: [{}]\t'.format(','.join(self.languages)))
        if self.locations is not None:
            flat = [coord for corner in self.locations for coord in corner]
            parts.append('locations: [{}]\t'.format(','.join('{:g}'.format(c) for c in flat)))
        if self.no_bounding_box:
            parts.append('--no-bounding-box\t')
        return ''.join(parts)


def split_list(value):
    return [e.strip() for e in value.split(',') if e.strip()]


def parse_locations(value):
    """
    Turn "lon,lat,lon,lat,..." into a tuple of (longitude, latitude) corners.
    Raises ValueError on a non-numeric value, an odd number of values or a
    corner left without its partner.
    """
    coords = [float(e) for e in value.split(',')]
    if len(coords) % 2 != 0:
        raise ValueError("There is a missing coordinate. See " + LOCATIONS_DOC)
    if len(coords) % 4 != 0:
        raise ValueError("Each bounding box needs two corners. See " + LOCATIONS_DOC)
    return tuple(zip(coords[0::2], coords[1::2]))


def build_parser():
    parser = ArgumentParser(
        prog='gather-stream',
        description='Collect raw statuses from the filtered stream into hourly rolled logs.',
        formatter_class=ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("-l", "--language", metavar="list",
                        help="comma-separated list of BCP 47 language identifiers")
    parser.add_argument("-g", "--locations", metavar="list",
                        help="comma-separated list of longitude,latitude pairs specifying a set of bounding boxes")
    parser.add_argument("-n", "--no-bounding-box", action="store_true",
                        help="do not consider places' bounding box")
    parser.add_argument("-d", "--log-dir", default=".",
                        help="directory for statuses.log and warnings.log")
    return parser


def join_locations(argv):
    """
    Glue a -g/--locations flag to the value after it, so a list starting with
    a minus sign is not mistaken for another option.
    """
    joined = []
    i = 0
    while i < len(argv):
        if argv[i] in ('-g', '--locations') and i + 1 < len(argv):
            joined.append('--locations=' + argv[i + 1])
            i += 2
        else:
            joined.append(argv[i])
            i += 1
    return joined


def get_clargs(argv=None):
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(join_locations(argv))

    languages = None
    if args.language is not None:
        languages = tuple(split_list(args.language))
        if not languages:
            parser.error("--language needs at least one language identifier")

    locations = None
    if args.locations is not None:
        try:
            locations = parse_locations(args.locations)
        except ValueError as e:
            # exits with status 2
            parser.error(str(e))

    return StreamOptions(
        languages=languages,
        locations=locations,
        no_bounding_box=args.no_bounding_box,
        log_dir=args.log_dir,
    )
