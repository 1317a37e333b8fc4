import json
import numbers


def parse_status(raw):
    """Decode one raw payload; None unless it is a JSON object."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError:
            return None
    try:
        status = json.loads(raw)
    except (TypeError, ValueError):
        return None
    return status if isinstance(status, dict) else None


def is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def get_coordinates(status):
    coordinates = status.get('coordinates')
    if not isinstance(coordinates, dict):
        return None
    point = coordinates.get('coordinates')
    if not isinstance(point, list) or len(point) < 2:
        return None
    longitude, latitude = point[0], point[1]
    if not (is_number(longitude) and is_number(latitude)):
        return None
    return float(longitude), float(latitude)


def get_language(status):
    lang = status.get('lang')
    return lang if isinstance(lang, str) else None


def in_bounding_boxes(point, corners):
    """
    Corners are taken two at a time as (south-west, north-east) of one box.
    A box matches when the longitude falls in its longitude range or the
    latitude falls in its latitude range, bounds included. An unpaired last
    corner is ignored.
    """
    longitude, latitude = point
    for i in range(0, len(corners) - 1, 2):
        (lon_min, lat_min), (lon_max, lat_max) = corners[i], corners[i + 1]
        if lon_min <= longitude <= lon_max or lat_min <= latitude <= lat_max:
            return True
    return False


def has_language(lang, languages):
    return lang in languages


def accept(raw, options):
    """
    Decide whether a raw payload is kept. Payloads that are not a JSON
    object are always dropped.

    The box check only runs when --no-bounding-box was given together with
    explicit --locations; the language check runs whenever languages were given.
    """
    status = parse_status(raw)
    if status is None:
        return False

    if options.no_bounding_box and options.locations is not None:
        point = get_coordinates(status)
        if point is None or not in_bounding_boxes(point, options.locations):
            return False

    if options.languages is not None:
        lang = get_language(status)
        if lang is None or not has_language(lang, options.languages):
            return False

    return True
