# Decoder for the compact ASCII polyline format used by GraphHopper and Google.


def _read_value(encoded: str, index: int) -> tuple[int, int] | None:
    """Reads one sign-extended varint starting at index.

    Returns the value and the index just past it, or None if the input ends
    before the value is complete.
    """
    result = 0
    shift = 0
    while index < len(encoded):
        b = ord(encoded[index]) - 63
        if not 0 <= b < 64:
            raise ValueError(f"Invalid polyline character {encoded[index]!r} at position {index}")
        index += 1
        result |= (b & 0x1f) << shift
        shift += 5
        if b < 0x20:
            value = ~(result >> 1) if result & 1 else result >> 1
            return value, index
    return None


def decode(encoded: str, precision: int = 5, with_elevation: bool = False) -> list[tuple[float, ...]]:
    """
    Decodes an encoded polyline into (lng, lat) tuples.

    With with_elevation=True the GraphHopper 3D variant is read instead and
    each tuple is (lng, lat, elevation_m); elevations are stored in centimeters.
    Only complete tuples are returned, a truncated tail is dropped.
    """
    factor = 10 ** precision
    dimensions = 3 if with_elevation else 2
    totals = [0] * dimensions
    coordinates = []
    index = 0

    while index < len(encoded):
        deltas = []
        for _ in range(dimensions):
            read = _read_value(encoded, index)
            if read is None:
                return coordinates
            delta, index = read
            deltas.append(delta)
        for i, delta in enumerate(deltas):
            totals[i] += delta

        lat, lng = totals[0] / factor, totals[1] / factor
        if with_elevation:
            coordinates.append((lng, lat, totals[2] / 100))
        else:
            coordinates.append((lng, lat))

    return coordinates
