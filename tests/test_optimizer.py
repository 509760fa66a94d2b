from trip_planner.services.routing.distance import calculate_distance
from trip_planner.services.routing.geocoding import Geocoder
from trip_planner.services.routing.models import Stop
from trip_planner.services.routing.optimizer import optimize_waypoints


class DummyMaps:
    """Geocodes from a lookup table and reverses waypoints when asked to optimize."""

    def __init__(self, locations=None, waypoint_order=None, omit_order=False):
        self.locations = locations or {}
        self.waypoint_order = waypoint_order
        self.omit_order = omit_order
        self.geocode_calls = []
        self.directions_calls = []

    def geocode(self, address):
        self.geocode_calls.append(address)
        if address not in self.locations:
            return {"status": "ZERO_RESULTS", "results": []}
        lat, lng = self.locations[address]
        return {"status": "OK", "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}, "formatted_address": address}]}

    def directions(self, origin, destination, waypoints=None, optimize=False):
        self.directions_calls.append({"waypoints": waypoints, "optimize": optimize})
        count = len(waypoints or [])
        legs = [
            {"distance": {"value": 1000 * (idx + 1), "text": f"leg {idx}"}, "duration": {"value": 60 * (idx + 1), "text": f"{idx + 1} mins"}}
            for idx in range(count + 1)
        ]
        route = {"legs": legs}
        if optimize and not self.omit_order:
            route["waypoint_order"] = self.waypoint_order if self.waypoint_order is not None else list(reversed(range(count)))
        return {"status": "OK", "routes": [route]}


def _stop(name, lat=None, lng=None, address=""):
    return Stop(name=name, address=address or f"{name} Road", latitude=lat, longitude=lng)


def test_fewer_than_two_valid_stops_makes_no_directions_call():
    maps = DummyMaps()
    stops = [_stop("A", 51.0, -1.0), _stop("B")]

    route = optimize_waypoints(stops, Geocoder(maps), maps)

    assert [stop.name for stop in route.optimized_stops] == ["A"]
    assert route.total_distance == 0
    assert route.total_duration == 0
    assert not route.routed
    assert maps.directions_calls == []


def test_two_stops_match_direct_distance_calculation():
    maps = DummyMaps()
    stops = [_stop("A", 51.0, -1.0), _stop("B", 51.1, -1.1)]

    route = optimize_waypoints(stops, Geocoder(maps), maps)

    assert len(maps.directions_calls) == 1
    assert maps.directions_calls[0]["optimize"] is False
    direct = calculate_distance(maps, stops[0].point(), stops[1].point())
    assert (route.total_distance, route.total_duration) == (direct.distance, direct.duration)
    assert (route.distance_text, route.duration_text) == (direct.distance_text, direct.duration_text)
    assert [stop.name for stop in route.optimized_stops] == ["A", "B"]
    assert route.legs[0].from_stop == "A"
    assert route.legs[0].to_stop == "B"


def test_provider_order_is_applied_between_fixed_endpoints():
    maps = DummyMaps(waypoint_order=[2, 0, 1])
    stops = [
        _stop("Origin", 51.0, -1.0),
        _stop("W0", 51.1, -1.1),
        _stop("W1", 51.2, -1.2),
        _stop("W2", 51.3, -1.3),
        _stop("Destination", 51.4, -1.4),
    ]

    route = optimize_waypoints(stops, Geocoder(maps), maps)

    assert [stop.name for stop in route.optimized_stops] == ["Origin", "W2", "W0", "W1", "Destination"]
    assert maps.directions_calls[0]["optimize"] is True
    assert route.total_distance == 1000 + 2000 + 3000 + 4000
    assert route.total_duration == 60 + 120 + 180 + 240
    assert route.distance_text == "10.0 km"
    assert route.duration_text == "10 min"
    assert [(leg.from_stop, leg.to_stop) for leg in route.legs] == [
        ("Origin", "W2"),
        ("W2", "W0"),
        ("W0", "W1"),
        ("W1", "Destination"),
    ]
    assert route.legs[1].duration == "2 mins"


def test_stops_without_coordinates_are_geocoded_and_failures_dropped():
    maps = DummyMaps(locations={"Mill Lane": (53.1, -1.1), "Church Road": (53.3, -1.3)})
    stops = [
        _stop("Stop 1", address="Mill Lane"),
        _stop("Stop 2", address="Unknown Close"),
        _stop("Stop 3", address="Church Road"),
    ]

    route = optimize_waypoints(stops, Geocoder(maps), maps)

    assert maps.geocode_calls == ["Mill Lane", "Unknown Close", "Church Road"]
    assert [stop.name for stop in route.optimized_stops] == ["Stop 1", "Stop 3"]
    assert route.optimized_stops[0].latitude == 53.1
    assert stops[0].latitude is None
    assert maps.directions_calls[0]["optimize"] is False


def test_missing_waypoint_order_keeps_submitted_order():
    maps = DummyMaps(omit_order=True)
    stops = [_stop(name, 51.0 + idx / 10, -1.0) for idx, name in enumerate(["O", "X", "Y", "D"])]

    route = optimize_waypoints(stops, Geocoder(maps), maps)

    assert [stop.name for stop in route.optimized_stops] == ["O", "X", "Y", "D"]
