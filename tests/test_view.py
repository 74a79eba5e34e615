from flightmap.formatting import format_flights
from flightmap.map_surface import MapSurface
from flightmap.models import FlightRecord
from flightmap.view import FlightView

from conftest import make_flight


def test_map_surface_add_and_clear():
    surface = MapSurface(center=(0.0, 0.0), zoom=2)

    surface.add_marker(1.0, 2.0, "AA1")
    surface.add_marker(3.0, 4.0, "AA2")
    assert [m.label for m in surface.markers] == ["AA1", "AA2"]

    surface.clear_markers()
    assert surface.markers == []


def test_map_surface_renders_markers_with_icon():
    surface = MapSurface(center=(51.5072, -0.1276), zoom=3, icon_url="https://example.test/plane.png")
    surface.add_marker(48.85, 2.35, "AF1234")

    html = surface.render_html()

    assert "leaflet" in html.lower()
    assert "https://example.test/plane.png" in html
    assert "AF1234" in html


def test_render_builds_cards_in_input_order():
    flights = format_flights([
        FlightRecord.from_dict(make_flight(iata="BA1", altitude=None)),
        FlightRecord.from_dict(make_flight(iata="BA2")),
    ])
    view = FlightView(MapSurface(center=(0.0, 0.0), zoom=2))

    view.render(flights)

    snapshot = view.snapshot()
    assert [c.title for c in snapshot.cards] == ["BA1", "BA2"]
    assert dict(snapshot.cards[0].rows)["Altitude"] == "N/A"
    assert dict(snapshot.cards[0].rows)["Latitude"] == "51.47"
    assert snapshot.updated_at is not None


def test_message_box_toggles():
    view = FlightView(MapSurface(center=(0.0, 0.0), zoom=2))

    view.show_error()
    assert view.message.visible is True
    assert "API key" in view.message.text

    view.hide_error()
    assert view.message.visible is False
    assert view.message.text == ""
