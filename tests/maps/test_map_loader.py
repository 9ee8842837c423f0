import math
import pickle

import pytest

from roadsearch.domain.entities.geography import Edge, Node, Point, RoadGraph
from roadsearch.domain.errors import MapFormatError
from roadsearch.io.map_loader import PickleMapSource, XmlMapSource
from roadsearch.io.projection import MercatorProjector
from roadsearch.runtime.resources import dump_graph, load_graph_from_path

MAP_XML = """<?xml version="1.0"?>
<root>
  <map>
    <nodes>
      <node id="1" latitude="4963454" longitude="621476"/>
      <node id="2" latitude="4959493" longitude="614350"/>
      <node id="3" latitude="4959247" longitude="612096"/>
      <node id="3" latitude="0" longitude="0"/>
    </nodes>
    <arcs>
      <arc from="1" to="2" length="1021.5"/>
      <arc from="2" to="1" length="1021.5"/>
      <arc from="2" to="3" length="160"/>
    </arcs>
  </map>
</root>
"""


class IdentityProjector:
    def project(self, longitude, latitude):
        return Point(longitude, latitude)


def _write(tmp_path, text, name="map.xml"):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_xml_map_loads_nodes_and_arcs(tmp_path):
    g = XmlMapSource(_write(tmp_path, MAP_XML), projector=IdentityProjector()).load()
    assert [n.id for n in g.nodes] == ["1", "2", "3"]
    assert g.node("1").position == Point(6.21476, 49.63454)
    # duplicate id keeps the first definition
    assert g.node("3").position == Point(6.12096, 49.59247)
    assert g.adjacency[Node("2")] == [Edge(Node("2"), Node("1")), Edge(Node("2"), Node("3"))]
    assert g.adjacency[Node("3")] == []
    assert g.edges[2].length == 160.0


def test_xml_map_goes_through_projector(tmp_path):
    proj = MercatorProjector(1000, 800)
    g = XmlMapSource(_write(tmp_path, MAP_XML), projector=proj).load()
    assert g.node("1").position == proj.project(6.21476, 49.63454)
    assert len(proj) == 3


@pytest.mark.parametrize(
    "body, msg",
    [
        ("<map><nodes/></map>", "arcs"),
        ("<map><arcs/></map>", "nodes"),
        ("<other/>", "map"),
        ('<map><nodes><node id="1" latitude="1"/></nodes><arcs/></map>', "longitude"),
        ('<map><nodes><node id="1" latitude="x" longitude="1"/></nodes><arcs/></map>', "number"),
        (
            '<map><nodes><node id="1" latitude="1" longitude="1"/></nodes>'
            '<arcs><arc from="1" to="9" length="1"/></arcs></map>',
            "unknown node",
        ),
        (
            '<map><nodes><node id="1" latitude="1" longitude="1"/></nodes>'
            '<arcs><arc from="1" to="1" length="-1"/></arcs></map>',
            "negative",
        ),
        ('<map><nodes><node id="1" latitude="9000000" longitude="1"/></nodes><arcs/></map>', "latitude"),
        ("<map><nodes>", "map.xml"),
    ],
)
def test_malformed_maps_raise_map_format_error(tmp_path, body, msg):
    with pytest.raises(MapFormatError, match=msg):
        XmlMapSource(_write(tmp_path, body), projector=IdentityProjector()).load()


def test_missing_map_file(tmp_path):
    missing = str(tmp_path / "nope.xml")
    with pytest.raises(FileNotFoundError):
        XmlMapSource(missing, projector=IdentityProjector()).load()
    g = XmlMapSource(missing, projector=IdentityProjector(), must_exist=False).load()
    assert not g.is_loaded()


def test_pickled_graph_round_trip(tmp_path, diamond):
    path = str(tmp_path / "g.pkl")
    dump_graph(diamond, path)
    g = PickleMapSource(path).load()
    assert isinstance(g, RoadGraph)
    assert g.adjacency == diamond.adjacency
    assert g.nearest_node(Point(0.0, 0.0)) == Node("A")


def test_pickle_of_something_else_is_rejected(tmp_path):
    path = tmp_path / "junk.pkl"
    path.write_bytes(pickle.dumps({"not": "a graph"}))
    with pytest.raises(TypeError):
        load_graph_from_path(str(path), "pickle")
    with pytest.raises(ValueError):
        load_graph_from_path(str(path), "graphml")


def test_mercator_projection_values():
    proj = MercatorProjector(1000, 800)
    r = 1000 / (2 * math.pi)
    origin = proj.project(-180.0, 0.0)
    assert origin.x == pytest.approx(0.0)
    assert origin.y == pytest.approx(400.0)
    p = proj.project(0.0, 45.0)
    assert p.x == pytest.approx(500.0)
    assert p.y == pytest.approx(400.0 - r * math.log(math.tan(math.pi / 4 + math.radians(45.0) / 2)))
    assert p.y < 400.0  # north is up


def test_projector_memoizes_per_instance():
    a, b = MercatorProjector(1000, 800), MercatorProjector(1000, 800)
    first = a.project(6.1, 49.6)
    assert a.project(6.1, 49.6) is first
    assert len(a) == 1 and len(b) == 0
    a.clear()
    assert len(a) == 0


@pytest.mark.parametrize("lat", ["-9000000", "-9500000", "9000000"])
def test_polar_latitudes_are_rejected_before_projection(tmp_path, lat):
    body = f'<map><nodes><node id="s" latitude="{lat}" longitude="610000"/></nodes><arcs/></map>'
    proj = MercatorProjector(1000, 800)
    with pytest.raises(MapFormatError, match="latitude"):
        XmlMapSource(_write(tmp_path, body), projector=proj).load()
    assert len(proj) == 0
