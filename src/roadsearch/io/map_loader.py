# io/map_loader.py
import logging
import os
import xml.etree.ElementTree as ET

from roadsearch.domain.entities.geography import Edge, Node, RoadGraph
from roadsearch.domain.errors import MapFormatError
from roadsearch.runtime.resources import load_graph_from_path

log = logging.getLogger("roadsearch.io")


def _child(parent: ET.Element, tag: str) -> ET.Element:
    el = parent.find(tag)
    if el is None:
        raise MapFormatError(f"<{parent.tag}> has no <{tag}> element")
    return el


def _attr(el: ET.Element, name: str) -> str:
    v = el.get(name)
    if v is None:
        raise MapFormatError(f"<{el.tag}> is missing attribute {name!r}")
    return v


def _float(el: ET.Element, name: str) -> float:
    raw = _attr(el, name)
    try:
        return float(raw)
    except ValueError:
        raise MapFormatError(f"<{el.tag} {name}={raw!r}> is not a number") from None


def parse_map(root: ET.Element, projector, *, scale: float = 100_000.0) -> RoadGraph:
    """
    Build a RoadGraph from a parsed ``<map>`` document:
      <map><nodes><node id latitude longitude/>…</nodes>
           <arcs><arc from to length/>…</arcs></map>
    Coordinates are degrees * ``scale``; the first node wins on duplicate ids.
    """
    map_el = root if root.tag == "map" else root.find(".//map")
    if map_el is None:
        raise MapFormatError("document has no <map> element")

    nodes: dict[str, Node] = {}
    for n in _child(map_el, "nodes").iter("node"):
        node_id = _attr(n, "id")
        if node_id in nodes:
            continue
        lat = _float(n, "latitude") / scale
        lon = _float(n, "longitude") / scale
        if not -90.0 < lat < 90.0:
            # Mercator y diverges at the poles
            raise MapFormatError(f"node {node_id!r} latitude {lat} is outside (-90, 90)")
        nodes[node_id] = Node(node_id, projector.project(lon, lat))

    edges: list[Edge] = []
    for a in _child(map_el, "arcs").iter("arc"):
        src, dst = _attr(a, "from"), _attr(a, "to")
        try:
            edges.append(Edge(nodes[src], nodes[dst], _float(a, "length")))
        except KeyError as exc:
            raise MapFormatError(f"arc {src!r} -> {dst!r} names unknown node {exc.args[0]!r}") from None
        if edges[-1].length < 0:
            raise MapFormatError(f"arc {src!r} -> {dst!r} has negative length")

    return RoadGraph(nodes.values(), edges)


class XmlMapSource:
    def __init__(self, file: str, *, projector, scale: float = 100_000.0, must_exist: bool = True):
        self.file, self.projector, self.scale, self.must_exist = file, projector, scale, must_exist

    def load(self) -> RoadGraph:
        if not os.path.exists(self.file):
            if self.must_exist:
                raise FileNotFoundError(self.file)
            log.warning("map file missing, using empty graph", extra={"extra": {"file": self.file}})
            return RoadGraph()
        try:
            root = ET.parse(self.file).getroot()
        except ET.ParseError as exc:
            raise MapFormatError(f"{self.file}: {exc}") from exc
        g = parse_map(root, self.projector, scale=self.scale)
        log.info(
            "map_loaded",
            extra={"extra": {"file": self.file, "nodes": len(g.nodes), "edges": len(g.edges)}},
        )
        return g


class PickleMapSource:
    def __init__(self, file: str, *, must_exist: bool = True):
        self.file, self.must_exist = file, must_exist

    def load(self) -> RoadGraph:
        if not os.path.exists(self.file):
            if self.must_exist:
                raise FileNotFoundError(self.file)
            return RoadGraph()
        return load_graph_from_path(self.file, "pickle")
