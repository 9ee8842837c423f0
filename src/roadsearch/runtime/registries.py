# runtime/registries.py
from collections.abc import Callable
from typing import Any

from roadsearch.app.protocols import GraphSource
from roadsearch.config.models import (
    MapByPickleModel,
    MapByXmlModel,
    MapSourceUnion,
    ProjectionModel,
)
from roadsearch.io.map_loader import PickleMapSource, XmlMapSource
from roadsearch.io.projection import MercatorProjector

GraphSourceFactory = Callable[[MapSourceUnion, dict], GraphSource]

_graph_source_registry: dict[str, GraphSourceFactory] = {}


# ----------------------- Graph sources ------------------------------


def register_graph_source(fmt: str):
    def deco(fn: GraphSourceFactory):
        _graph_source_registry[fmt] = fn
        return fn

    return deco


def make_graph_source(cfg: MapSourceUnion, *, deps: dict[str, Any] | None = None) -> GraphSource:
    """
    deps can include:
      - 'projection': ProjectionModel  # canvas for the XML projector
      - 'projector': Projector         # a prebuilt projector, wins over 'projection'
    """
    try:
        factory = _graph_source_registry[cfg.fmt]
    except KeyError:
        raise ValueError(f"Unsupported map fmt {cfg.fmt!r}")
    return factory(cfg, deps or {})


@register_graph_source("xml")
def _make_xml(cfg: MapByXmlModel, deps):
    projector = deps.get("projector")
    if projector is None:
        proj: ProjectionModel = deps.get("projection") or ProjectionModel()
        projector = MercatorProjector(proj.width, proj.height)
    return XmlMapSource(
        cfg.file, projector=projector, scale=cfg.coordinate_scale, must_exist=cfg.must_exist
    )


@register_graph_source("pickle")
def _make_pickle(cfg: MapByPickleModel, deps):
    return PickleMapSource(cfg.file, must_exist=cfg.must_exist)
