import json

import pytest
from pydantic import ValidationError

from roadsearch.config.models import (
    EngineModel,
    HeuristicModel,
    MapByPickleModel,
    MapByXmlModel,
    QueryOptionsModel,
)
from roadsearch.domain.entities.query import AlgorithmType
from roadsearch.domain.mechanics.mechanics_distance import MULTIPLICITY_BASE
from roadsearch.io.config import load_config


def test_defaults_match_a_fresh_session():
    m = EngineModel()
    assert m.query.algorithm is AlgorithmType.HYBRID_ASTAR
    assert m.query.heuristic_weight == 1.0
    assert m.query.use_manhattan and not m.query.mark_passed_edges
    assert m.heuristic.base_multiplier == MULTIPLICITY_BASE
    assert m.map is None
    assert m.log.level == "INFO"


@pytest.mark.parametrize("w", [-0.1, float("inf"), float("nan")])
def test_bad_weights_are_rejected(w):
    with pytest.raises(ValidationError):
        QueryOptionsModel(heuristic_weight=w)


@pytest.mark.parametrize("b", [0.0, -5.0, float("inf")])
def test_bad_base_multiplier_is_rejected(b):
    with pytest.raises(ValidationError):
        HeuristicModel(base_multiplier=b)


def test_unknown_keys_and_algorithms_are_rejected():
    with pytest.raises(ValidationError):
        QueryOptionsModel(algoritm="dijkstra")
    with pytest.raises(ValidationError):
        QueryOptionsModel(algorithm="bfs")


def test_map_source_discriminates_on_fmt(monkeypatch):
    monkeypatch.setenv("MAPS", "/data/maps")
    m = EngineModel.model_validate({"map": {"fmt": "xml", "file": "$MAPS/lux.xml"}})
    assert isinstance(m.map, MapByXmlModel)
    assert m.map.file == "/data/maps/lux.xml"
    assert m.map.coordinate_scale == 100_000.0
    m = EngineModel.model_validate({"map": {"fmt": "pickle", "file": "g.pkl", "must_exist": False}})
    assert isinstance(m.map, MapByPickleModel)
    with pytest.raises(ValidationError):
        EngineModel.model_validate({"map": {"fmt": "graphml", "file": "g.graphml"}})


def test_projection_must_be_positive():
    with pytest.raises(ValidationError):
        EngineModel.model_validate({"projection": {"width": 0}})


def test_load_config_from_json(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(
        json.dumps(
            {
                "name": "lux",
                "query": {"algorithm": "astar", "use_manhattan": False},
                "heuristic": {"base_multiplier": 2.5},
                "log": {"level": "DEBUG", "debug": True},
            }
        ),
        encoding="utf-8",
    )
    m = load_config(path)
    assert m.name == "lux"
    assert m.query.algorithm is AlgorithmType.ASTAR
    assert m.heuristic.base_multiplier == 2.5
    assert m.log.debug
