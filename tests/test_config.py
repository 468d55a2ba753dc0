import pytest
from pydantic import ValidationError

from pickroute.config import Settings


def test_crossover_aisles_parse_from_json_env(monkeypatch):
    monkeypatch.setenv("PICKROUTE_ZONE_CROSSOVER_AISLES", "[0, 12]")

    assert Settings().zone_crossover_aisles == (0, 12)


def test_crossover_aisles_reject_negative_positions():
    with pytest.raises(ValidationError):
        Settings(zone_crossover_aisles=(-1,))


@pytest.mark.parametrize("value", [0, 17, 30])
def test_exact_tsp_limit_is_bounded(value):
    with pytest.raises(ValidationError):
        Settings(tsp_exact_max_locations=value)


def test_exact_tsp_limit_accepts_upper_bound():
    assert Settings(tsp_exact_max_locations=16).tsp_exact_max_locations == 16
