import json

import pytest

from neverbeen.cli import main


def test_sample_json_is_seeded(capsys):
    argv = ["sample", "--lat", "55.774167", "--lon", "-3.918333", "--radius", "50", "--unit", "km", "--seed", "3", "--json"]
    assert main(argv) == 0
    first = json.loads(capsys.readouterr().out)
    assert main(argv) == 0
    second = json.loads(capsys.readouterr().out)

    assert first == second
    assert first["unit"] == "km"
    assert first["distance_km"] <= 50 + 1e-6


def test_sample_count_prints_one_line_per_destination(capsys):
    assert main(["sample", "--lat", "0", "--lon", "179", "--seed", "1", "--count", "3"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("Origin: 0°0'0.00\"N 179°0'0.00\"E")
    assert len(lines) == 4


def test_invalid_origin_exits_with_error(capsys):
    assert main(["sample", "--lat", "95", "--lon", "0"]) == 2
    assert "latitude must be within" in capsys.readouterr().err


def test_distance_command(capsys):
    assert main(["distance", "0", "0", "1", "0", "--unit", "km"]) == 0
    assert capsys.readouterr().out.strip() == "111.2 km"


def test_dms_both_directions(capsys):
    assert main(["dms", "-33.333", "--axis", "lat"]) == 0
    assert capsys.readouterr().out.strip() == "33°19'58.80\"S"

    assert main(["dms", "--axis", "lon", "--parse", "3°55'6\"W"]) == 0
    assert capsys.readouterr().out.strip() == "-3.918333"


@pytest.mark.parametrize("count", ["0", "-2", "many"])
def test_sample_rejects_non_positive_count(count, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["sample", "--lat", "0", "--lon", "0", "--count", count])
    assert exc.value.code == 2
    assert "--count" in capsys.readouterr().err


def test_bad_seed_env_is_reported_not_raised(monkeypatch, capsys):
    from neverbeen.config.settings import get_settings

    monkeypatch.setenv("NEVERBEEN_SEED", "abc")
    get_settings.cache_clear()
    try:
        assert main(["distance", "0", "0", "1", "0"]) == 2
    finally:
        get_settings.cache_clear()
    assert "NEVERBEEN_SEED" in capsys.readouterr().err
