import pytest
from pydantic import ValidationError
from rewardrules.engine.parser import RuleParser
from rewardrules.engine.settings import Settings, load_settings, save_settings

def test_load_settings_creates_defaults(tmp_path):
    path = tmp_path / "cfg" / "settings.json"
    s = load_settings(path)
    assert s == Settings()
    assert path.exists()

def test_settings_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    save_settings(Settings(max_depth=12, strict_unknown_children=True, rng_seed=9), path)
    s = load_settings(path)
    p = RuleParser.from_settings(s)
    assert p.max_depth == 12
    assert p.strict_unknown_children is True

def test_fixed_seed_rng_repeats():
    s = Settings(rng_seed=42)
    assert s.make_rng().randint(1, 10**9) == s.make_rng().randint(1, 10**9)
    assert s.make_rng(7).random() == Settings(rng_seed=0).make_rng(7).random()

def test_max_depth_above_recursion_limit_is_rejected():
    with pytest.raises(ValidationError, match="recursion limit"):
        Settings(max_depth=100_000)
    with pytest.raises(ValidationError):
        Settings(max_depth=0)
