from config import Configuration


def test_defaults():
    cfg = Configuration()
    assert cfg.feed_cap == 10
    assert cfg.feed_fetch_limit == 50
    assert (cfg.min_radius_miles, cfg.max_radius_miles) == (1.0, 1000.0)


def test_from_env_reads_and_coerces(monkeypatch):
    monkeypatch.setenv("FEED_CAP", "7")
    monkeypatch.setenv("DEFAULT_RADIUS_MILES", "12.5")
    monkeypatch.setenv("LOCATION_ENABLED_DEFAULT", "yes")

    cfg = Configuration.from_env()

    assert cfg.feed_cap == 7
    assert cfg.default_radius_miles == 12.5
    assert cfg.location_enabled_default is True


def test_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv("FEED_CAP", "7")
    cfg = Configuration.from_env({"feed_cap": 3, "feed_fetch_limit": None})
    assert cfg.feed_cap == 3
    assert cfg.feed_fetch_limit == 50
    assert "feed_cap=3" in cfg.log_summary()
