from tools.chanterm.config import BrowserConfig, FourChanConfig


def test_defaults() -> None:
    cfg = FourChanConfig()
    assert cfg.api_base == "https://a.4cdn.org"
    assert cfg.image_base == "https://i.4cdn.org"
    assert cfg.timeout == 30.0


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("CHANTERM_API_BASE", "http://localhost:8080/")
    monkeypatch.setenv("CHANTERM_TIMEOUT", "2.5")
    cfg = FourChanConfig.from_env()
    assert cfg.api_base == "http://localhost:8080"
    assert cfg.image_base == "https://i.4cdn.org"
    assert cfg.timeout == 2.5


def test_browser_config_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("CHANTERM_IMAGE_BASE", "http://img.local")
    assert BrowserConfig().fourchan.image_base == "http://img.local"
