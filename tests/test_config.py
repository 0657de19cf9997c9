"""Tests for application settings."""

from movie_finder.config import Settings, trim_trailing_slash


def test_settings_defaults() -> None:
    settings = Settings(tmdb_api_key="key")

    assert settings.tmdb_base_url == "https://api.themoviedb.org/3"
    assert settings.result_cache_ttl_seconds == 60
    assert settings.favorites_ttl_days == 7
    assert settings.favorites_max_per_session == 200
    assert settings.session_cookie_name == "mf.sid"


def test_settings_trim_trailing_slashes() -> None:
    settings = Settings(
        tmdb_api_key="key",
        tmdb_base_url="https://api.test/3/",
        tmdb_image_base_url="https://img.test/w500/",
    )

    assert settings.tmdb_base_url == "https://api.test/3"
    assert settings.tmdb_image_base_url == "https://img.test/w500"


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("TMDB_API_KEY", "from-env")
    monkeypatch.setenv("TMDB_TIMEOUT_SECONDS", "5")

    settings = Settings()

    assert settings.tmdb_api_key == "from-env"
    assert settings.tmdb_timeout_seconds == 5.0


def test_settings_repr_hides_api_key() -> None:
    assert "secret-key" not in repr(Settings(tmdb_api_key="secret-key"))


def test_trim_trailing_slash() -> None:
    assert trim_trailing_slash(None) is None
    assert trim_trailing_slash("") == ""
    assert trim_trailing_slash("https://a/") == "https://a"
    assert trim_trailing_slash("https://a") == "https://a"
