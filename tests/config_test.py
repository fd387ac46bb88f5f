import datetime

import pytest

from terminal_card.config import DEFAULT_TIMEOUT, Config
from terminal_card.errors import ConfigError


def test_user_name_fallbacks():
    assert Config.from_env({"USER_NAME": "a", "GITHUB_ACTOR": "b"}).user_name == "a"
    assert Config.from_env({"GITHUB_ACTOR": "b", "GITHUB_REPOSITORY": "c/c"}).user_name == "b"
    assert Config.from_env({"GITHUB_REPOSITORY": "owner/profile"}).user_name == "owner"


def test_missing_user_name():
    with pytest.raises(ConfigError):
        Config.from_env({"GITHUB_REPOSITORY": "no-slash"})


def test_defaults():
    config = Config.from_env({"USER_NAME": "octo"})
    assert config.api_base_url == "https://api.github.com"
    assert config.star_api_url == "https://api.github-star-counter.workers.dev"
    assert config.output_file == "terminal.svg"
    assert config.timeout == 30.0
    assert config.max_bio_len == 45
    assert config.max_lang_len == 35
    assert config.excluded_languages == {"HTML", "Jupyter Notebook", "Brainfuck"}
    assert not config.debug


def test_overrides():
    config = Config.from_env({
        "USER_NAME": "octo",
        "API_BASE_URL": "http://localhost:8080/",
        "OUTPUT_FILE": "out.svg",
        "REQUEST_TIMEOUT": "2.5",
        "DEBUG": "1",
    })
    assert config.api_base_url == "http://localhost:8080"
    assert config.output_file == "out.svg"
    assert config.timeout == 2.5
    assert config.debug


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_bad_timeout_falls_back(value):
    assert Config.from_env({"USER_NAME": "octo", "REQUEST_TIMEOUT": value}).timeout == DEFAULT_TIMEOUT


def test_timezone():
    config = Config(user_name="octo", timezone="Asia/Kolkata")
    now = config.now()
    assert now.utcoffset() == datetime.timedelta(hours=5, minutes=30)


def test_unknown_timezone_uses_local():
    config = Config(user_name="octo", timezone="Mars/Olympus_Mons")
    assert config.now().tzinfo is not None
