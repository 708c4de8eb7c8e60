from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from coola.equality import objects_are_equal

from farmclient.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    RETRY_STATUS_CODES,
    ClientConfig,
    LogConfig,
    RetryPolicy,
)

BASE_URL = "https://api.example.com"


#################################
#     Tests for RetryPolicy     #
#################################


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()
    assert policy.max_retries == DEFAULT_MAX_RETRIES == 3
    assert policy.base_delay == DEFAULT_BASE_DELAY == 1.0
    assert policy.retryable_status_codes == frozenset({408, 429, 500, 502, 503, 504})
    assert policy.max_delay is None


def test_retry_policy_status_codes_are_frozen() -> None:
    policy = RetryPolicy(retryable_status_codes=[503, 503, 429])
    assert policy.retryable_status_codes == frozenset({429, 503})
    assert isinstance(policy.retryable_status_codes, frozenset)


def test_retry_policy_is_immutable() -> None:
    policy = RetryPolicy()
    with pytest.raises(FrozenInstanceError):
        policy.max_retries = 10  # type: ignore[misc]


def test_retry_policy_zero_retries() -> None:
    assert RetryPolicy(max_retries=0).max_retries == 0


@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"max_retries": -1}, r"max_retries must be >= 0"),
        ({"max_retries": 1.5}, r"max_retries must be an int"),
        ({"base_delay": -0.1}, r"base_delay must be >= 0"),
        ({"max_delay": 0}, r"max_delay must be > 0"),
        ({"retryable_status_codes": [503, 42]}, r"invalid HTTP status code"),
    ],
)
def test_retry_policy_invalid(kwargs: dict, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        RetryPolicy(**kwargs)


def test_retry_policy_merge() -> None:
    policy = RetryPolicy(max_retries=2)
    merged = policy.merge(max_retries=5, base_delay=None)
    assert merged.max_retries == 5
    assert merged.base_delay == policy.base_delay
    assert policy.max_retries == 2


###############################
#     Tests for LogConfig     #
###############################


def test_log_config_defaults() -> None:
    assert objects_are_equal(
        LogConfig(),
        LogConfig(enabled=False, level="error", log_requests=False, log_responses=False),
    )


def test_log_config_invalid_level() -> None:
    with pytest.raises(ValueError, match=r"level must be one of"):
        LogConfig(level="trace")


##################################
#     Tests for ClientConfig     #
##################################


def test_client_config_defaults() -> None:
    config = ClientConfig(base_url=BASE_URL)
    assert config.base_url == BASE_URL
    assert dict(config.default_headers) == {"Content-Type": "application/json"}
    assert config.get_access_token is None
    assert config.timeout == DEFAULT_TIMEOUT == 30.0
    assert config.retry_policy == RetryPolicy()
    assert config.log_config == LogConfig()
    assert config.on_request is None
    assert config.on_retry is None
    assert config.on_success is None
    assert config.on_failure is None


def test_client_config_retry_status_codes_default() -> None:
    assert ClientConfig(base_url=BASE_URL).retry_policy.retryable_status_codes == RETRY_STATUS_CODES


def test_client_config_default_headers_are_copied() -> None:
    headers = {"X-Api-Version": "v1"}
    config = ClientConfig(base_url=BASE_URL, default_headers=headers)
    headers["X-Api-Version"] = "v2"
    assert config.default_headers["X-Api-Version"] == "v1"
    with pytest.raises(TypeError):
        config.default_headers["X-Api-Version"] = "v3"  # type: ignore[index]


def test_client_config_is_immutable() -> None:
    config = ClientConfig(base_url=BASE_URL)
    with pytest.raises(FrozenInstanceError):
        config.timeout = 1.0  # type: ignore[misc]


@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"base_url": ""}, r"base_url must not be empty"),
        ({"base_url": "ftp://api.example.com"}, r"base_url must start with"),
        ({"base_url": BASE_URL, "timeout": 0}, r"timeout must be > 0"),
        ({"base_url": BASE_URL, "timeout": -5.0}, r"timeout must be > 0"),
    ],
)
def test_client_config_invalid(kwargs: dict, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        ClientConfig(**kwargs)


def test_client_config_merge() -> None:
    config = ClientConfig(base_url=BASE_URL, timeout=10.0)
    merged = config.merge(timeout=5.0, get_access_token=None)
    assert merged.timeout == 5.0
    assert merged.base_url == BASE_URL
    assert config.timeout == 10.0


def test_client_config_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        ClientConfig(base_url=BASE_URL).merge(timeout=-1.0)
