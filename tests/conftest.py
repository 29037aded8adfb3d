from __future__ import annotations

import copy

import pytest

from payloads import CURRENT_PAYLOAD, forecast_payload


@pytest.fixture()
def current_payload() -> dict:
    return copy.deepcopy(CURRENT_PAYLOAD)


@pytest.fixture()
def forecast_json() -> dict:
    return forecast_payload()
