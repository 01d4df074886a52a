"""Shared fixtures: every test runs against a fresh, enabled configuration."""

from __future__ import annotations

import pytest

from contractual import ContractConfig, RecordingHandler, use_config


@pytest.fixture(autouse=True)
def contract_config():
    with use_config(ContractConfig(enabled=True)) as config:
        yield config


@pytest.fixture
def recorder(contract_config):
    handler = RecordingHandler()
    contract_config.violation_handler = handler
    return handler
