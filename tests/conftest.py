from __future__ import annotations

import pytest

from suite_money.config import reset_default_context
from suite_money.platform.bank.variable_exchange import VariableExchange


@pytest.fixture(autouse=True)
def fresh_default_context():
    """Give every test its own default context and shared bank, so stored rates and locale settings don't leak."""
    reset_default_context()
    VariableExchange._instance = None
    yield
    reset_default_context()
    VariableExchange._instance = None
