# -*- coding: utf-8 -*-
"""
Tests for the polling example's balance conversion.
"""

import importlib.util
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from myfxbook_client.models.errors import upstream_unavailable
from myfxbook_client.rates import ExchangeRateClient

_EXAMPLE_PATH = Path(__file__).resolve().parent.parent / "examples" / "poll_accounts.py"


@pytest.fixture(scope="module")
def poll_example():
    spec = importlib.util.spec_from_file_location("poll_accounts", _EXAMPLE_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def mock_rates():
    rates = Mock(spec=ExchangeRateClient)
    rates.get_rate = AsyncMock()
    return rates


class TestConvertBalances:
    """Test per-account currency conversion."""

    @pytest.mark.asyncio
    async def test_each_account_uses_its_own_currency(self, poll_example, mock_rates):
        table = {("USD", "JPY"): Decimal("150"), ("EUR", "JPY"): Decimal("160")}
        mock_rates.get_rate.side_effect = lambda base, quote: table[(base, quote)]
        accounts = [
            {"id": 1, "currency": "USD", "balance": 100.0},
            {"id": 2, "currency": "eur", "balance": 10.0},
            {"id": 3, "currency": "USD", "balance": 2.0},
        ]

        await poll_example.convert_balances(mock_rates, accounts, "jpy")

        assert [a["balanceJPY"] for a in accounts] == [15000.0, 1600.0, 300.0]
        # One lookup per distinct currency
        assert mock_rates.get_rate.await_count == 2

    @pytest.mark.asyncio
    async def test_failed_lookup_skips_only_that_currency(self, poll_example, mock_rates):
        def lookup(base, quote):
            if base == "GBP":
                return upstream_unavailable("Exchange rate: timed out")
            return Decimal("0.9")

        mock_rates.get_rate.side_effect = lookup
        accounts = [
            {"id": 1, "currency": "GBP", "balance": 50.0},
            {"id": 2, "currency": "USD", "balance": 10.0},
            {"id": 3, "currency": "", "balance": 5.0},
        ]

        await poll_example.convert_balances(mock_rates, accounts, "EUR")

        assert "balanceEUR" not in accounts[0]
        assert accounts[1]["balanceEUR"] == 9.0
        assert "balanceEUR" not in accounts[2]
