"""Unit tests for the market data service."""

from datetime import date
from decimal import Decimal

from models import AssetKind
from services.ledger_normalizer import normalize_ledger
from services.market_data_service import MarketDataService
from tests.fixtures import TODAY, make_asset, make_transaction
from tests.fixtures.mocks import MockPriceProvider


class TestGetPriceHistory:
    """Tests for planning and collecting price series."""

    def test_start_from_earliest_entry_minus_buffer(self):
        asset = make_asset("aapl", symbol="AAPL")
        txs = [make_transaction("b", "2024-01-10", quantity_change="1", asset_id="aapl")]
        ledger = normalize_ledger([asset], txs, TODAY)
        provider = MockPriceProvider({"aapl": {
            date(2024, 1, 1): Decimal("180"),
            date(2024, 1, 5): Decimal("185"),
        }})

        history = MarketDataService(provider).get_price_history([asset], ledger.entries, TODAY)

        assert provider.requests == [("aapl", date(2024, 1, 3), TODAY)]
        assert history == {"aapl": {date(2024, 1, 5): Decimal("185")}}

    def test_acquisition_date_and_default_lookback(self):
        legacy = make_asset("fund", AssetKind.FUND, quantity="1", date_acquired="2023-01-08")
        fresh = make_asset("new")
        provider = MockPriceProvider()

        MarketDataService(provider).get_price_history([legacy, fresh], [], TODAY)

        assert provider.requests == [
            ("fund", date(2023, 1, 1), TODAY),
            ("new", date(2020, 6, 30), TODAY),
        ]

    def test_malformed_acquisition_date_uses_default(self):
        asset = make_asset("odd", date_acquired="sometime")
        provider = MockPriceProvider()

        MarketDataService(provider).get_price_history([asset], [], TODAY)

        assert provider.requests == [("odd", date(2020, 6, 30), TODAY)]

    def test_manually_valued_assets_not_requested(self):
        house = make_asset("house", AssetKind.REAL_ESTATE)
        loan = make_asset("loan", AssetKind.LIABILITY)
        provider = MockPriceProvider()

        history = MarketDataService(provider).get_price_history([house, loan], [], TODAY)

        assert history == {"house": {}, "loan": {}}
        assert provider.requests == []

    def test_crypto_routed_to_crypto_provider(self):
        btc = make_asset("btc", AssetKind.CRYPTO, symbol="BTC")
        stock = make_asset("aapl")
        default = MockPriceProvider(name="stocks")
        crypto = MockPriceProvider(name="crypto")

        MarketDataService(default, crypto_provider=crypto).get_price_history(
            [btc, stock], [], TODAY
        )

        assert [r[0] for r in crypto.requests] == ["btc"]
        assert [r[0] for r in default.requests] == ["aapl"]

    def test_provider_failure_yields_empty_series(self, caplog):
        good = make_asset("good")
        bad = make_asset("bad", symbol="BAD")
        provider = MockPriceProvider(
            {"good": {TODAY: Decimal("5")}}, failing_ids={"bad"}
        )

        history = MarketDataService(provider).get_price_history([bad, good], [], TODAY)

        assert history["bad"] == {}
        assert history["good"] == {TODAY: Decimal("5")}
        assert "Price history fetch failed for BAD" in caplog.text


class TestProviderRetry:
    """Transient provider failures get one more attempt."""

    def test_transient_failure_retried_once(self):
        asset = make_asset("aapl")
        provider = MockPriceProvider({"aapl": {TODAY: Decimal("200")}}, flaky_ids={"aapl"})

        history = MarketDataService(provider).get_price_history([asset], [], TODAY)

        assert history["aapl"] == {TODAY: Decimal("200")}
        assert len(provider.requests) == 2

    def test_persistent_transient_failure_gives_up(self):
        asset = make_asset("aapl")
        provider = MockPriceProvider(failing_ids={"aapl"})

        history = MarketDataService(provider).get_price_history([asset], [], TODAY)

        assert history["aapl"] == {}
        assert len(provider.requests) == 2

    def test_non_retriable_failure_not_retried(self):
        asset = make_asset("zzzz")
        provider = MockPriceProvider(rejected_ids={"zzzz"})

        history = MarketDataService(provider).get_price_history([asset], [], TODAY)

        assert history["zzzz"] == {}
        assert len(provider.requests) == 1
