"""Tests for the Nifty Metal universe."""

from metal_sentiment.universe import (
    METAL_STOCKS,
    get_all_symbols,
    get_stock_by_symbol,
)


def test_universe_has_seven_stocks():
    assert len(METAL_STOCKS) == 7


def test_symbols_are_unique():
    symbols = get_all_symbols()
    assert len(symbols) == len(set(symbols))


def test_symbols_in_registry_order():
    assert get_all_symbols() == [
        "TATASTEEL",
        "JSWSTEEL",
        "HINDALCO",
        "VEDL",
        "SAIL",
        "NMDC",
        "COALINDIA",
    ]


def test_every_stock_has_nse_yahoo_symbol_and_search_terms():
    for stock in METAL_STOCKS:
        assert stock.yahoo_symbol == f"{stock.symbol}.NS"
        assert len(stock.search_terms) == 3
        assert stock.sector in ("steel", "aluminum", "mining", "coal")


def test_lookup_known_symbol():
    stock = get_stock_by_symbol("HINDALCO")
    assert stock is not None
    assert stock.short_name == "Hindalco"
    assert stock.sector == "aluminum"


def test_lookup_is_case_insensitive():
    assert get_stock_by_symbol("tatasteel") == get_stock_by_symbol("TATASTEEL")


def test_lookup_unknown_symbol_returns_none():
    assert get_stock_by_symbol("RELIANCE") is None


def test_to_dict_uses_camel_case():
    data = get_stock_by_symbol("COALINDIA").to_dict()
    assert data["shortName"] == "Coal India"
    assert data["yahooSymbol"] == "COALINDIA.NS"
    assert data["searchTerms"] == ["Coal India", "COALINDIA", "Coal India Limited"]
