"""Dependencies shared by the sentiment and stock endpoints."""

from pathlib import Path
from typing import Annotated

from fastapi import Depends

from metal_sentiment.core.config import get_data_dir
from metal_sentiment.core.prices import PriceFetcher, YFinancePriceFetcher
from metal_sentiment.storage import JsonStore


def get_data_base_path() -> Path:
    """Get the base path for the JSON documents."""
    return get_data_dir()


def get_json_store(
    base_path: Annotated[Path, Depends(get_data_base_path)],
) -> JsonStore:
    """Get the JSON document store."""
    return JsonStore(base_path)


def get_price_fetcher() -> PriceFetcher:
    """Get the market data implementation."""
    return YFinancePriceFetcher()
