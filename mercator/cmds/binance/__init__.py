"""Commands installed by the binance scope."""
