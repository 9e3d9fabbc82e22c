from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    from quant_engine import (
        BlackScholesEngine,
        EuropeanStockOption,
        MarketData,
        OptionParameters,
    )

    market = MarketData()
    market.add_risk_free_rate(1.0, 0.05)
    market.add_volatility(100.0, 1.0, 0.20)

    params = OptionParameters(
        notional=1.0, strike=100.0, maturity=1.0, spot_price=100.0, is_call=True
    )
    option = EuropeanStockOption(
        params=params, engine=BlackScholesEngine(), market=market
    )

    print("BS:", option.price())
    print("Greeks:", option.greeks())
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
