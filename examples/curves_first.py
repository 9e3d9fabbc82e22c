from __future__ import annotations


def main() -> None:
    # [START README_CURVES_FIRST]
    from quant_engine import BlackScholesEngine, EuropeanStockOption, MarketData
    from quant_engine.types import OptionParameters

    market = MarketData()
    for t, r in [(0.25, 0.045), (1.0, 0.040), (2.0, 0.038)]:
        market.add_risk_free_rate(t, r)

    grid = {
        (90.0, 0.5): 0.26,
        (90.0, 1.0): 0.25,
        (110.0, 0.5): 0.21,
        (110.0, 1.0): 0.22,
    }
    for (k, t), vol in grid.items():
        market.add_volatility(k, t, vol)

    engine = BlackScholesEngine()
    for strike in (95.0, 100.0, 105.0):
        for is_call in (True, False):
            params = OptionParameters(
                notional=100.0,
                strike=strike,
                maturity=0.75,
                spot_price=100.0,
                is_call=is_call,
            )
            option = EuropeanStockOption(params=params, engine=engine, market=market)
            print(
                f"{params.kind.value:>4} K={strike:6.1f} "
                f"r={float(market.get_risk_free_rate(0.75)):.4f} "
                f"vol={float(market.get_volatility(strike, 0.75)):.4f} "
                f"price={float(option.price()):10.4f}"
            )
    # [END README_CURVES_FIRST]


if __name__ == "__main__":
    main()
