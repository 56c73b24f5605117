"""Summary statistics and risk metric models."""

from pydantic import BaseModel, Field


class StatsSummary(BaseModel):
    """Aggregate statistics over transactions and matched trades."""

    unique_tickers: int = Field(..., ge=0, description="Distinct instruments")
    total_trades: int = Field(..., ge=0, description="Transaction count")
    yes_no_breakdown: dict[str, int] = Field(..., description="Transactions per direction")
    exit_direction_breakdown: dict[str, float] = Field(
        ..., description="Closed contracts per direction, revenue-weighted for market exits"
    )
    total_fees: float = Field(..., description="Sum of fees")
    total_profit: float = Field(..., description="Sum of ledger realized profit")
    avg_contract_purchase_price: float = Field(..., description="Average entry price in cents")
    avg_contract_final_price: float = Field(..., description="Average exit price in cents")
    weighted_holding_period: float = Field(..., ge=0, description="Cost-weighted holding days")
    win_rate: float = Field(..., ge=0, le=1, description="Fraction of winning exits")
    settled_win_rate: float = Field(..., ge=0, le=1, description="Fraction of winning settlements")

    model_config = {"frozen": True}


class RiskMetrics(BaseModel):
    """Return and volatility metrics over a synthetic daily portfolio series."""

    total_return: float = Field(default=0.0, description="Final over initial value, minus one")
    standard_deviation: float = Field(default=0.0, ge=0, description="Daily return volatility")
    annualized_sharpe: float = Field(default=0.0, description="Mean over sigma, times sqrt(252)")
    trading_days: int = Field(default=0, ge=0, description="Days with a nonzero return")
    avg_daily_return: float = Field(default=0.0, description="Mean daily return")
    annualized_return: float = Field(default=0.0, description="Mean daily return times 252")
    annualized_volatility: float = Field(default=0.0, ge=0, description="Sigma times sqrt(252)")
    initial_capital: float = Field(..., description="Starting capital")

    model_config = {"frozen": True}
