"""ProcessedData snapshot model."""

from pydantic import BaseModel, Field

from roundtrip.models.matched_trade import MatchedTrade
from roundtrip.models.report import MatchReport
from roundtrip.models.stats import StatsSummary
from roundtrip.models.transaction import Transaction


class ProcessedData(BaseModel):
    """Everything the presentation layer needs from one or more files."""

    transactions: list[Transaction] = Field(default_factory=list)
    matched_trades: list[MatchedTrade] = Field(default_factory=list)
    stats: StatsSummary
    report: MatchReport = Field(default_factory=MatchReport)
    diagnostics: list[str] = Field(default_factory=list, description="Non-fatal problems")
    sources: list[str] = Field(default_factory=list, description="Source file names")
