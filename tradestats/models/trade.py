"""Trade data models."""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ClosedTrade(BaseModel):
    """A settled trade, normalized for aggregation.

    Produced by :meth:`Trade.to_closed` so that the open/closed question
    is answered once at the model boundary.
    """

    id: str = Field(..., description="Trade identifier")
    date: date_type = Field(..., description="Entry date")
    effective_date: date_type = Field(..., description="Exit date, or entry date when unset")
    symbol: str = Field(..., description="Trading symbol")
    direction: Literal["long", "short"] = Field(..., description="Trade direction")
    pnl: float = Field(..., description="Realized P&L in currency")
    rr: float = Field(default=0.0, description="Realized R multiple (missing R counts as 0)")
    setup: str = Field(default="", description="Setup label")
    tags: tuple[str, ...] = Field(default=(), description="Tags")

    model_config = {"frozen": True}


class Trade(BaseModel):
    """Represents a journaled trade as it was recorded.

    Older records may carry an exit price without a status, so the
    closed state is derived rather than stored.

    Also accepts the camelCase keys of journal backups, where the
    direction is stored as ``type``.
    """

    id: str = Field(..., min_length=1, description="Trade identifier")
    date: date_type = Field(..., description="Entry date")
    symbol: str = Field(..., description="Trading symbol")
    direction: Literal["long", "short"] = Field(default="long", alias="type", description="Trade direction")
    entry_price: float = Field(default=0.0, description="Entry price")
    exit_price: Optional[float] = Field(default=None, description="Exit price (None while open)")
    pnl: float = Field(default=0.0, description="Realized P&L in currency")
    rr: Optional[float] = Field(default=None, description="Realized R multiple")
    status: Optional[Literal["open", "closed"]] = Field(default=None, description="Explicit trade status")
    exit_date: Optional[date_type] = Field(default=None, description="Date the trade was closed")
    name: Optional[str] = Field(default=None, description="Optional trade title")
    entry_time: Optional[str] = Field(default=None, description="Entry time (HH:MM)")
    exit_time: Optional[str] = Field(default=None, description="Exit time (HH:MM)")
    setup: str = Field(default="", description="Setup label")
    tags: tuple[str, ...] = Field(default=(), description="Tags")
    notes: str = Field(default="", description="Free-form notes")
    stop_loss: Optional[float] = Field(default=None, description="Planned stop loss")
    target: Optional[float] = Field(default=None, description="Planned target")
    screenshot_before: Optional[str] = Field(default=None, description="Entry screenshot URL")
    screenshot_after: Optional[str] = Field(default=None, description="Exit screenshot URL")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @property
    def is_closed(self) -> bool:
        """Whether the trade counts as closed.

        An exit price of zero is treated as an unfilled order, not a
        zero-price close.
        """
        if self.status == "closed":
            return True
        return self.exit_price is not None and self.exit_price != 0

    @property
    def effective_date(self) -> date_type:
        """Date used for all per-day aggregation."""
        return self.exit_date or self.date

    def to_closed(self) -> Optional[ClosedTrade]:
        """Normalize into a ClosedTrade, or None if the trade is open."""
        if not self.is_closed:
            return None
        return ClosedTrade(
            id=self.id,
            date=self.date,
            effective_date=self.effective_date,
            symbol=self.symbol,
            direction=self.direction,
            pnl=self.pnl,
            rr=self.rr if self.rr is not None else 0.0,
            setup=self.setup,
            tags=self.tags,
        )
