"""Built-in stock lists: the add-stock catalogue and the sample portfolio."""

from dataclasses import dataclass
from decimal import Decimal

from portfolio_dashboard.domain.models.enums import Exchange
from portfolio_dashboard.domain.models.holding import Holding


@dataclass(frozen=True)
class CatalogEntry:
    """A well-known stock offered when adding a holding."""

    symbol: str
    name: str
    sector: str


POPULAR_STOCKS: tuple[CatalogEntry, ...] = (
    CatalogEntry("TCS", "Tata Consultancy Services", "Technology"),
    CatalogEntry("INFY", "Infosys Limited", "Technology"),
    CatalogEntry("HDFCBANK", "HDFC Bank Limited", "Financials"),
    CatalogEntry("ICICIBANK", "ICICI Bank Limited", "Financials"),
    CatalogEntry("RELIANCE", "Reliance Industries", "Energy"),
    CatalogEntry("WIPRO", "Wipro Limited", "Technology"),
    CatalogEntry("SBIN", "State Bank of India", "Financials"),
    CatalogEntry("BHARTIARTL", "Bharti Airtel Limited", "Telecom"),
    CatalogEntry("KOTAKBANK", "Kotak Mahindra Bank", "Financials"),
    CatalogEntry("LT", "Larsen & Toubro", "Infrastructure"),
    CatalogEntry("ADANIGREEN", "Adani Green Energy", "Energy"),
    CatalogEntry("TITAN", "Titan Company Limited", "Consumer Goods"),
)


def _sample_holdings() -> list[Holding]:
    return [
        Holding(
            id="1",
            particulars="Tata Consultancy Services",
            sector="Technology",
            purchase_price=Decimal("3200"),
            quantity=10,
            exchange=Exchange.NSE,
            symbol="TCS",
        ),
        Holding(
            id="2",
            particulars="Infosys Limited",
            sector="Technology",
            purchase_price=Decimal("1400"),
            quantity=15,
            exchange=Exchange.NSE,
            symbol="INFY",
        ),
        Holding(
            id="3",
            particulars="HDFC Bank Limited",
            sector="Financials",
            purchase_price=Decimal("1600"),
            quantity=12,
            exchange=Exchange.NSE,
            symbol="HDFCBANK",
        ),
    ]


# Fallback portfolio used when nothing valid has been persisted yet
SAMPLE_HOLDINGS: tuple[Holding, ...] = tuple(_sample_holdings())
