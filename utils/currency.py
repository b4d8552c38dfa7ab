from utils.constants import CURRENCY_SYMBOL


def format_currency(amount: float | None, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format a float as currency string, e.g. '₹1,234.56'. None renders as 'N/A'."""
    if amount is None:
        return "N/A"
    return f"{symbol}{amount:,.2f}"
