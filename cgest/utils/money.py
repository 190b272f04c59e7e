"""
Money formatting.

Usage:
    from cgest.utils.money import format_money

    format_money(1500, "BRL")      -> "R$ 1.500,00"
    format_money(1200.5, "USD")    -> "1.200,50 USD"
"""
from decimal import Decimal

_CURRENCY_PREFIX = {
    "BRL": "R$",
}


def format_money(amount, currency: str = "BRL", decimals: int = 2) -> str:
    """
    Formatar valor no padrão pt-BR: ponto de milhar, vírgula decimal.

    Args:
        amount: número (int / float / Decimal / str)
        currency: código ISO da moeda
        decimals: casas decimais
    """
    if isinstance(amount, str):
        amount = Decimal(amount)
    fmt = f"{{:,.{decimals}f}}"
    formatted = fmt.format(amount).replace(",", "_").replace(".", ",").replace("_", ".")
    prefix = _CURRENCY_PREFIX.get(currency)
    if prefix:
        return f"{prefix} {formatted}"
    return f"{formatted} {currency}"
