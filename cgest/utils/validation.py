"""
Validation utilities for money input
"""
import re
from decimal import Decimal, InvalidOperation


def normalize_decimal_input(value: str) -> str:
    """
    Normalizar valor digitado: formato brasileiro (vírgula decimal,
    ponto de milhar) vira ponto decimal.

    Example:
        >>> normalize_decimal_input("1.500,50")
        "1500.50"
        >>> normalize_decimal_input("100.50")
        "100.50"
    """
    value = value.strip()
    if "," in value:
        value = value.replace(".", "").replace(",", ".")
    return value


def validate_decimal_amount(value: str, max_decimal_places: int = 2) -> tuple[bool, str | None]:
    """
    Validar valor monetário

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_decimal_amount("100.505")
        (False, "Máximo de 2 casas decimais")
    """
    normalized = normalize_decimal_input(value)

    try:
        Decimal(normalized)
    except (InvalidOperation, ValueError):
        return False, "Valor inválido"

    pattern = rf"^-?\d+(\.\d{{1,{max_decimal_places}}})?$"
    if not re.match(pattern, normalized):
        return False, f"Máximo de {max_decimal_places} casas decimais"

    return True, None


def validate_and_normalize_amount(value: str, max_decimal_places: int = 2) -> str:
    """
    Validar e normalizar valor (ValueError se inválido)

    Example:
        >>> validate_and_normalize_amount("100,50")
        "100.50"
    """
    is_valid, error = validate_decimal_amount(value, max_decimal_places)
    if not is_valid:
        raise ValueError(error)

    return normalize_decimal_input(value)
