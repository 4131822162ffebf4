"""Currency code normalization with Cyrillic and local-name aliases."""

SUPPORTED_CURRENCIES = ("USD", "UZS", "RUB")

# Lower-cased alias → ISO code
_CURRENCY_ALIASES: dict[str, str] = {
    # USD
    "usd": "USD", "dollar": "USD", "dollars": "USD", "$": "USD",
    "дол": "USD", "долл": "USD", "доллар": "USD", "доллары": "USD",
    # UZS
    "uzs": "UZS", "sum": "UZS", "so'm": "UZS", "som": "UZS",
    "сум": "UZS", "сўм": "UZS",
    # RUB
    "rub": "RUB", "rubl": "RUB", "ruble": "RUB", "rubles": "RUB", "₽": "RUB",
    "руб": "RUB", "рубль": "RUB", "рубли": "RUB",
}


def normalize_currency(raw: str) -> str:
    """Map known aliases to an ISO code.

    Anything unrecognised is kept, trimmed and upper-cased; balances count
    such codes 1:1 as USD rather than rejecting them.
    """

    cleaned = raw.strip()
    alias = _CURRENCY_ALIASES.get(cleaned.lower())
    if alias is not None:
        return alias
    return cleaned.upper()


def is_supported(code: str) -> bool:
    """Whether ``code`` has a conversion rate."""

    return code.strip().upper() in SUPPORTED_CURRENCIES
