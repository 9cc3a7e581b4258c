from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from flask import current_app, has_app_context

CENTESIMI = Decimal('0.01')


def to_decimal(value):
    """Converte un valore (Decimal, int, float, stringa) in Decimal a 2 decimali.

    I float passano da `str()` per non ereditare l'errore di rappresentazione
    binaria (0.1 -> Decimal('0.1000000000000000055...')).
    """
    if value is None or value == '':
        return Decimal('0.00')
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, float):
        d = Decimal(str(value))
    else:
        try:
            d = Decimal(str(value).strip().replace(',', '.'))
        except InvalidOperation:
            raise ValueError(f"Importo non valido: {value!r}")
    if not d.is_finite():
        raise ValueError(f"Importo non valido: {value!r}")
    return d.quantize(CENTESIMI, rounding=ROUND_HALF_UP)


def format_decimal(value, decimals=2):
    """Format a numeric value as a plain decimal string with fixed decimals.

    Used for every amount on the wire: the SPA expects plain numeric strings
    (e.g. "123.45") rather than numbers or localized currency strings.
    """
    exp = Decimal(1).scaleb(-int(decimals))
    return str(to_decimal(value).quantize(exp, rounding=ROUND_HALF_UP))


def format_currency(value, fmt=None):
    """Formatta un valore numerico usando il formato definito in `FORMATO_VALUTA`."""
    if fmt is None:
        fmt = current_app.config.get('FORMATO_VALUTA', '€ {:.2f}') if has_app_context() else '€ {:.2f}'
    return fmt.format(to_decimal(value))


def format_date(value):
    """Data in formato ISO (YYYY-MM-DD), None se assente"""
    return value.isoformat() if value else None
