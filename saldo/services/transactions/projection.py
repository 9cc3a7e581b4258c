"""
Calcoli di proiezione per le transazioni ricorrenti: prossima occorrenza e
impatto mensile. Funzioni pure, usate solo per la visualizzazione.
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta

from saldo.utils.formatting import to_decimal, CENTESIMI

# durata del periodo in mesi per ciascuna cadenza
PERIODI_MESI = {
    'monthly': 1,
    'bimonthly': 2,
    'quarterly': 3,
    'semiannual': 6,
    'annual': 12,
}

FREQUENZE = tuple(PERIODI_MESI)


def period_months(frequency):
    try:
        return PERIODI_MESI[frequency]
    except KeyError:
        raise ValueError(f"Frequenza non valida: {frequency!r}")


def occurrence(start_date, frequency, index):
    """Occorrenza `index` (0 = start_date) calcolata sempre a partire dalla data
    di inizio: un 31 diventa l'ultimo giorno dei mesi corti senza slittare."""
    return start_date + relativedelta(months=index * period_months(frequency))


def next_occurrence(frequency, start_date, today=None):
    """Prossima occorrenza strettamente successiva a oggi.

    Se la data di inizio è nel futuro viene restituita così com'è.
    """
    if today is None:
        today = date.today()
    if start_date > today:
        return start_date

    step = period_months(frequency)
    # salta direttamente vicino a oggi invece di avanzare un periodo alla volta
    elapsed = (today.year - start_date.year) * 12 + (today.month - start_date.month)
    index = max(elapsed // step, 1)
    candidate = occurrence(start_date, frequency, index)
    while candidate <= today:
        index += 1
        candidate = occurrence(start_date, frequency, index)
    return candidate


def monthly_impact(amount, frequency):
    """Importo spalmato su base mensile (es. trimestrale 300 -> 100)"""
    value = to_decimal(amount) / Decimal(period_months(frequency))
    return value.quantize(CENTESIMI, rounding=ROUND_HALF_UP)


def recurring_totals(definitions):
    """Entrate, uscite e saldo mensili equivalenti di un elenco di ricorrenze

    Somma gli importi mensili non arrotondati e arrotonda solo i totali.
    """
    monthly_income = Decimal('0')
    monthly_expense = Decimal('0')
    for r in definitions:
        impact = to_decimal(r.amount) / Decimal(period_months(r.frequency))
        if r.type == 'income':
            monthly_income += impact
        else:
            monthly_expense += impact
    monthly_income = monthly_income.quantize(CENTESIMI, rounding=ROUND_HALF_UP)
    monthly_expense = monthly_expense.quantize(CENTESIMI, rounding=ROUND_HALF_UP)
    return {
        'monthly_income': monthly_income,
        'monthly_expense': monthly_expense,
        'monthly_balance': monthly_income - monthly_expense,
    }
