"""
Verifica dello scoperto prima di registrare una uscita.

La verifica è solo consultiva: il server accetta comunque qualsiasi importo,
è il client a chiedere conferma all'utente in base all'esito.
"""
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

from saldo.utils.formatting import to_decimal, format_decimal, format_currency

ESITO_OK = 'ok'
ESITO_AVVISO = 'warning'
ESITO_BLOCCO = 'blocked'

OverdraftCheck = namedtuple('OverdraftCheck', [
    'status', 'severity', 'remaining_balance', 'overdraft_used', 'overdraft_remaining',
    'percent_used', 'exceeded_by', 'message',
])


def severity_for(percent_used):
    if percent_used > 80:
        return 'critical'
    if percent_used > 50:
        return 'high'
    return 'moderate'


def check_overdraft(current_balance, overdraft_limit, expense_amount, previous_amount=0):
    """Saldo residuo dopo l'uscita e relativo esito.

    `previous_amount` è l'importo precedente quando si modifica una uscita già
    registrata: conta solo la differenza.
    """
    current_balance = to_decimal(current_balance)
    overdraft_limit = to_decimal(overdraft_limit)
    net_expense = to_decimal(expense_amount) - to_decimal(previous_amount)

    remaining = current_balance - net_expense
    used = -remaining if remaining < 0 else Decimal('0.00')

    if remaining < -overdraft_limit:
        exceeded_by = abs(remaining + overdraft_limit)
        return OverdraftCheck(
            status=ESITO_BLOCCO,
            severity=None,
            remaining_balance=remaining,
            overdraft_used=used,
            overdraft_remaining=overdraft_limit - used,
            percent_used=None,
            exceeded_by=exceeded_by,
            message=(
                f"Questa uscita supera il saldo disponibile e il limite di scoperto "
                f"di {format_currency(exceeded_by)}"
            ),
        )

    if remaining < 0:
        # remaining >= -limit e remaining < 0 implicano limit > 0
        ratio = used / overdraft_limit * 100
        severity = severity_for(ratio)
        percent = ratio.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
        return OverdraftCheck(
            status=ESITO_AVVISO,
            severity=severity,
            remaining_balance=remaining,
            overdraft_used=used,
            overdraft_remaining=overdraft_limit - used,
            percent_used=percent,
            exceeded_by=None,
            message=(
                f"Questa uscita userà {format_currency(used)} dello scoperto ({percent:.0f}%), "
                f"livello di allerta: {severity}"
            ),
        )

    return OverdraftCheck(
        status=ESITO_OK,
        severity=None,
        remaining_balance=remaining,
        overdraft_used=used,
        overdraft_remaining=overdraft_limit,
        percent_used=None,
        exceeded_by=None,
        message=None,
    )


def overdraft_check_to_dict(check):
    return {
        'status': check.status,
        'severity': check.severity,
        'remainingBalance': format_decimal(check.remaining_balance),
        'overdraftUsed': format_decimal(check.overdraft_used),
        'overdraftRemaining': format_decimal(check.overdraft_remaining),
        'percentUsed': format_decimal(check.percent_used, 1) if check.percent_used is not None else None,
        'exceededBy': format_decimal(check.exceeded_by) if check.exceeded_by is not None else None,
        'message': check.message,
    }
