"""Scrive nella tabella `transactions` le occorrenze dovute delle transazioni ricorrenti.

Non gira mai in automatico: va lanciato da un operatore (o da cron).
Uso: eseguire nello stesso ambiente dell'app Flask (usa create_app()).
Opzioni:
  --user ID         : solo le ricorrenze di un utente (default tutti)
  --until YYYY-MM-DD: genera fino a questa data compresa (default oggi)
"""
import argparse
import logging
import sys
from datetime import datetime

from saldo import create_app


def main(argv=None):
    parser = argparse.ArgumentParser(description='Genera le transazioni dovute dalle ricorrenze')
    parser.add_argument('--user', type=int, default=None, help="ID dell'utente (default: tutti)")
    parser.add_argument('--until', default=None, help='Data limite YYYY-MM-DD (default: oggi)')
    args = parser.parse_args(argv)

    until = None
    if args.until:
        try:
            until = datetime.strptime(args.until, '%Y-%m-%d').date()
        except ValueError:
            parser.error('--until deve essere nel formato YYYY-MM-DD')

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    app = create_app()
    with app.app_context():
        from saldo.services.transactions.generated_transaction_service import GeneratedTransactionService

        success, message, _ = GeneratedTransactionService().materialize_due(user_id=args.user, until=until)
        print(message)
        return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
