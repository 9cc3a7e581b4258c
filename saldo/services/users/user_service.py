"""
Service per la gestione degli utenti e delle impostazioni del conto.
"""
import logging
from typing import Optional, Tuple

from saldo import db
from saldo.defaults import UTENTE_DEMO
from saldo.models import User, Transaction, RecurringTransaction
from saldo.services import BaseService
from saldo.services.users.passwords import hash_password, verify_password
from saldo.utils import FieldValidator, ValidationUtils
from saldo.utils.formatting import to_decimal

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """Service per utenti, login e impostazioni (saldo iniziale, scoperto)"""

    def get_by_id(self, user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return User.query.filter_by(username=username).first()

    def register(self, data: dict) -> Tuple[bool, str, Optional[User]]:
        """
        Registra un nuovo utente con saldo iniziale e scoperto a zero

        Raises:
            ValidationError: username o password mancanti
        """
        v = FieldValidator(data)
        username = v.field('username', ValidationUtils.validate_required_field, 'username')
        password = v.field('password', ValidationUtils.validate_required_field, 'password')
        v.raise_if_errors("Username e password sono obbligatori")

        if self.get_by_username(username):
            return False, "Username già esistente", None

        user = User(
            username=username,
            email=(data.get('email') or '').strip(),
            password=hash_password(password),
            initial_balance=0,
            overdraft_limit=0,
        )
        success, message = self.save(user)
        if not success:
            return False, message, None
        logger.info('Registrato utente %s', username)
        return True, "Utente registrato con successo", user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Utente se le credenziali sono valide, altrimenti None"""
        user = self.get_by_username(username)
        if not user or not verify_password(password or '', user.password):
            return None
        return user

    def update_settings(self, user: User, data: dict) -> Tuple[bool, str]:
        """
        Aggiorna saldo iniziale e limite di scoperto

        Raises:
            ValidationError: valori mancanti o non numerici
        """
        v = FieldValidator(data)
        initial_balance = v.field('initialBalance', ValidationUtils.validate_amount, True)
        overdraft_limit = v.field('overdraftLimit', ValidationUtils.validate_amount)
        v.raise_if_errors("Impostazioni del conto non valide")

        return self.update(user, initial_balance=initial_balance, overdraft_limit=overdraft_limit)

    def reset_account(self, user: User) -> Tuple[bool, str, dict]:
        """Elimina transazioni e ricorrenze dell'utente e azzera le impostazioni"""
        try:
            # prima le transazioni: puntano alle ricorrenze
            deleted_tx = Transaction.query.filter_by(user_id=user.id).delete(synchronize_session=False)
            deleted_rec = RecurringTransaction.query.filter_by(user_id=user.id).delete(synchronize_session=False)
            user.initial_balance = 0
            user.overdraft_limit = 0
            db.session.commit()
            # le collection caricate prima del delete bulk sarebbero obsolete
            db.session.expire(user)
        except Exception as e:
            db.session.rollback()
            logger.exception('Reset del conto %s fallito', user.id)
            return False, str(e), {}
        logger.info('Reset conto utente %s: %s transazioni, %s ricorrenze eliminate',
                    user.id, deleted_tx, deleted_rec)
        return True, "Dati dell'utente azzerati con successo", {
            'transactionsDeleted': deleted_tx,
            'recurringTransactionsDeleted': deleted_rec,
        }

    def ensure_demo_user(self) -> Tuple[bool, str, Optional[User]]:
        """Crea l'utente dimostrativo se non esiste già"""
        existing = self.get_by_username(UTENTE_DEMO['username'])
        if existing:
            return False, "Utente demo già presente", existing
        user = User(
            username=UTENTE_DEMO['username'],
            email='',
            password=hash_password(UTENTE_DEMO['password']),
            initial_balance=to_decimal(UTENTE_DEMO['initial_balance']),
            overdraft_limit=to_decimal(UTENTE_DEMO['overdraft_limit']),
        )
        success, message = self.save(user)
        if not success:
            return False, message, None
        logger.info('Creato utente demo')
        return True, "Utente demo creato", user
