"""
Utilità comuni per l'applicazione
"""
from datetime import datetime, date

from saldo.utils.formatting import to_decimal


class ValidationError(ValueError):
    """Errore di validazione dei dati in ingresso, con il dettaglio per campo"""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class ValidationUtils:
    """Utilità per la validazione"""

    @staticmethod
    def validate_amount(value, allow_negative=False):
        """Valida e converte un importo in Decimal a 2 decimali"""
        if value is None or str(value).strip() == '':
            raise ValueError("L'importo è obbligatorio")
        amount = to_decimal(value)
        if amount < 0 and not allow_negative:
            raise ValueError("L'importo non può essere negativo")
        if abs(amount) >= 10 ** 8:
            # Numeric(10, 2)
            raise ValueError("Importo troppo grande")
        return amount

    @staticmethod
    def validate_date(value):
        """Valida e converte una data (YYYY-MM-DD, accetta anche un timestamp ISO)"""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not value or not str(value).strip():
            raise ValueError("La data è obbligatoria")
        raw = str(value).strip()
        try:
            return datetime.strptime(raw[:10], '%Y-%m-%d').date()
        except ValueError:
            raise ValueError("Formato data non valido (YYYY-MM-DD)")

    @staticmethod
    def validate_required_field(value, field_name):
        """Valida che un campo obbligatorio non sia vuoto"""
        if value is None or not str(value).strip():
            raise ValueError(f"Il campo {field_name} è obbligatorio")
        return str(value).strip()

    @staticmethod
    def validate_choice(value, choices, field_name):
        if value not in choices:
            raise ValueError(f"Valore non valido per {field_name}. Valori ammessi: {', '.join(choices)}")
        return value

    @staticmethod
    def validate_id(value, field_name):
        """Intero positivo, None se il campo è vuoto"""
        if value is None or str(value).strip() in ('', 'null', 'undefined'):
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"ID non valido per {field_name}")
        if parsed <= 0:
            raise ValueError(f"ID non valido per {field_name}")
        return parsed

    @staticmethod
    def validate_bool(value):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ('true', '1', 'on', 'yes')


class FieldValidator:
    """Raccoglie gli errori di più campi e li solleva insieme come ValidationError.

    Uso:
        v = FieldValidator(data)
        amount = v.field('amount', ValidationUtils.validate_amount)
        v.raise_if_errors('Dati di transazione non validi')
    """

    def __init__(self, data):
        self.data = data or {}
        self.errors = {}

    def field(self, name, validator, *args, required=True, default=None):
        value = self.data.get(name)
        if value is None and not required:
            return default
        try:
            return validator(value, *args)
        except ValueError as e:
            self.errors[name] = str(e)
            return None

    def raise_if_errors(self, message):
        if self.errors:
            raise ValidationError(message, self.errors)


class SecurityUtils:
    """Utilità per la sicurezza"""

    @staticmethod
    def sanitize_string(input_str, max_length=None):
        """Sanitizza una stringa di input"""
        if not input_str:
            return ""
        sanitized = str(input_str).strip()
        if max_length and len(sanitized) > max_length:
            sanitized = sanitized[:max_length]
        return sanitized

    @staticmethod
    def validate_file_extension(filename, allowed_extensions):
        """Valida l'estensione di un file"""
        if not filename or '.' not in filename:
            return False
        extension = filename.rsplit('.', 1)[1].lower()
        return extension in allowed_extensions
