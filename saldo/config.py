"""Configurazione per l'applicazione saldo"""
import os


class Config:
    """Configurazione principale dell'applicazione"""

    # Database
    # Path assoluto verso la cartella `db/` nella root del repository,
    # sovrascrivibile con DATABASE_URL (es. postgresql://...).
    BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL', f'sqlite:///{os.path.join(BASE_DIR, "db", "saldo.db")}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'saldo-dev-secret-key')

    # Allegati (PNG, JPG, PDF fino a 15MB)
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'uploads'))
    MAX_CONTENT_LENGTH = 15 * 1024 * 1024
    ALLOWED_ATTACHMENT_EXTENSIONS = {'png', 'jpg', 'jpeg', 'pdf'}

    # Server
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 5001))

    # Orizzonte (giorni) delle prossime scadenze
    UPCOMING_DAYS = 30

    FORMATO_VALUTA = "€ {:.2f}"


class TestingConfig(Config):
    """Database in memoria e cartella allegati temporanea, usata dai test"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'


config = {
    'default': Config,
    'testing': TestingConfig,
}
