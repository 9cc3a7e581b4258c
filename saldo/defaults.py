"""
Default data values separated from operational configuration.

Questo modulo contiene i valori di 'contenuto' usati dall'app (categorie
predefinite e utente dimostrativo) che non vanno mescolati con le
impostazioni operative del runtime (DB, SECRET_KEY, cartella allegati).
"""

# Categorie predefinite (nome, tipo, icona)
CATEGORIE_DEFAULT = [
    # Entrate
    ('Stipendio', 'income', 'ri-money-dollar-circle-line'),
    ('Freelance', 'income', 'ri-briefcase-line'),
    ('Investimenti', 'income', 'ri-line-chart-line'),
    ('Vendite', 'income', 'ri-store-line'),
    ('Bonus', 'income', 'ri-money-dollar-box-line'),
    ('Rimborsi', 'income', 'ri-refund-line'),
    ('Affitti', 'income', 'ri-home-4-line'),
    ('Altro', 'income', 'ri-wallet-line'),

    # Uscite
    ('Casa', 'expense', 'ri-home-line'),
    ('Alimentari', 'expense', 'ri-shopping-cart-line'),
    ('Trasporti', 'expense', 'ri-car-line'),
    ('Salute', 'expense', 'ri-heart-pulse-line'),
    ('Istruzione', 'expense', 'ri-book-open-line'),
    ('Svago', 'expense', 'ri-gamepad-line'),
    ('Servizi', 'expense', 'ri-file-list-line'),
    ('Utenze', 'expense', 'ri-lightbulb-line'),
    ('Carta di credito', 'expense', 'ri-bank-card-line'),
    ('Prestiti', 'expense', 'ri-money-dollar-box-line'),
    ('Abbonamenti', 'expense', 'ri-netflix-fill'),
    ('Altro', 'expense', 'ri-question-line'),
]

ICONA_DEFAULT = 'ri-question-line'

# Utente dimostrativo creato dallo script di seed
UTENTE_DEMO = {
    'username': 'demo',
    'password': 'demo123',
    'initial_balance': '1800.00',
    'overdraft_limit': '1000.00',
}
