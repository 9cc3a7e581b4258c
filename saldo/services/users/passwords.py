"""Hash delle password utente con PBKDF2-SHA256 (cryptography).

Formato memorizzato: ``pbkdf2_sha256$<iterazioni>$<salt b64>$<hash b64>``
"""
import base64
import hmac
import os

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ALGORITMO = 'pbkdf2_sha256'
ITERAZIONI = 100000


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    kdf = PBKDF2HMAC(algorithm=hashes.SHA256(), length=32, salt=salt, iterations=iterations)
    return kdf.derive(password.encode('utf-8'))


def hash_password(password: str, iterations: int = ITERAZIONI) -> str:
    salt = os.urandom(16)
    digest = _derive(password, salt, iterations)
    return '$'.join([
        ALGORITMO,
        str(iterations),
        base64.urlsafe_b64encode(salt).decode('ascii'),
        base64.urlsafe_b64encode(digest).decode('ascii'),
    ])


def verify_password(password: str, stored: str) -> bool:
    try:
        algoritmo, iterations, salt_b64, digest_b64 = stored.split('$')
    except (AttributeError, ValueError):
        return False
    if algoritmo != ALGORITMO:
        return False
    salt = base64.urlsafe_b64decode(salt_b64)
    expected = base64.urlsafe_b64decode(digest_b64)
    return hmac.compare_digest(_derive(password, salt, int(iterations)), expected)
