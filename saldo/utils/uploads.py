"""Salvataggio degli allegati (ricevute, bollette) nella cartella UPLOAD_FOLDER"""
import os
import random
import time

from flask import current_app
from werkzeug.utils import secure_filename

from saldo.utils import SecurityUtils, ValidationError

URL_PREFIX = '/uploads'


def save_attachment(file_storage):
    """Scrive il file caricato su disco e restituisce il path pubblico.

    Il nome su disco è `<millisecondi>-<casuale><estensione>`; il nome
    originale serve solo per ricavare l'estensione.
    Restituisce None se non è stato caricato alcun file.
    """
    if file_storage is None or not file_storage.filename:
        return None

    # estensione dal nome originale: secure_filename scarta i caratteri non ASCII
    original = file_storage.filename
    allowed = current_app.config['ALLOWED_ATTACHMENT_EXTENSIONS']
    if not SecurityUtils.validate_file_extension(original, allowed):
        raise ValidationError(
            "Sono ammessi solo file PNG, JPG e PDF",
            {'attachment': f"Estensioni ammesse: {', '.join(sorted(allowed))}"},
        )

    ext = '.' + original.rsplit('.', 1)[1].lower()
    filename = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}{ext}"

    folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    file_storage.save(os.path.join(folder, filename))
    current_app.logger.info('Allegato salvato: %s (originale: %s)', filename, secure_filename(original))
    return f"{URL_PREFIX}/{filename}"
