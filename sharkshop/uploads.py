"""
Local storage for product images.
"""
import os
from typing import Optional
from uuid import uuid4

from flask import current_app
from werkzeug.utils import secure_filename

from sharkshop.errors import ValidationFailed

UPLOAD_URL_PREFIX = "/uploads/"


def upload_folder() -> str:
    return current_app.config["PRODUCT_UPLOAD_FOLDER"]


def allowed_image_extension(filename: str) -> bool:
    extension = os.path.splitext(filename)[1].lower().lstrip(".")
    if not extension:
        return False
    return extension in current_app.config["PRODUCT_ALLOWED_EXTENSIONS"]


def save_product_image(image_file) -> Optional[str]:
    if not image_file or not getattr(image_file, "filename", ""):
        return None

    original_filename = secure_filename(image_file.filename)
    if not original_filename:
        raise ValidationFailed("Please choose a valid file name.", field="image")

    if not allowed_image_extension(original_filename):
        raise ValidationFailed(
            "Only image files are allowed! Upload JPG, JPEG, PNG, or WEBP files.",
            field="image",
        )

    extension = os.path.splitext(original_filename)[1].lower()
    unique_filename = f"{uuid4().hex}{extension}"
    os.makedirs(upload_folder(), exist_ok=True)
    image_file.save(os.path.join(upload_folder(), unique_filename))

    return f"{UPLOAD_URL_PREFIX}{unique_filename}"


def remove_product_image(image_reference: Optional[str]):
    if not image_reference or not str(image_reference).startswith(UPLOAD_URL_PREFIX):
        return

    filename = secure_filename(str(image_reference)[len(UPLOAD_URL_PREFIX):])
    if not filename:
        return

    target = os.path.join(upload_folder(), filename)
    try:
        os.remove(target)
    except FileNotFoundError:
        return
    except OSError as exc:
        current_app.logger.warning("Unable to remove product image %s: %s", target, exc)
