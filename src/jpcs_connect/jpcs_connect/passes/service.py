"""Student QR passes.

The code scanned at check-in is the plain student id. The JSON pass payload
(``uid``, ``email``, ``role``) is shown on the student's screen only.
"""
from __future__ import annotations

import io
import json

import qrcode
from PIL import Image, UnidentifiedImageError

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.model import User


def pass_payload(user: User) -> str:
    return json.dumps({"uid": user.firebase_uid or user.user_id, "email": user.email, "role": Role.STUDENT.value})


def scan_value(user: User) -> str:
    if not user.student_id:
        raise ValidationError("Complete your profile to get a QR pass")
    return user.student_id


def render_pass_png(value: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(value)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_qr_image(image_bytes: bytes) -> str:
    """Return the first QR payload found in an uploaded image."""
    # pyzbar loads the native zbar library on import
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(io.BytesIO(image_bytes)).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise ValidationError("The uploaded file is not an image")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No QR code found in the image")
    return decoded[0].data.decode("utf-8").strip()
