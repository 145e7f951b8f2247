"""PIX "copia e cola" payloads (EMV BR Code) and their QR codes."""
import base64
import unicodedata
from decimal import Decimal
from io import BytesIO

import qrcode

GUI = "br.gov.bcb.pix"
MAX_NAME = 25
MAX_CITY = 15
MAX_DESCRIPTION = 72


def crc16_ccitt(data: str) -> str:
    """CRC16-CCITT-FALSE (poly 0x1021, init 0xFFFF) as 4 uppercase hex digits."""
    crc = 0xFFFF
    for byte in data.encode("utf-8"):
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return f"{crc:04X}"


def _field(tag: str, value: str) -> str:
    return f"{tag}{len(value):02d}{value}"


def _plain(value: str) -> str:
    normalized = unicodedata.normalize("NFD", value or "")
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def build_payload(key, name, city, amount=None, description="", txid="***"):
    """Assemble the BR Code string, CRC included."""
    account = _field("00", GUI) + _field("01", key)
    # template 26 holds at most 99 characters
    room = min(MAX_DESCRIPTION, 99 - len(account) - 4)
    if description and room > 0:
        account += _field("02", _plain(description)[:room])
    parts = [
        _field("00", "01"),
        _field("26", account),
        _field("52", "0000"),
        _field("53", "986"),
    ]
    if amount is not None:
        parts.append(_field("54", f"{Decimal(amount):.2f}"))
    parts += [
        _field("58", "BR"),
        _field("59", _plain(name).upper()[:MAX_NAME]),
        _field("60", _plain(city).upper()[:MAX_CITY]),
        _field("62", _field("05", txid)),
    ]
    payload = "".join(parts) + "6304"
    return payload + crc16_ccitt(payload)


def qr_code_data_uri(payload: str) -> str:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=4,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
