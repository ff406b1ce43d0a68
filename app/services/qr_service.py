"""
QR code generation service
"""

import io
import qrcode

from app.core.config import settings
from app.core.errors import ValidationError

# QR targets and the page each one opens
QR_TARGETS = {
    "lookup": "/",
    "upload": "/upload",
}

class QRService:
    """Service for generating QR codes"""

    @staticmethod
    def get_qr_url(target: str = "lookup") -> str:
        """Get the URL that the QR code will open"""
        if target not in QR_TARGETS:
            raise ValidationError(f"Unknown QR target '{target}'")
        return f"{settings.BASE_URL.rstrip('/')}{QR_TARGETS[target]}"

    @staticmethod
    def generate_qr(target: str = "lookup", format: str = 'PNG') -> bytes:
        """Generate a QR code pointing attendees at ``target``"""
        url = QRService.get_qr_url(target)

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(url)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format=format)

        return buffer.getvalue()
