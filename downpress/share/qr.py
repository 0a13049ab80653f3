from __future__ import annotations

import io

import segno


def qr_svg(data: str, size: int = 256) -> str:
    """Render ``data`` as an inline SVG QR code with high error correction."""
    if not data:
        raise ValueError("QR payload is required")

    qr = segno.make(data, micro=False, error="h", boost_error=False)
    width, _ = qr.symbol_size(scale=1, border=4)
    scale = max(1, int(size / max(width, 1)))
    buffer = io.BytesIO()
    qr.save(buffer, kind="svg", xmldecl=False, unit="px", scale=scale)
    return buffer.getvalue().decode("utf-8")


__all__ = ["qr_svg"]
