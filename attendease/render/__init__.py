"""Presentation helpers: view projections and QR images."""

from .projection import IssuerView, ScanView, issuer_view, scan_view

__all__ = ["IssuerView", "ScanView", "issuer_view", "scan_view", "render_data_uri", "render_png"]


def __getattr__(name: str):
    if name in {"render_data_uri", "render_png"}:
        from . import qr

        return getattr(qr, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
