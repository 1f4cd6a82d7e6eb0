import base64

from attendease.errors import RejectionReason
from attendease.render.projection import issuer_view, scan_view
from attendease.render.qr import render_data_uri
from attendease.scan.flow import ScanPhase, ScanState
from attendease.timing.issuance import RevealPhase, RevealState
from attendease.token.codec import encode
from attendease.validation.types import Accepted


def test_issuer_view_tracks_blur_and_reveal() -> None:
    idle = issuer_view(RevealState(RevealPhase.IDLE))
    assert idle.show_code is False

    visible = issuer_view(RevealState(RevealPhase.VISIBLE, 15))
    assert visible.blurred is False
    assert visible.progress == 1.0
    assert visible.can_reveal is False

    blurred = issuer_view(RevealState(RevealPhase.BLURRED, 0))
    assert blurred.blurred is True
    assert blurred.can_reveal is True
    assert blurred.hint is not None

    revealed = issuer_view(RevealState(RevealPhase.REVEALED, 4))
    assert revealed.blurred is False
    assert revealed.seconds_left == 4
    assert revealed.progress == 0.8


def test_scan_view_messages() -> None:
    assert scan_view(ScanState()).title == "Identity Verification"
    assert scan_view(ScanState(ScanPhase.CAPTURING, capture_active=True)).capture_active is True

    accepted = scan_view(ScanState(ScanPhase.ACCEPTED, outcome=Accepted("CS301", 0)))
    assert accepted.class_id == "CS301"
    assert accepted.marked_at == "1970-01-01T00:00:00+00:00"

    rejected = scan_view(ScanState(ScanPhase.REJECTED, reason=RejectionReason.EXPIRED))
    assert rejected.message == "This QR code has expired"
    assert scan_view(ScanState(ScanPhase.REJECTED, reason=RejectionReason.MALFORMED)).message == "Invalid QR code format"


def test_qr_data_uri_is_png() -> None:
    uri = render_data_uri(encode("cs301", 1000), box_size=2, border=1)
    prefix = "data:image/png;base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):]).startswith(b"\x89PNG")
