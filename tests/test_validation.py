from attendease.config import ProtocolConfig
from attendease.errors import RejectionReason
from attendease.token.codec import TokenCodec
from attendease.validation.engine import ValidationEngine
from attendease.validation.types import Accepted, Rejected


def test_fresh_token_is_accepted_with_scan_time() -> None:
    engine = ValidationEngine()
    payload = TokenCodec().encode("cs301", 100_000)
    verdict = engine.validate(payload, 101_000)
    assert verdict == Accepted(class_id="CS301", at=101_000)
    assert verdict.accepted is True


def test_window_boundary_is_inclusive() -> None:
    engine = ValidationEngine()
    payload = TokenCodec().encode("cs301", 0)

    assert isinstance(engine.validate(payload, 60_000), Accepted)
    assert engine.validate(payload, 60_001) == Rejected(RejectionReason.EXPIRED)
    assert engine.validate(payload, 120_000) == Rejected(RejectionReason.EXPIRED)


def test_missing_payload_is_malformed() -> None:
    verdict = ValidationEngine().validate(None, 0)
    assert verdict == Rejected(RejectionReason.MALFORMED)
    assert verdict.message == "Invalid QR code format"


def test_token_still_accepted_after_issuer_display_window() -> None:
    # The scanner's window is independent of the issuer's 15 s display window.
    engine = ValidationEngine()
    payload = TokenCodec().encode("cs301", 0)
    assert payload.expires_at == 15_000
    assert isinstance(engine.validate(payload, 45_000), Accepted)


def test_check_decodes_and_validates() -> None:
    engine = ValidationEngine(ProtocolConfig(validity_window_ms=1_000))
    assert engine.check('{"classId":"CS301","issuedAt":5000}', 5_500) == Accepted("CS301", 5_500)
    assert engine.check('{"classId":"CS301","issuedAt":5000}', 7_000) == Rejected(RejectionReason.EXPIRED)
    assert engine.check("not json", 0) == Rejected(RejectionReason.MALFORMED)
    assert engine.check('{"classId":"CS301","issuedAt":5000}', 7_000).message == "This QR code has expired"
