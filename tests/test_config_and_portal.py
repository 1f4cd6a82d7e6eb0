import asyncio

import pytest

from attendease.config import ProtocolConfig
from attendease.errors import ClassificationUnknown, RoleNotPermitted
from attendease.identity.session import SessionIdentity
from attendease.portal import home_for, open_faculty_console, open_scan_session
from attendease.scan.flow import ScanPhase
from attendease.timing.issuance import RevealPhase
from attendease.timing.scheduler import VirtualScheduler


def test_config_defaults_and_env_overrides() -> None:
    cfg = ProtocolConfig()
    assert (cfg.display_ticks, cfg.reveal_ticks) == (15, 5)
    assert (cfg.expiry_horizon_ms, cfg.validity_window_ms) == (15_000, 60_000)

    env = {"ATTENDEASE_VALIDITY_WINDOW_MS": "90000", "ATTENDEASE_TICK_INTERVAL_S": "0.5"}
    cfg = ProtocolConfig.from_env(env)
    assert cfg.validity_window_ms == 90_000
    assert cfg.tick_interval_s == 0.5
    assert cfg.display_ticks == 15

    with pytest.raises(ValueError):
        ProtocolConfig.from_env({"ATTENDEASE_REVEAL_TICKS": "five"})


def test_issuing_is_blocked_for_non_faculty() -> None:
    with pytest.raises(ClassificationUnknown):
        open_faculty_console(SessionIdentity.from_identifier("someone@example.com"))
    with pytest.raises(RoleNotPermitted):
        open_faculty_console(SessionIdentity.from_identifier("123456789@cse.iiitp.ac.in"))


def test_home_screen_by_role() -> None:
    assert home_for(None) == "auth"
    assert home_for(SessionIdentity.from_identifier("teacher@iiitp.ac.in")) == "faculty"
    assert home_for(SessionIdentity.from_identifier("123456789@cse.iiitp.ac.in")) == "student"


def test_issue_blur_reveal_and_scan_end_to_end() -> None:
    scheduler = VirtualScheduler()
    base = 1_700_000_000_000

    def clock() -> int:
        return base + int(scheduler.now * 1000)

    console = open_faculty_console(
        SessionIdentity.from_identifier("teacher@iiitp.ac.in"), scheduler=scheduler, clock=clock
    )
    console.generate("cs301")
    wire = console.timer.wire
    assert wire is not None

    scheduler.advance(15)
    assert console.timer.phase is RevealPhase.BLURRED
    assert console.reveal() is True

    scan = open_scan_session(scheduler, clock=clock)
    scan.begin_identity_check()
    scheduler.advance(1.5)
    scan.deliver(wire)
    assert scan.state.phase is ScanPhase.ACCEPTED
    assert scan.state.outcome is not None
    assert scan.state.outcome.class_id == "CS301"

    # A superseded token keeps validating on the scanner until its own window ends.
    console.regenerate()
    scan.reset()
    scan.begin_identity_check()
    scheduler.advance(1.5)
    scan.deliver(wire)
    assert scan.state.phase is ScanPhase.ACCEPTED

    scan.reset()
    scan.begin_identity_check()
    scheduler.advance(60)
    scan.deliver(wire)
    assert scan.state.phase is ScanPhase.REJECTED

    scan.close()
    console.close()


def test_demo_runs(capsys) -> None:
    from attendease.demo.run_demo import main

    asyncio.run(main())
    out = capsys.readouterr().out
    assert "ISSUED:" in out
    assert "Attendance Marked!" in out
    assert "This QR code has expired" in out
