"""Issue a token, let it blur, reveal it, and scan it on a virtual timeline."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from ..config import ProtocolConfig
from ..identity.auth import AuthService
from ..identity.store import InMemorySessionStore
from ..portal import open_faculty_console, open_scan_session
from ..render.projection import issuer_view, scan_view
from ..timing.scheduler import VirtualScheduler
from ..utils.time import now_ms


async def main() -> None:
    config = replace(ProtocolConfig.from_env(), auth_delay_s=0.0)
    scheduler = VirtualScheduler()
    epoch_ms = now_ms()

    def clock() -> int:
        return epoch_ms + int(scheduler.now * 1000)

    faculty_auth = AuthService(InMemorySessionStore(), config)
    faculty = await faculty_auth.login("teacher@iiitp.ac.in", "secret123")
    console = open_faculty_console(faculty, scheduler=scheduler, config=config, clock=clock)

    payload = console.generate("cs301")
    wire = console.timer.wire
    print("ISSUED:", wire, issuer_view(console.timer.state, config))

    scheduler.advance(config.display_ticks * config.tick_interval_s)
    print("AFTER DISPLAY WINDOW:", issuer_view(console.timer.state, config))

    console.reveal()
    print("REVEALED:", issuer_view(console.timer.state, config))

    student_auth = AuthService(InMemorySessionStore(), config)
    await student_auth.login("123456789@cse.iiitp.ac.in", "secret123")
    scan = open_scan_session(scheduler, config=config, clock=clock)
    scan.begin_identity_check()
    scheduler.advance(config.identity_check_delay_s)
    assert wire is not None
    scan.deliver(wire)
    print("SCAN:", scan_view(scan.state))

    scan.reset()
    scan.begin_identity_check()
    scheduler.advance(config.validity_window_ms / 1000)
    scan.deliver(wire)
    print(f"SCAN {payload.class_id} AFTER VALIDITY WINDOW:", scan_view(scan.state))

    scan.close()
    console.close()
    await faculty_auth.logout()
    await student_auth.logout()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(main())
