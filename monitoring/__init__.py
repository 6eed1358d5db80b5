"""
============================================================================
URL STATUS MONITOR - MONITORING PACKAGE
============================================================================
The polling engine:
    • HTTPProber        — one HEAD probe per URL, outcome classification
    • CycleRunner       — one pass over every URL, skip-on-success policy
    • MonitorScheduler  — start/stop, cycle-to-cycle interval
    • StatusStore       — ordered per-URL status + change notifications
    • Session           — the URL list and active flag of one run

File layout
-----------
monitoring/
├── __init__.py          ← this file
├── models.py            ← ProbeOutcome, URLStatus, StatusUpdate
├── prober.py            ← HTTPProber
├── cycle.py             ← CycleRunner + CycleReport
├── scheduler.py         ← MonitorScheduler
├── session.py           ← Session
└── store.py             ← StatusStore

============================================================================
"""

from monitoring.models import OutcomeKind, ProbeOutcome, StatusState, URLStatus, StatusUpdate
from monitoring.prober import HTTPProber
from monitoring.store import StatusStore
from monitoring.session import Session
from monitoring.cycle import CycleRunner, CycleReport
from monitoring.scheduler import MonitorScheduler, SchedulerState

__all__ = [
    # Model
    "OutcomeKind",
    "ProbeOutcome",
    "StatusState",
    "URLStatus",
    "StatusUpdate",

    # Engine
    "HTTPProber",
    "CycleRunner",
    "CycleReport",
    "MonitorScheduler",
    "SchedulerState",
    "Session",
    "StatusStore",
]
