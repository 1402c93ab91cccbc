"""Text layout of a TR 101 290 alarm summary and the alarm log location."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Iterable

_PREFERRED_LOG_DIR = "/storage/ltn/logs"
_FALLBACK_LOG_DIR = "/tmp"
_STATE_TEXT = ("OK ", "BAD")
_ROWS_USED = 8


class AlarmId(enum.Enum):
    """The TR 101 290 priority 1 and priority 2 checks shown in the summary."""

    P1_1_TS_SYNC_LOSS = enum.auto()
    P1_2_SYNC_BYTE_ERROR = enum.auto()
    P1_3_PAT_ERROR = enum.auto()
    P1_3A_PAT_ERROR_2 = enum.auto()
    P1_4_CONTINUITY_COUNTER_ERROR = enum.auto()
    P1_5_PMT_ERROR = enum.auto()
    P1_5A_PMT_ERROR_2 = enum.auto()
    P1_6_PID_ERROR = enum.auto()
    P2_1_TRANSPORT_ERROR = enum.auto()
    P2_2_CRC_ERROR = enum.auto()
    P2_3_PCR_ERROR = enum.auto()
    P2_3A_PCR_REPETITION_ERROR = enum.auto()
    P2_4_PCR_ACCURACY_ERROR = enum.auto()
    P2_5_PTS_ERROR = enum.auto()
    P2_6_CAT_ERROR = enum.auto()


# Row offset below the stream row, and the line template for each alarm.
_LAYOUT: dict[AlarmId, tuple[int, str]] = {
    AlarmId.P1_1_TS_SYNC_LOSS: (2, "P1.1  {s} [SYNC LOSS]"),
    AlarmId.P1_2_SYNC_BYTE_ERROR: (3, "P1.2  {s} [SYNC BYTE]"),
    AlarmId.P1_3_PAT_ERROR: (4, "P1.3  {s} [PAT      ]"),
    AlarmId.P1_3A_PAT_ERROR_2: (5, "P1.3a {s} [PAT 2    ]"),
    AlarmId.P1_4_CONTINUITY_COUNTER_ERROR: (6, "P1.4  {s} [CC       ]"),
    AlarmId.P1_5_PMT_ERROR: (7, "P1.5  {s} [PMT      ]"),
    AlarmId.P1_5A_PMT_ERROR_2: (8, "P1.5a {s} [PMT 2    ]"),
    AlarmId.P1_6_PID_ERROR: (9, "P1.6  {s} [PID      ] {a}"),
    AlarmId.P2_1_TRANSPORT_ERROR: (2, "P2.1  {s} [TRANSPORT TEI ]"),
    AlarmId.P2_2_CRC_ERROR: (3, "P2.2  {s} [CRC           ] {a}"),
    AlarmId.P2_3_PCR_ERROR: (4, "P2.3  {s} [PCR           ] {a}"),
    AlarmId.P2_3A_PCR_REPETITION_ERROR: (5, "P2.3a {s} [PCR REPETITION] {a}"),
    AlarmId.P2_4_PCR_ACCURACY_ERROR: (6, "P2.4  {s} [PCR ACCURACY  ]"),
    AlarmId.P2_5_PTS_ERROR: (7, "P2.5  {s} [PTS           ]"),
    AlarmId.P2_6_CAT_ERROR: (8, "P2.6  {s} [CAT           ]"),
}


@dataclass
class SummaryItem:
    """The current state of one alarm as reported by the analyser."""

    id: AlarmId
    priority: int
    enabled: bool = True
    raised: bool = False
    arg: str = ""


def render_summary(
    items: Iterable[SummaryItem], stream_row: int, p1col: int, p2col: int
) -> tuple[list[tuple[int, int, str, bool]], int]:
    """Lay out enabled alarms as (row, column, text, raised) cells.

    Returns the cells and the stream row to continue from, eight rows further on.
    """
    columns = (0, p1col, p2col, p2col)
    cells = []
    for item in items:
        if not item.enabled:
            continue
        if not 0 <= item.priority < len(columns):
            raise ValueError(f"alarm priority {item.priority} out of range")
        layout = _LAYOUT.get(item.id)
        if layout is None:
            continue
        offset, template = layout
        state = _STATE_TEXT[1] if item.raised else _STATE_TEXT[0]
        text = template.format(s=state, a=item.arg)
        cells.append((stream_row + offset, columns[item.priority], text, bool(item.raised)))
    return cells, stream_row + _ROWS_USED


def log_filename(directory: str | None, ifname: str, dstaddr: str) -> str:
    """Path of the alarm log for one stream, with ':' replaced by '.'.

    Without a directory the preferred log directory is used when it exists,
    else /tmp.
    """
    if directory is None:
        directory = (
            _PREFERRED_LOG_DIR if os.path.exists(_PREFERRED_LOG_DIR) else _FALLBACK_LOG_DIR
        )
    name = f"{directory}/tr101290-{ifname}-{dstaddr}.log"
    return name.replace(":", ".")