from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from .model import OnlineAttendanceRecord

EXPORT_COLUMNS = ["Trainee ID", "Name", "Email", "Meeting", "Date", "Time Marked", "Status", "Marked By"]


def records_to_frame(records: Sequence[OnlineAttendanceRecord]) -> pd.DataFrame:
    data = [
        {
            "Trainee ID": r.trainee_id,
            "Name": r.trainee_name,
            "Email": r.email,
            "Meeting": r.entry.meeting_name,
            "Date": r.entry.date.isoformat(),
            "Time Marked": r.entry.time_marked.strftime("%H:%M:%S") if r.entry.time_marked else "",
            "Status": r.entry.status.value,
            "Marked By": r.entry.marked_by or "",
        }
        for r in records
    ]
    return pd.DataFrame(data, columns=EXPORT_COLUMNS)


def records_to_xlsx(records: Sequence[OnlineAttendanceRecord], *, sheet_name: str = "Attendance") -> io.BytesIO:
    # Written to memory; nothing touches the disk.
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        records_to_frame(records).to_excel(writer, index=False, sheet_name=sheet_name[:31])
    output.seek(0)
    return output
