from __future__ import annotations

from pydantic import BaseModel


SPREADSHEET_ID = "1B34MYj61oXb4hZ0WmkMG8LoUxOz2igB20eVMEGmLk8I"
SHEET_RANGE = "A2:I50"


def sheet_csv_url(sheet: str, spreadsheet_id: str = SPREADSHEET_ID, cell_range: str = SHEET_RANGE) -> str:
    return (
        f"https://docs.google.com/spreadsheets/d/{spreadsheet_id}/gviz/tq"
        f"?tqx=out:csv&sheet={sheet}&range={cell_range}"
    )


class SheetSource(BaseModel):
    key: str
    title: str
    url: str
    color: str = "rgba(255, 99, 132, 0.8)"


class ColumnLayout(BaseModel):
    """Where the name and score live in each CSV row (0-based field indexes)."""

    name_index: int = 0
    score_index: int = 8

    @property
    def required_fields(self) -> int:
        return max(self.name_index, self.score_index) + 1


GROUP_A = SheetSource(key="msci", title="MSCI", url=sheet_csv_url("MSCI"), color="rgba(255, 99, 132, 0.8)")
GROUP_B = SheetSource(key="ssci", title="SSCI", url=sheet_csv_url("SSCI"), color="rgba(255, 182, 193, 0.8)")
SOURCES = (GROUP_A, GROUP_B)

# Older sheet revisions kept the score in column 12
NAME_COLUMN = 0
SCORE_COLUMN = 8
DEFAULT_LAYOUT = ColumnLayout(name_index=NAME_COLUMN, score_index=SCORE_COLUMN)

TOP_N = 4
REFRESH_INTERVAL_SECONDS = 15.0
FETCH_TIMEOUT_SECONDS = 30.0
CEILING_PADDING = 20
CEILING_FALLBACK = 100

RANK_HEADER = "อันดับ"
NAME_HEADER = "ชื่อ"
SCORE_HEADER = "คะแนน"
RANK_LABEL = "อันดับ {rank}"
ERROR_MESSAGE = "เกิดข้อผิดพลาดในการโหลดข้อมูล"
LAST_UPDATED_PREFIX = "อัปเดตล่าสุด: "
