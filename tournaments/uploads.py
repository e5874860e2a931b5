import csv
import io
import structlog

from typing import Any, Dict, List

import openpyxl
import xlrd

from .exceptions import UploadError

logger = structlog.get_logger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xls", ".csv")


def read_results_file(uploaded_file) -> List[Dict[str, Any]]:
    """
    Read the first sheet of an uploaded results file into a list of
    {header: value} rows. Blank rows are dropped.
    """
    file_name = (getattr(uploaded_file, "name", "") or "").lower()
    contents = uploaded_file.read()

    if file_name.endswith(".xlsx"):
        sheet = _read_xlsx(contents)
    elif file_name.endswith(".xls"):
        sheet = _read_xls(contents)
    elif file_name.endswith(".csv"):
        sheet = _read_csv(contents)
    else:
        raise UploadError("Unsupported file format. Only .xlsx, .xls and .csv files are supported.")

    rows = _rows_to_dicts(sheet)
    logger.info("Results file read", file_name=file_name, rows=len(rows))
    return rows


def _read_xlsx(contents: bytes) -> List[List[Any]]:
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(contents), read_only=True, data_only=True)
        sheet = workbook.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    except Exception as e:
        raise UploadError(f"Error reading .xlsx file: {str(e)}")


def _read_xls(contents: bytes) -> List[List[Any]]:
    try:
        workbook = xlrd.open_workbook(file_contents=contents)
        sheet = workbook.sheet_by_index(0)
        return [sheet.row_values(row_idx) for row_idx in range(sheet.nrows)]
    except Exception as e:
        raise UploadError(f"Error reading .xls file: {str(e)}")


def _read_csv(contents: bytes) -> List[List[Any]]:
    try:
        text = contents.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = contents.decode("latin-1")
    return [row for row in csv.reader(io.StringIO(text))]


def _is_blank(row) -> bool:
    return all(cell is None or str(cell).strip() == "" for cell in row)


def _rows_to_dicts(sheet: List[List[Any]]) -> List[Dict[str, Any]]:
    rows = [row for row in sheet if not _is_blank(row)]
    if not rows:
        raise UploadError("The file has no header row")

    headers = [str(cell).strip() if cell is not None else "" for cell in rows[0]]
    result = []
    for row in rows[1:]:
        result.append({
            header: row[idx] if idx < len(row) else None
            for idx, header in enumerate(headers) if header
        })
    return result
